"""Process utilities."""
import logging
import subprocess
from typing import List

logger = logging.getLogger(__name__)


def run(cmd: List[str], log_failure: bool = True, **kwargs) -> subprocess.CompletedProcess:
    """Run a subprocess synchronously with automatic logging.

    Args:
        cmd: Command to run as list of strings
        log_failure: Log a non-zero exit at ERROR; probes that are expected
            to fail (has-session) pass False
        **kwargs: Additional arguments passed to subprocess.run

    Returns:
        CompletedProcess result
    """
    logger.debug(f"Running: {' '.join(cmd)}")

    # Capture output by default for logging
    kwargs.setdefault('capture_output', True)
    kwargs.setdefault('text', True)

    try:
        result = subprocess.run(cmd, **kwargs)

        if result.stdout:
            logger.debug(f"stdout: {result.stdout.strip()}")
        if result.stderr:
            logger.debug(f"stderr: {result.stderr.strip()}")

        if result.returncode != 0:
            if log_failure:
                logger.error(f"Command failed with exit code {result.returncode}: {' '.join(cmd)}")
            else:
                logger.debug(f"Command exited {result.returncode}: {' '.join(cmd)}")
        else:
            logger.debug(f"Command succeeded: {' '.join(cmd)}")

        return result

    except Exception as e:
        logger.error(f"Command failed with exception: {' '.join(cmd)} - {e}")
        raise


def attach(cmd: List[str]) -> int:
    """Run a command in the foreground with the terminal inherited.

    Blocks until the command exits; there is no timeout. Signals are not
    intercepted.

    Returns:
        The command's exit status
    """
    logger.debug(f"Attaching: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd)
    except Exception as e:
        logger.error(f"Command failed with exception: {' '.join(cmd)} - {e}")
        raise

    logger.debug(f"Detached with exit code {result.returncode}: {' '.join(cmd)}")
    return result.returncode
