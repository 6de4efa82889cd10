"""Shared tmux sessions for pair programming."""
__version__ = "0.1.0"
