"""Object storage samples: blob transfer helper, CLI and hello-world app."""

__version__ = "0.1.0"
