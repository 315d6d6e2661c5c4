"""devstack: developer tool bootstrapper."""

__version__ = "0.1.0"
