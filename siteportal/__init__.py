"""Site portal core: user accounts, credentials and federation persistence."""

__version__ = "0.1.0"
