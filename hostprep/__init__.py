"""hostprep — bring a Linux host from bare OS to a configured desktop."""

__version__ = "0.1.0"
