"""PageCounter - printed page estimation for directory trees."""

__version__ = "0.1.0"
