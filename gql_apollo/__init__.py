"""Drive the Apollo GraphQL CLI from Python."""

__version__ = "0.1.0"
