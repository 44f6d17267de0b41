"""maplist - catalog and launch service for logical resources."""

__version__ = "0.1.0"
