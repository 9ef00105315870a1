"""Domain models, enumerations and errors for a supplier security portal."""

__version__ = "0.1.0"