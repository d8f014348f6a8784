"""relflow: human-confirmed git release workflow."""

__version__ = "0.1.0"
