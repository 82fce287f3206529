"""Nine Men's Morris rule engine."""

__version__ = "0.1.0"
