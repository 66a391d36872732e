"""Interview Review & Assessment Pipeline."""

__version__ = "0.3.0"
