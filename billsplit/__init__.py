"""Receipt OCR normalization for bill splitting."""

__version__ = "0.1.0"
