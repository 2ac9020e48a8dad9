"""LineGutter: line-number gutters for code samples in rendered HTML."""

__version__ = "0.1.0"
