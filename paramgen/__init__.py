"""CSV -> deployment-parameter document generator."""

__version__ = "0.1.0"
