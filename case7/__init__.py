"""case7: hybrid search over markdown product development cases."""

__version__ = "1.0.0"
