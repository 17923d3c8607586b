"""helm-generate — run code generators declared in source file comments."""

__version__ = "0.1.0"
