"""Index CREATE TABLE statements, their columns and a sample row in SQL dump files."""

__version__ = "0.1.0"
__all__ = ["__version__"]