"""Find the unit of study codes for a list of course record numbers."""

__version__ = "1.0.0"
