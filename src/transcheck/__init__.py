"""transcheck - consistency checks for localized message catalogs."""

__version__ = "0.4.0"
