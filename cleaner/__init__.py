"""catalog-cleaner: tidy and merge file catalogs."""

__version__ = "1.0.0"
