"""Configuration, logging and exception hierarchy for catalog-cleaner."""
