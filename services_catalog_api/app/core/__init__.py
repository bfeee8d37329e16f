"""Configuration, logging, errors, sessions and database helpers."""
