"""Configuration, logging, errors and the access policy."""
