"""Configuration, logging, transport and error reporting."""
