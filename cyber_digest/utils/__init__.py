"""Configuration, settings and logging helpers."""
