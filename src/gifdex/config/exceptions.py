"""Configuration errors."""


class ConfigError(Exception):
    """Raised when configuration cannot be read, merged, or validated."""
