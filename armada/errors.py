"""Exceptions raised by the armada core."""


class InvalidConfig(ValueError):
    """Raised when a configuration value cannot start a game."""
