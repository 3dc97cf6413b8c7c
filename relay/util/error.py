"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Required configuration is missing or invalid.

    Raised at startup; the process must not serve requests afterwards.
    """

    pass
