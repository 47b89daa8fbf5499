"""saneif-specific exceptions."""


class SaneIfConfigError(Exception):
    """Raised when a configuration value has the wrong type.

    Callers should print the message and exit non-zero so that pre-commit
    treats the hook as failed instead of running with a half-read config.
    """
