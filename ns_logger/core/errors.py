"""Configuration error raised by the factory layer"""


class ConfigError(ValueError):
    """
    Raised when logging configuration cannot be turned into transports.

    Covers missing namespaces, unknown transport kinds or formats,
    malformed configuration files and modules that fail to side-load.
    Always raised synchronously, before any record is written.
    """
