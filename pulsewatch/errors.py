"""Exception types for PulseWatch."""


class PulseWatchError(Exception):
    """Base class for all PulseWatch errors."""


class SourceError(PulseWatchError):
    """An upstream data source could not be reached or returned bad data."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")


class ConfigError(PulseWatchError):
    """The configuration file is unreadable or invalid."""
