"""
Exceptions raised at the input boundary.

The transformation engine itself has no fatal conditions; these only cover
reading analyzer output from disk.
"""


class ChronographError(Exception):
    """Base class for chronograph errors."""


class InputFormatError(ChronographError):
    """Analyzer output could not be read or does not match a known shape."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class ConfigError(ChronographError):
    """The configuration file exists but cannot be used."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")
