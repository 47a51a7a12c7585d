from __future__ import annotations


class DnsSweepError(Exception):
    """Base class for failures that end a dns-sweep run."""

    exit_code = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UsageError(DnsSweepError):
    def __init__(self, message: str, usage: str = "") -> None:
        super().__init__(message)
        self.usage = usage


class ConfigurationError(DnsSweepError):
    pass


class ReverseLookupError(DnsSweepError):
    pass


class SerializationError(DnsSweepError):
    pass
