"""Goldenpane exceptions."""


class GoldenPaneError(Exception):
    """Base class for goldenpane errors."""


class InvalidConfigKeyError(GoldenPaneError, KeyError):
    """Raised when a configuration key is not one of the defaults."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown configuration key '{self.key}'"


class InvalidConfigValueError(GoldenPaneError, ValueError):
    """Raised when a value would leave the configuration inconsistent."""

    def __init__(self, key: str, value: object, reason: str):
        super().__init__(key, value, reason)
        self.key = key
        self.value = value
        self.reason = reason

    def __str__(self) -> str:
        return f"Invalid value {self.value!r} for '{self.key}': {self.reason}"


class InvalidFactorArgumentError(GoldenPaneError, ValueError):
    """Raised when the adjust command receives a non-numeric factor."""

    def __init__(self, argument: object):
        super().__init__(argument)
        self.argument = argument

    def __str__(self) -> str:
        return f"Invalid factor {self.argument!r}. Usage: adjust <number>"


class HostOperationError(GoldenPaneError):
    """Raised by providers when the host rejects a pane operation."""
