# Custom exceptions for wrapping

from typing import Iterable, Optional


class WrappingError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ConfigError(WrappingError):
    """Raised for configuration-related problems."""
    pass


class MutuallyExclusiveListsError(ConfigError):
    """Raised when both the filetype allowlist and denylist have entries."""

    def __init__(self, allowlist: Iterable[str], denylist: Iterable[str]):
        self.allowlist = sorted(allowlist)
        self.denylist = sorted(denylist)
        super().__init__(
            "wrapping: both auto_set_mode_filetype_allowlist and "
            "auto_set_mode_filetype_denylist have entries; they are mutually "
            "exclusive and only one must be set."
        )


class HostError(WrappingError):
    """Raised when the editor host cannot perform an operation."""

    def __init__(self, operation: str, message: str, buffer: Optional[int] = None):
        self.operation = operation
        self.buffer = buffer
        self.message = message
        where = f" (buffer {buffer})" if buffer is not None else ""
        super().__init__(f"Host operation '{operation}' failed{where}: {message}")


class KeymapNotFoundError(HostError):
    """Raised when removing a buffer-local mapping that does not exist."""

    def __init__(self, buffer: int, mode: str, lhs: str):
        self.mode = mode
        self.lhs = lhs
        super().__init__("del_keymap", f"no {mode}-mode mapping for {lhs}", buffer)


class SyntaxQueryError(WrappingError):
    """Raised when a structural query cannot be compiled for an available language."""

    def __init__(self, language: str, message: str):
        self.language = language
        self.message = message
        super().__init__(f"Invalid query for '{language}': {message}")
