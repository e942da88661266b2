from __future__ import annotations


class PathtypeError(Exception):
    """Base error for pathtype."""


class InvalidSeedToken(PathtypeError, ValueError):
    """Raised when a seed token cannot be decoded into generator state."""


class InsufficientSpace(PathtypeError):
    """Raised when the region between the path boundaries cannot hold the rows."""

    def __init__(self, message: str, *, span: float = 0.0, n_rows: int = 0) -> None:
        super().__init__(message)
        self.span = float(span)
        self.n_rows = int(n_rows)


class ConfigOutOfRange(PathtypeError, ValueError):
    """A setting fell outside its allowed range.

    Validation clamps instead of raising; instances are kept as notes so callers
    can report what was changed.
    """

    def __init__(self, field: str, value: object, clamped: object) -> None:
        super().__init__(f"{field}={value!r} out of range, clamped to {clamped!r}")
        self.field = field
        self.value = value
        self.clamped = clamped
