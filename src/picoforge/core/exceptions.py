"""Exception hierarchy for picoforge.

Every failure reported to a caller is a PicoForgeError carrying a
human-readable message, so the command line and any other front end can
catch them with a single handler.
"""

from __future__ import annotations


class PicoForgeError(Exception):
    """Base exception for all picoforge errors.

    Attributes:
        message: Human-readable error description.
        hint: Optional troubleshooting hint.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class TransportError(PicoForgeError):
    """PC/SC level failure: no service, reader gone, card removed.

    Raised with the underlying pyscard exception chained as ``__cause__``.
    """


class DeviceError(PicoForgeError):
    """The device answered, but not with what the operation requires.

    Raised for a non-9000 status word on a checked command, or for a
    response too short to carry the fields the operation needs.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        response: bytes | None = None,
    ) -> None:
        super().__init__(message, hint)
        self.response = response


class ValidationError(PicoForgeError):
    """Caller input cannot be encoded. Raised before any device I/O."""
