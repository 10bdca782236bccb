from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


def _drop_none(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value for key, value in items if value is not None}


@dataclass
class Message:
    """Base class for messages sent to a terminal."""


@dataclass
class Result:
    """Base class for typed results from a terminal operation."""

    def to_dict(self) -> dict[str, Any]:
        """Return the result as plain data, nested dataclasses included.

        Fields set to None are left out, so an unset optional value is
        absent rather than null.
        """
        return asdict(self, dict_factory=_drop_none)
