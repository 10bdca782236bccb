from __future__ import annotations

import logging
from dataclasses import dataclass

lg = logging.getLogger(__name__)


@dataclass
class TLV:
    """A single simple-TLV record: 1-byte tag, 1-byte length, value."""

    tag: int
    value: bytes = b""

    def to_bytes(self) -> bytes:
        if len(self.value) > 0xFF:
            raise ValueError(f"TLV {self.tag:02X} value too long: {len(self.value)} bytes")
        return bytes([self.tag, len(self.value)]) + self.value

    def format(self, tag_names: dict[int, str] | None = None) -> str:
        """Format this record as one human-readable line."""
        name = (tag_names or {}).get(self.tag, "")
        label = f"{self.tag:02X} {name}".rstrip()
        return f"{label}: {self.value.hex(' ').upper()}".rstrip()

    def __repr__(self) -> str:
        return f"TLV({self.tag:02X}, {self.value.hex().upper()})"


def parse(data: bytes) -> list[TLV]:
    """Parse a packed sequence of simple-TLV records.

    Records follow each other with no padding. A record whose header or
    value does not fit in the remaining bytes ends the scan; it and
    anything after it are dropped.
    """
    nodes: list[TLV] = []
    offset = 0
    while offset + 2 <= len(data):
        tag, length = data[offset], data[offset + 1]
        if offset + 2 + length > len(data):
            lg.debug("truncated TLV %02X at offset %d, dropping %d bytes",
                     tag, offset, len(data) - offset)
            return nodes
        offset += 2
        nodes.append(TLV(tag=tag, value=data[offset : offset + length]))
        offset += length
    if offset < len(data):
        lg.debug("dropping %d trailing byte(s)", len(data) - offset)
    return nodes


def build(nodes: list[TLV]) -> bytes:
    """Serialize records back to back."""
    return b"".join(node.to_bytes() for node in nodes)
