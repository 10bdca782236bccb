from __future__ import annotations

from dataclasses import dataclass

MAX_DATA_LENGTH = 0xFF


@dataclass
class APDU:
    """Short command APDU as the rescue applet expects it.

    Serialized as CLA INS P1 P2 Lc DATA. The length byte is always
    present, so a command without data ends in 00.
    """

    cla: int
    ins: int
    p1: int
    p2: int
    data: bytes = b""

    def to_bytes(self) -> bytes:
        if len(self.data) > MAX_DATA_LENGTH:
            raise ValueError(f"command data too long: {len(self.data)} bytes")
        buf = bytearray([self.cla, self.ins, self.p1, self.p2, len(self.data)])
        buf.extend(self.data)
        return bytes(buf)

    def __repr__(self) -> str:
        return self.to_bytes().hex(" ").upper()


@dataclass
class Response:
    """ISO 7816 response APDU. ``data`` excludes the status word."""

    data: bytes
    sw1: int
    sw2: int

    @property
    def sw(self) -> int:
        return (self.sw1 << 8) | self.sw2

    @property
    def success(self) -> bool:
        return self.sw1 == 0x90 and self.sw2 == 0x00

    @property
    def raw(self) -> bytes:
        """The response as the device sent it: data followed by SW1 SW2."""
        return self.data + bytes([self.sw1, self.sw2])

    def __repr__(self) -> str:
        sw = f"SW={self.sw:04X}"
        if self.data:
            return f"{self.data.hex(' ').upper()} {sw}"
        return sw
