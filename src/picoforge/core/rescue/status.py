"""Fixed-layout payloads returned by the rescue applet."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from picoforge.core.exceptions import DeviceError
from picoforge.core.smartcard import Response

_SELECT_LENGTH = 12


@dataclass
class SelectionResult:
    """Applet identity from the SELECT response.

    Layout: MCU(1) PRODUCT(1) VER_MAJOR(1) VER_MINOR(1) SERIAL(8).
    """

    mcu_id: int
    product_id: int
    version_major: int
    version_minor: int
    serial: bytes

    @property
    def firmware_version(self) -> str:
        return f"{self.version_major}.{self.version_minor}"


@dataclass
class FlashInfo:
    """Flash usage in bytes."""

    free: int = 0
    used: int = 0
    total: int = 0


@dataclass
class SecureBootState:
    enabled: bool = False
    locked: bool = False


def parse_selection(response: Response) -> SelectionResult:
    if len(response.data) < _SELECT_LENGTH:
        raise DeviceError("Invalid response from device", response=response.raw)
    mcu, product, major, minor = response.data[:4]
    return SelectionResult(
        mcu_id=mcu,
        product_id=product,
        version_major=major,
        version_minor=minor,
        serial=bytes(response.data[4:_SELECT_LENGTH]),
    )


def parse_flash_info(data: bytes) -> FlashInfo:
    """Parse FREE(4) USED(4) TOTAL(4), big endian.

    Firmware may append further counters; they are ignored. A field that
    is not fully present reads as 0.
    """
    fields = []
    for offset in range(0, 12, 4):
        chunk = data[offset : offset + 4]
        fields.append(struct.unpack(">I", chunk)[0] if len(chunk) == 4 else 0)
    return FlashInfo(*fields)


def parse_secure_boot_state(response: Response) -> SecureBootState:
    """ENABLED(1) LOCKED(1) ... on 9000; anything else reads as all False."""
    if not response.success or len(response.data) < 2:
        return SecureBootState()
    return SecureBootState(
        enabled=response.data[0] != 0,
        locked=response.data[1] != 0,
    )
