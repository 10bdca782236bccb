from __future__ import annotations

import logging
from collections.abc import Callable

from picoforge.core.exceptions import DeviceError
from picoforge.core.rescue.status import (
    FlashInfo,
    SecureBootState,
    parse_flash_info,
    parse_secure_boot_state,
)
from picoforge.core.rescue.tags import (
    INS_READ,
    INS_SECURE,
    INS_WRITE,
    READ_FLASH,
    READ_PHY,
    READ_SECURE,
    WRITE_PHY,
)
from picoforge.core.smartcard import APDU, Response
from picoforge.core.smartcard.logging import PROTOCOL
from picoforge.core.smartcard.observer import format_sw

lg = logging.getLogger(__name__)


class RescueProtocol:
    """Rescue applet protocol operations."""

    def __init__(self, transmit: Callable[[APDU], Response]) -> None:
        self._transmit = transmit

    def _send(self, label: str, apdu: APDU) -> Response:
        resp = self._transmit(apdu)
        lg.log(PROTOCOL, "%s %s", label, format_sw(resp.sw1, resp.sw2))
        return resp

    # -- commands --

    def send_select(self, aid: bytes) -> Response:
        """SELECT by AID (00 A4 04 04)."""
        apdu = APDU(cla=0x00, ins=0xA4, p1=0x04, p2=0x04, data=aid)
        return self._send(f"SELECT {aid.hex().upper()}", apdu)

    def send_read(self, p1: int, p2: int, label: str) -> Response:
        """READ (80 1E)."""
        apdu = APDU(cla=0x80, ins=INS_READ, p1=p1, p2=p2)
        return self._send(f"READ {label}", apdu)

    def send_write_phy(self, data: bytes) -> Response:
        """WRITE PHY (80 1C 01 00)."""
        apdu = APDU(cla=0x80, ins=INS_WRITE, p1=WRITE_PHY, p2=0x00, data=data)
        return self._send(f"WRITE PHY len={len(data):02X}", apdu)

    def send_secure_boot(self, lock: bool, key_index: int = 0x00) -> Response:
        """SECURE (80 1D). P1=key index, P2=01 to lock."""
        apdu = APDU(cla=0x80, ins=INS_SECURE, p1=key_index, p2=0x01 if lock else 0x00)
        return self._send(f"SECURE BOOT key={key_index:02X} lock={lock}", apdu)

    # -- operations --

    def read_flash_info(self, error: str = "Failed to read flash info") -> FlashInfo:
        resp = self.send_read(*READ_FLASH, "FLASH")
        if not resp.success:
            raise DeviceError(error, response=resp.raw)
        return parse_flash_info(resp.data)

    def read_secure_boot_state(self) -> SecureBootState:
        """Best effort: a failed read reports secure boot as off."""
        resp = self.send_read(*READ_SECURE, "SECURE")
        state = parse_secure_boot_state(resp)
        if not resp.success:
            lg.debug("secure boot state unavailable (SW=%04X)", resp.sw)
        return state

    def read_phy(self) -> bytes:
        """Return the PHY config blob without its status word."""
        resp = self.send_read(*READ_PHY, "PHY")
        if not resp.success:
            raise DeviceError("Failed to read config", response=resp.raw)
        return resp.data
