from __future__ import annotations

import logging

from picoforge.core.base import Agent, Terminal
from picoforge.core.base.terminal import handles
from picoforge.core.exceptions import DeviceError
from picoforge.core.rescue import phy
from picoforge.core.rescue.messages import (
    DeviceInfo,
    FullDeviceStatus,
    GetDeviceInfoMessage,
    ReadDeviceDetailsMessage,
    SecureBootMessage,
    SecureBootResult,
    WriteConfigMessage,
    WriteConfigResult,
)
from picoforge.core.rescue.protocol import RescueProtocol
from picoforge.core.rescue.status import parse_selection
from picoforge.core.rescue.tags import RESCUE_AID
from picoforge.core.smartcard import Response

lg = logging.getLogger(__name__)


def _hex(data: bytes) -> str:
    return data.hex(" ").upper()


class RescueTerminal(Terminal):
    """Terminal for the rescue applet.

    connect() selects the applet and keeps the SELECT response, which
    carries the firmware version and serial the info handlers report.
    """

    def __init__(self, agent: Agent) -> None:
        super().__init__(agent)
        self._proto = RescueProtocol(agent.transmit)
        self._select_response: Response | None = None

    def connect(self) -> None:
        super().connect()
        resp = self._proto.send_select(RESCUE_AID)
        if not resp.success:
            raise DeviceError(
                "Rescue Applet not found on device. Is it in FIDO mode?",
                response=resp.raw,
            )
        self._select_response = resp

    def disconnect(self) -> None:
        self._select_response = None
        super().disconnect()

    def _device_info(self, flash_error: str) -> DeviceInfo:
        if self._select_response is None:
            raise RuntimeError("rescue applet not selected")
        selection = parse_selection(self._select_response)
        flash = self._proto.read_flash_info(flash_error)
        return DeviceInfo(
            serial=selection.serial.hex().upper(),
            flash_used=flash.used // 1024,
            flash_total=flash.total // 1024,
            firmware_version=selection.firmware_version,
        )

    @handles(GetDeviceInfoMessage)
    def _get_device_info(self, message: GetDeviceInfoMessage) -> DeviceInfo:
        return self._device_info("Failed to read flash info")

    @handles(ReadDeviceDetailsMessage)
    def _read_device_details(self, message: ReadDeviceDetailsMessage) -> FullDeviceStatus:
        info = self._device_info("Failed to read flash")
        secure = self._proto.read_secure_boot_state()
        config = phy.decode(self._proto.read_phy())
        return FullDeviceStatus(
            info=info,
            config=config,
            secure_boot=secure.enabled,
            secure_lock=secure.locked,
        )

    @handles(WriteConfigMessage)
    def _write_config(self, message: WriteConfigMessage) -> WriteConfigResult:
        resp = self._proto.send_write_phy(message.data)
        if not resp.success:
            raise DeviceError(f"Write failed: {_hex(resp.raw)}", response=resp.raw)
        return WriteConfigResult(message="Configuration Applied Successfully")

    @handles(SecureBootMessage)
    def _secure_boot(self, message: SecureBootMessage) -> SecureBootResult:
        resp = self._proto.send_secure_boot(message.lock)
        if not resp.success:
            raise DeviceError(f"Secure Boot failed: {_hex(resp.raw)}", response=resp.raw)
        return SecureBootResult(message="Secure Boot Enabled")
