from __future__ import annotations

from dataclasses import dataclass

from picoforge.core.base import Message, Result
from picoforge.core.rescue.phy import PhyConfig


@dataclass
class GetDeviceInfoMessage(Message):
    """Request serial, firmware version and flash usage."""


@dataclass
class DeviceInfo(Result):
    serial: str
    flash_used: int
    flash_total: int
    firmware_version: str


@dataclass
class ReadDeviceDetailsMessage(Message):
    """Request device info plus PHY config and secure boot state."""


@dataclass
class FullDeviceStatus(Result):
    info: DeviceInfo
    config: PhyConfig
    secure_boot: bool
    secure_lock: bool


@dataclass
class WriteConfigMessage(Message):
    """WRITE an encoded PHY blob."""

    data: bytes


@dataclass
class WriteConfigResult(Result):
    message: str


@dataclass
class SecureBootMessage(Message):
    """Enable secure boot, optionally locking the device to its key."""

    lock: bool = False


@dataclass
class SecureBootResult(Result):
    message: str
