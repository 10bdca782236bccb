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
from picoforge.core.rescue.phy import PhyConfig, PhyConfigUpdate
from picoforge.core.rescue.protocol import RescueProtocol
from picoforge.core.rescue.terminal import RescueTerminal

__all__ = [
    "DeviceInfo",
    "FullDeviceStatus",
    "GetDeviceInfoMessage",
    "PhyConfig",
    "PhyConfigUpdate",
    "ReadDeviceDetailsMessage",
    "RescueProtocol",
    "RescueTerminal",
    "SecureBootMessage",
    "SecureBootResult",
    "WriteConfigMessage",
    "WriteConfigResult",
]
