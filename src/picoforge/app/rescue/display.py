"""Human-readable and JSON formatting of device results."""

from __future__ import annotations

import json

from picoforge.core.base import Result
from picoforge.core.rescue import DeviceInfo, FullDeviceStatus, PhyConfig


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def format_device_info(info: DeviceInfo) -> str:
    lines = [
        f"Serial:             {info.serial}",
        f"Firmware:           {info.firmware_version}",
        f"Flash:              {info.flash_used} / {info.flash_total} KB",
    ]
    return "\n".join(lines)


def format_config(config: PhyConfig) -> str:
    driver = "not set" if config.led_driver is None else str(config.led_driver)
    lines = [
        f"VID:PID:            {config.vid or '----'}:{config.pid or '----'}",
        f"Product:            {config.product_name}",
        f"LED GPIO:           {config.led_gpio}",
        f"LED brightness:     {config.led_brightness}",
        f"LED driver:         {driver}",
        f"LED dimmable:       {_yes_no(config.led_dimmable)}",
        f"LED steady:         {_yes_no(config.led_steady)}",
        f"Power cycle reset:  {_yes_no(config.power_cycle_on_reset)}",
        f"Touch timeout:      {config.touch_timeout} s",
        f"secp256k1:          {_yes_no(config.enable_secp256k1)}",
    ]
    return "\n".join(lines)


def format_status(status: FullDeviceStatus) -> str:
    parts = [
        format_device_info(status.info),
        format_config(status.config),
        f"Secure boot:        {_yes_no(status.secure_boot)}"
        f" ({'locked' if status.secure_lock else 'unlocked'})",
    ]
    return "\n".join(parts)


def to_json(result: Result) -> str:
    return json.dumps(result.to_dict(), indent=2)
