"""PHY configuration codec.

The PHY blob is a packed run of simple-TLV records (see tags.py). Reading
decodes the whole blob into a PhyConfig. Writing sends only the records
for the fields the caller set; the device merges them into its stored
configuration.
"""

from __future__ import annotations

import logging
import re
import struct
from dataclasses import dataclass

from picoforge.core.exceptions import ValidationError
from picoforge.core.rescue.tags import (
    CURVE_SECP256K1,
    MAX_PRODUCT_NAME,
    OPT_DISABLE_POWER_RESET,
    OPT_LED_DIMMABLE,
    OPT_LED_STEADY,
    PHY_TAG_NAMES,
    TAG_CURVES,
    TAG_LED_BRIGHTNESS,
    TAG_LED_DRIVER,
    TAG_LED_GPIO,
    TAG_OPTS,
    TAG_UP_BTN,
    TAG_USB_PRODUCT,
    TAG_VIDPID,
)
from picoforge.core.smartcard.logging import TRACE
from picoforge.core.smartcard.tlv import TLV, build as build_tlv, parse as parse_tlv

lg = logging.getLogger(__name__)

_USB_ID = re.compile(r"[0-9A-Fa-f]{1,4}")

# Single-byte fields, in write order.
_BYTE_FIELDS: dict[int, str] = {
    TAG_LED_GPIO: "led_gpio",
    TAG_LED_BRIGHTNESS: "led_brightness",
    TAG_UP_BTN: "touch_timeout",
}


@dataclass
class PhyConfig:
    """Full PHY configuration as read from the device.

    Fields whose tag is missing from the blob keep their defaults.
    ``led_driver`` stays None unless the device reports one.
    """

    vid: str = ""
    pid: str = ""
    product_name: str = ""
    led_gpio: int = 0
    led_brightness: int = 0
    touch_timeout: int = 0
    led_driver: int | None = None
    led_dimmable: bool = False
    power_cycle_on_reset: bool = False
    led_steady: bool = False
    enable_secp256k1: bool = False


@dataclass
class PhyConfigUpdate:
    """Partial PHY configuration to write. None leaves a field unchanged.

    ``vid`` and ``pid`` share one record and are written only together.
    The three option flags share one bitmask and are written only when
    all three are set.
    """

    vid: str | None = None
    pid: str | None = None
    product_name: str | None = None
    led_gpio: int | None = None
    led_brightness: int | None = None
    touch_timeout: int | None = None
    led_driver: int | None = None
    led_dimmable: bool | None = None
    power_cycle_on_reset: bool | None = None
    led_steady: bool | None = None
    enable_secp256k1: bool | None = None


# -- options bitmask --

def _pack_options(dimmable: bool, power_cycle_on_reset: bool, steady: bool) -> int:
    opts = 0
    if dimmable:
        opts |= OPT_LED_DIMMABLE
    if not power_cycle_on_reset:
        opts |= OPT_DISABLE_POWER_RESET
    if steady:
        opts |= OPT_LED_STEADY
    return opts


def _unpack_options(opts: int) -> tuple[bool, bool, bool]:
    """Return (dimmable, power_cycle_on_reset, steady)."""
    return (
        bool(opts & OPT_LED_DIMMABLE),
        not opts & OPT_DISABLE_POWER_RESET,
        bool(opts & OPT_LED_STEADY),
    )


# -- decode --

def decode(data: bytes) -> PhyConfig:
    """Decode a PHY blob (status word already stripped).

    Unknown tags and records too short for their tag are skipped.
    """
    config = PhyConfig()
    nodes = parse_tlv(data)
    for node in nodes:
        lg.log(TRACE, "PHY %s", node.format(PHY_TAG_NAMES))
        value = node.value
        if node.tag == TAG_VIDPID:
            if len(value) >= 4:
                vid, pid = struct.unpack(">HH", value[:4])
                config.vid = f"{vid:04X}"
                config.pid = f"{pid:04X}"
        elif node.tag in _BYTE_FIELDS:
            if value:
                setattr(config, _BYTE_FIELDS[node.tag], value[0])
        elif node.tag == TAG_USB_PRODUCT:
            try:
                config.product_name = value.rstrip(b"\x00").decode("utf-8")
            except UnicodeDecodeError:
                lg.warning("USB product string is not UTF-8: %s", value.hex(" ").upper())
                config.product_name = ""
        elif node.tag == TAG_OPTS:
            if len(value) >= 2:
                (opts,) = struct.unpack(">H", value[:2])
                (
                    config.led_dimmable,
                    config.power_cycle_on_reset,
                    config.led_steady,
                ) = _unpack_options(opts)
        elif node.tag == TAG_CURVES:
            if len(value) >= 4:
                (curves,) = struct.unpack(">I", value[:4])
                config.enable_secp256k1 = bool(curves & CURVE_SECP256K1)
        elif node.tag == TAG_LED_DRIVER:
            if value:
                config.led_driver = value[0]
        else:
            lg.debug("skipping unknown PHY tag %02X", node.tag)
    return config


# -- encode --

def _parse_usb_id(text: str, label: str) -> int:
    if not _USB_ID.fullmatch(text):
        raise ValidationError(f"Invalid {label}", hint=f"expected up to 4 hex digits, got {text!r}")
    return int(text, 16)


def _byte(value: int, label: str) -> bytes:
    if not 0 <= value <= 0xFF:
        raise ValidationError(f"Invalid {label}: {value}", hint="expected 0-255")
    return bytes([value])


def encode(update: PhyConfigUpdate) -> bytes:
    """Encode the fields set in ``update`` as a PHY blob.

    Returns b"" when nothing is set. Raises ValidationError for input
    that cannot be encoded.
    """
    nodes: list[TLV] = []

    if update.vid is not None and update.pid is not None:
        vid = _parse_usb_id(update.vid, "VID")
        pid = _parse_usb_id(update.pid, "PID")
        nodes.append(TLV(TAG_VIDPID, struct.pack(">HH", vid, pid)))

    for tag, name in _BYTE_FIELDS.items():
        value = getattr(update, name)
        if value is not None:
            nodes.append(TLV(tag, _byte(value, name)))

    options = (update.led_dimmable, update.power_cycle_on_reset, update.led_steady)
    if None not in options:
        nodes.append(TLV(TAG_OPTS, struct.pack(">H", _pack_options(*options))))

    if update.enable_secp256k1 is not None:
        curves = CURVE_SECP256K1 if update.enable_secp256k1 else 0
        nodes.append(TLV(TAG_CURVES, struct.pack(">I", curves)))

    if update.led_driver is not None:
        nodes.append(TLV(TAG_LED_DRIVER, _byte(update.led_driver, "led_driver")))

    if update.product_name:
        try:
            value = update.product_name.encode("utf-8") + b"\x00"
        except UnicodeEncodeError as exc:
            raise ValidationError("Invalid product name", hint="not valid Unicode text") from exc
        if len(value) > MAX_PRODUCT_NAME:
            raise ValidationError(
                "Product name too long",
                hint=f"at most {MAX_PRODUCT_NAME - 1} bytes of UTF-8",
            )
        nodes.append(TLV(TAG_USB_PRODUCT, value))

    return build_tlv(nodes)
