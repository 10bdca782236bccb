"""
Pytest configuration and fixtures for picoforge tests.

pyscard is replaced by a fake CardConnection that answers each command by
its CLA INS P1 P2 header, so the whole stack runs without a reader.
"""

import struct
from unittest.mock import MagicMock

import pytest


# ============================================================================
# Command headers
# ============================================================================

SELECT = bytes.fromhex("00A40404")
READ_PHY = bytes.fromhex("801E0101")
READ_FLASH = bytes.fromhex("801E0200")
READ_SECURE = bytes.fromhex("801E0300")
WRITE_PHY = bytes.fromhex("801C0100")
SECURE_BOOT = bytes.fromhex("801D0000")
SECURE_BOOT_LOCK = bytes.fromhex("801D0001")

SELECT_PAYLOAD = bytes.fromhex("01020105AABBCCDD11223344")


def ok(data=b""):
    """Response tuple as pyscard returns it, SW=9000."""
    return list(data), 0x90, 0x00


def sw(sw1, sw2, data=b""):
    return list(data), sw1, sw2


class FakeConnection:
    """Stand-in for smartcard.CardConnection.CardConnection.

    Unknown commands answer 6D00 (INS not supported).
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.commands = []
        self.observers = []
        self.connected = False
        self.connect_kwargs = None

    def addObserver(self, observer):
        self.observers.append(observer)

    def deleteObserver(self, observer):
        self.observers.remove(observer)

    def connect(self, **kwargs):
        self.connected = True
        self.connect_kwargs = kwargs

    def disconnect(self):
        self.connected = False

    def transmit(self, command):
        raw = bytes(command)
        self.commands.append(raw)
        return self.responses.get(raw[:4], sw(0x6D, 0x00))


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def flash_payload():
    """FREE=1000, USED=2048, TOTAL=8192, plus two trailing counters."""
    return struct.pack(">IIIII", 1000, 2048, 8192, 3, 512)


@pytest.fixture
def phy_payload():
    return bytes.fromhex(
        "0004CAFE4242"        # VID/PID CAFE:4242
        "040119"              # LED GPIO 25
        "0501C8"              # LED brightness 200
        "08010F"              # touch timeout 15
        "06020006"            # options: dimmable, power cycle disabled
        "0A0400000008"        # curves: secp256k1
        "0C0102"              # LED driver 2
        "09064D794B657900"    # product "MyKey"
    )


@pytest.fixture
def connection(flash_payload, phy_payload):
    return FakeConnection({
        SELECT: ok(SELECT_PAYLOAD),
        READ_FLASH: ok(flash_payload),
        READ_SECURE: ok(b"\x01\x00\x00"),
        READ_PHY: ok(phy_payload),
        WRITE_PHY: ok(),
        SECURE_BOOT: ok(),
        SECURE_BOOT_LOCK: ok(),
    })


@pytest.fixture
def reader(connection):
    reader = MagicMock()
    reader.__str__.return_value = "Mock PC/SC Reader 00 00"
    reader.createConnection.return_value = connection
    return reader


@pytest.fixture
def readers(monkeypatch, reader):
    """Patch reader enumeration to return the mock reader."""
    fake = MagicMock(return_value=[reader])
    monkeypatch.setattr("picoforge.core.smartcard.card.readers", fake)
    return fake
