"""
Tests for the picoforge command line.
"""

import json
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner
from smartcard.Exceptions import CardConnectionException

from picoforge.scripts import picoforge

from conftest import WRITE_PHY, sw


@pytest.fixture
def runner():
    return CliRunner()


def test_info(runner, readers):
    result = runner.invoke(picoforge, ["info"])

    assert result.exit_code == 0
    assert "AABBCCDD11223344" in result.stdout
    assert "2 / 8 KB" in result.stdout


def test_status_json(runner, readers):
    result = runner.invoke(picoforge, ["status", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["info"]["firmware_version"] == "1.5"
    assert data["config"]["pid"] == "4242"
    assert data["config"]["enable_secp256k1"] is True


def test_status_text(runner, readers):
    result = runner.invoke(picoforge, ["status"])

    assert result.exit_code == 0
    assert "CAFE:4242" in result.stdout
    assert "MyKey" in result.stdout


def test_write(runner, readers, connection):
    result = runner.invoke(
        picoforge, ["write", "--vid", "1234", "--pid", "5678", "--led-gpio", "3"]
    )

    assert result.exit_code == 0
    assert "Configuration Applied Successfully" in result.stdout
    assert connection.commands[-1] == bytes.fromhex("801C010009000412345678040103")


def test_write_nothing(runner, readers):
    result = runner.invoke(picoforge, ["write"])

    assert result.exit_code == 0
    assert "No changes to apply" in result.stdout
    readers.assert_not_called()


def test_write_options(runner, readers, connection):
    result = runner.invoke(
        picoforge,
        ["write", "--led-dimmable", "--power-cycle-on-reset", "--no-led-steady"],
    )

    assert result.exit_code == 0
    assert connection.commands[-1] == bytes.fromhex("801C01000406020002")


def test_write_vid_without_pid(runner, readers):
    result = runner.invoke(picoforge, ["write", "--vid", "1234"])

    assert result.exit_code == 2
    readers.assert_not_called()


def test_write_partial_options(runner, readers):
    result = runner.invoke(picoforge, ["write", "--led-dimmable"])

    assert result.exit_code == 2


def test_write_product_name_too_long(runner, readers):
    result = runner.invoke(picoforge, ["write", "--product", "X" * 40])

    assert result.exit_code == 1
    readers.assert_not_called()


def test_write_rejected(runner, readers, connection):
    connection.responses[WRITE_PHY] = sw(0x6A, 0x82)

    result = runner.invoke(picoforge, ["write", "--led-gpio", "3"])

    assert result.exit_code == 1


def test_secure_boot_lock(runner, readers, connection):
    result = runner.invoke(picoforge, ["secure-boot", "--lock", "--yes"])

    assert result.exit_code == 0
    assert "Secure Boot Enabled" in result.stdout
    assert connection.commands[-1] == bytes.fromhex("801D000100")


def test_secure_boot_aborted(runner, readers, connection):
    result = runner.invoke(picoforge, ["secure-boot"], input="n\n")

    assert result.exit_code == 1
    assert connection.commands == []


def test_info_survives_disconnect_failure(runner, readers, connection):
    connection.disconnect = MagicMock(side_effect=CardConnectionException("card removed"))

    result = runner.invoke(picoforge, ["info"])

    assert result.exit_code == 0
    assert "AABBCCDD11223344" in result.stdout
