"""
Unit tests for the pyscard wrapper, the agent and APDU traffic logging.
"""

import logging
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from smartcard.Exceptions import CardConnectionException, ListReadersException
from smartcard.scard import SCARD_SHARE_SHARED

from picoforge.core.base import Agent
from picoforge.core.exceptions import DeviceError, TransportError
from picoforge.core.smartcard import APDU, Card, TRACE
from picoforge.core.smartcard import logging as sc_logging
from picoforge.core.smartcard.observer import LoggingCardObserver

from conftest import READ_FLASH, ok


class TestCard:
    """Test Card connection handling."""

    def test_connect_shared_mode(self, reader, connection):
        card = Card()

        card.connect(reader)

        assert card.connected
        assert connection.connected
        assert connection.connect_kwargs == {"mode": SCARD_SHARE_SHARED}
        assert len(connection.observers) == 1

    def test_disconnect_releases_connection(self, reader, connection):
        card = Card()
        card.connect(reader)

        card.disconnect()

        assert not card.connected
        assert not connection.connected
        assert connection.observers == []

    def test_disconnect_failure_still_releases(self, reader, connection):
        connection.disconnect = MagicMock(side_effect=CardConnectionException("card removed"))
        card = Card()
        card.connect(reader)

        card.disconnect()

        assert not card.connected
        assert connection.observers == []

    def test_disconnect_when_not_connected(self):
        Card().disconnect()

    def test_connect_failure_wrapped(self, reader, connection):
        connection.connect = MagicMock(side_effect=CardConnectionException("no card"))
        card = Card()

        with pytest.raises(TransportError) as exc_info:
            card.connect(reader)

        assert isinstance(exc_info.value.__cause__, CardConnectionException)
        assert not card.connected
        assert connection.observers == []

    def test_transmit(self, reader, connection):
        connection.responses[READ_FLASH] = ok(b"\x01\x02")
        card = Card()
        card.connect(reader)

        resp = card.transmit(APDU(0x80, 0x1E, 0x02, 0x00))

        assert connection.commands == [bytes.fromhex("801E020000")]
        assert resp.data == b"\x01\x02"
        assert resp.success

    def test_transmit_failure_wrapped(self, reader, connection):
        connection.transmit = MagicMock(side_effect=CardConnectionException("removed"))
        card = Card()
        card.connect(reader)

        with pytest.raises(TransportError):
            card.transmit(APDU(0x80, 0x1E, 0x02, 0x00))

    def test_transmit_not_connected(self):
        with pytest.raises(RuntimeError):
            Card().transmit(APDU(0x80, 0x1E, 0x02, 0x00))

    def test_list_readers_failure_wrapped(self, monkeypatch):
        monkeypatch.setattr(
            "picoforge.core.smartcard.card.readers",
            MagicMock(side_effect=ListReadersException(0x8010001D)),
        )

        with pytest.raises(TransportError):
            Card.list_readers()


class TestAgent:
    """Test reader selection."""

    def test_connects_first_reader(self, monkeypatch, reader):
        second = MagicMock()
        monkeypatch.setattr(
            "picoforge.core.smartcard.card.readers",
            MagicMock(return_value=[reader, second]),
        )
        agent = Agent(Card())

        agent.connect()

        assert agent.connected
        reader.createConnection.assert_called_once()
        second.createConnection.assert_not_called()

    def test_no_readers(self, monkeypatch):
        monkeypatch.setattr("picoforge.core.smartcard.card.readers", MagicMock(return_value=[]))
        agent = Agent(Card())

        with pytest.raises(DeviceError, match="No Smart Card Reader found"):
            agent.connect()

        assert not agent.connected


class TestLoggingCardObserver:
    """Test APDU traffic logging."""

    def test_command_logged_as_hex(self, caplog):
        caplog.set_level(TRACE, logger="picoforge.core.smartcard.observer")
        event = SimpleNamespace(type="command", args=[[0x80, 0x1E, 0x02, 0x00, 0x00]])

        LoggingCardObserver().update(None, event)

        assert ">> 80 1E 02 00 00" in caplog.text

    def test_long_data_wrapped(self, caplog):
        caplog.set_level(TRACE, logger="picoforge.core.smartcard.observer")
        event = SimpleNamespace(type="response", args=[list(range(20)), 0x90, 0x00])

        LoggingCardObserver().update(None, event)

        lines = [r.getMessage() for r in caplog.records]
        assert lines[0].startswith("<< 00 01 02")
        assert lines[1].strip() == "10 11 12 13"
        assert "9000" in lines[2]

    def test_connect_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="picoforge.core.smartcard.observer")

        LoggingCardObserver().update(None, SimpleNamespace(type="connect", args=[]))

        assert "connect" in caplog.text


class TestConfigureLogging:
    """Test command-line logging levels."""

    @pytest.mark.parametrize(
        "verbose, quiet, level",
        [
            (True, False, sc_logging.TRACE),
            (False, True, logging.WARNING),
            (False, False, sc_logging.PROTOCOL),
        ],
    )
    def test_levels(self, monkeypatch, verbose, quiet, level):
        basic_config = MagicMock()
        monkeypatch.setattr(logging, "basicConfig", basic_config)

        sc_logging.configure(verbose=verbose, quiet=quiet)

        assert basic_config.call_args.kwargs["level"] == level
