from __future__ import annotations

import logging

from picoforge.core.exceptions import DeviceError
from picoforge.core.smartcard import APDU, Card, Response

lg = logging.getLogger(__name__)


class Agent:
    """Agent that owns the reader connection and transmits APDUs.

    Protocol classes receive agent.transmit as a callable and never see
    the connection itself. Responses are returned as received; status
    word checks belong to the caller.
    """

    def __init__(self, card: Card) -> None:
        self._card = card

    @property
    def connected(self) -> bool:
        return self._card.connected

    def connect(self) -> None:
        """Connect to the first reader found."""
        available = Card.list_readers()
        if not available:
            raise DeviceError(
                "No Smart Card Reader found",
                hint="Plug in the key. On Linux, check that pcscd is running.",
            )
        reader = available[0]
        if len(available) > 1:
            lg.debug("%d readers found, using the first", len(available))
        self._card.connect(reader)
        lg.info("connected to %s", reader)

    def disconnect(self) -> None:
        self._card.disconnect()

    def transmit(self, apdu: APDU) -> Response:
        return self._card.transmit(apdu)
