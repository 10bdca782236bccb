from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smartcard.CardConnection import CardConnection
from smartcard.Exceptions import SmartcardException
from smartcard.scard import SCARD_SHARE_SHARED
from smartcard.System import readers

from picoforge.core.exceptions import TransportError
from picoforge.core.smartcard.observer import LoggingCardObserver
from picoforge.core.smartcard.types import APDU, Response

if TYPE_CHECKING:
    from smartcard.reader.Reader import Reader

lg = logging.getLogger(__name__)


class Card:
    """Wrapper around pyscard for the PC/SC channel to one reader."""

    def __init__(self) -> None:
        self._connection: CardConnection | None = None
        self._observer = LoggingCardObserver()

    @property
    def connected(self) -> bool:
        return self._connection is not None

    @staticmethod
    def list_readers() -> list[Reader]:
        """Establish a PC/SC context and list the attached readers."""
        try:
            return list(readers())
        except SmartcardException as exc:
            raise TransportError(f"PC/SC error: {exc}") from exc

    def connect(self, reader: Reader) -> None:
        """Connect to the card in ``reader`` in shared mode."""
        connection = reader.createConnection()
        connection.addObserver(self._observer)
        try:
            connection.connect(mode=SCARD_SHARE_SHARED)
        except SmartcardException as exc:
            connection.deleteObserver(self._observer)
            raise TransportError(
                f"PC/SC error: {exc}",
                hint="Check that the key is plugged in and not claimed by another program.",
            ) from exc
        self._connection = connection

    def disconnect(self) -> None:
        if self._connection is None:
            return
        try:
            self._connection.disconnect()
        except SmartcardException as exc:
            lg.debug("disconnect failed: %s", exc)
        finally:
            self._connection.deleteObserver(self._observer)
            self._connection = None

    def transmit(self, apdu: APDU) -> Response:
        if self._connection is None:
            raise RuntimeError("not connected to a card")
        try:
            data, sw1, sw2 = self._connection.transmit(list(apdu.to_bytes()))
        except SmartcardException as exc:
            raise TransportError(f"PC/SC error: {exc}") from exc
        return Response(data=bytes(data), sw1=sw1, sw2=sw2)
