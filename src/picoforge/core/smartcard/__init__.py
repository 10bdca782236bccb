from picoforge.core.smartcard.card import Card
from picoforge.core.smartcard.logging import PROTOCOL, TRACE
from picoforge.core.smartcard.types import APDU, Response

__all__ = ["APDU", "Card", "PROTOCOL", "Response", "TRACE"]
