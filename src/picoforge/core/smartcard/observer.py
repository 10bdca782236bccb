from __future__ import annotations

import logging

from smartcard.CardConnectionObserver import CardConnectionObserver

from picoforge.core.smartcard.logging import PROTOCOL, TRACE

lg = logging.getLogger(__name__)


LINE_BYTES = 16

_GREEN = "\033[32m"
_RED = "\033[31m"
_RESET = "\033[0m"


def color_sw(sw1: int, sw2: int) -> str:
    """Return ANSI color for a status word: green for 9000, red otherwise."""
    if sw1 == 0x90 and sw2 == 0x00:
        return _GREEN
    return _RED


def format_sw(sw1: int, sw2: int) -> str:
    return f"{color_sw(sw1, sw2)}{sw1:02X}{sw2:02X}{_RESET}"


class LoggingCardObserver(CardConnectionObserver):
    """CardConnectionObserver that logs APDU traffic at TRACE level."""

    def _log_hex(self, prefix: str, data: bytes) -> None:
        pad = " " * len(prefix)
        for i in range(0, len(data), LINE_BYTES):
            chunk = data[i : i + LINE_BYTES].hex(" ").upper()
            lg.log(TRACE, "%s%s", prefix if i == 0 else pad, chunk)

    def update(self, observable, event):
        if event.type in ("connect", "reconnect", "disconnect"):
            lg.log(PROTOCOL, event.type)

        elif event.type == "command":
            self._log_hex(">> ", bytes(event.args[0]))

        elif event.type == "response":
            data, sw1, sw2 = event.args[0], event.args[1], event.args[2]
            if data:
                self._log_hex("<< ", bytes(data))
            lg.log(TRACE, "<< %s", format_sw(sw1, sw2))
