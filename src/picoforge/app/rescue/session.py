"""Rescue applet session.

Constructs the stack (Card -> Agent -> RescueTerminal), connects and
selects the applet, and disconnects however the block exits. Every
operation opens its own session; nothing is kept between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from picoforge.core.base import Agent
from picoforge.core.rescue import RescueTerminal
from picoforge.core.smartcard import Card

lg = logging.getLogger(__name__)


@contextmanager
def rescue_session() -> Iterator[RescueTerminal]:
    """Open a rescue applet session on the first reader."""
    card = Card()
    agent = Agent(card)
    terminal = RescueTerminal(agent)

    try:
        terminal.connect()
        yield terminal
    finally:
        terminal.disconnect()
        lg.debug("session closed")
