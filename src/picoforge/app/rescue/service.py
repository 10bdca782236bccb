from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager

from picoforge.app.rescue.session import rescue_session
from picoforge.core.rescue import (
    DeviceInfo,
    FullDeviceStatus,
    GetDeviceInfoMessage,
    PhyConfigUpdate,
    ReadDeviceDetailsMessage,
    RescueTerminal,
    SecureBootMessage,
    WriteConfigMessage,
)
from picoforge.core.rescue import phy

lg = logging.getLogger(__name__)

NO_CHANGES = "No changes to apply"


class PicoForge:
    """The four device operations.

    Each call opens a fresh session and closes it before returning.
    Failures raise PicoForgeError subclasses.
    """

    def __init__(
        self,
        session: Callable[[], AbstractContextManager[RescueTerminal]] = rescue_session,
    ) -> None:
        self._session = session

    def get_basic_info(self) -> DeviceInfo:
        with self._session() as terminal:
            return terminal.send(GetDeviceInfoMessage())

    def get_full_status(self) -> FullDeviceStatus:
        with self._session() as terminal:
            return terminal.send(ReadDeviceDetailsMessage())

    def write_config(self, update: PhyConfigUpdate) -> str:
        """Write the fields set in ``update``.

        Input is validated and encoded before the device is touched; an
        update with nothing set does not open a session at all.
        """
        blob = phy.encode(update)
        if not blob:
            lg.info(NO_CHANGES)
            return NO_CHANGES
        with self._session() as terminal:
            return terminal.send(WriteConfigMessage(data=blob)).message

    def set_secure_boot(self, lock: bool) -> str:
        with self._session() as terminal:
            return terminal.send(SecureBootMessage(lock=lock)).message
