# filename : main.py
# created  : 10/19/2026


import logging

import click

from picoforge.app.rescue import PicoForge
from picoforge.app.rescue.display import format_device_info, format_status, to_json
from picoforge.core.exceptions import PicoForgeError
from picoforge.core.rescue import PhyConfigUpdate

lg = logging.getLogger(__name__)


def _info(service: PicoForge, as_json: bool = False) -> None:
    info = service.get_basic_info()
    click.echo(to_json(info) if as_json else format_device_info(info))


def _status(service: PicoForge, as_json: bool = False) -> None:
    status = service.get_full_status()
    click.echo(to_json(status) if as_json else format_status(status))


def _write(service: PicoForge, update: PhyConfigUpdate) -> None:
    click.echo(service.write_config(update))


def _secure_boot(service: PicoForge, lock: bool = False) -> None:
    click.echo(service.set_secure_boot(lock))


_ACTIONS = {
    "info": _info,
    "status": _status,
    "write": _write,
    "secure-boot": _secure_boot,
}


def main(action: str, service: PicoForge | None = None, **kwargs) -> int:
    """Run one action and return the process exit code."""
    lg.debug("picoforge %s", action)
    try:
        _ACTIONS[action](service or PicoForge(), **kwargs)
    except PicoForgeError as exc:
        lg.error("%s", exc)
        return 1
    return 0
