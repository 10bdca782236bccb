from __future__ import annotations

import logging

TRACE = 15
PROTOCOL = 18
logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(PROTOCOL, "PROTOCOL")

FORMAT = "%(levelname)-8s %(name)s: %(message)s"


def configure(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging for the command line.

    ``verbose`` shows raw APDUs (TRACE), ``quiet`` only warnings and
    errors. The default shows one PROTOCOL line per command.
    """
    if verbose:
        level = TRACE
    elif quiet:
        level = logging.WARNING
    else:
        level = PROTOCOL
    logging.basicConfig(level=level, format=FORMAT)
