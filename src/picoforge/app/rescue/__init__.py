from picoforge.app.rescue.service import NO_CHANGES, PicoForge
from picoforge.app.rescue.session import rescue_session

__all__ = [
    "NO_CHANGES",
    "PicoForge",
    "rescue_session",
]
