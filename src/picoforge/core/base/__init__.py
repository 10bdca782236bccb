from picoforge.core.base.agent import Agent
from picoforge.core.base.message import Message, Result
from picoforge.core.base.terminal import Terminal

__all__ = ["Agent", "Message", "Result", "Terminal"]
