from .terminal import TerminalDisplay

__all__ = ["TerminalDisplay"]
