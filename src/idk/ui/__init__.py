"""idk CLI UI - Rich terminal interface."""

from idk.ui.console import IdkConsole

__all__ = ["IdkConsole"]
