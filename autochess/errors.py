"""
Exceptions raised by the auto-chess core.

Expected rejections of placement commands are reported through
CommandStatus return values; these exceptions cover the async battle
command, which returns a report instead of a status.
"""
from autochess.utils.constants import CommandStatus


class AutoChessError(Exception):
    """Base class for all auto-chess errors."""


class CommandRejectedError(AutoChessError):
    """A command was refused in the current game phase."""

    def __init__(self, status: CommandStatus, message: str = ""):
        self.status = status
        super().__init__(message or f"Command rejected: {status.value}")
