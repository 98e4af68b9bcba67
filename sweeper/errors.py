from __future__ import annotations


class SweeperError(Exception):
    pass


class ConfigError(SweeperError, ValueError):
    """Invalid board shape or mine count. Nothing is changed when raised."""


class GameError(SweeperError):
    """A recoverable rejection of a player intent. State is left untouched."""
    reason = 'rejected'

    def __init__(self, reason: str | None = None):
        if reason is not None:
            self.reason = reason
        super().__init__(self.reason)


class OutOfBounds(GameError):
    reason = 'invalid coordinate'


class AlreadyOpen(GameError):
    reason = 'cell is already open'


class GameOver(GameError):
    reason = 'game is over'


class CellFlagged(GameError):
    reason = 'cell is flagged'


class CellNotHidden(GameError):
    reason = 'cell not hidden'


class ChordRejected(GameError):
    reason = 'incorrect number of flags'


class InvariantViolation(SweeperError, RuntimeError):
    """Overlay and rules disagree in a way that should be impossible."""
