"""
Exception hierarchy for the Quoridor engine.
"""


class QuoridorError(Exception):
    """Base class for all engine errors."""


class IllegalActionError(QuoridorError):
    """A move, wall or decline that is not legal in the current state."""


class WallOverlapError(IllegalActionError):
    """Wall is out of bounds or overlaps/crosses an existing wall."""


class PathBlockedError(IllegalActionError):
    """Wall would cut a player off from their goal row."""

    def __init__(self, message: str = "Walls cannot block a player's only path to their goal row"):
        super().__init__(message)


class MalformedStateError(QuoridorError):
    """Persisted or handed-off state failed validation."""


class NoLegalActionsError(QuoridorError):
    """The player to act has no legal move at all."""


class UnknownNodeError(QuoridorError, KeyError):
    """History node id does not exist in the tree."""

    def __str__(self):
        return Exception.__str__(self)
