"""
Exceptions raised by the Lucky 4 rules engine.

Validators report problems through ValidationResult objects; these are
for the paths that raise: transitions, generation and record mapping.
"""
from __future__ import annotations

from typing import Optional


class Lucky4Error(Exception):
    """Base class for every Lucky 4 error."""
    pass


class GenerationError(Lucky4Error, ValueError):
    """A number generation request cannot be satisfied."""
    pass


class GameRuleError(Lucky4Error):
    """A transition was refused by a validation rule."""
    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)


class InvalidStateTransition(Lucky4Error):
    """The action is not allowed from the game's current status."""
    def __init__(self, action, status):
        self.action = action
        self.status = status
        super().__init__(f"Cannot perform {action} on game with status {status}")


class UnknownAction(Lucky4Error, ValueError):
    def __init__(self, action):
        self.action = action
        super().__init__(f"Unknown action: {action}")


class InvalidGameRecord(Lucky4Error, ValueError):
    """An external game record could not be mapped onto a GameState."""
    pass
