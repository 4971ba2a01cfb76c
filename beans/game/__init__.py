"""Game module: player interaction with a generated puzzle."""

from .session import GameSession, MoveResult, CheckStatus, CheckResult

__all__ = ["GameSession", "MoveResult", "CheckStatus", "CheckResult"]
