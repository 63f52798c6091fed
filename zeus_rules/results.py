"""Outcome values returned by rules operations."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


class RulesError(RuntimeError):
    """Raised when game data breaks an invariant that correct setup guarantees.

    Expected, player-facing failures never raise; they come back as a failed
    :class:`Result` instead.
    """


@dataclass(frozen=True)
class Result:
    success: bool
    message: str

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "message": self.message}


def success(message: str) -> Result:
    return Result(True, message)


def failure(message: str) -> Result:
    return Result(False, message)


__all__ = ["RulesError", "Result", "success", "failure"]
