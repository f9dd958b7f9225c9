"""typingpool: many typists, many strategies, one leaderboard."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .engine import Engine, EngineConfig, RunAbortedError
from .plan import DEFAULT_ALPHABET, Roster, RunConfig, TypistSpec, build_roster
from .types import Strategy, TypingInputs, TypistResult

try:
    __version__ = version("typingpool")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "DEFAULT_ALPHABET",
    "Engine",
    "EngineConfig",
    "Roster",
    "RunAbortedError",
    "RunConfig",
    "Strategy",
    "TypingInputs",
    "TypistResult",
    "TypistSpec",
    "build_roster",
    "__version__",
]
