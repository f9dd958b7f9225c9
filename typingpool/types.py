from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Strategy(str, Enum):
    RANDOM = "random"
    LINEAR_COMMON = "linear"
    LOG_COMMON = "log"
    BIGRAM = "bigram"
    TRIGRAM = "trigram"

    @property
    def prefix(self) -> str:
        return f"{self.value}_"

    @property
    def markov_order(self) -> int:
        """Number of trailing characters the strategy conditions on (0 = none)."""
        if self is Strategy.BIGRAM:
            return 1
        if self is Strategy.TRIGRAM:
            return 2
        return 0


class PreconditionError(ValueError):
    pass


@dataclass(frozen=True)
class ErrorInfo:
    exc_type: str
    message: str
    traceback: str


@dataclass(frozen=True)
class TypingInputs:
    """Read-only inputs shared by every typist of a run."""

    alphabet: Tuple[str, ...]
    dictionary: frozenset
    bigram_map: Dict[Tuple[str, ...], int]
    trigram_map: Dict[Tuple[str, ...], int]


@dataclass(frozen=True)
class TypistResult:
    name: str
    strategy: Strategy
    occurrences: Dict[str, int]
    started_at: float
    finished_at: float

    @property
    def total(self) -> int:
        return sum(self.occurrences.values())

    @property
    def duration_seconds(self) -> float:
        return max(0.0, self.finished_at - self.started_at)


@dataclass(frozen=True)
class RunSummary:
    started_at_iso: str
    finished_at_iso: str
    executor: str
    seed: Optional[int]
    typists: int
    total_occurrences: int
    distinct_words: int
    top_words: List[Tuple[str, int]]
    top_typists: List[Tuple[str, int]]
    durations: Dict[str, float]
