from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from .types import Strategy

# Latin letters, most common first
DEFAULT_ALPHABET: tuple[str, ...] = tuple("eianosrtlcudpmhgybfvkwzxqj")


class NamePoolExhaustedError(RuntimeError):
    pass


@dataclass(frozen=True)
class RunConfig:
    strategies: tuple[Strategy, ...] = tuple(Strategy)
    repetitions: int = 10
    target_length: int = 100_000
    # Inclusive bounds on the length of words searched for
    min_word_length: int = 4
    max_word_length: int = 8
    top_n: int = 10
    seed: int | None = None

    @property
    def search_window(self) -> tuple[int, int]:
        return (self.min_word_length, self.max_word_length + 1)

    @property
    def typist_count(self) -> int:
        return len(self.strategies) * self.repetitions


@dataclass(frozen=True)
class TypistSpec:
    name: str
    strategy: Strategy
    seed: int | None = None


@dataclass(frozen=True)
class Roster:
    config: RunConfig
    typists: list[TypistSpec] = field(default_factory=list)

    def names(self) -> list[str]:
        return [t.name for t in self.typists]

    def by_name(self) -> dict[str, TypistSpec]:
        return {t.name: t for t in self.typists}


def shuffle_names(names: Sequence[str], seed: int | None = None) -> list[str]:
    shuffled = list(names)
    random.Random(seed).shuffle(shuffled)
    return shuffled


def build_roster(config: RunConfig, names: Sequence[str]) -> Roster:
    """One typist per (strategy, repetition), named prefix + next unused name."""
    needed = config.typist_count
    if len(names) < needed:
        raise NamePoolExhaustedError(
            f"Name pool has {len(names)} names but {needed} typists are scheduled."
        )

    seeder = random.Random(config.seed) if config.seed is not None else None
    pool = iter(names)
    typists: list[TypistSpec] = []
    seen: set[str] = set()
    for strategy in config.strategies:
        for _ in range(config.repetitions):
            name = strategy.prefix + next(pool)
            if name in seen:
                raise ValueError(f"Duplicate typist name '{name}'.")
            seen.add(name)
            seed = seeder.getrandbits(63) if seeder is not None else None
            typists.append(TypistSpec(name=name, strategy=strategy, seed=seed))
    return Roster(config=config, typists=typists)
