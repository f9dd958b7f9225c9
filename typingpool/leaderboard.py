from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from .types import TypistResult


@dataclass(frozen=True)
class Leaderboard:
    totals: dict[str, int]
    top_words: list[tuple[str, int]]
    top_typists: list[tuple[str, int]]


def merge_counts(*counts: dict[str, int]) -> dict[str, int]:
    total: Counter[str] = Counter()
    for c in counts:
        total.update(c)
    return dict(total)


def rank_words(totals: dict[str, int], top_n: int | None = None) -> list[tuple[str, int]]:
    """Most typed words first; equal counts are ordered by word."""
    ranked = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))
    return ranked if top_n is None else ranked[:top_n]


def rank_typists(results: Iterable[TypistResult], top_n: int | None = None) -> list[tuple[str, int]]:
    """Most productive typists first; equal totals are ordered by name."""
    ranked = sorted(((r.name, r.total) for r in results), key=lambda kv: (-kv[1], kv[0]))
    return ranked if top_n is None else ranked[:top_n]


def build_leaderboard(results: list[TypistResult], top_n: int | None = None) -> Leaderboard:
    totals = merge_counts(*(r.occurrences for r in results))
    return Leaderboard(
        totals=totals,
        top_words=rank_words(totals, top_n),
        top_typists=rank_typists(results, top_n),
    )


def format_leaderboard(
    top_words: list[tuple[str, int]],
    top_typists: list[tuple[str, int]],
) -> list[str]:
    lines = [f"{word} was typed {count} times" for word, count in top_words]
    for placement, (typist, total) in enumerate(top_typists, start=1):
        lines.append(f"{placement}. {typist} typed {total} words")
    return lines
