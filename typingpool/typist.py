from __future__ import annotations

import random
from collections import Counter
from typing import AbstractSet, Sequence

from .ngrams import NGram
from .sampler import LetterSampler
from .types import PreconditionError, Strategy, TypistResult
from .utils import emit_log, now_ts


def type_text(sampler: LetterSampler, target_length: int, rng: random.Random) -> str:
    """Type ``target_length`` letters; Markov context is whatever was typed so far."""
    page: list[str] = []
    for _ in range(target_length):
        page.append(sampler.sample(page, rng))
    return "".join(page)


def count_words(
    text: str,
    dictionary: AbstractSet[str],
    search_window: tuple[int, int],
) -> dict[str, int]:
    """Count dictionary words found as substrings of ``text``.

    Every length in the half-open ``search_window`` is scanned independently,
    at every offset.
    """
    min_len, max_len = search_window
    found: Counter[str] = Counter()
    for word_len in range(min_len, max_len):
        for i in range(len(text) - word_len + 1):
            chunk = text[i : i + word_len]
            if chunk in dictionary:
                found[chunk] += 1
    return dict(found)


def _check_preconditions(
    name: str,
    alphabet: Sequence[str],
    target_length: int,
    search_window: tuple[int, int],
) -> None:
    if not alphabet:
        raise PreconditionError(f"Typist '{name}': alphabet must not be empty.")
    if target_length < 1:
        raise PreconditionError(f"Typist '{name}': target_length must be >= 1 (got {target_length}).")
    min_len, max_len = search_window
    if min_len < 1 or max_len <= min_len:
        raise PreconditionError(
            f"Typist '{name}': search window [{min_len}, {max_len}) is empty or invalid."
        )


def run_typist(
    name: str,
    strategy: Strategy,
    alphabet: Sequence[str],
    target_length: int,
    search_window: tuple[int, int],
    dictionary: AbstractSet[str],
    bigram_map: dict[NGram, int] | None = None,
    trigram_map: dict[NGram, int] | None = None,
    seed: int | None = None,
    emit_logs: bool = True,
) -> TypistResult:
    """Executed in worker process/thread: type a page, then look for words in it."""
    started_at = now_ts()
    strategy = Strategy(strategy)
    _check_preconditions(name, alphabet, target_length, search_window)

    rng = random.Random(seed)
    sampler = LetterSampler(alphabet, strategy, bigram_map, trigram_map)
    page = type_text(sampler, target_length, rng)
    if emit_logs:
        emit_log("typist_typed", typist=name, strategy=strategy.value, characters=len(page))

    occurrences = count_words(page, dictionary, search_window)
    if emit_logs:
        emit_log(
            "typist_counted",
            typist=name,
            distinct_words=len(occurrences),
            occurrences=sum(occurrences.values()),
        )

    return TypistResult(
        name=name,
        strategy=strategy,
        occurrences=occurrences,
        started_at=started_at,
        finished_at=now_ts(),
    )
