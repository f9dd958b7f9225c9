from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

NGram = tuple[str, ...]


def build_ngram_map(corpus: Sequence[str], n: int) -> dict[NGram, int]:
    """Count every run of ``n`` adjacent characters in ``corpus``.

    The corpus is expected to be normalized already (see
    ``loader.normalize_corpus``). A corpus shorter than ``n`` yields an empty map.
    """
    if n < 1:
        raise ValueError("n must be >= 1")
    windows = zip(*(corpus[i:] for i in range(n)))
    return dict(Counter(windows))


def build_bigram_map(corpus: Sequence[str]) -> dict[NGram, int]:
    return build_ngram_map(corpus, 2)


def build_trigram_map(corpus: Sequence[str]) -> dict[NGram, int]:
    return build_ngram_map(corpus, 3)


def successor_table(
    ngram_map: dict[NGram, int],
    alphabet: Iterable[str] | None = None,
) -> dict[NGram, tuple[str, ...]]:
    """Index n-grams by their prefix: ``prefix -> distinct next characters``.

    Every distinct n-gram key is one candidate, whatever its count. Keys holding
    a character outside ``alphabet`` are dropped when an alphabet is given.
    """
    allowed = set(alphabet) if alphabet is not None else None
    grouped: dict[NGram, set[str]] = {}
    for key in ngram_map:
        if allowed is not None and not allowed.issuperset(key):
            continue
        grouped.setdefault(tuple(key[:-1]), set()).add(key[-1])
    return {prefix: tuple(sorted(nexts)) for prefix, nexts in grouped.items()}
