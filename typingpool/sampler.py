from __future__ import annotations

import itertools
import math
import random
from typing import Sequence

from .ngrams import NGram, successor_table
from .types import PreconditionError, Strategy


def linear_weights(size: int) -> list[float]:
    """Rank weights ``size-1, size-2, ..., 0``. The last letter is never drawn."""
    return [float(size - 1 - i) for i in range(size)]


def log_weights(size: int) -> list[float]:
    """Logarithmic rank weights ``ln(size+1), ..., ln(2)``, all strictly positive."""
    return [math.log(size - i + 1) for i in range(size)]


def uniform_choice(alphabet: Sequence[str], rng: random.Random) -> str:
    return alphabet[rng.randrange(len(alphabet))]


def weighted_choice(alphabet: Sequence[str], cumulative: Sequence[float], rng: random.Random) -> str:
    """Pick the bucket the draw falls into; unmatched draws go to the first letter."""
    draw = rng.random() * cumulative[-1]
    for letter, bound in zip(alphabet, cumulative):
        if draw < bound:
            return letter
    return alphabet[0]


def markov_choice(
    alphabet: Sequence[str],
    successors: dict[NGram, tuple[str, ...]],
    context: Sequence[str],
    order: int,
    rng: random.Random,
) -> str:
    # Cold start: not enough context yet
    if len(context) < order:
        return uniform_choice(alphabet, rng)
    candidates = successors.get(tuple(context[len(context) - order:]))
    if not candidates:
        return uniform_choice(alphabet, rng)
    return rng.choice(candidates)


class LetterSampler:
    """Draws the next letter for one strategy over a fixed alphabet.

    Weights and Markov successor tables are computed once at construction, so a
    sampler is meant to be built per typist and reused for every letter.
    """

    def __init__(
        self,
        alphabet: Sequence[str],
        strategy: Strategy,
        bigram_map: dict[NGram, int] | None = None,
        trigram_map: dict[NGram, int] | None = None,
    ) -> None:
        if not alphabet:
            raise PreconditionError("Alphabet must contain at least one letter.")
        self.alphabet = tuple(alphabet)
        self.strategy = Strategy(strategy)
        self.cumulative: list[float] = []
        self.successors: dict[NGram, tuple[str, ...]] = {}

        if self.strategy is Strategy.LINEAR_COMMON:
            self.cumulative = list(itertools.accumulate(linear_weights(len(self.alphabet))))
        elif self.strategy is Strategy.LOG_COMMON:
            self.cumulative = list(itertools.accumulate(log_weights(len(self.alphabet))))
        elif self.strategy is Strategy.BIGRAM:
            if bigram_map is None:
                raise PreconditionError("Strategy 'bigram' requires a bigram map.")
            self.successors = successor_table(bigram_map, self.alphabet)
        elif self.strategy is Strategy.TRIGRAM:
            if trigram_map is None:
                raise PreconditionError("Strategy 'trigram' requires a trigram map.")
            self.successors = successor_table(trigram_map, self.alphabet)

    def sample(self, context: Sequence[str], rng: random.Random) -> str:
        if self.strategy is Strategy.RANDOM:
            return uniform_choice(self.alphabet, rng)
        if self.cumulative:
            return weighted_choice(self.alphabet, self.cumulative, rng)
        return markov_choice(self.alphabet, self.successors, context, self.strategy.markov_order, rng)


def sample(
    alphabet: Sequence[str],
    strategy: Strategy,
    context: Sequence[str],
    rng: random.Random,
    bigram_map: dict[NGram, int] | None = None,
    trigram_map: dict[NGram, int] | None = None,
) -> str:
    """One-off draw; build a ``LetterSampler`` instead when drawing repeatedly."""
    return LetterSampler(alphabet, strategy, bigram_map, trigram_map).sample(context, rng)
