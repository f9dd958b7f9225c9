import random
import unittest

from typingpool.plan import DEFAULT_ALPHABET
from typingpool.sampler import LetterSampler, linear_weights, log_weights, sample
from typingpool.types import PreconditionError, Strategy


class TestWeights(unittest.TestCase):
    def test_linear_weights_decrease_to_zero(self) -> None:
        self.assertEqual(linear_weights(4), [3.0, 2.0, 1.0, 0.0])

    def test_log_weights_strictly_positive_and_decreasing(self) -> None:
        weights = log_weights(len(DEFAULT_ALPHABET))
        self.assertTrue(all(w > 0 for w in weights))
        self.assertEqual(weights, sorted(weights, reverse=True))


class TestLetterSampler(unittest.TestCase):
    def test_linear_never_picks_last_letter(self) -> None:
        rng = random.Random(1)
        sampler = LetterSampler(DEFAULT_ALPHABET, Strategy.LINEAR_COMMON)
        seen = {sampler.sample([], rng) for _ in range(20000)}
        self.assertTrue(seen <= set(DEFAULT_ALPHABET))
        self.assertNotIn(DEFAULT_ALPHABET[-1], seen)
        self.assertIn(DEFAULT_ALPHABET[0], seen)

    def test_log_can_pick_every_letter(self) -> None:
        rng = random.Random(2)
        alphabet = ("e", "t", "a", "o", "q")
        sampler = LetterSampler(alphabet, Strategy.LOG_COMMON)
        seen = {sampler.sample([], rng) for _ in range(5000)}
        self.assertEqual(seen, set(alphabet))

    def test_single_letter_linear_falls_back_to_first(self) -> None:
        rng = random.Random(3)
        self.assertEqual(sample(("z",), Strategy.LINEAR_COMMON, [], rng), "z")

    def test_random_stays_in_alphabet(self) -> None:
        rng = random.Random(4)
        sampler = LetterSampler("abc", Strategy.RANDOM)
        seen = {sampler.sample([], rng) for _ in range(1000)}
        self.assertEqual(seen, {"a", "b", "c"})

    def test_bigram_follows_only_candidate(self) -> None:
        rng = random.Random(5)
        sampler = LetterSampler("abc", Strategy.BIGRAM, bigram_map={("a", "b"): 3})
        for _ in range(50):
            self.assertEqual(sampler.sample(["c", "a"], rng), "b")

    def test_bigram_falls_back_without_candidates(self) -> None:
        rng = random.Random(6)
        sampler = LetterSampler("abc", Strategy.BIGRAM, bigram_map={("a", "b"): 3})
        for _ in range(200):
            self.assertIn(sampler.sample(["c"], rng), "abc")
            self.assertIn(sampler.sample([], rng), "abc")

    def test_empty_map_always_falls_back(self) -> None:
        rng = random.Random(7)
        letter = sample("xyz", Strategy.TRIGRAM, ["x", "y"], rng, trigram_map={})
        self.assertIn(letter, "xyz")

    def test_trigram_uses_two_letter_context(self) -> None:
        rng = random.Random(8)
        trigrams = {("x", "y", "z"): 1, ("y", "y", "x"): 1}
        sampler = LetterSampler("xyz", Strategy.TRIGRAM, trigram_map=trigrams)
        for _ in range(50):
            self.assertEqual(sampler.sample(["z", "x", "y"], rng), "z")
            self.assertEqual(sampler.sample(["y", "y"], rng), "x")

    def test_trigram_cold_start_is_uniform(self) -> None:
        rng = random.Random(9)
        sampler = LetterSampler("xyz", Strategy.TRIGRAM, trigram_map={("x", "y", "z"): 1})
        seen = {sampler.sample(["x"], rng) for _ in range(500)}
        self.assertEqual(seen, {"x", "y", "z"})

    def test_same_seed_same_letters(self) -> None:
        sampler = LetterSampler(DEFAULT_ALPHABET, Strategy.LOG_COMMON)
        a = random.Random(10)
        b = random.Random(10)
        self.assertEqual(
            [sampler.sample([], a) for _ in range(100)],
            [sampler.sample([], b) for _ in range(100)],
        )

    def test_empty_alphabet_rejected(self) -> None:
        with self.assertRaises(PreconditionError):
            LetterSampler((), Strategy.RANDOM)

    def test_markov_strategy_requires_map(self) -> None:
        with self.assertRaises(PreconditionError):
            LetterSampler("abc", Strategy.BIGRAM)
        with self.assertRaises(PreconditionError):
            LetterSampler("abc", Strategy.TRIGRAM, bigram_map={("a", "b"): 1})
