import json
import os
import unittest
from tempfile import TemporaryDirectory

from typingpool.loader import (
    InputError,
    RunConfigValidationError,
    load_corpus,
    load_dictionary,
    load_names,
    load_run_config,
    normalize_corpus,
    parse_run_config,
    read_run_config_data,
)
from typingpool.plan import RunConfig
from typingpool.types import Strategy


class TestRunConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = parse_run_config({})
        self.assertEqual(cfg, RunConfig())
        self.assertEqual(cfg.strategies, tuple(Strategy))
        self.assertIsNone(cfg.seed)

    def test_values_parsed(self) -> None:
        cfg = parse_run_config({
            "strategies": ["Bigram", "random"],
            "repetitions": "3",
            "target_length": 500,
            "min_word_length": 3,
            "max_word_length": 3,
            "top_n": 5,
            "seed": 9,
        })
        self.assertEqual(cfg.strategies, (Strategy.BIGRAM, Strategy.RANDOM))
        self.assertEqual(cfg.repetitions, 3)
        self.assertEqual(cfg.search_window, (3, 4))
        self.assertEqual(cfg.seed, 9)

    def test_unknown_strategy_rejected(self) -> None:
        with self.assertRaises(RunConfigValidationError):
            parse_run_config({"strategies": ["quadgram"]})
        with self.assertRaises(RunConfigValidationError):
            parse_run_config({"strategies": []})

    def test_non_positive_values_rejected(self) -> None:
        for key in ("repetitions", "target_length", "min_word_length", "top_n"):
            with self.assertRaises(RunConfigValidationError, msg=key):
                parse_run_config({key: 0})

    def test_inverted_word_lengths_rejected(self) -> None:
        with self.assertRaises(RunConfigValidationError):
            parse_run_config({"min_word_length": 6, "max_word_length": 5})

    def test_invalid_numeric_fields_rejected(self) -> None:
        with self.assertRaises(RunConfigValidationError):
            parse_run_config({"repetitions": "oops"})
        with self.assertRaises(RunConfigValidationError):
            parse_run_config({"target_length": True})

    def test_fractional_numbers_rejected(self) -> None:
        with self.assertRaises(RunConfigValidationError):
            parse_run_config({"target_length": 2.9})
        with self.assertRaises(RunConfigValidationError):
            parse_run_config({"seed": float("nan")})
        self.assertEqual(parse_run_config({"target_length": 300.0}).target_length, 300)

    def test_unknown_keys_rejected(self) -> None:
        with self.assertRaises(RunConfigValidationError):
            parse_run_config({"repetition": 3})

    def test_load_from_file(self) -> None:
        with TemporaryDirectory() as d:
            path = os.path.join(d, "run.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"repetitions": 2, "seed": 1}, f)
            cfg = load_run_config(path)
        self.assertEqual(cfg.repetitions, 2)
        self.assertEqual(cfg.typist_count, 10)

    def test_read_raw_data_requires_object(self) -> None:
        with TemporaryDirectory() as d:
            path = os.path.join(d, "run.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump([1, 2], f)
            with self.assertRaises(RunConfigValidationError):
                read_run_config_data(path)
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"top_n": 3}, f)
            self.assertEqual(read_run_config_data(path), {"top_n": 3})


class TestInputs(unittest.TestCase):
    def _write(self, d: str, name: str, text: str) -> str:
        path = os.path.join(d, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_normalize_corpus(self) -> None:
        self.assertEqual(normalize_corpus("In the Beginning, 1:1 God!"), "inthebeginninggod")

    def test_load_corpus(self) -> None:
        with TemporaryDirectory() as d:
            self.assertEqual(load_corpus(self._write(d, "c.txt", "Let there be\nLIGHT.")), "lettherebelight")
            with self.assertRaises(InputError):
                load_corpus(self._write(d, "empty.txt", "123 ..."))

    def test_load_dictionary_trims_and_skips_blanks(self) -> None:
        with TemporaryDirectory() as d:
            words = load_dictionary(self._write(d, "w.txt", "cat\n  dog \n\nCat\n"))
        self.assertEqual(words, frozenset({"cat", "dog", "Cat"}))

    def test_load_names_deduplicates_in_order(self) -> None:
        with TemporaryDirectory() as d:
            names = load_names(self._write(d, "n.txt", "ada\ngrace\n\nada\nalan\n"))
            with self.assertRaises(InputError):
                load_names(self._write(d, "none.txt", "\n\n"))
        self.assertEqual(names, ["ada", "grace", "alan"])
