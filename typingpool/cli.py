from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from typing import Any, Dict

from .engine import Engine, EngineConfig, RunAbortedError
from .leaderboard import format_leaderboard
from .loader import load_corpus, load_dictionary, load_names, parse_run_config, read_run_config_data
from .ngrams import build_bigram_map, build_trigram_map
from .plan import DEFAULT_ALPHABET, NamePoolExhaustedError, build_roster, shuffle_names
from .types import TypingInputs
from .utils import emit_log


def _config_data(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge the optional JSON config file with command-line overrides."""
    data: Dict[str, Any] = read_run_config_data(args.config) if args.config else {}
    overrides = {
        "strategies": [s for s in args.strategies.split(",") if s.strip()] if args.strategies else None,
        "repetitions": args.repetitions,
        "target_length": args.length,
        "min_word_length": args.min_word_length,
        "max_word_length": args.max_word_length,
        "top_n": args.top_n,
        "seed": args.seed,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    return data


def main(argv: Any = None) -> int:
    parser = argparse.ArgumentParser(prog="typingpool", description="Infinite-typist word search simulator.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    runp = sub.add_parser("run", help="Run every typist and print the leaderboards.")
    runp.add_argument("--corpus", required=True, help="Reference text used for bigram/trigram statistics")
    runp.add_argument("--words", required=True, help="Word list, one word per line")
    runp.add_argument("--names", required=True, help="Name pool, one name per line")
    runp.add_argument("--config", default=None, help="Run configuration JSON file")
    runp.add_argument("--strategies", default=None, help="Comma-separated strategies like 'random,bigram'")
    runp.add_argument("--repetitions", type=int, default=None, help="Typists per strategy")
    runp.add_argument("--length", type=int, default=None, help="Characters typed by each typist")
    runp.add_argument("--min-word-length", type=int, default=None, help="Shortest word searched for")
    runp.add_argument("--max-word-length", type=int, default=None, help="Longest word searched for")
    runp.add_argument("--top-n", type=int, default=None, help="Leaderboard size")
    runp.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    runp.add_argument("--encoding", default="utf-8", help="Encoding of the input files")
    runp.add_argument("--max-workers", type=int, default=None, help="Max parallel workers")
    runp.add_argument("--executor", choices=["process", "thread"], default="process", help="Executor type")
    runp.add_argument("--summary-json", default=None, help="Write run summary JSON to this path")
    runp.add_argument("--verbose", action="store_true", help="Include full tracebacks in logs")
    runp.add_argument("--quiet", action="store_true", help="Disable logs")

    args = parser.parse_args(argv)

    if args.cmd == "run":
        emit_logs = not bool(args.quiet)

        def log(event: str, **fields: Any) -> None:
            if emit_logs:
                emit_log(event, **fields)

        try:
            run_config = parse_run_config(_config_data(args))
            corpus = load_corpus(args.corpus, args.encoding)
            log("corpus_loaded", path=args.corpus, letters=len(corpus))
            bigram_map = build_bigram_map(corpus)
            trigram_map = build_trigram_map(corpus)
            log("ngrams_built", bigrams=len(bigram_map), trigrams=len(trigram_map))
            dictionary = load_dictionary(args.words, args.encoding)
            log("dictionary_loaded", path=args.words, words=len(dictionary))
            names = load_names(args.names, args.encoding)
            log("names_loaded", path=args.names, names=len(names))
            roster = build_roster(run_config, shuffle_names(names, run_config.seed))
        except (OSError, ValueError, NamePoolExhaustedError) as e:
            # ValueError covers bad JSON, decoding failures and invalid input/config
            print(f"Error: {e}", file=sys.stderr)
            return 2

        inputs = TypingInputs(
            alphabet=DEFAULT_ALPHABET,
            dictionary=dictionary,
            bigram_map=bigram_map,
            trigram_map=trigram_map,
        )
        cfg = EngineConfig(
            max_workers=args.max_workers or EngineConfig().max_workers,
            executor=args.executor,
            verbose=bool(args.verbose),
            emit_logs=emit_logs,
        )

        try:
            _, summary = Engine(cfg).run(roster, inputs)
        except RunAbortedError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            print("Interrupted", file=sys.stderr)
            return 130

        for line in format_leaderboard(summary.top_words, summary.top_typists):
            print(line)

        if args.summary_json:
            with open(args.summary_json, "w", encoding="utf-8") as f:
                json.dump(dataclasses.asdict(summary), f, ensure_ascii=False, indent=2)

        return 0

    return 0
