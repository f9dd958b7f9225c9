from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .plan import RunConfig
from .types import Strategy

_CONFIG_KEYS = {
    "strategies",
    "repetitions",
    "target_length",
    "min_word_length",
    "max_word_length",
    "top_n",
    "seed",
}


class RunConfigValidationError(ValueError):
    pass


class InputError(ValueError):
    pass


def read_run_config_data(path: str) -> dict[str, Any]:
    """Read the raw run configuration object, before validation of its values."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise RunConfigValidationError("Run configuration must be an object.")
    return data


def load_run_config(path: str) -> RunConfig:
    return parse_run_config(read_run_config_data(path))


def parse_run_config(data: dict[str, Any]) -> RunConfig:
    """Validate a run configuration object; missing keys keep their defaults."""
    if not isinstance(data, dict):
        raise RunConfigValidationError("Run configuration must be an object.")
    unknown = sorted(set(data) - _CONFIG_KEYS)
    if unknown:
        raise RunConfigValidationError(f"Unknown configuration keys: {', '.join(unknown)}.")

    defaults = RunConfig()
    strategies = _parse_strategies(data.get("strategies"), default=defaults.strategies)
    repetitions = _parse_int_field("repetitions", data.get("repetitions"), default=defaults.repetitions, minimum=1)
    target_length = _parse_int_field(
        "target_length", data.get("target_length"), default=defaults.target_length, minimum=1
    )
    min_len = _parse_int_field(
        "min_word_length", data.get("min_word_length"), default=defaults.min_word_length, minimum=1
    )
    max_len = _parse_int_field(
        "max_word_length", data.get("max_word_length"), default=defaults.max_word_length, minimum=1
    )
    if max_len < min_len:
        raise RunConfigValidationError(
            f"'max_word_length' ({max_len}) must be >= 'min_word_length' ({min_len})."
        )
    top_n = _parse_int_field("top_n", data.get("top_n"), default=defaults.top_n, minimum=1)
    seed = data.get("seed")
    if seed is not None:
        seed = _parse_int_field("seed", seed, default=0, minimum=0)

    return RunConfig(
        strategies=strategies,
        repetitions=repetitions,
        target_length=target_length,
        min_word_length=min_len,
        max_word_length=max_len,
        top_n=top_n,
        seed=seed,
    )


def normalize_corpus(text: str) -> str:
    """Keep alphabetic characters only, lower-cased."""
    return "".join(ch for ch in text if ch.isalpha()).lower()


def load_corpus(path: str, encoding: str = "utf-8") -> str:
    corpus = normalize_corpus(Path(path).read_text(encoding=encoding))
    if not corpus:
        raise InputError(f"Corpus '{path}' contains no letters.")
    return corpus


def load_dictionary(path: str, encoding: str = "utf-8") -> frozenset[str]:
    words = frozenset(_read_lines(path, encoding))
    if not words:
        raise InputError(f"Word list '{path}' is empty.")
    return words


def load_names(path: str, encoding: str = "utf-8") -> list[str]:
    # Keep first occurrence of repeated names so typist names stay unique
    names = list(dict.fromkeys(_read_lines(path, encoding)))
    if not names:
        raise InputError(f"Name list '{path}' is empty.")
    return names


def _read_lines(path: str, encoding: str) -> list[str]:
    with open(path, encoding=encoding) as f:
        return [line.strip() for line in f if line.strip()]


def _parse_strategies(raw: Any, *, default: tuple[Strategy, ...]) -> tuple[Strategy, ...]:
    if raw is None:
        return default
    if not isinstance(raw, list) or not raw or any(not isinstance(s, str) for s in raw):
        raise RunConfigValidationError("'strategies' must be a non-empty list of strings.")
    out: list[Strategy] = []
    for s in raw:
        try:
            out.append(Strategy(s.strip().lower()))
        except ValueError as e:
            valid = ", ".join(m.value for m in Strategy)
            raise RunConfigValidationError(f"Unknown strategy '{s}'. Expected one of: {valid}.") from e
    return tuple(out)


def _parse_int_field(
    field_name: str,
    raw: Any,
    *,
    default: int,
    minimum: int,
) -> int:
    if raw is None:
        return default
    if isinstance(raw, bool):
        raise RunConfigValidationError(f"'{field_name}' must be an integer.")
    if isinstance(raw, float) and not raw.is_integer():
        raise RunConfigValidationError(f"'{field_name}' must be a whole number (got {raw}).")
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise RunConfigValidationError(f"'{field_name}' must be an integer.") from e
    if value < minimum:
        raise RunConfigValidationError(f"'{field_name}' must be >= {minimum}.")
    return value
