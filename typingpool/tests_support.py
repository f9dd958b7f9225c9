"""Test helpers (kept in package so they are importable in subprocess workers)."""

from __future__ import annotations

from typing import Any

from .types import Strategy, TypistResult
from .typist import run_typist


def jammed_random_typist(**kwargs: Any) -> TypistResult:
    """Behave like ``run_typist`` except that random typists always fail."""
    if Strategy(kwargs["strategy"]) is Strategy.RANDOM:
        raise RuntimeError("typewriter jammed")
    return run_typist(**kwargs)
