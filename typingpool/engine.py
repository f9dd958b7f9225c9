from __future__ import annotations

import concurrent.futures as cf
import os
import traceback as tb
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .leaderboard import build_leaderboard
from .plan import Roster, TypistSpec
from .types import ErrorInfo, RunSummary, TypingInputs, TypistResult
from .utils import emit_log, import_func, now_ts


@dataclass(frozen=True)
class EngineConfig:
    max_workers: int = max(1, (os.cpu_count() or 2) - 1)
    executor: str = "process"  # "process" or "thread"
    # Resolved inside each worker, so it must be importable there
    typist_func: str = "typingpool.typist:run_typist"
    # Set to True to include full tracebacks in failure logs
    verbose: bool = False
    # Set to False to disable JSON-line logs (useful for tests/integration)
    emit_logs: bool = True


class RunAbortedError(RuntimeError):
    def __init__(self, typist: str, error: ErrorInfo) -> None:
        super().__init__(f"Typist '{typist}' failed: {error.exc_type}: {error.message}")
        self.typist = typist
        self.error = error


def _worker_call(func_path: str, kwargs: dict[str, Any]) -> TypistResult:
    """Executed in worker process/thread."""
    fn = import_func(func_path)
    return fn(**kwargs)


class Engine:
    def __init__(self, config: EngineConfig) -> None:
        self.config = config

    def _typist_kwargs(self, roster: Roster, spec: TypistSpec, inputs: TypingInputs) -> dict[str, Any]:
        return {
            "name": spec.name,
            "strategy": spec.strategy,
            "alphabet": inputs.alphabet,
            "target_length": roster.config.target_length,
            "search_window": roster.config.search_window,
            "dictionary": inputs.dictionary,
            "bigram_map": inputs.bigram_map,
            "trigram_map": inputs.trigram_map,
            "seed": spec.seed,
            "emit_logs": self.config.emit_logs,
        }

    def run(self, roster: Roster, inputs: TypingInputs) -> tuple[list[TypistResult], RunSummary]:
        """Run every typist of the roster, wait for all of them, then rank.

        Any failed typist aborts the whole run with ``RunAbortedError``; no
        partial leaderboard is produced.
        """
        started = datetime.now(timezone.utc)
        t0 = now_ts()

        executor_type = self.config.executor.lower().strip()
        if executor_type not in {"process", "thread"}:
            raise ValueError("EngineConfig.executor must be 'process' or 'thread'.")

        executor_cls = cf.ProcessPoolExecutor if executor_type == "process" else cf.ThreadPoolExecutor

        def log(event: str, **fields: Any) -> None:
            if self.config.emit_logs:
                emit_log(event, **fields)

        log(
            "run_start",
            typists=len(roster.typists),
            max_workers=self.config.max_workers,
            executor=executor_type,
            seed=roster.config.seed,
        )

        # Insertion order is roster order; results are reported in that order
        futures: dict[cf.Future, TypistSpec] = {}
        with executor_cls(max_workers=self.config.max_workers) as ex:
            for spec in roster.typists:
                kwargs = self._typist_kwargs(roster, spec, inputs)
                futures[ex.submit(_worker_call, self.config.typist_func, kwargs)] = spec
                log("typist_submitted", typist=spec.name, strategy=spec.strategy.value)

            cf.wait(futures.keys(), return_when=cf.ALL_COMPLETED)

        results: list[TypistResult] = []
        failure: tuple[str, ErrorInfo, BaseException] | None = None
        for fut, spec in futures.items():
            try:
                result = fut.result()
            except Exception as e:
                err = ErrorInfo(
                    exc_type=type(e).__name__,
                    message=str(e),
                    traceback="".join(tb.format_exception(type(e), e, e.__traceback__)),
                )
                fields: dict[str, Any] = {
                    "typist": spec.name,
                    "error_type": err.exc_type,
                    "error_message": err.message,
                }
                if self.config.verbose:
                    fields["error_traceback"] = err.traceback
                log("typist_failed", **fields)
                if failure is None:
                    failure = (spec.name, err, e)
                continue
            results.append(result)
            log(
                "typist_success",
                typist=spec.name,
                duration_seconds=result.duration_seconds,
                occurrences=result.total,
            )

        if failure is not None:
            name, err, exc = failure
            log("run_aborted", typist=name, wall_seconds=max(0.0, now_ts() - t0))
            raise RunAbortedError(name, err) from exc

        board = build_leaderboard(results, roster.config.top_n)
        finished = datetime.now(timezone.utc)
        t1 = now_ts()

        summary = RunSummary(
            started_at_iso=started.isoformat(),
            finished_at_iso=finished.isoformat(),
            executor=executor_type,
            seed=roster.config.seed,
            typists=len(results),
            total_occurrences=sum(board.totals.values()),
            distinct_words=len(board.totals),
            top_words=board.top_words,
            top_typists=board.top_typists,
            durations={r.name: r.duration_seconds for r in results},
        )

        log(
            "run_finished",
            wall_seconds=max(0.0, t1 - t0),
            typists=summary.typists,
            total_occurrences=summary.total_occurrences,
        )
        return results, summary
