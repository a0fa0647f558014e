"""Colored sync logger — ANSI-colored console logging for live queries.

Traces the lifecycle of every live query (the objects that keep a
collection in step with the change feed) so that fetch / re-fetch
cycles can be followed in the terminal.

Color scheme:
    🟢 Green   — Subscribe
    🔵 Blue    — Fetch / Re-fetch
    🟡 Yellow  — Change notification received
    🟣 Magenta — Mutation issued
    ⚪ Gray    — Teardown / stats
    🔴 Red     — Errors
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


# ── Sync Stage Definitions ───────────────────────────────────────────

class SyncStage:
    """Predefined live-query stages with colors and icons."""

    SUBSCRIBE = ("SUBSCRIBE", _Colors.GREEN, "📡")
    FETCH = ("FETCH", _Colors.BLUE, "📥")
    NOTIFY = ("NOTIFY", _Colors.YELLOW, "🔔")
    MUTATE = ("MUTATE", _Colors.MAGENTA, "✏️")
    TEARDOWN = ("TEARDOWN", _Colors.GRAY, "🔌")
    ERROR = ("ERROR", _Colors.RED, "❌")


# ── SyncLogger ───────────────────────────────────────────────────────

class SyncLogger:
    """Color-coded logger for live queries.

    Usage:
        log = SyncLogger("LiveArticleList")
        log.step(SyncStage.SUBSCRIBE, "articles", category="travel")
        async with log.timed_step(SyncStage.FETCH, "Re-fetching articles"):
            rows = await fetch()
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(f"peakflow.live.{component_name}")

    @staticmethod
    def _details(kwargs: dict[str, Any]) -> str:
        if not kwargs:
            return ""
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f" {_Colors.GRAY}({details}){_Colors.RESET}"

    def step(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.debug(formatted + self._details(kwargs))

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.warning(formatted)

    def stats(self, **kwargs: Any) -> None:
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.debug(f"   {_Colors.GRAY}📈 {' | '.join(parts)}{_Colors.RESET}")

    @asynccontextmanager
    async def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Log start/end of an awaited step with elapsed time."""
        self.step(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.stats(step=message, elapsed=f"{elapsed:.3f}s")
