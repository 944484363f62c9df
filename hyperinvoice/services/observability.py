"""Step tracing for the invoice pipeline.

The orchestrator reports each pipeline state through a single observer
instead of timing and logging inline, so deployments can swap in a
metrics backend without touching the pipeline.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Dict, Iterator, List, Protocol

logger = logging.getLogger("hyperinvoice.pipeline")


class PipelineObserver(Protocol):
    def step(self, name: str, **fields: Any):  # pragma: no cover - protocol
        ...

    def event(self, name: str, **fields: Any) -> None:  # pragma: no cover - protocol
        ...


class LoggingPipelineObserver:
    """Logs one line per completed or failed pipeline step."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    @contextmanager
    def step(self, name: str, **fields: Any) -> Iterator[None]:
        start = perf_counter()
        self._log.debug("Pipeline step '%s' started %s", name, fields)
        try:
            yield
        except Exception as exc:
            elapsed_ms = (perf_counter() - start) * 1000
            self._log.warning(
                "Pipeline step '%s' failed after %.1f ms: %s %s",
                name,
                elapsed_ms,
                exc,
                fields,
            )
            raise
        elapsed_ms = (perf_counter() - start) * 1000
        self._log.info("Pipeline step '%s' completed in %.1f ms %s", name, elapsed_ms, fields)

    def event(self, name: str, **fields: Any) -> None:
        self._log.info("Pipeline event '%s' %s", name, fields)


@dataclass
class ObservedStep:
    name: str
    outcome: str
    fields: Dict[str, Any] = field(default_factory=dict)
    error: Exception | None = None


class RecordingPipelineObserver:
    """Keeps every step and event in memory; used by tests and debugging."""

    def __init__(self) -> None:
        self.steps: List[ObservedStep] = []
        self.events: List[ObservedStep] = []

    @contextmanager
    def step(self, name: str, **fields: Any) -> Iterator[None]:
        try:
            yield
        except Exception as exc:
            self.steps.append(ObservedStep(name, "failed", dict(fields), exc))
            raise
        self.steps.append(ObservedStep(name, "completed", dict(fields)))

    def event(self, name: str, **fields: Any) -> None:
        self.events.append(ObservedStep(name, "event", dict(fields)))

    @property
    def completed(self) -> List[str]:
        return [step.name for step in self.steps if step.outcome == "completed"]

    @property
    def failed(self) -> List[str]:
        return [step.name for step in self.steps if step.outcome == "failed"]
