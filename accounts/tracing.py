"""Span emitter collaborator.

Spans are diagnostic only: entering or leaving one never changes the
result of the wrapped code, and exceptions raised inside a span always
propagate.

Usage:
    with tracer.span("Get Users", service="user") as span:
        span.set_attribute("id", user_id)
        ...
"""

import logging
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator

logger = logging.getLogger(__name__)


class Span:
    """A named, timed scope with free-form attributes."""

    def __init__(self, name: str, attributes: Dict[str, Any]):
        self.name = name
        self.attributes = dict(attributes)
        self.started_at = time.perf_counter()
        self.ended_at = None

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def end(self) -> None:
        if self.ended_at is None:
            self.ended_at = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        end = self.ended_at if self.ended_at is not None else time.perf_counter()
        return (end - self.started_at) * 1000


class Tracer(ABC):
    """Starts spans around units of work."""

    @abstractmethod
    def span(self, name: str, **attributes: Any):
        """Return a context manager yielding a ``Span``; the span ends on exit."""
        pass


class NullTracer(Tracer):
    """Tracer that records nothing."""

    @contextmanager
    def span(self, name: str, **attributes: Any) -> Iterator[Span]:
        yield Span(name, attributes)


class LoggingTracer(Tracer):
    """Tracer that emits one DEBUG record per finished span."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    @contextmanager
    def span(self, name: str, **attributes: Any) -> Iterator[Span]:
        span = Span(name, attributes)
        try:
            yield span
        finally:
            span.end()
            self.log.debug(
                "span %r finished in %.2fms %s", span.name, span.duration_ms, span.attributes
            )
