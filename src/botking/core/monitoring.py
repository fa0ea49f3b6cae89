"""Monitoring sinks for forwarding events, metrics and logs.

A sink is anything that implements the MonitoringSink protocol. Sinks are
collected in a MonitoringHub that the application constructs explicitly and
passes to whoever needs it; there is no process-wide registry. Delivery is
fire-and-forget: a sink that keeps failing after its retries is logged and
skipped, and the failure never reaches domain code.

Example:
    >>> hub = MonitoringHub([ConsoleSink()])
    >>> hub.send_event(MonitoringEvent(name="bot_created", tags={"type": "king"}))
    >>> hub.close()
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field
from tenacity import RetryError, retry, stop_after_attempt, wait_exponential

from botking.core.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from structlog.types import EventDict, WrappedLogger


logger = get_logger(__name__)

_LEVEL_ORDER = {"debug": 10, "info": 20, "warning": 30, "error": 40, "critical": 50}


# =============================================================================
# Payloads
# =============================================================================


class MonitoringEvent(BaseModel):
    """A named occurrence worth reporting, e.g. a bot being assembled."""

    model_config = ConfigDict(frozen=True)

    name: str
    tags: dict[str, str] = Field(default_factory=dict)
    data: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.now)


class PerformanceMetrics(BaseModel):
    """A batch of named numeric measurements."""

    model_config = ConfigDict(frozen=True)

    values: dict[str, float]
    tags: dict[str, str] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.now)


class LogEntry(BaseModel):
    """A log record mirrored from the structlog pipeline."""

    model_config = ConfigDict(frozen=True)

    level: str
    message: str
    context: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.now)


# =============================================================================
# Sink Protocol & Implementations
# =============================================================================


@runtime_checkable
class MonitoringSink(Protocol):
    """Capability interface every monitoring backend implements."""

    name: str

    def send_event(self, event: MonitoringEvent) -> None: ...

    def send_metrics(self, metrics: PerformanceMetrics) -> None: ...

    def send_log(self, entry: LogEntry) -> None: ...

    def destroy(self) -> None: ...


class ConsoleSink:
    """Sink that re-emits payloads through a dedicated structlog logger."""

    def __init__(self, name: str = "console") -> None:
        self.name = name
        self._log = get_logger(f"botking.monitoring.{name}")

    def send_event(self, event: MonitoringEvent) -> None:
        self._log.info("monitoring.event", name=event.name, tags=event.tags, **event.data)

    def send_metrics(self, metrics: PerformanceMetrics) -> None:
        self._log.info("monitoring.metrics", tags=metrics.tags, **metrics.values)

    def send_log(self, entry: LogEntry) -> None:
        self._log.info("monitoring.log", level_name=entry.level, message=entry.message)

    def destroy(self) -> None:
        self._log.debug("monitoring.sink_destroyed", sink=self.name)


class MemorySink:
    """Sink that keeps every payload in memory. Used by tests and tooling."""

    def __init__(self, name: str = "memory") -> None:
        self.name = name
        self.events: list[MonitoringEvent] = []
        self.metrics: list[PerformanceMetrics] = []
        self.logs: list[LogEntry] = []
        self.destroyed = False

    def send_event(self, event: MonitoringEvent) -> None:
        self.events.append(event)

    def send_metrics(self, metrics: PerformanceMetrics) -> None:
        self.metrics.append(metrics)

    def send_log(self, entry: LogEntry) -> None:
        self.logs.append(entry)

    def destroy(self) -> None:
        self.destroyed = True


# =============================================================================
# Hub
# =============================================================================


class MonitoringHub:
    """Fans payloads out to a set of sinks with retried delivery.

    Attributes:
        sinks: The registered sinks, in registration order.
        retry_attempts: Delivery attempts per sink per payload.
        min_level: Lowest log level mirrored by ``processor``.
    """

    def __init__(
        self,
        sinks: Iterable[MonitoringSink] = (),
        *,
        retry_attempts: int = 3,
        min_level: str = "warning",
        retry_wait_max: float = 2.0,
    ) -> None:
        self.sinks: list[MonitoringSink] = []
        self.retry_attempts = retry_attempts
        self.min_level = min_level.lower()
        self._retry_wait_max = retry_wait_max
        self._closed = False
        self._dispatching = False
        for sink in sinks:
            self.add_sink(sink)

    @classmethod
    def from_settings(cls, sinks: Iterable[MonitoringSink] = ()) -> MonitoringHub:
        """Build a hub configured from application settings."""
        from botking.core.config import get_settings

        settings = get_settings().monitoring
        return cls(
            sinks if settings.enabled else (),
            retry_attempts=settings.retry_attempts,
            min_level=settings.min_level,
        )

    def add_sink(self, sink: MonitoringSink) -> None:
        """Register a sink.

        Raises:
            TypeError: If the object does not implement MonitoringSink.
        """
        if not isinstance(sink, MonitoringSink):
            raise TypeError(f"{type(sink).__name__} does not implement MonitoringSink")
        self.sinks.append(sink)

    def remove_sink(self, name: str) -> bool:
        """Unregister and destroy the sink called ``name``."""
        for sink in self.sinks:
            if sink.name == name:
                self.sinks.remove(sink)
                self._deliver(sink, sink.destroy)
                return True
        return False

    def send_event(self, event: MonitoringEvent) -> None:
        for sink in list(self.sinks):
            self._deliver(sink, sink.send_event, event)

    def send_metrics(self, metrics: PerformanceMetrics) -> None:
        for sink in list(self.sinks):
            self._deliver(sink, sink.send_metrics, metrics)

    def send_log(self, entry: LogEntry) -> None:
        for sink in list(self.sinks):
            self._deliver(sink, sink.send_log, entry)

    def close(self) -> None:
        """Destroy all sinks. Further sends are ignored."""
        if self._closed:
            return
        for sink in self.sinks:
            self._deliver(sink, sink.destroy)
        self.sinks.clear()
        self._closed = True

    def processor(
        self,
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """structlog processor mirroring qualifying events into the sinks."""
        level = str(event_dict.get("level", method_name)).lower()
        below_threshold = _LEVEL_ORDER.get(level, 0) < _LEVEL_ORDER.get(self.min_level, 30)
        # Events raised while a sink is being called are not mirrored back into it.
        if self._closed or self._dispatching or below_threshold:
            return event_dict
        context = {
            key: value
            for key, value in event_dict.items()
            if key not in {"event", "level", "timestamp"}
        }
        self.send_log(LogEntry(level=level, message=str(event_dict.get("event", "")), context=context))
        return event_dict

    def _deliver(self, sink: MonitoringSink, call: Callable[..., None], *args: Any) -> None:
        @retry(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=0.1, min=0, max=self._retry_wait_max),
        )
        def _call() -> None:
            call(*args)

        self._dispatching = True
        try:
            _call()
        except RetryError as exc:
            logger.warning(
                "Monitoring sink delivery failed",
                sink=sink.name,
                operation=getattr(call, "__name__", "unknown"),
                error=str(exc.last_attempt.exception()),
            )
        finally:
            self._dispatching = False


__all__ = [
    "MonitoringEvent",
    "PerformanceMetrics",
    "LogEntry",
    "MonitoringSink",
    "ConsoleSink",
    "MemorySink",
    "MonitoringHub",
]
