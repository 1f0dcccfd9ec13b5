"""Observability utilities: run clock, progress logging and metrics."""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .logging_config import setup_logger


class LogLevel(Enum):
    """Log levels for progress logging."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class RunClock:
    """Monotonic reference taken once at the start of a run."""

    start: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.start) * 1000)

    def elapsed(self) -> float:
        return time.monotonic() - self.start


class ProgressLogger:
    """Logger that prefixes messages with the time elapsed since run start."""

    def __init__(
        self,
        name: str = "gallery-pipeline",
        clock: Optional[RunClock] = None,
        level: Optional[str] = None,
    ):
        self._logger = setup_logger(name, level=level)
        self.clock = clock or RunClock()

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _log(self, level: LogLevel, message: str, **kwargs: Any) -> None:
        formatted = f"[+{self.clock.elapsed_ms():>4}ms] {message}"
        if kwargs:
            metadata = ", ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted = f"{formatted} ({metadata})"
        getattr(self._logger, level.value.lower())(formatted)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(LogLevel.ERROR, message, **kwargs)


@dataclass
class PerformanceMetrics:
    """Timing of a single operation."""

    operation: str
    start_time: float
    end_time: float
    success: bool
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def duration(self) -> float:
        """Operation duration in seconds."""
        return self.end_time - self.start_time

    @property
    def duration_ms(self) -> float:
        return self.duration * 1000


class MetricsCollector:
    """Thread-safe collector for per-item performance metrics."""

    def __init__(self):
        self._metrics: List[PerformanceMetrics] = []
        self._lock = threading.Lock()

    def record_metric(self, metric: PerformanceMetrics) -> None:
        with self._lock:
            self._metrics.append(metric)

    def get_metrics(self, operation: Optional[str] = None) -> List[PerformanceMetrics]:
        """Get recorded metrics, optionally filtered by operation."""
        with self._lock:
            if operation:
                return [m for m in self._metrics if m.operation == operation]
            return self._metrics.copy()

    def get_summary(self, operation: Optional[str] = None) -> Dict[str, Any]:
        """Summary statistics for recorded metrics."""
        metrics = self.get_metrics(operation)

        if not metrics:
            return {}

        durations = [m.duration for m in metrics]
        successful = [m for m in metrics if m.success]

        return {
            "total_operations": len(metrics),
            "successful_operations": len(successful),
            "failed_operations": len(metrics) - len(successful),
            "avg_duration": sum(durations) / len(durations),
            "min_duration": min(durations),
            "max_duration": max(durations),
            "total_duration": sum(durations),
        }

    def clear_metrics(self) -> None:
        with self._lock:
            self._metrics.clear()
