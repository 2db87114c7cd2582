"""
Structured logging for mealpicker.

One named logger with a stderr console handler and a daily file handler.
The file always receives DEBUG and up; only the console follows the
configured level. Also keeps counters for API health and recipe selection
during a browsing session.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=DATE_FORMAT))
    return handler


class StructuredLogger:
    """
    Session logger: console + file output, context as JSON, and metrics
    for TheMealDB requests and recency-bounded selections.
    """

    def __init__(
        self,
        name: str = "mealpicker",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Args:
            name: Logger name
            level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for mealpicker_YYYYMMDD.log (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to stderr
        """
        self.logger = logging.getLogger(name)
        # Handlers do the filtering; the logger itself must pass DEBUG to the file
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()

        self.metrics = {
            "api_calls": 0,
            "requests_attempted": 0,
            "requests_successful": 0,
            "requests_failed": 0,
            "recipes_selected": 0,
            "selector_resets": 0,
            "errors_by_type": {},
            "endpoint_success_rate": {},
        }

        if enable_console:
            self.logger.addHandler(
                _handler(logging.StreamHandler(sys.stderr), getattr(logging, level.upper()), CONSOLE_FORMAT)
            )

        if enable_file:
            log_dir = log_dir or Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / f"mealpicker_{datetime.now():%Y%m%d}.log"
            self.logger.addHandler(
                _handler(logging.FileHandler(log_file, encoding='utf-8'), logging.DEBUG, FILE_FORMAT)
            )

    def set_level(self, level: str):
        """Change the console level. The file handler stays at DEBUG."""
        lvl = getattr(logging, level.upper())
        for handler in self.logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(lvl)

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context):
        self._log(logging.WARNING, message, context)

    def error(self, message: str, **context):
        self._log(logging.ERROR, message, context)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metrics

    def record_api_call(self):
        self.metrics["api_calls"] += 1

    def record_request_attempt(self, endpoint: str):
        """Count a request against an endpoint such as "filter.php"."""
        self.metrics["requests_attempted"] += 1
        stats = self.metrics["endpoint_success_rate"].setdefault(endpoint, {"attempts": 0, "successes": 0})
        stats["attempts"] += 1

    def record_request_success(self, endpoint: str):
        self.metrics["requests_successful"] += 1
        if endpoint in self.metrics["endpoint_success_rate"]:
            self.metrics["endpoint_success_rate"][endpoint]["successes"] += 1

    def record_request_failure(self, endpoint: str, error_type: str):
        self.metrics["requests_failed"] += 1
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def record_selection(self, reset: bool = False):
        """Count a selection, and whether the recency cache was reset for it."""
        self.metrics["recipes_selected"] += 1
        if reset:
            self.metrics["selector_resets"] += 1

    def get_metrics(self) -> dict:
        """Current metrics, with success_rate filled in per endpoint."""
        metrics = self.metrics.copy()
        for stats in metrics["endpoint_success_rate"].values():
            if stats["attempts"] > 0:
                stats["success_rate"] = round(stats["successes"] / stats["attempts"], 3)
        return metrics

    def log_metrics_summary(self):
        metrics = self.get_metrics()

        attempts = metrics["requests_attempted"]
        successes = metrics["requests_successful"]
        overall = round(successes / attempts * 100, 1) if attempts else 0

        self.info("=== Browsing Session Metrics ===")
        self.info(f"API Calls: {metrics['api_calls']}")
        self.info(f"Requests: {successes}/{attempts} ({overall}% success)")
        self.info(
            f"Recipes selected: {metrics['recipes_selected']} "
            f"(recency resets: {metrics['selector_resets']})"
        )

        for endpoint, stats in metrics["endpoint_success_rate"].items():
            rate = stats.get("success_rate", 0) * 100
            self.info(f"  {endpoint}: {stats['successes']}/{stats['attempts']} ({rate:.1f}%)")

        for error_type, count in metrics["errors_by_type"].items():
            self.info(f"  error {error_type}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "mealpicker", level: str = "INFO", **kwargs) -> StructuredLogger:
    """Return the process-wide logger, creating it on first use.

    Arguments only apply to that first call; later callers get the same instance.
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)
    return _global_logger


def reset_logger():
    global _global_logger
    _global_logger = None
