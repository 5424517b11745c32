"""Diagnostics raised while normalizing a manifest.

Nothing in the normalization passes is fatal. Anomalies are logged and, when a
sink is supplied, delivered to it as ManifestEvent objects.
"""

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

_LEVELS = {
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True)
class ManifestEvent:
    """A single diagnostic about a manifest.

    Attributes:
        message: Human-readable description
        level: One of "info", "warn" or "error"
    """

    message: str
    level: str = "warn"


EventSink = Callable[[ManifestEvent], None]


def emit(sink: EventSink | None, message: str, level: str = "warn") -> ManifestEvent:
    """Log a diagnostic and forward it to a sink.

    Args:
        sink: Optional callable receiving the event
        message: Description of the anomaly
        level: "info", "warn" or "error"

    Returns:
        The event that was emitted
    """
    event = ManifestEvent(message=message, level=level)
    logger.log(_LEVELS.get(level, logging.WARNING), message)

    if sink is not None:
        sink(event)

    return event
