"""Document defaulting pass.

Runs on every freshly parsed document, main or media, before any graph
assembly: strips low-latency fields when they are not wanted and backfills
the duration fields downstream code treats as mandatory.
"""

import logging

from ..core.defaults import (
    DEFAULT_TARGET_DURATION,
    LL_DOCUMENT_FIELDS,
    LL_SEGMENT_FIELDS,
    PART_TARGET_REFERENCE,
)
from ..core.events import EventSink, emit
from ..core.playlist import last_parts
from ..core.types import ManifestDocument

logger = logging.getLogger(__name__)


def strip_low_latency(document: ManifestDocument) -> list[str]:
    """Remove LL-HLS fields from a document and its segments.

    Returns:
        Names of the fields that were populated before removal
    """
    removed = []
    for name in LL_DOCUMENT_FIELDS:
        if getattr(document, name) is not None:
            removed.append(name)
        setattr(document, name, None)

    for segment in document.segments:
        for name in LL_SEGMENT_FIELDS:
            if getattr(segment, name) is not None and name not in removed:
                removed.append(name)
            setattr(segment, name, None)

    return removed


def normalize_document(
    document: ManifestDocument,
    llhls: bool = True,
    onwarn: EventSink | None = None,
    oninfo: EventSink | None = None,
) -> ManifestDocument:
    """Apply low-latency stripping and duration defaults to a parsed document.

    The document is modified in place and returned for convenience.

    Args:
        document: Document produced by a grammar parser
        llhls: Keep low-latency fields; when False they are removed whether or
            not the parser populated them
        onwarn: Optional sink for warnings
        oninfo: Optional sink for informational events

    Returns:
        The same document
    """
    if not llhls:
        removed = strip_low_latency(document)
        if removed:
            emit(oninfo, f"removed low-latency fields: {', '.join(removed)}", level="info")

    if document.target_duration is None:
        target_duration: float = DEFAULT_TARGET_DURATION
        if document.segments:
            target_duration = max(segment.duration or 0 for segment in document.segments)

        emit(onwarn, f"manifest has no targetDuration defaulting to {target_duration}")
        document.target_duration = target_duration

    parts = last_parts(document)

    if parts and document.part_target_duration is None:
        part_target_duration = max(part.duration for part in parts)

        emit(onwarn, f"manifest has no partTargetDuration defaulting to {part_target_duration}")
        logger.error(
            "LL-HLS manifest has parts but lacks required #EXT-X-PART-INF:PART-TARGET value. "
            "See %s. Playback is not guaranteed.",
            PART_TARGET_REFERENCE,
        )
        document.part_target_duration = part_target_duration

    return document
