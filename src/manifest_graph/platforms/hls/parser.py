"""HLS manifest parsing.

Drives the ``m3u8`` grammar parser and adapts its output to the
ManifestDocument model before running the defaulting pass.
"""

import re
from collections.abc import Iterable
from typing import Any, Callable

import m3u8
from m3u8 import protocol

from ...core.defaults import MEDIA_GROUP_TYPES
from ...core.events import EventSink, emit
from ...core.types import (
    ManifestDocument,
    MediaPlaylist,
    PartialSegment,
    PlaylistTable,
    RenditionDescriptor,
    Segment,
)
from ...transformers.defaults import normalize_document

# A tag mapper receives a manifest line and returns it, or a replacement line
TagMapper = Callable[[str], str]

# Every tag the m3u8 grammar understands
KNOWN_TAGS = frozenset(
    value for value in vars(protocol).values() if isinstance(value, str) and value.startswith("#")
) | {"#EXTM3U"}

# EXT-X-MEDIA attributes carried through on renditions
RENDITION_EXTRAS = {
    "name": "name",
    "forced": "forced",
    "characteristics": "characteristics",
    "instream_id": "instreamId",
    "channels": "channels",
    "assoc_language": "assocLanguage",
}

_UNDERSCORE = re.compile(r"_([a-z])")


def _camel(key: str) -> str:
    return _UNDERSCORE.sub(lambda m: m.group(1).upper(), key)


def _flag(value: Any) -> bool:
    return str(value).upper() == "YES"


def _camel_dict(data: dict[str, Any] | None) -> dict[str, Any]:
    """Convert an m3u8 attribute dict to camelCase keys and boolean flags."""
    result = {}
    for key, value in (data or {}).items():
        if value in ("YES", "NO"):
            value = value == "YES"
        result[_camel(key)] = value
    return result


def apply_tag_mappers(text: str, mappers: Iterable[TagMapper]) -> str:
    """Run tag mappers over every manifest line.

    A mapped line that differs from the original is inserted right after it,
    so both are parsed.
    """
    mappers = list(mappers)
    if not mappers:
        return text

    lines = []
    for line in text.splitlines():
        lines.append(line)
        for mapper in mappers:
            mapped = mapper(line)
            if mapped != line:
                lines.append(mapped)
    return "\n".join(lines)


def report_unsupported_tags(text: str, oninfo: EventSink | None) -> list[str]:
    """Emit an info event for every tag the grammar does not understand."""
    unsupported = []
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith("#EXT"):
            continue

        tag = line.split(":", 1)[0]
        if tag not in KNOWN_TAGS:
            unsupported.append(tag)
            emit(oninfo, f"Skipping unsupported tag: {tag}", level="info")
    return unsupported


def _stream_attributes(stream_info: dict[str, Any] | None) -> dict[str, Any]:
    # m3u8 lowercases attribute names; restore the manifest spelling
    return {
        key.upper().replace("_", "-"): value
        for key, value in (stream_info or {}).items()
        if value is not None
    }


def _rendition(media: dict[str, Any]) -> RenditionDescriptor:
    default = _flag(media.get("default"))
    extras = {}
    for key, name in RENDITION_EXTRAS.items():
        if media.get(key) is not None:
            extras[name] = media[key]
    if "forced" in extras:
        extras["forced"] = _flag(extras["forced"])

    return RenditionDescriptor(
        uri=media.get("uri"),
        language=media.get("language"),
        default=default,
        autoselect=default or _flag(media.get("autoselect")),
        extras=extras,
    )


def _media_groups(media: list[dict[str, Any]]) -> dict[str, dict[str, dict[str, RenditionDescriptor]]]:
    groups: dict[str, dict[str, dict[str, RenditionDescriptor]]] = {
        media_type: {} for media_type in MEDIA_GROUP_TYPES
    }
    for entry in media:
        media_type = entry.get("type")
        group_key = entry.get("group_id")
        label_key = entry.get("name")
        if not media_type or group_key is None or label_key is None:
            continue

        groups.setdefault(media_type, {}).setdefault(group_key, {})[label_key] = _rendition(entry)
    return groups


def _part(data: dict[str, Any]) -> PartialSegment:
    return PartialSegment(
        duration=data.get("duration") or 0,
        uri=data.get("uri"),
        independent=_flag(data.get("independent")),
        byterange=data.get("byterange"),
        gap=_flag(data.get("gap")),
    )


def _segment(data: dict[str, Any]) -> Segment:
    extras: dict[str, Any] = {}
    if data.get("title"):
        extras["title"] = data["title"]
    if data.get("discontinuity"):
        extras["discontinuity"] = True
    if data.get("byterange"):
        extras["byterange"] = data["byterange"]
    if data.get("program_date_time"):
        extras["programDateTime"] = data["program_date_time"].isoformat()

    parts = data.get("parts")
    return Segment(
        duration=data.get("duration"),
        uri=data.get("uri"),
        parts=[_part(p) for p in parts] if parts else None,
        extras=extras,
    )


def document_from_m3u8(data: dict[str, Any]) -> ManifestDocument:
    """Adapt the dictionary produced by ``m3u8.parse`` to a ManifestDocument."""
    segments = [_segment(s) for s in data.get("segments") or []]

    # Parts announced after the last complete segment form the in-progress segment
    preload_segment = None
    if segments and segments[-1].uri is None:
        preload_segment = segments.pop()

    hint = data.get("preload_hint")
    if hint:
        preload_segment = preload_segment or Segment()
        preload_segment.preload_hints = [_camel_dict(hint)]

    part_inf = _camel_dict(data.get("part_inf")) or None
    reports = [_camel_dict(r) for r in data.get("rendition_reports") or []]

    return ManifestDocument(
        target_duration=data.get("targetduration"),
        part_target_duration=(part_inf or {}).get("partTarget"),
        media_sequence=data.get("media_sequence"),
        end_list=bool(data.get("is_endlist")),
        playlists=PlaylistTable(
            [
                MediaPlaylist(uri=p.get("uri"), attributes=_stream_attributes(p.get("stream_info")))
                for p in data.get("playlists") or []
            ]
        ),
        media_groups=_media_groups(data.get("media") or []),
        segments=segments,
        server_control=_camel_dict(data.get("server_control")) or None,
        preload_segment=preload_segment,
        skip=_camel_dict(data.get("skip")) or None,
        rendition_reports=reports or None,
        part_inf=part_inf,
    )


def parse_manifest(
    manifest_string: str,
    *,
    llhls: bool = True,
    onwarn: EventSink | None = None,
    oninfo: EventSink | None = None,
    custom_tags_parser: Callable[..., Any] | None = None,
    tag_mappers: Iterable[TagMapper] = (),
) -> ManifestDocument:
    """Parse an HLS manifest and apply the defaulting pass.

    Args:
        manifest_string: The downloaded manifest text
        llhls: Keep low-latency features after parsing
        onwarn: Optional sink for warnings
        oninfo: Optional sink for informational events
        custom_tags_parser: Forwarded to ``m3u8.parse`` for custom tags
        tag_mappers: Callables rewriting manifest lines before parsing

    Returns:
        The defaulted document (main or media)
    """
    text = apply_tag_mappers(manifest_string, tag_mappers)
    report_unsupported_tags(text, oninfo)

    data = m3u8.parse(text, strict=False, custom_tags_parser=custom_tags_parser)
    document = document_from_m3u8(data)

    return normalize_document(document, llhls=llhls, onwarn=onwarn, oninfo=oninfo)
