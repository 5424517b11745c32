"""Playlist helpers shared by the normalization passes.

These are the collaborators the graph assembly relies on: URI resolution,
the audio-only check and the lookup of trailing low-latency parts.
"""

import re
from urllib.parse import urljoin

from .defaults import AUDIO_CODEC_PREFIXES
from .media_groups import for_each_media_group
from .types import ManifestDocument, MediaPlaylist, PartialSegment, RenditionDescriptor

_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)


def resolve_uri(base: str | None, relative: str) -> str:
    """Resolve a playlist URI against a base URI.

    Absolute URIs are returned unchanged. A missing base, or a ``data:`` base
    that cannot anchor relative references, leaves the URI as it is.
    """
    if _SCHEME.match(relative):
        return relative

    if not base or base.startswith("data:"):
        return relative

    return urljoin(base, relative)


def last_parts(document: ManifestDocument) -> list[PartialSegment]:
    """Parts of the trailing run of segments that carry parts.

    Walks back from the last segment while segments have parts and returns
    those parts in playback order.
    """
    run = []
    for segment in reversed(document.segments):
        if not segment.parts:
            break
        run.append(segment)

    parts: list[PartialSegment] = []
    for segment in reversed(run):
        parts.extend(segment.parts or [])
    return parts


def is_audio_codec(codec: str) -> bool:
    return codec.strip().lower().startswith(AUDIO_CODEC_PREFIXES)


def _in_audio_group(document: ManifestDocument, playlist: MediaPlaylist) -> bool:
    groups = (document.media_groups or {}).get("AUDIO") or {}
    for labels in groups.values():
        for rendition in labels.values():
            for candidate in rendition.playlists or []:
                if candidate is playlist:
                    return True
                if playlist.uri is not None and candidate.uri == playlist.uri:
                    return True
    return False


def is_audio_only(document: ManifestDocument) -> bool:
    """Whether a main document contains no video.

    Without top-level playlists the document is audio only when an audio
    rendition has a playlist or URI of its own. Otherwise every top-level
    playlist must either declare only audio codecs or be one of the audio
    renditions' playlists.
    """
    if not document.playlists:
        found = []

        def visit(rendition: RenditionDescriptor, media_type: str, group_key: str, label_key: str) -> None:
            if media_type == "AUDIO" and (rendition.playlists or rendition.uri):
                found.append(rendition)

        for_each_media_group(document, visit)
        return bool(found)

    for playlist in document.playlists:
        codecs = (playlist.attributes or {}).get("CODECS")
        if codecs and all(is_audio_codec(c) for c in codecs.split(",")):
            continue

        if _in_audio_group(document, playlist):
            continue

        return False

    return True
