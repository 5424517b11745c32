"""Type definitions for parsed and normalized manifests.

The dataclasses in this module mirror the document shape produced by
manifest grammar parsers (m3u8-parser / mpd-parser style). Each type can be
built from, and rendered back to, that camelCase dictionary shape. Fields a
type does not model explicitly are carried through untouched in ``extras``.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in values.items() if value is not None}


def _extras(data: dict[str, Any], known: tuple[str, ...]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if key not in known}


@dataclass
class PartialSegment:
    """A low-latency part of a segment."""

    duration: float
    uri: str | None = None
    independent: bool = False
    byterange: Any = None
    gap: bool = False
    extras: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("duration", "uri", "independent", "byterange", "gap")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PartialSegment":
        return cls(
            duration=data.get("duration") or 0,
            uri=data.get("uri"),
            independent=bool(data.get("independent", False)),
            byterange=data.get("byterange"),
            gap=bool(data.get("gap", False)),
            extras=_extras(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        result = dict(self.extras)
        result.update(_compact({"duration": self.duration, "uri": self.uri, "byterange": self.byterange}))
        if self.independent:
            result["independent"] = True
        if self.gap:
            result["gap"] = True
        return result


@dataclass
class Segment:
    """A media segment.

    Attributes:
        duration: Segment duration in seconds (may be missing for an
            in-progress segment that only has parts)
        uri: Segment URI
        parts: Partial segments (LL-HLS), None when absent
        preload_hints: Preload hints (LL-HLS), None when absent
        extras: Any other parser-provided fields
    """

    duration: float | None = None
    uri: str | None = None
    parts: list[PartialSegment] | None = None
    preload_hints: list[dict[str, Any]] | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("duration", "uri", "parts", "preloadHints")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        parts = data.get("parts")
        hints = data.get("preloadHints")
        return cls(
            duration=data.get("duration"),
            uri=data.get("uri"),
            parts=[PartialSegment.from_dict(p) for p in parts] if parts is not None else None,
            preload_hints=list(hints) if hints is not None else None,
            extras=_extras(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        result = dict(self.extras)
        result.update(_compact({"duration": self.duration, "uri": self.uri}))
        if self.parts is not None:
            result["parts"] = [part.to_dict() for part in self.parts]
        if self.preload_hints is not None:
            result["preloadHints"] = list(self.preload_hints)
        return result


@dataclass(eq=False)
class MediaPlaylist:
    """A leaf rendition: one playlist of segments.

    Playlists compare by identity; the lookup table relies on every key of an
    entry resolving to the same instance.
    """

    uri: str | None = None
    resolved_uri: str | None = None
    id: str | None = None
    attributes: dict[str, Any] | None = None
    segments: list[Segment] = field(default_factory=list)
    target_duration: float | None = None
    part_target_duration: float | None = None
    error_count: int = 0
    extras: dict[str, Any] = field(default_factory=dict)

    _KEYS = (
        "uri",
        "resolvedUri",
        "id",
        "attributes",
        "segments",
        "targetDuration",
        "partTargetDuration",
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MediaPlaylist":
        attributes = data.get("attributes")
        return cls(
            uri=data.get("uri"),
            resolved_uri=data.get("resolvedUri"),
            id=data.get("id"),
            attributes=dict(attributes) if attributes is not None else None,
            segments=[Segment.from_dict(s) for s in data.get("segments") or []],
            target_duration=data.get("targetDuration"),
            part_target_duration=data.get("partTargetDuration"),
            extras=_extras(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        result = dict(self.extras)
        result.update(
            _compact(
                {
                    "uri": self.uri,
                    "resolvedUri": self.resolved_uri,
                    "id": self.id,
                    "attributes": self.attributes,
                    "targetDuration": self.target_duration,
                    "partTargetDuration": self.part_target_duration,
                }
            )
        )
        if self.segments:
            result["segments"] = [segment.to_dict() for segment in self.segments]
        return result


@dataclass(eq=False)
class RenditionDescriptor:
    """One alternate audio or subtitle rendition.

    A rendition either points at its own playlist (``uri``) or embeds an
    ordered list of playlists (``playlists``), as DASH documents do.
    """

    uri: str | None = None
    resolved_uri: str | None = None
    language: str | None = None
    default: bool = False
    autoselect: bool = False
    playlists: list[MediaPlaylist] | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    _KEYS = ("uri", "resolvedUri", "language", "default", "autoselect", "playlists")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenditionDescriptor":
        playlists = data.get("playlists")
        return cls(
            uri=data.get("uri"),
            resolved_uri=data.get("resolvedUri"),
            language=data.get("language"),
            default=bool(data.get("default", False)),
            autoselect=bool(data.get("autoselect", False)),
            playlists=[MediaPlaylist.from_dict(p) for p in playlists] if playlists is not None else None,
            extras=_extras(data, cls._KEYS),
        )

    def as_playlist(self) -> MediaPlaylist:
        """Shallow copy of this rendition's own fields as a playlist."""
        extras = dict(self.extras)
        extras.update(_compact({"language": self.language}))
        extras["default"] = self.default
        extras["autoselect"] = self.autoselect
        return MediaPlaylist(uri=self.uri, resolved_uri=self.resolved_uri, extras=extras)

    def to_dict(self) -> dict[str, Any]:
        result = dict(self.extras)
        result.update(
            _compact({"uri": self.uri, "resolvedUri": self.resolved_uri, "language": self.language})
        )
        result["default"] = self.default
        result["autoselect"] = self.autoselect
        if self.playlists is not None:
            result["playlists"] = [playlist.to_dict() for playlist in self.playlists]
        return result


MediaGroups = dict[str, dict[str, dict[str, RenditionDescriptor]]]


class PlaylistTable:
    """Playlist lookup table with three explicit indexes.

    * by position: the ordered top-level playlists
    * by id
    * by uri

    Every registered playlist resolves to the same instance through its id and
    its uri. Nested rendition playlists are registered by id and uri only.
    """

    def __init__(self, playlists: list[MediaPlaylist] | None = None):
        self._ordered: list[MediaPlaylist] = list(playlists or [])
        self._by_id: dict[str, MediaPlaylist] = {}
        self._by_uri: dict[str, MediaPlaylist] = {}

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self) -> Iterator[MediaPlaylist]:
        return iter(self._ordered)

    def __bool__(self) -> bool:
        return bool(self._ordered)

    def append(self, playlist: MediaPlaylist) -> int:
        """Add a top-level playlist and return its position."""
        self._ordered.append(playlist)
        return len(self._ordered) - 1

    def register(self, playlist: MediaPlaylist) -> None:
        """Make a playlist reachable by its id and its uri.

        Raises:
            ValueError: If the playlist has no id or no uri yet
        """
        if playlist.id is None or playlist.uri is None:
            raise ValueError("Playlist needs an id and a uri before it can be registered")

        self._by_id[playlist.id] = playlist
        self._by_uri[playlist.uri] = playlist

    def at(self, index: int) -> MediaPlaylist:
        return self._ordered[index]

    def by_id(self, playlist_id: str) -> MediaPlaylist | None:
        return self._by_id.get(playlist_id)

    def by_uri(self, uri: str) -> MediaPlaylist | None:
        return self._by_uri.get(uri)

    def get(self, key: str) -> MediaPlaylist | None:
        """Look a playlist up by id, falling back to uri."""
        return self._by_id.get(key) or self._by_uri.get(key)

    def ids(self) -> list[str]:
        return list(self._by_id)

    def uris(self) -> list[str]:
        return list(self._by_uri)

    def to_list(self) -> list[dict[str, Any]]:
        return [playlist.to_dict() for playlist in self._ordered]


@dataclass(eq=False)
class ManifestDocument:
    """A parsed manifest, main or media, before and after normalization.

    Attributes:
        uri: The manifest's own (base) URI
        resolved_uri: Absolute form of ``uri`` where known
        target_duration: Maximum segment duration; always set after normalization
        part_target_duration: Part target duration, only when parts exist
        media_sequence: Media sequence number of the first segment
        end_list: Whether the playlist is complete
        playlists: Top-level playlists (variant streams)
        media_groups: category -> group -> label -> rendition, or None
        segments: Segments of a media playlist
        server_control, preload_segment, skip, rendition_reports, part_inf:
            Low-latency (LL-HLS) fields
        extras: Any other parser-provided fields
    """

    uri: str | None = None
    resolved_uri: str | None = None
    target_duration: float | None = None
    part_target_duration: float | None = None
    media_sequence: int | None = None
    end_list: bool = False
    playlists: PlaylistTable = field(default_factory=PlaylistTable)
    media_groups: MediaGroups | None = None
    segments: list[Segment] = field(default_factory=list)
    server_control: dict[str, Any] | None = None
    preload_segment: Segment | None = None
    skip: dict[str, Any] | None = None
    rendition_reports: list[dict[str, Any]] | None = None
    part_inf: dict[str, Any] | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    _KEYS = (
        "uri",
        "resolvedUri",
        "targetDuration",
        "partTargetDuration",
        "mediaSequence",
        "endList",
        "playlists",
        "mediaGroups",
        "segments",
        "serverControl",
        "preloadSegment",
        "skip",
        "renditionReports",
        "partInf",
    )

    def is_main(self) -> bool:
        """Whether this document references renditions rather than segments."""
        if self.playlists:
            return True

        for groups in (self.media_groups or {}).values():
            for labels in groups.values():
                if labels:
                    return True

        return False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ManifestDocument":
        media_groups = data.get("mediaGroups")
        preload = data.get("preloadSegment")
        return cls(
            uri=data.get("uri"),
            resolved_uri=data.get("resolvedUri"),
            target_duration=data.get("targetDuration"),
            part_target_duration=data.get("partTargetDuration"),
            media_sequence=data.get("mediaSequence"),
            end_list=bool(data.get("endList", False)),
            playlists=PlaylistTable([MediaPlaylist.from_dict(p) for p in data.get("playlists") or []]),
            media_groups=(
                {
                    media_type: {
                        group_key: {
                            label_key: RenditionDescriptor.from_dict(properties)
                            for label_key, properties in labels.items()
                        }
                        for group_key, labels in groups.items()
                    }
                    for media_type, groups in media_groups.items()
                }
                if media_groups is not None
                else None
            ),
            segments=[Segment.from_dict(s) for s in data.get("segments") or []],
            server_control=data.get("serverControl"),
            preload_segment=Segment.from_dict(preload) if preload is not None else None,
            skip=data.get("skip"),
            rendition_reports=data.get("renditionReports"),
            part_inf=data.get("partInf"),
            extras=_extras(data, cls._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        result = dict(self.extras)
        result.update(
            _compact(
                {
                    "uri": self.uri,
                    "resolvedUri": self.resolved_uri,
                    "targetDuration": self.target_duration,
                    "partTargetDuration": self.part_target_duration,
                    "mediaSequence": self.media_sequence,
                    "serverControl": self.server_control,
                    "skip": self.skip,
                    "renditionReports": self.rendition_reports,
                    "partInf": self.part_inf,
                }
            )
        )
        if self.end_list:
            result["endList"] = True
        if self.preload_segment is not None:
            result["preloadSegment"] = self.preload_segment.to_dict()
        result["playlists"] = self.playlists.to_list()
        if self.media_groups is not None:
            result["mediaGroups"] = {
                media_type: {
                    group_key: {label_key: rendition.to_dict() for label_key, rendition in labels.items()}
                    for group_key, labels in groups.items()
                }
                for media_type, groups in self.media_groups.items()
            }
        if self.segments:
            result["segments"] = [segment.to_dict() for segment in self.segments]
        return result
