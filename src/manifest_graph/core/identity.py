"""Playlist identity assignment and registration."""

from typing import Callable

from .defaults import PLACEHOLDER_PREFIX
from .events import EventSink, emit
from .playlist import resolve_uri
from .types import ManifestDocument, MediaPlaylist

Resolver = Callable[[str | None, str], str]


def make_playlist_id(index: int, uri: str) -> str:
    """Build the id of a playlist from its position and URI.

    ``index`` is the position within the sequence the playlist belongs to:
    the top-level playlists, or a rendition's own playlists.
    """
    return f"{index}-{uri}"


def placeholder_uri(index: int) -> str:
    """Synthetic URI for a top-level playlist that has none (e.g. DASH)."""
    return f"{PLACEHOLDER_PREFIX}-{index}"


def setup_playlist(playlist: MediaPlaylist, id: str, uri: str | None = None) -> None:
    """Prepare a playlist for use in the graph.

    Args:
        playlist: The playlist to set up
        id: Id to assign; replaces any id the parser supplied
        uri: URI to assign, for playlists that came without one (a media
            playlist fetched on its own has no URI in its text)
    """
    playlist.id = id
    playlist.error_count = 0

    if uri:
        playlist.uri = uri

    # Media playlists have no stream attributes, and a main playlist may omit
    # them; downstream code always expects the mapping.
    if playlist.attributes is None:
        playlist.attributes = {}


def setup_all_playlists(
    document: ManifestDocument,
    resolver: Resolver = resolve_uri,
    onwarn: EventSink | None = None,
) -> None:
    """Set up and register every top-level playlist of a main document.

    Each playlist gets its resolved URI and id, and becomes reachable in the
    lookup table by both its id and its URI.

    Args:
        document: Main document whose playlists all have a URI
        resolver: Resolves a playlist URI against the document URI
        onwarn: Optional sink for warnings
    """
    for index, playlist in enumerate(document.playlists):
        if playlist.uri is None:
            playlist.uri = placeholder_uri(index)

        setup_playlist(playlist, id=make_playlist_id(index, playlist.uri))
        playlist.resolved_uri = resolver(document.uri, playlist.uri)
        document.playlists.register(playlist)

        # BANDWIDTH is mandatory on EXT-X-STREAM-INF, but the stream still plays without it.
        if not (playlist.attributes or {}).get("BANDWIDTH"):
            emit(onwarn, "Invalid playlist STREAM-INF detected. Missing BANDWIDTH attribute.")
