"""Playlist graph assembly.

Turns a defaulted main document into the resolved graph downstream
consumers rely on: every playlist, top-level or nested under a rendition,
gets an id, a URI and a resolved URI, and is reachable in the document's
lookup table.

``resolve_graph`` consumes and mutates its document and returns nothing.
``wrap_as_main`` is the only operation here that builds a new document.
"""

import logging
from typing import TYPE_CHECKING, Callable

from ..config import GraphOptions
from ..core.defaults import MEDIA_GROUP_TYPES
from ..core.events import EventSink
from ..core.identity import Resolver, make_playlist_id, placeholder_uri, setup_all_playlists
from ..core.media_groups import GroupIdFn, default_group_id, for_each_media_group
from ..core.playlist import is_audio_only, resolve_uri
from ..core.types import ManifestDocument, MediaPlaylist, PlaylistTable, RenditionDescriptor
from .base import Transformer

if TYPE_CHECKING:
    from ..sources.base import ManifestData, SourceManifest

logger = logging.getLogger(__name__)


def wrap_as_main(media: ManifestDocument, uri: str, context_uri: str | None = None) -> ManifestDocument:
    """Build a main document around a bare media playlist.

    Args:
        media: The parsed media playlist
        uri: URI the media playlist was loaded from
        context_uri: Location of the host context; a media playlist has no
            manifest-level URI of its own, so this becomes the base URI.
            Defaults to ``uri``.

    Returns:
        A new main document holding a single playlist, reachable at index 0,
        by its id and by its URI
    """
    base_uri = context_uri or uri
    playlist = MediaPlaylist(
        uri=uri,
        id=make_playlist_id(0, uri),
        resolved_uri=uri,
        attributes={},
        segments=media.segments,
        target_duration=media.target_duration,
        part_target_duration=media.part_target_duration,
    )

    main = ManifestDocument(
        uri=base_uri,
        resolved_uri=base_uri,
        target_duration=media.target_duration,
        playlists=PlaylistTable([playlist]),
        media_groups={media_type: {} for media_type in MEDIA_GROUP_TYPES},
    )
    main.playlists.register(playlist)

    return main


def _represented_at_top_level(document: ManifestDocument, group_key: str) -> bool:
    for playlist in document.playlists:
        if (playlist.attributes or {}).get("AUDIO") == group_key:
            return True
    return False


def resolve_graph(
    document: ManifestDocument,
    uri: str,
    group_id_fn: GroupIdFn = default_group_id,
    *,
    legacy_group_uris: bool = True,
    resolver: Resolver = resolve_uri,
    audio_only: Callable[[ManifestDocument], bool] = is_audio_only,
    onwarn: EventSink | None = None,
) -> None:
    """Resolve ids and URIs of every playlist in a main document, in place.

    Running it again on an already resolved document changes nothing.

    Args:
        document: The main document; consumed and mutated
        uri: URI the document was loaded from
        group_id_fn: Builds the group id of rendition playlists
        legacy_group_uris: When True, the first placeholder playlist of a
            rendition uses the bare group id as its URI and later ones use
            their id. When False every placeholder uses its id.
        resolver: Resolves relative URIs against the document URI
        audio_only: Decides whether the document carries no video
        onwarn: Optional sink for warnings
    """
    document.uri = uri

    # Formats such as DASH carry no per-playlist URI, but playlists are looked
    # up by URI everywhere.
    for index, playlist in enumerate(document.playlists):
        if not playlist.uri:
            playlist.uri = placeholder_uri(index)

    audio_only_main = audio_only(document)

    def visit(rendition: RenditionDescriptor, media_type: str, group_key: str, label_key: str) -> None:
        if not rendition.playlists:
            # In an audio-only main, an audio group referenced by a top-level
            # playlist is that playlist, not an alternate track.
            if audio_only_main and media_type == "AUDIO" and not rendition.uri:
                if _represented_at_top_level(document, group_key):
                    return

            rendition.playlists = [rendition.as_playlist()]

        for index, playlist in enumerate(rendition.playlists):
            group_id = group_id_fn(media_type, group_key, label_key, playlist)
            playlist_id = make_playlist_id(index, group_id)

            if playlist.uri:
                playlist.resolved_uri = playlist.resolved_uri or resolver(document.uri, playlist.uri)
            else:
                playlist.uri = group_id if index == 0 and legacy_group_uris else playlist_id
                # placeholders are not resolvable
                playlist.resolved_uri = playlist.uri

            if playlist.id is None:
                playlist.id = playlist_id

            if playlist.attributes is None:
                playlist.attributes = {}

            document.playlists.register(playlist)

    for_each_media_group(document, visit)

    setup_all_playlists(document, resolver=resolver, onwarn=onwarn)
    resolve_media_group_uris(document, resolver=resolver)

    logger.debug("Resolved playlist graph for %s (%d playlists)", uri, len(document.playlists))


def resolve_media_group_uris(document: ManifestDocument, resolver: Resolver = resolve_uri) -> None:
    """Set the resolved URI of every rendition that has a URI of its own."""

    def visit(rendition: RenditionDescriptor, media_type: str, group_key: str, label_key: str) -> None:
        if rendition.uri:
            rendition.resolved_uri = resolver(document.uri, rendition.uri)

    for_each_media_group(document, visit)


class GraphTransformer(Transformer):
    """Transformer producing the resolved playlist graph.

    Bare media playlists are wrapped in a main document first.
    """

    def __init__(self, options: GraphOptions | None = None):
        self.options = options or GraphOptions()

    def transform(
        self,
        manifest: "SourceManifest",
        data: "ManifestData",
        onwarn: EventSink | None = None,
        **kwargs,
    ) -> ManifestDocument:
        """Transform a defaulted document into a resolved graph.

        Args:
            manifest: The source manifest being transformed
            data: Parsed and defaulted document
            onwarn: Optional sink for warnings
            **kwargs: Overrides for GraphOptions fields (group_id_fn,
                legacy_group_uris, context_uri)

        Returns:
            The resolved main document
        """
        document = data.document
        if document is None:
            raise ValueError(f"No parsed document for manifest: {manifest.uri}")

        group_id_fn = kwargs.get("group_id_fn", self.options.group_id_fn)
        legacy_group_uris = kwargs.get("legacy_group_uris", self.options.legacy_group_uris)
        context_uri = kwargs.get("context_uri", self.options.context_uri)

        if not document.is_main():
            # wrap_as_main returns an already resolved document
            return wrap_as_main(document, manifest.uri, context_uri=context_uri)

        resolve_graph(
            document,
            manifest.uri,
            group_id_fn,
            legacy_group_uris=legacy_group_uris,
            onwarn=onwarn,
        )
        return document
