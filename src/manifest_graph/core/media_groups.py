"""Traversal helpers for alternate renditions (media groups)."""

from typing import Callable

from .defaults import ALTERNATE_MEDIA_TYPES, PLACEHOLDER_PREFIX
from .types import ManifestDocument, MediaPlaylist, RenditionDescriptor

MediaGroupVisitor = Callable[[RenditionDescriptor, str, str, str], None]

GroupIdFn = Callable[[str, str, str, MediaPlaylist], str]


def for_each_media_group(document: ManifestDocument, visit: MediaGroupVisitor) -> None:
    """Call ``visit`` for every AUDIO and SUBTITLES rendition.

    VIDEO and CLOSED-CAPTIONS groups carry no alternate playlists and are not
    visited. Groups and labels are visited in insertion order.

    Args:
        document: The parsed manifest
        visit: Called as visit(rendition, media_type, group_key, label_key)
    """
    if not document.media_groups:
        return

    for media_type in ALTERNATE_MEDIA_TYPES:
        groups = document.media_groups.get(media_type)
        if not groups:
            continue

        for group_key, labels in groups.items():
            for label_key, rendition in labels.items():
                visit(rendition, media_type, group_key, label_key)


def default_group_id(media_type: str, group_key: str, label_key: str, playlist: MediaPlaylist) -> str:
    """Build the placeholder group id for a rendition's playlists.

    The playlist is accepted so that replacements can look at it; this
    implementation ignores it.
    """
    return f"{PLACEHOLDER_PREFIX}-{media_type}-{group_key}-{label_key}"
