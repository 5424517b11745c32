"""Normalization configuration."""

from dataclasses import dataclass

from .core.media_groups import GroupIdFn, default_group_id


@dataclass
class GraphOptions:
    """Options controlling how manifests are normalized.

    Attributes:
        llhls: Keep low-latency (LL-HLS) fields after parsing
        legacy_group_uris: Give the first placeholder playlist of a rendition
            the bare group id as its URI (later ones use their playlist id).
            Disable to use the playlist id for every placeholder.
        context_uri: Location of the host context, used as the base URI of a
            main document synthesized around a bare media playlist
        group_id_fn: Builds the group id of rendition playlists
    """

    llhls: bool = True
    legacy_group_uris: bool = True
    context_uri: str | None = None
    group_id_fn: GroupIdFn = default_group_id
