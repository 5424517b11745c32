"""Manifest normalization pipeline.

This module provides the main interface for turning manifests into
resolved playlist graphs. The pipeline is format-agnostic and delegates
parsing to source-specific implementations.
"""

from collections.abc import Iterator
from typing import Callable

from .config import GraphOptions
from .core.events import EventSink
from .core.types import ManifestDocument
from .sources.base import Source, SourceManifest


class ManifestPipeline:
    """Main interface for manifest normalization.

    Each manifest goes through the source's parser and defaulting pass,
    then through the source's transformer, which wraps bare media playlists
    and resolves the playlist graph.

    Example:
        >>> from manifest_graph import SourceRegistry
        >>> pipeline = SourceRegistry.create_pipeline('hls', path=Path('main.m3u8'))
        >>> document = next(pipeline.generate_documents())
        >>> document.playlists.at(0).resolved_uri
    """

    def __init__(
        self,
        source: Source,
        options: GraphOptions | None = None,
        onwarn: EventSink | None = None,
        oninfo: EventSink | None = None,
    ):
        """Initialize the pipeline.

        Args:
            source: Source instance to read manifests from
            options: Normalization options
            onwarn: Optional sink for warnings
            oninfo: Optional sink for informational events
        """
        self.source = source
        self.options = options or GraphOptions()
        self.onwarn = onwarn
        self.oninfo = oninfo

    def generate_documents(
        self,
        filter_fn: Callable[[SourceManifest], bool] | None = None,
        limit: int | None = None,
    ) -> Iterator[ManifestDocument]:
        """Generate normalized documents for the source's manifests.

        Args:
            filter_fn: Optional filter function to select specific manifests
            limit: Optional limit on number of documents to generate

        Yields:
            Resolved main documents
        """
        manifests = self.source.list_manifests()

        if filter_fn:
            manifests = [manifest for manifest in manifests if filter_fn(manifest)]

        if limit:
            manifests = manifests[:limit]

        for manifest in manifests:
            yield self.generate_document_for_manifest(manifest)

    def generate_document_for_manifest(
        self,
        manifest: SourceManifest,
        **kwargs
    ) -> ManifestDocument:
        """Generate the normalized document for a single manifest.

        Args:
            manifest: The manifest to normalize
            **kwargs: Overrides passed to the transformer (group_id_fn,
                legacy_group_uris, context_uri)

        Returns:
            The resolved main document
        """
        data = self.source.get_manifest_data(
            manifest,
            self.options,
            onwarn=self.onwarn,
            oninfo=self.oninfo,
        )

        transformer = self.source.get_transformer(self.options)
        return transformer.transform(manifest, data, onwarn=self.onwarn, **kwargs)
