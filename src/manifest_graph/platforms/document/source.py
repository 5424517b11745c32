"""Pre-parsed document source.

This module provides a Source implementation for manifests that an
external grammar parser has already turned into the m3u8-parser /
mpd-parser JSON shape, such as DASH documents.
"""

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from ...config import GraphOptions
from ...core.defaults import PLACEHOLDER_PREFIX
from ...core.events import EventSink
from ...core.media_groups import default_group_id
from ...core.types import ManifestDocument, MediaPlaylist
from ...sources.base import ManifestData, Source, SourceManifest
from ...transformers.base import Transformer
from ...transformers.defaults import normalize_document
from ...transformers.graph import GraphTransformer


def name_group_id(media_type: str, group_key: str, label_key: str, playlist: MediaPlaylist) -> str:
    """Group id built from the playlist's NAME attribute.

    DASH representations are told apart by NAME rather than by label. A
    document without NAME falls back to the label.
    """
    name = (playlist.attributes or {}).get("NAME") or label_key
    return f"{PLACEHOLDER_PREFIX}-{media_type}-{group_key}-{name}"


@dataclass
class ParsedManifest:
    """Manifest representation for pre-parsed documents."""

    uri: str
    title: str
    path: Path | None = None


class DocumentSource(Source):
    """Source adapter for a pre-parsed manifest document.

    Example:
        >>> source = DocumentSource(path=Path('/streams/main.json'), uri='https://cdn/main.mpd')
        >>> data = source.get_manifest_data(source.list_manifests()[0], GraphOptions())
    """

    def __init__(
        self,
        path: Path | None = None,
        data: dict[str, Any] | None = None,
        uri: str | None = None,
    ):
        """Initialize the document source.

        Args:
            path: JSON file holding the parsed document
            data: The parsed document, used instead of reading ``path``
            uri: URI the manifest was loaded from; defaults to the document's
                own ``uri`` field, then to the file URI of ``path``

        Raises:
            ValueError: If neither data nor an existing file is given, or no
                URI can be determined
        """
        self.path = path.resolve() if path is not None else None
        self.data = data

        if data is None:
            if self.path is None:
                raise ValueError("Either a document path or document data is required")

            if not self.path.is_file():
                raise ValueError(f"Path is not a file: {self.path}")

        if uri is None and data is not None:
            uri = data.get("uri")
        if uri is None and self.path is not None:
            uri = self.path.as_uri()
        if uri is None:
            raise ValueError("A URI is required for document data without a 'uri' field")

        self.uri = uri

    def _manifest(self) -> ParsedManifest:
        title = self.path.name if self.path is not None else self.uri.rsplit("/", 1)[-1]
        return ParsedManifest(uri=self.uri, title=title, path=self.path)

    def list_manifests(self) -> list[SourceManifest]:
        """A document source holds exactly one manifest."""
        return [self._manifest()]

    def get_manifest(self, uri: str) -> SourceManifest:
        if uri == self.uri:
            return self._manifest()
        raise KeyError(f"No manifest found with URI: {uri}")

    def _load(self) -> dict[str, Any]:
        if self.data is not None:
            return self.data

        try:
            with self.path.open("r", encoding="utf-8") as f:  # type: ignore[union-attr]
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Failed to read document {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Document must be a JSON object: {self.path}")
        return data

    def get_manifest_data(
        self,
        manifest: SourceManifest,
        options: GraphOptions,
        onwarn: EventSink | None = None,
        oninfo: EventSink | None = None,
    ) -> ManifestData:
        """Load the document and apply the defaulting pass."""
        raw = self._load()
        document = normalize_document(
            ManifestDocument.from_dict(raw),
            llhls=options.llhls,
            onwarn=onwarn,
            oninfo=oninfo,
        )

        return ManifestData(
            manifest=manifest,
            document=document,
            metadata={"format": "document", "is_main": document.is_main()},
        )

    def get_transformer(self, options: GraphOptions) -> Transformer:
        """Graph transformer naming rendition playlists by their NAME attribute.

        A group id function set explicitly in the options is kept.
        """
        if options.group_id_fn is default_group_id:
            options = replace(options, group_id_fn=name_group_id)
        return GraphTransformer(options)
