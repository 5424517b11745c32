"""HLS manifest source.

This module provides a Source implementation that reads an HLS manifest
from a file or from text and parses it with the m3u8 grammar parser.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from ...config import GraphOptions
from ...core.events import EventSink
from ...sources.base import ManifestData, Source, SourceManifest
from .parser import TagMapper, parse_manifest


@dataclass
class HlsManifest:
    """Simple manifest representation for HLS sources.

    This acts as a SourceManifest for the hls platform.
    """

    uri: str
    title: str
    path: Path | None = None


class HlsSource(Source):
    """Source adapter for a single HLS manifest (main or media playlist).

    Example:
        >>> source = HlsSource(path=Path('/streams/main.m3u8'))
        >>> manifest = source.list_manifests()[0]
        >>> data = source.get_manifest_data(manifest, GraphOptions())
    """

    def __init__(
        self,
        path: Path | None = None,
        text: str | None = None,
        uri: str | None = None,
        custom_tags_parser: Callable[..., Any] | None = None,
        tag_mappers: Iterable[TagMapper] = (),
    ):
        """Initialize the HLS source.

        Args:
            path: Manifest file to read
            text: Manifest text, used instead of reading ``path``
            uri: URI the manifest was loaded from; defaults to the file URI
                of ``path``
            custom_tags_parser: Forwarded to the m3u8 parser
            tag_mappers: Line rewriters applied before parsing

        Raises:
            ValueError: If neither text nor an existing file is given, or if
                text is given without a URI
        """
        self.path = path.resolve() if path is not None else None
        self.text = text
        self.custom_tags_parser = custom_tags_parser
        self.tag_mappers = list(tag_mappers)

        if text is None:
            if self.path is None:
                raise ValueError("Either a manifest path or manifest text is required")

            if not self.path.exists():
                raise ValueError(f"Path does not exist: {self.path}")

            if not self.path.is_file():
                raise ValueError(f"Path is not a file: {self.path}")

        if uri is None:
            if self.path is None:
                raise ValueError("A URI is required when parsing manifest text")
            uri = self.path.as_uri()

        self.uri = uri

    def _manifest(self) -> HlsManifest:
        title = self.path.name if self.path is not None else self.uri.rsplit("/", 1)[-1]
        return HlsManifest(uri=self.uri, title=title, path=self.path)

    def list_manifests(self) -> list[SourceManifest]:
        """List available manifests.

        An HLS source holds exactly one manifest.
        """
        return [self._manifest()]

    def get_manifest(self, uri: str) -> SourceManifest:
        """Get the manifest by URI.

        Raises:
            KeyError: If the URI is not this source's manifest
        """
        if uri == self.uri:
            return self._manifest()
        raise KeyError(f"No manifest found with URI: {uri}")

    def get_manifest_data(
        self,
        manifest: SourceManifest,
        options: GraphOptions,
        onwarn: EventSink | None = None,
        oninfo: EventSink | None = None,
    ) -> ManifestData:
        """Read and parse the manifest, applying the defaulting pass.

        Raises:
            ValueError: If the manifest file cannot be read
        """
        text = self.text
        if text is None:
            try:
                text = self.path.read_text(encoding="utf-8")  # type: ignore[union-attr]
            except (OSError, UnicodeDecodeError) as e:
                raise ValueError(f"Failed to read manifest {self.path}: {e}") from e

        document = parse_manifest(
            text,
            llhls=options.llhls,
            onwarn=onwarn,
            oninfo=oninfo,
            custom_tags_parser=self.custom_tags_parser,
            tag_mappers=self.tag_mappers,
        )

        return ManifestData(
            manifest=manifest,
            text=text,
            document=document,
            metadata={"format": "hls", "is_main": document.is_main()},
        )
