"""Base abstractions for manifest sources.

This module defines the core interfaces and data structures that all
manifest sources must implement to integrate with the pipeline.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ..config import GraphOptions
from ..core.events import EventSink
from ..core.types import ManifestDocument

if TYPE_CHECKING:
    from ..transformers.base import Transformer


@runtime_checkable
class SourceManifest(Protocol):
    """Protocol for manifests from any source.

    Any object with a uri and title can act as a SourceManifest.

    Attributes:
        uri: URI the manifest was (or would be) loaded from
        title: Human-readable name
    """

    uri: str
    title: str


@dataclass
class ManifestData:
    """Container for a manifest read and parsed by a source.

    Attributes:
        manifest: The source manifest this data belongs to
        text: Raw manifest text, when the source had any
        document: Parsed document after the defaulting pass
        metadata: Additional source-specific information
    """

    manifest: SourceManifest
    text: str = ""
    document: ManifestDocument | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class Source(ABC):
    """Abstract base class for all manifest sources.

    Implementations read manifests from a platform-specific origin and drive
    the matching grammar parser, while adhering to this common interface.
    """

    @abstractmethod
    def list_manifests(self) -> list[SourceManifest]:
        """List all manifests available from this source."""
        pass

    @abstractmethod
    def get_manifest(self, uri: str) -> SourceManifest:
        """Retrieve a specific manifest by URI.

        Raises:
            KeyError: If the manifest is not found
        """
        pass

    @abstractmethod
    def get_manifest_data(
        self,
        manifest: SourceManifest,
        options: GraphOptions,
        onwarn: EventSink | None = None,
        oninfo: EventSink | None = None,
    ) -> ManifestData:
        """Read, parse and default a manifest.

        Args:
            manifest: The manifest to read
            options: Normalization options (low-latency support etc.)
            onwarn: Optional sink for warnings
            oninfo: Optional sink for informational events

        Returns:
            ManifestData holding the defaulted document
        """
        pass

    def get_transformer(self, options: GraphOptions) -> "Transformer":
        """Transformer turning this source's documents into resolved graphs."""
        from ..transformers.graph import GraphTransformer

        return GraphTransformer(options)
