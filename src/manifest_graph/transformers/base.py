"""Base transformer class for normalizing parsed manifests.

This module defines the base interface for transformers that turn a parsed
manifest document into the resolved playlist graph.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.types import ManifestDocument
    from ..sources.base import ManifestData, SourceManifest


class Transformer(ABC):
    """Abstract base class for document transformers.

    Transformers take the parsed, defaulted document a source produced
    (ManifestData) and return the normalized document handed to playback.
    """

    @abstractmethod
    def transform(
        self,
        manifest: "SourceManifest",
        data: "ManifestData",
        **kwargs
    ) -> "ManifestDocument":
        """Transform parsed data into a normalized document.

        Args:
            manifest: The source manifest being transformed
            data: Parsed data from the source
            **kwargs: Additional transformation parameters

        Returns:
            The normalized document
        """
        pass
