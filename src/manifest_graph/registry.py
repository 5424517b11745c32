"""Manifest format registry.

Platforms register a source factory together with the file suffixes and the
leading text that identify their manifests. The registry builds pipelines by
platform name and picks the platform for a manifest file when the caller does
not name one.
"""

import importlib
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .config import GraphOptions
    from .pipeline import ManifestPipeline
    from .sources.base import Source

logger = logging.getLogger(__name__)

# Platform packages under manifest_graph.platforms
PLATFORMS = ("hls", "document")

# Characters read from a manifest when looking for a signature
SNIFF_LENGTH = 64


class SourceRegistry:
    """Registry of manifest platforms.

    Each platform contributes a factory and, optionally, the file suffixes
    and the signature (leading text, e.g. ``#EXTM3U``) of its manifests.
    """

    _factories: dict[str, Callable[..., "Source"]] = {}
    _suffixes: dict[str, str] = {}
    _signatures: dict[str, str] = {}

    @classmethod
    def register_factory(
        cls,
        name: str,
        factory: Callable[..., "Source"],
        suffixes: Iterable[str] = (),
        signature: str | None = None,
    ) -> None:
        """Register a platform.

        Args:
            name: Platform name used by ``create_pipeline`` and ``--format``
            factory: Callable that creates a Source instance
            suffixes: File suffixes of this platform's manifests ('.m3u8')
            signature: Text a manifest of this platform starts with
        """
        cls._factories[name] = factory
        for suffix in suffixes:
            cls._suffixes[suffix.lower()] = name
        if signature:
            cls._signatures[signature] = name

    @classmethod
    def detect_format(cls, path: Path) -> str:
        """Pick the platform for a manifest file.

        The file's leading text is matched against registered signatures
        first; the suffix decides when no signature matches.

        Raises:
            ValueError: If the file cannot be read or matches no platform
        """
        try:
            with path.open("r", encoding="utf-8-sig", errors="replace") as f:
                head = f.read(SNIFF_LENGTH).lstrip()
        except OSError as e:
            raise ValueError(f"Failed to read manifest {path}: {e}") from e

        for signature, name in cls._signatures.items():
            if head.startswith(signature):
                return name

        name = cls._suffixes.get(path.suffix.lower())
        if name is None:
            raise ValueError(
                f"Cannot detect the format of {path}. "
                f"Pass one of: {', '.join(cls.list_sources()) or 'none'}"
            )

        logger.debug("No signature in %s, using %s from its suffix", path, name)
        return name

    @classmethod
    def create_pipeline(
        cls,
        source_name: str,
        options: "GraphOptions | None" = None,
        **kwargs,
    ) -> "ManifestPipeline":
        """Create a pipeline for a registered platform.

        Args:
            source_name: Platform name
            options: Normalization options for the pipeline
            **kwargs: Arguments passed to the platform's source factory

        Raises:
            ValueError: If source_name is not registered

        Example:
            >>> pipeline = SourceRegistry.create_pipeline(
            ...     'hls',
            ...     path=Path('/streams/main.m3u8'),
            ...     options=GraphOptions(llhls=False),
            ... )
        """
        from .pipeline import ManifestPipeline

        factory = cls._factories.get(source_name)
        if factory is None:
            raise ValueError(
                f"Unknown source: '{source_name}'. "
                f"Available sources: {', '.join(cls.list_sources()) or 'none'}"
            )

        return ManifestPipeline(factory(**kwargs), options)

    @classmethod
    def list_sources(cls) -> list[str]:
        """Registered platform names, sorted."""
        return sorted(cls._factories)

    @classmethod
    def discover_platforms(cls) -> None:
        """Import the bundled platforms so they register themselves.

        A platform whose dependencies are missing is skipped with a warning.
        """
        for name in PLATFORMS:
            try:
                importlib.import_module(f".platforms.{name}", package=__package__)
            except ImportError as e:
                logger.warning("Platform '%s' is unavailable: %s", name, e)
