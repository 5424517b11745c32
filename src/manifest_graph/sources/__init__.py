"""Manifest sources for the pipeline.

This package contains base classes and interfaces for manifest sources.
Platform-specific implementations live in the platforms/ directory.
"""

from .base import ManifestData, Source, SourceManifest

__all__ = ["ManifestData", "Source", "SourceManifest"]
