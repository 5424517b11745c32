"""Transformers for normalizing parsed manifests.

This package contains the document defaulting pass and the playlist graph
assembly shared by every platform.
"""

from .base import Transformer
from .defaults import normalize_document, strip_low_latency
from .graph import GraphTransformer, resolve_graph, resolve_media_group_uris, wrap_as_main

__all__ = [
    "GraphTransformer",
    "Transformer",
    "normalize_document",
    "resolve_graph",
    "resolve_media_group_uris",
    "strip_low_latency",
    "wrap_as_main",
]
