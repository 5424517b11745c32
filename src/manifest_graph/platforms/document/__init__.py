"""Pre-parsed document platform for the pipeline.

This platform accepts manifests already parsed by an external grammar
parser (for example DASH documents from an MPD parser) in JSON form.
"""

from pathlib import Path

from .source import DocumentSource, ParsedManifest, name_group_id

# Auto-register with the registry
from ...registry import SourceRegistry


def _create_document_source(path: Path | None = None, **kwargs) -> DocumentSource:
    """Factory function for creating document sources.

    Args:
        path: JSON file holding the parsed document
        **kwargs: data, uri

    Returns:
        DocumentSource instance
    """
    return DocumentSource(path=path, **kwargs)


# Auto-register at module import
SourceRegistry.register_factory(
    'document',
    _create_document_source,
    suffixes=('.json',),
    signature='{',
)

__all__ = [
    "DocumentSource",
    "ParsedManifest",
    "name_group_id",
]
