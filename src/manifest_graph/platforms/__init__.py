"""Platform implementations for the pipeline.

This package contains self-contained platform modules that provide
source implementations for different manifest formats (HLS text,
pre-parsed documents).

Each platform module auto-registers itself with the SourceRegistry
when imported.
"""

# Platforms listed in registry.PLATFORMS are imported by
# SourceRegistry.discover_platforms()
