"""Command-line interface for manifest normalization.

This module provides the CLI entry point for turning a manifest file into
its resolved playlist graph, written as JSON.
"""

import argparse
import json
import sys
from pathlib import Path

from .config import GraphOptions
from .core.events import ManifestEvent
from .core.types import ManifestDocument
from .core.validator import validate_graph_with_error_details
from .registry import SourceRegistry


_EVENT_PREFIXES = {"info": "Info", "warn": "Warning", "error": "Error"}


def _print_event(event: ManifestEvent) -> None:
    prefix = _EVENT_PREFIXES.get(event.level, event.level.capitalize())
    print(f"{prefix}: {event.message}", file=sys.stderr)


def normalize_manifest(
    path: Path,
    source_format: str | None = None,
    uri: str | None = None,
    options: GraphOptions | None = None,
) -> ManifestDocument:
    """Normalize a manifest file into a resolved playlist graph.

    Args:
        path: Manifest file (HLS text or pre-parsed JSON document)
        source_format: Registered source name ('hls' or 'document');
            detected from the file when None
        uri: URI the manifest was loaded from; defaults per source
        options: Normalization options

    Returns:
        The resolved main document

    Raises:
        ValueError: If the source cannot be created or read
    """
    if source_format is None:
        source_format = SourceRegistry.detect_format(path)

    print(f"Reading {source_format} manifest: {path}", file=sys.stderr)
    pipeline = SourceRegistry.create_pipeline(
        source_format,
        options=options,
        path=path,
        uri=uri,
    )
    pipeline.onwarn = _print_event

    document = next(pipeline.generate_documents())

    print(f"Resolved {len(document.playlists)} playlists", file=sys.stderr)

    return document


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the manifest-graph command."""
    parser = argparse.ArgumentParser(
        prog="manifest-graph",
        description="Normalize an adaptive-streaming manifest into a resolved playlist graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Basic usage
  manifest-graph main.m3u8 --uri https://cdn.example.com/live/main.m3u8

  # Strip low-latency fields and write to a file
  manifest-graph main.m3u8 --uri https://cdn.example.com/live/main.m3u8 --no-llhls > graph.json

  # Pre-parsed DASH document (format detected from the content)
  manifest-graph main.json --uri https://cdn.example.com/vod/main.mpd
        """,
    )

    parser.add_argument("path", help="Manifest file to normalize")

    parser.add_argument(
        "--format",
        choices=SourceRegistry.list_sources() or None,
        help="Manifest format (default: detected from the file)",
    )

    parser.add_argument("--uri", help="URI the manifest was loaded from (default: file URI)")

    parser.add_argument(
        "--context-uri",
        help="Base URI for a main document synthesized around a media playlist",
    )

    parser.add_argument(
        "--no-llhls",
        action="store_true",
        help="Remove low-latency (LL-HLS) fields",
    )

    parser.add_argument(
        "--no-legacy-group-uris",
        action="store_true",
        help="Use playlist ids for every placeholder rendition URI",
    )

    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip JSON Schema validation of the output",
    )

    args = parser.parse_args(argv)

    path = Path(args.path)
    if not path.exists():
        print(f"Error: Path does not exist: {path}", file=sys.stderr)
        sys.exit(1)

    if not path.is_file():
        print(f"Error: Path is not a file: {path}", file=sys.stderr)
        sys.exit(1)

    options = GraphOptions(
        llhls=not args.no_llhls,
        legacy_group_uris=not args.no_legacy_group_uris,
        context_uri=args.context_uri,
    )

    try:
        document = normalize_manifest(path, args.format, uri=args.uri, options=options)
        output = document.to_dict()

        if not args.no_validate:
            print("Validating playlist graph against schema...", file=sys.stderr)
            is_valid, error_msg = validate_graph_with_error_details(output)

            if not is_valid:
                print("Error: Playlist graph validation failed:", file=sys.stderr)
                print(error_msg, file=sys.stderr)
                sys.exit(1)

            print("Validation successful!", file=sys.stderr)

        json.dump(output, sys.stdout, indent=2)
        print()

    except Exception as e:
        print(f"Error: Failed to normalize manifest: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
