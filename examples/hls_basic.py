"""Basic HLS normalization example.

This example demonstrates how to:
- Parse a main manifest from a local file
- Resolve its playlist graph
- Display the playlists and renditions
- Save output to JSON file
"""

import json
import sys
from pathlib import Path

from manifest_graph import SourceRegistry


def main():
    # Manifest to normalize (change this to your own main.m3u8)
    manifest_file = Path("main.m3u8")
    manifest_uri = "https://cdn.example.com/live/main.m3u8"

    if not manifest_file.exists():
        print(f"Manifest not found: {manifest_file}", file=sys.stderr)
        print("Please update the manifest_file variable in this script", file=sys.stderr)
        return

    print(f"Reading manifest: {manifest_file}", file=sys.stderr)

    # Create pipeline
    pipeline = SourceRegistry.create_pipeline('hls', path=manifest_file, uri=manifest_uri)
    pipeline.onwarn = lambda event: print(f"  warning: {event.message}", file=sys.stderr)

    # Resolve the graph
    document = next(pipeline.generate_documents())

    # Display summary
    print(f"\nResolved {len(document.playlists)} variant playlists", file=sys.stderr)
    for playlist in document.playlists:
        bandwidth = playlist.attributes.get('BANDWIDTH', '?')
        print(f"  {playlist.id}  {bandwidth} bps  {playlist.resolved_uri}", file=sys.stderr)

    for media_type, groups in document.media_groups.items():
        for group_key, labels in groups.items():
            for label_key, rendition in labels.items():
                playlists = rendition.playlists or []
                print(f"  {media_type}/{group_key}/{label_key}: {len(playlists)} playlist(s)", file=sys.stderr)

    # Save to file
    output_file = Path("graph.json")
    with open(output_file, 'w') as f:
        json.dump(document.to_dict(), f, indent=2)

    print(f"\nGraph saved to {output_file}", file=sys.stderr)


if __name__ == '__main__':
    main()
