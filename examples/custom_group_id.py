"""Custom rendition naming example.

This example demonstrates how to:
- Normalize an in-memory DASH document without playlist URIs
- Replace the placeholder group id function
- Keep one URI scheme for every placeholder (no legacy rule)
"""

import json

from manifest_graph import GraphOptions, SourceRegistry


DOCUMENT = {
    "uri": "https://cdn.example.com/vod/main.mpd",
    "playlists": [
        {"attributes": {"NAME": "video-720", "BANDWIDTH": 2000000}, "segments": [{"duration": 4}]},
    ],
    "mediaGroups": {
        "AUDIO": {
            "audio": {
                "en": {
                    "language": "en",
                    "default": True,
                    "autoselect": True,
                    "playlists": [
                        {"attributes": {"NAME": "audio-en-128", "BANDWIDTH": 128000}},
                        {"attributes": {"NAME": "audio-en-64", "BANDWIDTH": 64000}},
                    ],
                }
            }
        },
        "VIDEO": {},
        "CLOSED-CAPTIONS": {},
        "SUBTITLES": {},
    },
}


def group_id(media_type, group_key, label_key, playlist):
    """Name rendition playlists as dash://<group>/<representation>."""
    name = playlist.attributes.get('NAME', label_key)
    return f"dash://{group_key}/{name}"


def main():
    options = GraphOptions(group_id_fn=group_id, legacy_group_uris=False)
    pipeline = SourceRegistry.create_pipeline('document', data=DOCUMENT, options=options)

    document = next(pipeline.generate_documents())

    for playlist in document.media_groups['AUDIO']['audio']['en'].playlists:
        print(f"{playlist.id} -> {playlist.uri}")

    print(json.dumps(document.to_dict(), indent=2))


if __name__ == '__main__':
    main()
