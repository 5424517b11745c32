"""Default values used while normalizing manifests."""

# Target duration (seconds) used when a manifest has no segments to derive one from
DEFAULT_TARGET_DURATION = 10

# Prefix for synthetic URIs given to playlists that have no native URI
PLACEHOLDER_PREFIX = "placeholder-locator"

# Rendition categories present on every main document
MEDIA_GROUP_TYPES = ("AUDIO", "VIDEO", "CLOSED-CAPTIONS", "SUBTITLES")

# Rendition categories that carry alternate sub-playlists
ALTERNATE_MEDIA_TYPES = ("AUDIO", "SUBTITLES")

# Document-level low-latency fields (attribute names on ManifestDocument)
LL_DOCUMENT_FIELDS = (
    "preload_segment",
    "skip",
    "server_control",
    "rendition_reports",
    "part_inf",
    "part_target_duration",
)

# Segment-level low-latency fields (attribute names on Segment)
LL_SEGMENT_FIELDS = ("parts", "preload_hints")

# Codec prefixes (RFC 6381 style) that only carry audio
AUDIO_CODEC_PREFIXES = (
    "mp4a",
    "ac-3",
    "ec-3",
    "ac-4",
    "opus",
    "flac",
    "vorbis",
    "mp3",
    "alac",
    "dtsc",
    "dtse",
    "dtsh",
    "dtsl",
    "speex",
)

PART_TARGET_REFERENCE = (
    "https://datatracker.ietf.org/doc/html/draft-pantos-hls-rfc8216bis-09#section-4.4.3.7"
)
