"""
Constants for dawplay.

This module centralizes schema tag names, attribute defaults and the
tunables used by the scheduler, audio sink and file watcher.
"""


class ProjectSchema:
    """Names used by the project archive and its XML description."""

    PROJECT_ENTRY = "project.xml"

    # Structural paths (child combinators, CSS style)
    TRACK_CONTAINER = "Structure"
    TRACK_PATH = "Structure > Track"
    CLIP_PATH = "Lanes > Clips > Clip"
    WARPED_AUDIO_FILE_PATH = "Warps > Audio > File"
    AUDIO_FILE_PATH = "Audio > File"
    TEMPO_PATH = "Transport > Tempo"

    # Attributes
    NAME = "name"
    TIME = "time"
    PATH = "path"
    VALUE = "value"


class ParserDefaults:
    """Default values substituted for missing or unparsable attributes."""

    TRACK_NAME = ""
    CLIP_NAME = "unnamed"
    CLIP_TIME = 0.0
    TEMPO = None


class PlaybackConstants:
    """Constants for scheduling and audio output."""

    DEFAULT_TEMPO = 120.0

    SAMPLE_RATE = 44100
    CHANNELS = 2
    BLOCK_SIZE = 512


class WatchConstants:
    """Constants for archive file watching."""

    DEBOUNCE_SECONDS = 1.0
    EXTENSIONS = frozenset({".dawproject", ".zip"})
