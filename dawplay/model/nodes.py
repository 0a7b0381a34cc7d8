"""
Data model for a loaded DAW project.

The model is built once per parsed document and never mutated afterwards.
Reloading a project builds a new ProjectModel and replaces the old one.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..constants import ParserDefaults


@dataclass(frozen=True)
class FileReference:
    """Path of an audio entry inside the project archive, kept verbatim."""
    archive_path: str


@dataclass(frozen=True)
class Clip:
    """
    A placed segment on a track lane.

    Clips without an audio reference (MIDI, automation) are valid but
    silent; the scheduler skips them.
    """
    name: str = ParserDefaults.CLIP_NAME
    start_beat: float = ParserDefaults.CLIP_TIME
    audio_reference: Optional[FileReference] = None

    @property
    def is_audible(self) -> bool:
        return self.audio_reference is not None


@dataclass(frozen=True)
class Track:
    """A track with its clips in document order."""
    name: str = ParserDefaults.TRACK_NAME
    clips: Tuple[Clip, ...] = ()


@dataclass(frozen=True)
class ProjectModel:
    """Root of the project model. Owns all tracks."""
    tracks: Tuple[Track, ...] = field(default_factory=tuple)

    @property
    def clips(self) -> Tuple[Clip, ...]:
        """All clips across all tracks, in document order."""
        return tuple(clip for track in self.tracks for clip in track.clips)

    @property
    def audio_clips(self) -> Tuple[Clip, ...]:
        return tuple(clip for clip in self.clips if clip.is_audible)

    @property
    def track_count(self) -> int:
        return len(self.tracks)

    @property
    def clip_count(self) -> int:
        return sum(len(track.clips) for track in self.tracks)


@dataclass(frozen=True)
class Tempo:
    """
    A fixed project tempo.

    seconds_per_beat is derived on every access so a new Tempo always
    produces fresh offsets.
    """
    beats_per_minute: float

    def __post_init__(self):
        bpm = self.beats_per_minute
        if isinstance(bpm, bool) or not isinstance(bpm, (int, float)):
            raise ValueError(f"Tempo must be a number, got {bpm!r}")
        if not math.isfinite(bpm) or bpm <= 0:
            raise ValueError(f"Tempo must be a positive finite number, got {bpm!r}")

    @property
    def seconds_per_beat(self) -> float:
        return 60.0 / self.beats_per_minute

    def beats_to_seconds(self, beats: float) -> float:
        """Convert a beat position to seconds at this tempo."""
        return beats * self.seconds_per_beat
