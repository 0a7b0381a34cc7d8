"""
Serialization and pretty printing for project models.

This module provides:
- Conversion of a ProjectModel to a JSON-compatible dict
- A human-readable summary of tracks and audio clips
"""

from typing import Any, Dict, List

from .nodes import Clip, ProjectModel, Track


def serialize_clip(clip: Clip) -> Dict[str, Any]:
    return {
        "name": clip.name,
        "start_beat": clip.start_beat,
        "audio_path": clip.audio_reference.archive_path if clip.audio_reference else None,
    }


def serialize_track(track: Track, index: int) -> Dict[str, Any]:
    return {
        "index": index,
        "name": track.name,
        "clips": [serialize_clip(clip) for clip in track.clips],
    }


def serialize_model(model: ProjectModel) -> Dict[str, Any]:
    """
    Serialize a project model to a JSON-compatible dictionary.

    Args:
        model: The project model

    Returns:
        Dictionary with a "tracks" list; each track lists its clips
    """
    return {
        "tracks": [serialize_track(track, i) for i, track in enumerate(model.tracks)],
    }


def describe_model(model: ProjectModel) -> str:
    """
    Build a multi-line summary of the project for display.

    Only audio clips are listed under each track; silent clips are
    counted in the model but not shown.
    """
    lines: List[str] = [
        "Project loaded",
        f"Tracks: {model.track_count}",
        "",
    ]

    for track_index, track in enumerate(model.tracks):
        lines.append(f"  Track {track_index + 1}: {track.name}")
        for clip_index, clip in enumerate(track.clips):
            if not clip.is_audible:
                continue
            lines.append(f"    - Audio Clip {clip_index + 1}: {clip.name} (at {clip.start_beat:g} beats)")
            lines.append(f"      > File: {clip.audio_reference.archive_path}")

    return "\n".join(lines)
