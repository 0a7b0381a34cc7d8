"""
Playback for loaded projects.

This module provides:
- The AudioSink interface and a device-backed implementation
- The PlaybackScheduler that turns beat positions into play requests
- The TransportController play/pause state machine
"""

from .sink import AudioSink, DecodedAudio, TransportState
from .report import ScheduleReport, ScheduledClip, SchedulingWarning, WarningKind
from .scheduler import PlaybackScheduler
from .transport import TransportController
from .device_sink import DeviceAudioSink, decode_audio

__all__ = [
    "AudioSink",
    "DecodedAudio",
    "TransportState",
    "ScheduleReport",
    "ScheduledClip",
    "SchedulingWarning",
    "WarningKind",
    "PlaybackScheduler",
    "TransportController",
    "DeviceAudioSink",
    "decode_audio",
]
