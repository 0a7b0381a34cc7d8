"""
Audio sink interface.

An audio sink decodes raw audio bytes and plays decoded audio at an
instant on its own clock. Instants are seconds on that clock. The sink's
clock is the only mutable state shared by all scheduled clips, and it is
changed only through suspend() and resume().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import numpy as np


class TransportState(Enum):
    """Clock state of an audio sink."""
    IDLE = "idle"
    RUNNING = "running"
    SUSPENDED = "suspended"


@dataclass(frozen=True)
class DecodedAudio:
    """
    Decoded PCM audio.

    Attributes:
        samples: float32 array shaped (frames, channels), values in [-1, 1]
        sample_rate: Frames per second
    """
    samples: np.ndarray
    sample_rate: int

    @property
    def frame_count(self) -> int:
        return int(self.samples.shape[0])

    @property
    def channels(self) -> int:
        return int(self.samples.shape[1]) if self.samples.ndim > 1 else 1

    @property
    def duration(self) -> float:
        return self.frame_count / self.sample_rate if self.sample_rate else 0.0


class AudioSink(ABC):
    """Base class for audio sinks consumed by the scheduler and transport."""

    @abstractmethod
    async def decode(self, data: bytes) -> DecodedAudio:
        """
        Decode raw audio bytes.

        Raises:
            DecodeError: The bytes are not decodable audio
        """

    @abstractmethod
    def play(self, audio: DecodedAudio, at: float) -> None:
        """Play audio starting at the given clock instant."""

    @abstractmethod
    def state(self) -> TransportState:
        """Current clock state."""

    @abstractmethod
    def suspend(self) -> None:
        """Pause the clock. Scheduled audio waits with it."""

    @abstractmethod
    def resume(self) -> None:
        """Start the clock from idle, or continue it after suspend()."""

    @abstractmethod
    def now(self) -> float:
        """Current clock instant in seconds."""
