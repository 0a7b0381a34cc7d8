"""
Audio sink backed by the system output device.

Decoded clips are mixed in the output callback. The clock counts frames
rendered while running, so it stops when the sink is suspended and every
scheduled clip waits with it.
"""

import asyncio
import io
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import soundfile as sf

from ..constants import PlaybackConstants
from ..errors import DecodeError
from .sink import AudioSink, DecodedAudio, TransportState

logger = logging.getLogger(__name__)


def match_channels(samples: np.ndarray, channels: int) -> np.ndarray:
    """Up- or down-mix (frames, n) samples to the requested channel count."""
    source_channels = samples.shape[1]
    if source_channels == channels:
        return samples
    if source_channels == 1:
        return np.repeat(samples, channels, axis=1)
    if channels == 1:
        return samples.mean(axis=1, keepdims=True)
    if source_channels > channels:
        return samples[:, :channels]
    padding = np.repeat(samples[:, -1:], channels - source_channels, axis=1)
    return np.concatenate([samples, padding], axis=1)


def resample(samples: np.ndarray, source_rate: int, target_rate: int) -> np.ndarray:
    """Linear-interpolation resampling of (frames, channels) samples."""
    if source_rate == target_rate or len(samples) == 0:
        return samples

    out_frames = int(round(len(samples) * target_rate / source_rate))
    if out_frames == 0:
        return np.zeros((0, samples.shape[1]), dtype=np.float32)

    x_old = np.arange(len(samples)) / source_rate
    x_new = np.arange(out_frames) / target_rate
    columns = [np.interp(x_new, x_old, samples[:, ch]) for ch in range(samples.shape[1])]
    return np.column_stack(columns).astype(np.float32)


def decode_audio(data: bytes, sample_rate: int, channels: int) -> DecodedAudio:
    """
    Decode audio file bytes into audio matching the sink's format.

    Any format libsndfile reads is accepted (WAV with PCM or float samples,
    AIFF, FLAC, OGG).

    Raises:
        DecodeError: libsndfile cannot read the bytes
    """
    try:
        samples, source_rate = sf.read(io.BytesIO(data), dtype="float32", always_2d=True)
    except (sf.LibsndfileError, RuntimeError) as e:
        raise DecodeError(f"Unsupported audio data: {e}") from e

    if samples.shape[1] == 0 or source_rate <= 0:
        raise DecodeError("Audio declares no channels or no sample rate")

    samples = match_channels(samples, channels)
    samples = resample(samples, source_rate, sample_rate)
    return DecodedAudio(samples=np.ascontiguousarray(samples, dtype=np.float32), sample_rate=sample_rate)


@dataclass
class _Voice:
    samples: np.ndarray
    start_frame: int

    @property
    def end_frame(self) -> int:
        return self.start_frame + len(self.samples)


class DeviceAudioSink(AudioSink):
    """
    Audio sink that mixes scheduled clips into a sounddevice output stream.

    Args:
        sample_rate: Output rate in Hz
        channels: Output channel count
        block_size: Frames per output callback
        output_enabled: Open a device stream on start; when False, audio is
                        only produced by calling render()
    """

    def __init__(
        self,
        sample_rate: int = PlaybackConstants.SAMPLE_RATE,
        channels: int = PlaybackConstants.CHANNELS,
        block_size: int = PlaybackConstants.BLOCK_SIZE,
        output_enabled: bool = True,
    ):
        self.sample_rate = sample_rate
        self.channels = channels
        self.block_size = block_size
        self.output_enabled = output_enabled

        self._lock = threading.Lock()
        self._state = TransportState.IDLE
        self._clock_frames = 0
        self._voices: List[_Voice] = []
        self._stream: Optional[object] = None

    async def decode(self, data: bytes) -> DecodedAudio:
        return await asyncio.to_thread(decode_audio, data, self.sample_rate, self.channels)

    def play(self, audio: DecodedAudio, at: float) -> None:
        samples = audio.samples
        if samples.ndim == 1:
            samples = samples.reshape(-1, 1)
        samples = match_channels(samples, self.channels)
        samples = resample(samples, audio.sample_rate, self.sample_rate)

        start_frame = int(round(at * self.sample_rate))
        with self._lock:
            # Requests for instants already rendered start right away
            start_frame = max(start_frame, self._clock_frames)
            self._voices.append(_Voice(samples=samples, start_frame=start_frame))

    def state(self) -> TransportState:
        return self._state

    def suspend(self) -> None:
        with self._lock:
            if self._state is TransportState.RUNNING:
                self._state = TransportState.SUSPENDED

    def resume(self) -> None:
        if self._state is TransportState.IDLE and self.output_enabled:
            self._open_stream()
        with self._lock:
            self._state = TransportState.RUNNING

    def now(self) -> float:
        with self._lock:
            return self._clock_frames / self.sample_rate

    @property
    def active_voices(self) -> int:
        with self._lock:
            return len(self._voices)

    def render(self, frames: int) -> np.ndarray:
        """
        Mix the next block of output and advance the clock.

        Returns silence, without advancing the clock, unless running.
        """
        out = np.zeros((frames, self.channels), dtype=np.float32)

        with self._lock:
            if self._state is not TransportState.RUNNING:
                return out

            block_start = self._clock_frames
            block_end = block_start + frames
            remaining = []

            for voice in self._voices:
                if voice.end_frame <= block_start:
                    continue
                if voice.start_frame < block_end:
                    src_start = max(0, block_start - voice.start_frame)
                    dst_start = max(0, voice.start_frame - block_start)
                    count = min(frames - dst_start, len(voice.samples) - src_start)
                    out[dst_start:dst_start + count] += voice.samples[src_start:src_start + count]
                if voice.end_frame > block_end:
                    remaining.append(voice)

            self._voices = remaining
            self._clock_frames = block_end

        np.clip(out, -1.0, 1.0, out=out)
        return out

    def _callback(self, outdata, frames, time_info, status) -> None:
        if status:
            logger.debug(f"Output stream status: {status}")
        outdata[:] = self.render(frames)

    def _open_stream(self) -> None:
        # Import here to avoid loading PortAudio unless audio output is used
        import sounddevice as sd

        self._stream = sd.OutputStream(
            samplerate=self.sample_rate,
            blocksize=self.block_size,
            channels=self.channels,
            dtype="float32",
            callback=self._callback,
        )
        self._stream.start()
        logger.info(f"Audio output started ({self.sample_rate} Hz, {self.channels} ch)")

    def close(self) -> None:
        """Stop and close the output stream, if one was opened."""
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None
            logger.info("Audio output stopped")
