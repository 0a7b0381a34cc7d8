"""
Playback scheduler.

Converts each audio clip's beat position into an instant on the sink's
clock and issues play requests. Every clip is handled by its own task;
all tasks compute their start time from a single reference instant, so
the order in which decodes finish does not affect what is heard.
"""

import asyncio
import logging
import zipfile
import zlib
from typing import List, Optional, Union

from ..errors import DecodeError, SchedulingError
from ..model import Clip, ProjectModel, Tempo
from .report import ScheduleReport, ScheduledClip, SchedulingWarning
from .sink import AudioSink

logger = logging.getLogger(__name__)

ClipOutcome = Union[ScheduledClip, SchedulingWarning]

# Raised by ZipFile.read for entries that exist but cannot be extracted
ENTRY_READ_ERRORS = (zipfile.BadZipFile, zlib.error, NotImplementedError, OSError)


class PlaybackScheduler:
    """
    Schedules the audio clips of a project model against an audio sink.

    Every clip task is started at once. Entry reads share the event loop's
    default thread pool; no clip waits for another clip's decode.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.PlaybackScheduler")

    async def schedule(
        self,
        model: ProjectModel,
        tempo: Tempo,
        archive,
        sink: AudioSink,
        reference_time: Optional[float] = None,
    ) -> ScheduleReport:
        """
        Schedule every audio clip of the model.

        Args:
            model: Project model to play
            tempo: Tempo in force for this pass
            archive: ProjectArchive (anything with read(path) -> bytes | None)
            sink: Audio sink that decodes and plays
            reference_time: Clock instant offsets are relative to; defaults to sink.now()

        Returns:
            ScheduleReport with play requests and per-clip warnings

        Raises:
            SchedulingError: Invalid tempo, or a clip task failed unexpectedly
        """
        if not isinstance(tempo, Tempo):
            raise SchedulingError(f"Expected a Tempo, got {tempo!r}")

        seconds_per_beat = tempo.seconds_per_beat
        if reference_time is None:
            reference_time = sink.now()

        audio_clips = model.audio_clips
        skipped_count = model.clip_count - len(audio_clips)

        self.logger.info(
            f"Scheduling {len(audio_clips)} audio clip(s) at {tempo.beats_per_minute:g} BPM "
            f"(reference {reference_time:.3f}s)"
        )

        results = await asyncio.gather(
            *(
                self._schedule_clip(clip, seconds_per_beat, archive, sink, reference_time)
                for clip in audio_clips
            ),
            return_exceptions=True,
        )

        scheduled: List[ScheduledClip] = []
        warnings: List[SchedulingWarning] = []
        failures: List[BaseException] = []

        for result in results:
            if isinstance(result, ScheduledClip):
                scheduled.append(result)
            elif isinstance(result, SchedulingWarning):
                warnings.append(result)
            elif isinstance(result, Exception):
                failures.append(result)
            else:
                raise result

        if failures:
            for failure in failures:
                self.logger.error(f"Clip task failed: {failure!r}")
            raise SchedulingError(
                f"{len(failures)} clip task(s) failed unexpectedly: {failures[0]}"
            ) from failures[0]

        scheduled.sort(key=lambda item: item.start_time)
        report = ScheduleReport(
            reference_time=reference_time,
            seconds_per_beat=seconds_per_beat,
            scheduled=tuple(scheduled),
            warnings=tuple(warnings),
            skipped_count=skipped_count,
        )
        self.logger.info(report.summary())
        return report

    async def _schedule_clip(
        self,
        clip: Clip,
        seconds_per_beat: float,
        archive,
        sink: AudioSink,
        reference_time: float,
    ) -> ClipOutcome:
        """Read, decode and schedule one clip, or return a warning."""
        path = clip.audio_reference.archive_path

        try:
            data = await asyncio.to_thread(archive.read, path)
        except ENTRY_READ_ERRORS as e:
            return self._warn(SchedulingWarning.read_failed(path, clip.name, str(e)))

        if data is None:
            return self._warn(SchedulingWarning.file_not_found(path, clip.name))

        try:
            audio = await sink.decode(data)
        except DecodeError as e:
            return self._warn(SchedulingWarning.decode_failed(path, clip.name, str(e)))

        offset = clip.start_beat * seconds_per_beat
        if offset < 0:
            self.logger.debug(f"Clamping negative offset {offset:.3f}s of {clip.name} to 0")
            offset = 0.0

        start_time = reference_time + offset
        sink.play(audio, start_time)
        self.logger.info(f"SCHEDULED: {path} at {offset:.2f}s")

        return ScheduledClip(
            clip_name=clip.name,
            path=path,
            start_beat=clip.start_beat,
            offset_seconds=offset,
            start_time=start_time,
        )

    def _warn(self, warning: SchedulingWarning) -> SchedulingWarning:
        self.logger.warning(str(warning))
        return warning
