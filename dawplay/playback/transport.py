"""
Play/pause transport.

States follow the sink's clock: IDLE -> RUNNING <-> SUSPENDED. The first
toggle starts the clock and schedules the loaded project; later toggles
only suspend and resume the clock, so playback continues where it was
paused instead of restarting.
"""

import logging
from typing import Callable, Optional

from ..errors import SchedulingError
from ..model import Tempo
from .report import ScheduleReport
from .scheduler import PlaybackScheduler
from .sink import AudioSink, TransportState

logger = logging.getLogger(__name__)


class TransportController:
    """
    Owns the transport state machine for one audio sink.

    Args:
        sink: Audio sink whose clock is controlled
        session_provider: Returns the current Session (or None when nothing is loaded)
        tempo_provider: Returns the Tempo to schedule with
        scheduler: PlaybackScheduler to use (a default one is created if omitted)
    """

    def __init__(
        self,
        sink: AudioSink,
        session_provider: Callable[[], Optional[object]],
        tempo_provider: Callable[[], Tempo],
        scheduler: Optional[PlaybackScheduler] = None,
    ):
        self.sink = sink
        self.session_provider = session_provider
        self.tempo_provider = tempo_provider
        self.scheduler = scheduler or PlaybackScheduler()
        self.last_report: Optional[ScheduleReport] = None

    @property
    def state(self) -> TransportState:
        return self.sink.state()

    async def toggle(self) -> TransportState:
        """
        Advance the transport by one play/pause press.

        A failed scheduling pass leaves the clock running: clips already
        handed to the sink keep playing and the next toggle suspends them.
        last_report is None until a pass completes.

        Returns:
            The state after the toggle

        Raises:
            SchedulingError: Starting from idle with no project loaded, or the
                scheduling pass failed
        """
        state = self.sink.state()

        if state is TransportState.RUNNING:
            self.sink.suspend()
            logger.info("Transport suspended")
        elif state is TransportState.SUSPENDED:
            self.sink.resume()
            logger.info("Transport resumed")
        else:
            await self._start()

        return self.sink.state()

    async def _start(self) -> ScheduleReport:
        session = self.session_provider()
        if session is None:
            raise SchedulingError("No project loaded")

        tempo = self.tempo_provider()
        self.sink.resume()
        logger.info("Transport started")

        self.last_report = None
        try:
            self.last_report = await self.scheduler.schedule(
                session.model,
                tempo,
                session.archive,
                self.sink,
                reference_time=self.sink.now(),
            )
        except SchedulingError as e:
            logger.error(f"Scheduling failed, transport left running: {e}")
            raise
        return self.last_report
