import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from dawplay.errors import SchedulingError
from dawplay.model import ProjectModel, Tempo
from dawplay.playback import ScheduleReport, TransportController, TransportState


class MockClockSink:
    """Sink exposing only the clock and transport controls."""

    def __init__(self):
        self._state = TransportState.IDLE
        self.clock = 0.0
        self.calls = []

    def state(self):
        return self._state

    def suspend(self):
        self.calls.append("suspend")
        self._state = TransportState.SUSPENDED

    def resume(self):
        self.calls.append("resume")
        self._state = TransportState.RUNNING

    def now(self):
        return self.clock


@pytest.fixture
def sink():
    return MockClockSink()


@pytest.fixture
def session():
    session = MagicMock()
    session.model = ProjectModel()
    session.archive = MagicMock()
    return session


@pytest.fixture
def scheduler():
    scheduler = MagicMock()
    scheduler.schedule = AsyncMock(return_value=ScheduleReport(reference_time=0.0, seconds_per_beat=0.5))
    return scheduler


@pytest.fixture
def transport(sink, session, scheduler):
    return TransportController(sink, lambda: session, lambda: Tempo(120), scheduler=scheduler)


@pytest.mark.asyncio
async def test_first_toggle_starts_and_schedules(transport, sink, session, scheduler):
    sink.clock = 1.5
    state = await transport.toggle()

    assert state is TransportState.RUNNING
    assert sink.calls == ["resume"]
    scheduler.schedule.assert_awaited_once()
    args, kwargs = scheduler.schedule.call_args
    assert args[0] is session.model
    assert args[1] == Tempo(120)
    assert args[2] is session.archive
    assert args[3] is sink
    assert kwargs["reference_time"] == 1.5
    assert transport.last_report is scheduler.schedule.return_value


@pytest.mark.asyncio
async def test_suspend_and_resume_do_not_reschedule(transport, sink, scheduler):
    await transport.toggle()
    first_report = transport.last_report

    assert await transport.toggle() is TransportState.SUSPENDED
    assert await transport.toggle() is TransportState.RUNNING
    assert await transport.toggle() is TransportState.SUSPENDED

    assert sink.calls == ["resume", "suspend", "resume", "suspend"]
    scheduler.schedule.assert_awaited_once()
    assert transport.last_report is first_report


@pytest.mark.asyncio
async def test_start_without_project(sink, scheduler):
    transport = TransportController(sink, lambda: None, lambda: Tempo(120), scheduler=scheduler)

    with pytest.raises(SchedulingError, match="No project loaded"):
        await transport.toggle()

    assert transport.state is TransportState.IDLE
    scheduler.schedule.assert_not_called()


@pytest.mark.asyncio
async def test_tempo_is_read_at_start(sink, session, scheduler):
    tempos = iter([Tempo(90)])
    transport = TransportController(sink, lambda: session, lambda: next(tempos), scheduler=scheduler)

    await transport.toggle()

    assert scheduler.schedule.call_args[0][1] == Tempo(90)


@pytest.mark.asyncio
async def test_failed_scheduling_leaves_clock_running(sink, session, scheduler):
    scheduler.schedule = AsyncMock(side_effect=SchedulingError("1 clip task(s) failed unexpectedly"))
    transport = TransportController(sink, lambda: session, lambda: Tempo(120), scheduler=scheduler)

    with patch("dawplay.playback.transport.logger") as mock_logger:
        with pytest.raises(SchedulingError):
            await transport.toggle()

    assert transport.state is TransportState.RUNNING
    assert transport.last_report is None
    mock_logger.error.assert_called_once()

    assert await transport.toggle() is TransportState.SUSPENDED
    assert scheduler.schedule.await_count == 1
