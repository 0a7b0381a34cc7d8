import asyncio
import json
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Optional

from .constants import PlaybackConstants
from .errors import DawplayError
from .model import Tempo, describe_model, serialize_model
from .playback import DeviceAudioSink, PlaybackScheduler, TransportController
from .session import SessionManager
from .watcher import ArchiveWatcher


# Configure logging
logger = logging.getLogger(__name__)


def setup_logging(log_file: Path = None, level: str = "INFO"):
    """
    Configure logging to both file and console.

    Args:
        log_file: Path to log file (optional)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    level_value = getattr(logging, level.upper(), None)
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(level_value)
    root_logger.handlers = []

    # Console handler (simple format)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level_value)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    # File handler (detailed format)
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")

    return root_logger


def resolve_tempo(manager: SessionManager, bpm: Optional[float]) -> Tempo:
    """Pick the tempo: command line first, then the document, then the default."""
    if bpm is not None:
        return Tempo(bpm)
    if manager.current is not None and manager.current.document_tempo is not None:
        return Tempo(manager.current.document_tempo)
    return Tempo(PlaybackConstants.DEFAULT_TEMPO)


def print_report(report) -> None:
    print(report.summary())
    for item in report.scheduled:
        print(f"  {item.offset_seconds:8.2f}s  {item.path}  ({item.clip_name})")
    for warning in report.warnings:
        print(f"  WARNING {warning}")


def track_task(task: asyncio.Task, pending: set, on_failure) -> asyncio.Task:
    """
    Keep a reference to a background task until it finishes.

    Args:
        task: Task to hold on to
        pending: Set holding the running tasks
        on_failure: Called with the exception if the task raises

    Returns:
        The task
    """
    pending.add(task)

    def done(finished: asyncio.Task):
        pending.discard(finished)
        if finished.cancelled():
            return
        error = finished.exception()
        if error is not None:
            logger.error(f"Background task failed: {error!r}")
            on_failure(error)

    task.add_done_callback(done)
    return task


async def run_player(path: Path, bpm: Optional[float]):
    """Load a project, start playback and toggle pause on each Enter press."""
    manager = SessionManager()
    manager.load_file(path)
    tempo = resolve_tempo(manager, bpm)

    print(describe_model(manager.current.model))
    print(f"\nTempo: {tempo.beats_per_minute:g} BPM")

    sink = DeviceAudioSink()
    transport = TransportController(
        sink,
        session_provider=lambda: manager.current,
        tempo_provider=lambda: tempo,
        scheduler=PlaybackScheduler(),
    )

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()
    pending = set()

    async def toggle():
        try:
            state = await transport.toggle()
        except DawplayError as e:
            print(f"Error: {e}")
            stop_event.set()
            return
        print(f"[Transport] {state.value}")

    def on_toggle_failure(error: BaseException):
        print(f"Error: {error}")
        stop_event.set()

    def on_input():
        line = sys.stdin.readline()
        if not line or line.strip().lower() == "q":
            stop_event.set()
            return
        track_task(asyncio.create_task(toggle()), pending, on_toggle_failure)

    try:
        await toggle()
        if transport.last_report is not None:
            print_report(transport.last_report)

        print("\nPress Enter to pause/resume, q + Enter to quit.")
        loop.add_reader(sys.stdin.fileno(), on_input)
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, stop_event.set)

        await stop_event.wait()
    finally:
        loop.remove_reader(sys.stdin.fileno())
        for task in list(pending):
            task.cancel()
        sink.close()

    print("Playback stopped.")


def run_watch(path: Path):
    """Print project info and re-print it whenever the archive changes."""
    manager = SessionManager()
    manager.load_file(path)
    print(json.dumps(manager.get_project_info(), indent=2))

    def on_change(file_path: Path):
        print(f"\n[File Watch] Detected change in {file_path.name}")
        try:
            result = manager.reload()
        except DawplayError as e:
            print(f"[File Watch] Reload failed, keeping previous project: {e}")
            return
        if result["changed"]:
            print(f"[File Watch] Project reloaded: {result['fingerprint'][:8]}...")
            print(json.dumps(manager.get_project_info(), indent=2))
        else:
            print("[File Watch] No changes detected (fingerprint identical)")

    with ArchiveWatcher(on_change, path):
        print("Watching for changes... Press Ctrl+C to stop")
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            print("\nStopping watcher...")


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m dawplay.main <path-to-archive> [OPTIONS]")
        print("\nModes:")
        print("  --mode=info       - Show project summary (default)")
        print("  --mode=json       - Output the project model as JSON")
        print("  --mode=watch      - Show project info and reload on change")
        print("  --mode=play       - Play the project (Enter toggles pause)")
        print("\nPlayback Options:")
        print("  --bpm=BPM         - Tempo (default: document tempo, else 120)")
        print("\nLogging Options:")
        print("  --log-file=PATH   - Log to file (default: console only)")
        print("  --log-level=LEVEL - Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)")
        sys.exit(1)

    path = Path(sys.argv[1])
    mode = "info"
    bpm = None
    log_file = None
    log_level = "INFO"

    try:
        # Parse optional arguments
        for arg in sys.argv[2:]:
            if arg.startswith("--mode="):
                mode = arg.split("=")[1]
            elif arg.startswith("--bpm="):
                value = arg.split("=")[1]
                try:
                    bpm = float(value)
                except ValueError:
                    raise ValueError(f"Invalid --bpm value: {value!r}") from None
            elif arg.startswith("--log-file="):
                log_file = Path(arg.split("=")[1])
            elif arg.startswith("--log-level="):
                log_level = arg.split("=")[1]

        setup_logging(log_file=log_file, level=log_level)

        if mode == "play":
            asyncio.run(run_player(path, bpm))
        elif mode == "watch":
            run_watch(path)
        else:
            manager = SessionManager()
            manager.load_file(path)
            if mode == "json":
                print(json.dumps(serialize_model(manager.current.model), indent=2))
            else:
                print(describe_model(manager.current.model))
                print(json.dumps(manager.get_project_info(), indent=2))
    except (DawplayError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nShutdown complete.")


if __name__ == "__main__":
    main()
