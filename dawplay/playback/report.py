"""
Results of a scheduling pass.

Per-clip problems are recorded as SchedulingWarning values; they never
abort the pass.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class WarningKind(Enum):
    """Per-clip problems that skip a clip without failing the pass."""
    FILE_NOT_FOUND = "file_not_found"
    READ_FAILED = "read_failed"
    DECODE_FAILED = "decode_failed"


@dataclass(frozen=True)
class SchedulingWarning:
    kind: WarningKind
    path: str
    clip_name: str
    message: str = ""

    @classmethod
    def file_not_found(cls, path: str, clip_name: str) -> "SchedulingWarning":
        return cls(WarningKind.FILE_NOT_FOUND, path, clip_name, f"{path} not found in archive")

    @classmethod
    def read_failed(cls, path: str, clip_name: str, reason: str) -> "SchedulingWarning":
        return cls(WarningKind.READ_FAILED, path, clip_name, f"{path} could not be read: {reason}")

    @classmethod
    def decode_failed(cls, path: str, clip_name: str, reason: str) -> "SchedulingWarning":
        return cls(WarningKind.DECODE_FAILED, path, clip_name, f"{path} could not be decoded: {reason}")

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.clip_name}: {self.message}"


@dataclass(frozen=True)
class ScheduledClip:
    """A play request issued to the sink."""
    clip_name: str
    path: str
    start_beat: float
    offset_seconds: float
    start_time: float


@dataclass(frozen=True)
class ScheduleReport:
    """
    Outcome of one scheduling pass.

    Attributes:
        reference_time: Clock instant all offsets are relative to
        seconds_per_beat: Tempo conversion used for the pass
        scheduled: Play requests, ordered by start time
        warnings: Per-clip problems
        skipped_count: Clips without an audio reference
    """
    reference_time: float
    seconds_per_beat: float
    scheduled: Tuple[ScheduledClip, ...] = field(default_factory=tuple)
    warnings: Tuple[SchedulingWarning, ...] = field(default_factory=tuple)
    skipped_count: int = 0

    @property
    def scheduled_count(self) -> int:
        return len(self.scheduled)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def summary(self) -> str:
        text = f"Scheduled {self.scheduled_count} clip(s)"
        if self.warnings:
            text += f", {len(self.warnings)} warning(s)"
        if self.skipped_count:
            text += f", {self.skipped_count} non-audio clip(s) skipped"
        return text
