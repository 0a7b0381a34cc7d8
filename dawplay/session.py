"""
Loaded-project sessions.

A Session bundles an open archive with the model parsed from it. Sessions
are immutable: reloading builds a new Session and swaps it in only once
loading has fully succeeded, so the previous session stays in place when
a reload fails.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .archive import ProjectArchive, open_archive, open_archive_file
from .model import ProjectModel, fingerprint
from .parser import build_project_model, parse_document, tempo_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """
    An open archive together with its project model.

    Attributes:
        archive: Archive the model was loaded from; used to read audio entries
        model: Parsed project model
        fingerprint: Content hash of the model
        source: File the archive was read from, if any
        document_tempo: Tempo declared by the document's transport, if any
    """
    archive: ProjectArchive
    model: ProjectModel
    fingerprint: str
    source: Optional[Path] = None
    document_tempo: Optional[float] = None


def load_session(source: Union[Path, str, bytes]) -> Session:
    """
    Open a project archive and parse its project.xml.

    Args:
        source: Path to the archive, or the archive's bytes

    Returns:
        A new Session

    Raises:
        LoadError: The archive is unreadable or has no project.xml
        ParseError: project.xml is malformed or has no track container
    """
    if isinstance(source, (bytes, bytearray)):
        archive = open_archive(bytes(source))
        path = None
    else:
        path = Path(source)
        archive = open_archive_file(path)

    try:
        document = parse_document(archive.project_xml())
        model = build_project_model(document)
    except Exception:
        archive.close()
        raise

    return Session(
        archive=archive,
        model=model,
        fingerprint=fingerprint(model),
        source=path,
        document_tempo=tempo_of(document),
    )


class SessionManager:
    """
    Holds the current session and replaces it on (re)load.

    Provides operations for:
    - Loading archives from disk or memory
    - Reloading the current file
    - Summarizing the loaded project
    """

    def __init__(self):
        self.current: Optional[Session] = None
        self.logger = logging.getLogger(f"{__name__}.SessionManager")

    def load_file(self, file_path: Union[Path, str]) -> Dict[str, Any]:
        """
        Load a project archive from disk and make it current.

        Args:
            file_path: Path to the archive

        Returns:
            Dictionary with status and basic project info
        """
        return self._swap(load_session(Path(file_path)))

    def load_bytes(self, data: bytes) -> Dict[str, Any]:
        """Load a project archive from memory and make it current."""
        return self._swap(load_session(data))

    def reload(self) -> Dict[str, Any]:
        """
        Reload the current session's file.

        Returns:
            Load result, with "changed" telling whether the model differs
        """
        if self.current is None or self.current.source is None:
            raise RuntimeError("No file-backed session to reload")

        previous = self.current.fingerprint
        result = self.load_file(self.current.source)
        result["changed"] = result["fingerprint"] != previous
        return result

    def _swap(self, session: Session) -> Dict[str, Any]:
        # The old archive is left open: a scheduling pass may still be reading it
        self.current = session

        self.logger.info(
            f"Loaded project: {session.model.track_count} tracks, "
            f"{session.model.clip_count} clips ({session.fingerprint[:8]})"
        )
        return {
            "status": "success",
            "file": str(session.source) if session.source else None,
            "fingerprint": session.fingerprint,
        }

    def get_project_info(self) -> Dict[str, Any]:
        """Summarize the current project."""
        if self.current is None:
            return {"loaded": False}

        model = self.current.model
        return {
            "loaded": True,
            "file": str(self.current.source) if self.current.source else None,
            "fingerprint": self.current.fingerprint,
            "num_tracks": model.track_count,
            "num_clips": model.clip_count,
            "num_audio_clips": len(model.audio_clips),
            "num_entries": len(self.current.archive.list()),
            "document_tempo": self.current.document_tempo,
        }
