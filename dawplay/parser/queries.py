"""
Typed accessors over a parsed project document.

These functions hide the structural query syntax from the model builder:
callers get elements, FileReference values or floats back.
"""

import xml.etree.ElementTree as ET
from typing import List, Optional

from ..constants import ProjectSchema
from ..errors import MissingRootError
from ..model import FileReference
from .defaults import parse_or_default
from .xml_loader import Scope, select, select_first


def track_container_of(document: Scope) -> List[ET.Element]:
    """Return every track container element (root included)."""
    root = document.getroot() if isinstance(document, ET.ElementTree) else document
    return list(root.iter(ProjectSchema.TRACK_CONTAINER))


def tracks_of(document: Scope) -> List[ET.Element]:
    """
    Return track elements in document order.

    Raises:
        MissingRootError: The document has no track container at all
    """
    if not track_container_of(document):
        raise MissingRootError(ProjectSchema.TRACK_CONTAINER)
    return select(document, ProjectSchema.TRACK_PATH)


def clips_of(track: ET.Element) -> List[ET.Element]:
    """Return the clip elements of a track's lanes in document order."""
    return select(track, ProjectSchema.CLIP_PATH)


def audio_reference_of(clip: ET.Element) -> Optional[FileReference]:
    """
    Locate the audio file a clip plays.

    Warped audio is searched first, then plain audio. A File element with
    no path attribute does not count as a reference.
    """
    file_elem = select_first(clip, ProjectSchema.WARPED_AUDIO_FILE_PATH)
    if file_elem is None:
        file_elem = select_first(clip, ProjectSchema.AUDIO_FILE_PATH)
    if file_elem is None:
        return None

    path = file_elem.get(ProjectSchema.PATH)
    if path is None:
        return None
    return FileReference(archive_path=path)


def tempo_of(document: Scope) -> Optional[float]:
    """Return the document's transport tempo in BPM, if it declares a usable one."""
    tempo_elem = select_first(document, ProjectSchema.TEMPO_PATH)
    if tempo_elem is None:
        return None

    bpm = parse_or_default(tempo_elem, ProjectSchema.VALUE)
    if bpm is None or bpm <= 0:
        return None
    return bpm
