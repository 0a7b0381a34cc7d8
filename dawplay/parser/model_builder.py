import logging

from ..constants import ProjectSchema
from ..model import Clip, ProjectModel, Track
from .defaults import parse_or_default
from .queries import audio_reference_of, clips_of, tracks_of

logger = logging.getLogger(__name__)


def build_project_model(document) -> ProjectModel:
    """
    Build a ProjectModel from a parsed project document.

    Args:
        document: ElementTree (or root element) of project.xml

    Returns:
        The fully built ProjectModel

    Raises:
        MissingRootError: The document has no track container
    """
    tracks = []

    for track_elem in tracks_of(document):
        clips = []
        for clip_elem in clips_of(track_elem):
            clips.append(Clip(
                name=parse_or_default(clip_elem, ProjectSchema.NAME),
                start_beat=parse_or_default(clip_elem, ProjectSchema.TIME),
                audio_reference=audio_reference_of(clip_elem),
            ))

        tracks.append(Track(
            name=parse_or_default(track_elem, ProjectSchema.NAME),
            clips=tuple(clips),
        ))

    model = ProjectModel(tracks=tuple(tracks))
    logger.debug(
        f"Built project model: {model.track_count} tracks, "
        f"{model.clip_count} clips ({len(model.audio_clips)} audio)"
    )
    return model
