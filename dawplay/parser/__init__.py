"""
Parser module for packaged project documents.

This module handles:
- Parsing project.xml text into an element tree
- Structural queries over the tree
- Attribute defaulting
- Building the ProjectModel from the document
"""

from .xml_loader import parse_document, select
from .queries import tracks_of, clips_of, audio_reference_of, tempo_of
from .model_builder import build_project_model

__all__ = [
    "parse_document",
    "select",
    "tracks_of",
    "clips_of",
    "audio_reference_of",
    "tempo_of",
    "build_project_model",
]
