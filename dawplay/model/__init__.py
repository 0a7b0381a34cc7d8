"""
Project model for dawplay.

This module provides:
- Frozen dataclasses for projects, tracks, clips, file references and tempo
- Serialization and a human-readable summary
- Content fingerprints for change detection
"""

from .nodes import (
    ProjectModel,
    Track,
    Clip,
    FileReference,
    Tempo,
)

from .serializers import (
    serialize_model,
    describe_model,
)

from .hashing import fingerprint

__all__ = [
    # Nodes
    "ProjectModel",
    "Track",
    "Clip",
    "FileReference",
    "Tempo",
    # Serialization
    "serialize_model",
    "describe_model",
    # Hashing
    "fingerprint",
]
