"""
Content hashing for project models.

A fingerprint identifies the musical content of a loaded project, which
lets a reload tell apart "file touched" from "project changed".
"""

import hashlib
import json

from .nodes import ProjectModel
from .serializers import serialize_model


def fingerprint(model: ProjectModel, algorithm: str = "sha256") -> str:
    """
    Compute a content hash for a project model.

    Args:
        model: The project model to hash
        algorithm: hashlib algorithm name (default: sha256)

    Returns:
        Hexadecimal hash string
    """
    canonical = json.dumps(serialize_model(model), sort_keys=True, separators=(",", ":"))
    hasher = hashlib.new(algorithm)
    hasher.update(canonical.encode("utf-8"))
    return hasher.hexdigest()
