"""
Archive access for packaged projects.

This module handles opening ZIP project containers and reading their
named entries on demand.
"""

from .container import ProjectArchive, open_archive, open_archive_file

__all__ = [
    "ProjectArchive",
    "open_archive",
    "open_archive_file",
]
