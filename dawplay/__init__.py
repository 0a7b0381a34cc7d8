"""
dawplay: load packaged DAW projects and schedule their audio clips for playback.

This package provides:
- Archive access for project containers (project.xml plus audio assets)
- Parsing of the XML project description into an immutable project model
- Beat-to-time scheduling of audio clips against an audio sink
- A play/pause transport and file watching for reloads
"""

__version__ = "0.1.0"
