"""
Exception hierarchy for dawplay.

Fatal problems (unreadable archive, missing project.xml, no track
container) are raised as exceptions. Per-clip playback problems are not
exceptions; they are collected as SchedulingWarning values instead.
"""


class DawplayError(Exception):
    """Base class for all dawplay errors."""


class LoadError(DawplayError):
    """The archive could not be opened or has no readable project.xml."""


class ParseError(DawplayError):
    """The project document could not be turned into a project model."""


class MalformedDocumentError(ParseError):
    """project.xml is not well-formed XML."""


class MissingRootError(ParseError):
    """The document has no track container, so it is not a project file."""

    def __init__(self, container: str = "Structure"):
        self.container = container
        super().__init__(f"No <{container}> track container found in project document")


class SchedulingError(DawplayError):
    """Scheduling could not be performed or a task failed unexpectedly."""


class DecodeError(DawplayError):
    """The audio sink could not decode an audio entry."""
