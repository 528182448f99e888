"""Exceptions raised while building package graphs."""


class PackvizError(Exception):
    """Base class for packviz errors."""


class MissingNodeError(PackvizError):
    """Raised when a dependency edge points at a package with no node."""

    def __init__(self, source: str, destination: str):
        self.source = source
        self.destination = destination
        super().__init__(f"Unable to add edge `{source}`->`{destination}`")
