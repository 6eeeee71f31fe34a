"""
Exception hierarchy for depmesh.

The layout engine itself never raises for well-typed input; these errors
belong to the edges of the system (reading graph files and configuration).
"""


class DepmeshError(Exception):
    """Base class for all depmesh errors."""


class GraphLoadError(DepmeshError):
    """A graph file could not be read or does not match the expected shape."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load graph from {source}: {reason}")


class ConfigError(DepmeshError):
    """The configuration file is malformed."""
