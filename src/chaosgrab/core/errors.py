"""
Exception hierarchy for the harvesting pipeline.

Fatal errors (workspace setup, index retrieval, aggregate output creation)
propagate out of the controller; the rest are recorded per entry or per file.
"""


class ChaosGrabError(Exception):
    """Base class for all pipeline errors."""


class WorkspaceError(ChaosGrabError):
    """The workspace or an entry directory cannot be used."""


class IndexFetchError(ChaosGrabError):
    """The remote index could not be retrieved or decoded."""


class RetrievalError(ChaosGrabError):
    """An archive could not be downloaded."""


class ExtractionError(ChaosGrabError):
    """An archive could not be opened or unpacked."""


class AggregationError(ChaosGrabError):
    """The aggregate output file could not be created."""
