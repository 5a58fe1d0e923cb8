"""
Export errors - one exception per failing stage of a dependency export.

Every error carries the ``stage`` it was raised in so the CLI can report
which part of the run failed (resolution, configuration, walk or write).
"""


class ExportError(Exception):
    """Base class for all dependency export failures."""

    stage = "export"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        # Set by Pipeline.execute to the run summary up to the failure
        self.result = None

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


class ResolutionError(ExportError):
    """
    Raised when the dependency tree could not be built.

    Not recoverable locally: the run aborts before any output file exists.
    """

    stage = "resolution"


class DependencyCycleError(ResolutionError):
    """Raised when an artifact turns up among its own ancestors."""

    def __init__(self, cycle: list[str]):
        super().__init__("Dependency cycle detected: " + " -> ".join(cycle))
        self.cycle = cycle


class ConfigurationError(ExportError):
    """Raised for an unsupported output format or another bad setting."""

    stage = "configuration"


class MalformedArtifactError(ExportError):
    """Raised when an artifact identity cannot be turned into a URI."""

    stage = "walk"


class SerializationError(ExportError):
    """
    Raised when writing the RDF document fails.

    The output stream is left in an undefined partial state and must not be
    treated as a usable document.
    """

    stage = "write"
