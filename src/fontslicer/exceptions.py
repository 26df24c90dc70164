"""Exception hierarchy for Fontslicer.

Every error carries a ``stage`` attribute that the pipeline fills in with
the name of the stage that failed. The exceptions define ``__reduce__`` so
they survive the trip back from encoder worker processes.
"""


class FontSlicerError(Exception):
    """Base exception for all Fontslicer errors."""

    stage: str | None = None


class DecodeError(FontSlicerError):
    """Source font could not be read or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to decode font '{source}': {reason}")

    def __reduce__(self):
        return (self.__class__, (self.source, self.reason))


class EstimationError(FontSlicerError):
    """Chunk length could not be calibrated."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Chunk size estimation failed: {reason}")

    def __reduce__(self):
        return (self.__class__, (self.reason,))


class EncodeError(FontSlicerError):
    """Codec rejected a glyph subset."""

    def __init__(self, target_format: str, reason: str) -> None:
        self.target_format = target_format
        self.reason = reason
        super().__init__(f"Failed to encode {target_format} chunk: {reason}")

    def __reduce__(self):
        return (self.__class__, (self.target_format, self.reason))


class PersistenceError(FontSlicerError):
    """An output file could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write '{path}': {reason}")

    def __reduce__(self):
        return (self.__class__, (self.path, self.reason))


class PriorityError(FontSlicerError):
    """Character priority file could not be read or parsed.

    Raised while the run is being configured, before any stage starts.
    """

    stage: str | None = "config"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid priority file '{path}': {reason}")

    def __reduce__(self):
        return (self.__class__, (self.path, self.reason))
