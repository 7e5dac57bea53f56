"""Exception types raised by docindex."""


class DocIndexError(Exception):
    """Base class for docindex errors."""


class PayloadError(DocIndexError):
    """A generated data file could not be parsed."""

    def __init__(self, message: str, source: str = "", line: int = 0):
        self.source = source
        self.line = line
        where = f"{source}:{line}: " if source and line else (f"{source}: " if source else "")
        super().__init__(f"{where}{message}")


class ConfigError(DocIndexError):
    """A page manifest is missing or invalid."""


class RegistrarAlreadyInstalled(DocIndexError):
    """A page already has an implementor registrar."""
