from typing import Optional


class PipelineError(Exception):
    """Base error carrying a machine-readable code."""

    def __init__(self, code: str, message: Optional[str] = None):
        self.code = code
        self.message = message or "An error occurred"
        super().__init__(f"{self.code}: {self.message}")


class NotFoundError(PipelineError):
    """Input file is missing."""


class BadInputError(PipelineError):
    """Input could not be parsed or lacks a required field."""


class EmptyCorpusError(PipelineError):
    """Nothing left to model after cleaning."""


class ConfigError(PipelineError):
    """A step was configured with invalid values."""
