"""Project-specific exceptions."""


class SpringFitError(Exception):
    """Base exception for the project."""


class InvalidConfigError(SpringFitError):
    """Raised when runtime configuration is missing or invalid."""


class InvalidParameterError(SpringFitError):
    """Raised when generation parameters violate their preconditions."""


class DatasetWriteError(SpringFitError):
    """Raised when the dataset file cannot be created or written."""


class DatasetReadError(SpringFitError):
    """Raised when the dataset file cannot be opened for reading."""


class DatasetParseError(SpringFitError):
    """Raised when a dataset row is not a pair of numbers."""


class TraceWriteError(SpringFitError):
    """Raised when the run trace file cannot be written."""
