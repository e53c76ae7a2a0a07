"""Project-wide exception types."""

class DensityReductionError(Exception):
    """Base exception for all reduction errors."""


class InvalidInputError(DensityReductionError):
    """Raised when samples, grids or bin counts are unusable."""


class DataSourceError(DensityReductionError):
    """Raised when sample data cannot be read."""


class SchemaError(DataSourceError):
    """Raised when required columns are missing from a sample file."""


class ResourceLimitError(DensityReductionError):
    """Raised when a plot would exceed configured resource limits."""


class ConfigError(DensityReductionError):
    """Raised when configuration is missing or malformed."""


class ConfigValidationError(ConfigError):
    """Raised when validation fails for supplied configuration."""
