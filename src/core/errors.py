# src/core/errors.py


class FareAnalyzerError(Exception):
    pass


class InvalidSearchError(FareAnalyzerError, ValueError):
    """Search parameters the engine refuses to price (e.g. zero passengers)."""


class DataSourceError(FareAnalyzerError):
    """The remote analysis backend failed or returned something unusable."""
