"""Exception types raised by the simulation engine."""


class VirusAlertError(Exception):
    """Base class for all domain errors of the engine."""


class ConfigurationError(VirusAlertError, ValueError):
    """Raised when a scenario configuration holds out-of-range values."""


class AggregationError(VirusAlertError, ValueError):
    """Raised when a Monte Carlo request has a non-positive replay count."""


class PopulationError(VirusAlertError, ValueError):
    """Raised when an update would break the allowed status transitions."""
