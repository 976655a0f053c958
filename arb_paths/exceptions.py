"""
Exception hierarchy for arbitrage path discovery and simulation.

Missing reserve data and infeasible swap arithmetic are not exceptions:
simulation reports them as an absent (None) result so a scanner can skip
the path for the current snapshot. The types below cover bad inputs that
should stop a run: malformed configuration, malformed pool records and
paths that do not form a closed cycle.
"""

from typing import Any, Dict, Optional


class ArbPathsError(Exception):
    """Base exception for all arbitrage path errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigError(ArbPathsError):
    """Raised when config is invalid or missing required fields."""

    pass


class PoolValidationError(ArbPathsError):
    """Raised when a pool record is malformed (e.g. token0 == token1)."""

    def __init__(
        self,
        message: str,
        address: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.address = address


class PathValidationError(ArbPathsError):
    """Raised when hops do not chain into a closed cycle."""

    def __init__(
        self,
        message: str,
        pools: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.pools = pools or []


class ReserveValidationError(ArbPathsError):
    """Raised when a reserve snapshot file or record is malformed."""

    def __init__(
        self,
        message: str,
        address: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.address = address
