"""
Arbitrage path discovery and simulation over constant-product pools.

Generates closed 3-hop cycles on a base token from a static pool registry
and simulates their output against caller-supplied reserve snapshots.
"""

PROJECT_NAME = "arb-paths"
VERSION = "0.1.0"

from arb_paths.amm import FEE_DENOMINATOR, get_amount_out
from arb_paths.exceptions import (
    ArbPathsError,
    ConfigError,
    PathValidationError,
    PoolValidationError,
    ReserveValidationError,
)
from arb_paths.filters import (
    build_pool_index,
    dedupe_rotations,
    filter_blacklisted,
    paths_with_pool,
    rank_by_output,
)
from arb_paths.generator import (
    GenerationProgress,
    LoggingProgress,
    generate_triangular_paths,
)
from arb_paths.paths import ArbPath
from arb_paths.types import Hop, Pool, Reserve, ReserveSnapshot

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "FEE_DENOMINATOR",
    "get_amount_out",
    "ArbPathsError",
    "ConfigError",
    "PathValidationError",
    "PoolValidationError",
    "ReserveValidationError",
    "build_pool_index",
    "dedupe_rotations",
    "filter_blacklisted",
    "paths_with_pool",
    "rank_by_output",
    "GenerationProgress",
    "LoggingProgress",
    "generate_triangular_paths",
    "ArbPath",
    "Hop",
    "Pool",
    "Reserve",
    "ReserveSnapshot",
]
