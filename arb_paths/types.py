"""
Core data types for arbitrage path discovery.

Pools are static registry entries; reserves are the time-varying state that
a synchronization component refreshes between simulations. Paths only ever
hold pools, so one path topology can be simulated against many snapshots.
"""

from dataclasses import dataclass
from typing import Mapping, Tuple


@dataclass(frozen=True)
class Pool:
    """
    A two-asset constant-product liquidity pool.

    Attributes:
        address: Pool contract address (checksummed when loaded from file)
        token0: Address of token0
        token1: Address of token1
        decimals0: Decimal scale of token0
        decimals1: Decimal scale of token1
        fee: Fee numerator over the AMM fee denominator (3 -> 0.3%)
    """

    address: str
    token0: str
    token1: str
    decimals0: int
    decimals1: int
    fee: int

    @property
    def tokens(self) -> Tuple[str, str]:
        return (self.token0, self.token1)

    def can_trade(self, token: str) -> bool:
        """True if either side of the pool is `token` (direction-agnostic)."""
        return self.token0 == token or self.token1 == token

    def zero_for_one(self, token_in: str) -> bool:
        """Direction flag for a swap that supplies `token_in`."""
        return self.token0 == token_in

    def token_out(self, token_in: str) -> str:
        """Token received when supplying `token_in`."""
        return self.token1 if self.zero_for_one(token_in) else self.token0

    def decimals_of(self, zero_for_one: bool) -> int:
        """Decimals of the input token for the given direction."""
        return self.decimals0 if zero_for_one else self.decimals1


@dataclass(frozen=True)
class Reserve:
    """Reserves of one pool in native token units."""

    reserve0: int
    reserve1: int

    def in_out(self, zero_for_one: bool) -> Tuple[int, int]:
        """Return (reserve_in, reserve_out) for a swap direction."""
        if zero_for_one:
            return self.reserve0, self.reserve1
        return self.reserve1, self.reserve0


@dataclass(frozen=True)
class Hop:
    """One swap through one pool; zero_for_one means token0 in, token1 out."""

    pool: Pool
    zero_for_one: bool

    @property
    def token_in(self) -> str:
        return self.pool.token0 if self.zero_for_one else self.pool.token1

    @property
    def token_out(self) -> str:
        return self.pool.token1 if self.zero_for_one else self.pool.token0


# pool address -> reserves, read-only for the duration of one simulation
ReserveSnapshot = Mapping[str, Reserve]
