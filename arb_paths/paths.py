"""
Closed arbitrage cycles over constant-product pools.

An ArbPath is an immutable sequence of 2 or 3 hops that starts and ends on
the same base token. It never stores reserves: simulation takes a reserve
snapshot per call, so the same path can be re-evaluated on every update.
"""

from dataclasses import dataclass
from typing import Any, Collection, Dict, List, Optional, Tuple

from .amm import FEE_DENOMINATOR, get_amount_out, scale_amount
from .exceptions import PathValidationError
from .types import Hop, ReserveSnapshot

SUPPORTED_HOP_COUNTS = (2, 3)


@dataclass(frozen=True)
class ArbPath:
    """
    A closed cycle of pool hops.

    Attributes:
        hops: Ordered hops; hop i's output token feeds hop i+1 and the last
            hop returns to the first hop's input token
    """

    hops: Tuple[Hop, ...]

    def __post_init__(self):
        hops = tuple(self.hops)
        object.__setattr__(self, "hops", hops)

        if len(hops) not in SUPPORTED_HOP_COUNTS:
            raise PathValidationError(
                f"Path must have {SUPPORTED_HOP_COUNTS} hops, got {len(hops)}",
                pools=[hop.pool.address for hop in hops],
            )

        for i, hop in enumerate(hops):
            next_hop = hops[(i + 1) % len(hops)]
            if hop.token_out != next_hop.token_in:
                raise PathValidationError(
                    f"Hop {i} outputs {hop.token_out} but hop "
                    f"{(i + 1) % len(hops)} expects {next_hop.token_in}",
                    pools=[h.pool.address for h in hops],
                )

    @property
    def nhop(self) -> int:
        return len(self.hops)

    @property
    def base_token(self) -> str:
        return self.hops[0].token_in

    @property
    def pool_addresses(self) -> List[str]:
        return [hop.pool.address for hop in self.hops]

    @property
    def token_path(self) -> List[str]:
        """Tokens visited, e.g. [A, B, C, A]."""
        return [hop.token_in for hop in self.hops] + [self.hops[-1].token_out]

    @property
    def route_id(self) -> str:
        """Stable id of the pool set; rotations of one cycle share it."""
        return "-".join(sorted(self.pool_addresses))

    def has_pool(self, address: str) -> bool:
        return any(hop.pool.address == address for hop in self.hops)

    def should_blacklist(self, blacklist_tokens: Collection[str]) -> bool:
        """True if any pool in the cycle holds a blacklisted token."""
        for hop in self.hops:
            pool = hop.pool
            if pool.token0 in blacklist_tokens or pool.token1 in blacklist_tokens:
                return True
        return False

    def simulate(
        self,
        amount_in: int,
        reserves: ReserveSnapshot,
        fee_denominator: int = FEE_DENOMINATOR,
    ) -> Optional[int]:
        """
        Simulate swapping `amount_in` whole tokens around the cycle.

        The amount is scaled once by the input token's decimals; each hop
        then passes its base-unit output straight into the next.

        Args:
            amount_in: Input amount in whole tokens of the base token
            reserves: Mapping of pool address -> Reserve
            fee_denominator: Denominator applied to every pool's fee

        Returns:
            Final output in base units, or None if any pool has no reserve
            entry or a swap is infeasible
        """
        first = self.hops[0]
        decimals = first.pool.decimals_of(first.zero_for_one)
        amount_out = scale_amount(amount_in, decimals)
        if amount_out is None:
            return None

        for hop in self.hops:
            reserve = reserves.get(hop.pool.address)
            if reserve is None:
                return None

            reserve_in, reserve_out = reserve.in_out(hop.zero_for_one)
            amount_out = get_amount_out(
                amount_out, reserve_in, reserve_out, hop.pool.fee, fee_denominator
            )
            if amount_out is None:
                return None

        return amount_out

    # V2 simulator name
    simulate_v2_path = simulate

    def simulate_profit(
        self,
        amount_in: int,
        reserves: ReserveSnapshot,
        fee_denominator: int = FEE_DENOMINATOR,
    ) -> Optional[int]:
        """Output minus scaled input in base units (negative means a loss)."""
        amount_out = self.simulate(amount_in, reserves, fee_denominator)
        if amount_out is None:
            return None
        first = self.hops[0]
        return amount_out - scale_amount(
            amount_in, first.pool.decimals_of(first.zero_for_one)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "nhop": self.nhop,
            "base_token": self.base_token,
            "token_path": self.token_path,
            "hops": [
                {"pool": hop.pool.address, "zero_for_one": hop.zero_for_one}
                for hop in self.hops
            ],
        }
