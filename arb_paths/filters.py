"""
Filtering and ranking helpers over generated path collections.
"""

from typing import Collection, Dict, Iterable, List, Sequence, Tuple

from .amm import FEE_DENOMINATOR
from .paths import ArbPath
from .types import ReserveSnapshot


def filter_blacklisted(
    paths: Iterable[ArbPath], blacklist_tokens: Collection[str]
) -> List[ArbPath]:
    """Drop paths touching any blacklisted token, keeping order."""
    blacklist = set(blacklist_tokens)
    if not blacklist:
        return list(paths)
    return [path for path in paths if not path.should_blacklist(blacklist)]


def paths_with_pool(paths: Iterable[ArbPath], address: str) -> List[ArbPath]:
    """Paths affected by a reserve update on `address`."""
    return [path for path in paths if path.has_pool(address)]


def build_pool_index(paths: Sequence[ArbPath]) -> Dict[str, List[int]]:
    """
    Map each pool address to the indices of the paths that use it.

    Lets a reserve-sync loop re-simulate only the paths touched by an update
    instead of calling has_pool() on every path.
    """
    index: Dict[str, List[int]] = {}
    for i, path in enumerate(paths):
        for address in dict.fromkeys(path.pool_addresses):
            index.setdefault(address, []).append(i)
    return index


def dedupe_rotations(paths: Iterable[ArbPath]) -> List[ArbPath]:
    """Keep the first path for each pool set (drops reversed/rotated cycles)."""
    seen = set()
    unique = []
    for path in paths:
        if path.route_id in seen:
            continue
        seen.add(path.route_id)
        unique.append(path)
    return unique


def rank_by_output(
    paths: Iterable[ArbPath],
    amount_in: int,
    reserves: ReserveSnapshot,
    fee_denominator: int = FEE_DENOMINATOR,
) -> List[Tuple[ArbPath, int]]:
    """
    Simulate every path and sort by output, best first.

    Paths whose simulation is absent (missing reserves, infeasible swap)
    are skipped for this snapshot.
    """
    results = []
    for path in paths:
        amount_out = path.simulate(amount_in, reserves, fee_denominator)
        if amount_out is not None:
            results.append((path, amount_out))
    results.sort(key=lambda item: item[1], reverse=True)
    return results
