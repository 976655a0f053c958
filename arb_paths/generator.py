"""
Triangular path generation: base -> A -> B -> base over a pool list.

Enumeration is an exhaustive triple loop over the pools, pruned at each
level by whether a pool holds the token produced so far. Output order
follows the nested loop order over the input list; it is not sorted.
"""

import time
from concurrent.futures import ProcessPoolExecutor
from typing import List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .paths import ArbPath
from .types import Hop, Pool
from .utils import format_duration, get_logger

logger = get_logger(__name__)


@runtime_checkable
class GenerationProgress(Protocol):
    """Observer notified while paths are generated."""

    def on_start(self, total: int) -> None:
        """Called once with the number of outer-loop pools."""
        ...

    def on_advance(self, done: int, found: int) -> None:
        """Called as outer-loop pools complete (cumulative counts)."""
        ...

    def on_finish(self, found: int, elapsed: float) -> None:
        """Called once after generation with total paths and seconds."""
        ...


class LoggingProgress:
    """Progress observer that reports through a logger."""

    def __init__(self, log_every: int = 100, log=None):
        self.log_every = max(1, log_every)
        self.log = log or logger
        self.total = 0
        self._last_logged = 0

    def on_start(self, total: int) -> None:
        self.total = total
        self._last_logged = 0
        self.log.info(f"Scanning {total} pools for 3-hop cycles")

    def on_advance(self, done: int, found: int) -> None:
        if done - self._last_logged >= self.log_every or done == self.total:
            self._last_logged = done
            pct = (done / self.total * 100) if self.total else 100.0
            self.log.info(f"[{done:>7}/{self.total:<7}] {pct:5.1f}% | {found} paths")

    def on_finish(self, found: int, elapsed: float) -> None:
        self.log.debug(f"Progress finished: {found} paths in {elapsed:.3f}s")


def _is_malformed(pool: Pool) -> bool:
    return pool.token0 == pool.token1


def _cycles_from_first_hop(
    pools: Sequence[Pool], token_in: str, i: int
) -> List[Tuple[int, int, int]]:
    """Pool index triples of every 3-hop cycle whose first hop is pools[i]."""
    triples = []
    pool_1 = pools[i]
    if _is_malformed(pool_1) or not pool_1.can_trade(token_in):
        return triples

    token_out_1 = pool_1.token_out(token_in)

    for j, pool_2 in enumerate(pools):
        if _is_malformed(pool_2) or not pool_2.can_trade(token_out_1):
            continue

        token_out_2 = pool_2.token_out(token_out_1)

        for k, pool_3 in enumerate(pools):
            if _is_malformed(pool_3) or not pool_3.can_trade(token_out_2):
                continue

            if pool_3.token_out(token_out_2) != token_in:
                continue

            if len({pool_1.address, pool_2.address, pool_3.address}) < 3:
                continue

            triples.append((i, j, k))

    return triples


def _build_path(
    pools: Sequence[Pool], token_in: str, triple: Tuple[int, int, int]
) -> ArbPath:
    hops = []
    token = token_in
    for index in triple:
        pool = pools[index]
        # Direction from the token supplied, not from can_trade()
        hops.append(Hop(pool, pool.zero_for_one(token)))
        token = pool.token_out(token)
    return ArbPath(hops=tuple(hops))


# Pool list shipped once per worker process by the executor initializer
_WORKER_POOLS: Sequence[Pool] = ()


def _init_worker(pools: Sequence[Pool]) -> None:
    global _WORKER_POOLS
    _WORKER_POOLS = pools


def _generate_chunk(
    token_in: str, start: int, stop: int
) -> Tuple[int, List[Tuple[int, int, int]]]:
    """Worker entry point: cycle index triples for first pools in [start, stop)."""
    triples = []
    for i in range(start, stop):
        triples.extend(_cycles_from_first_hop(_WORKER_POOLS, token_in, i))
    return start, triples


def _chunk_bounds(n: int, workers: int) -> List[Tuple[int, int]]:
    """Split range(n) into contiguous chunks, several per worker."""
    n_chunks = min(n, workers * 4)
    if n_chunks == 0:
        return []
    size, extra = divmod(n, n_chunks)
    bounds = []
    start = 0
    for k in range(n_chunks):
        stop = start + size + (1 if k < extra else 0)
        bounds.append((start, stop))
        start = stop
    return bounds


def generate_triangular_paths(
    pools: Sequence[Pool],
    token_in: str,
    progress: Optional[GenerationProgress] = None,
    workers: int = 1,
) -> List[ArbPath]:
    """
    Generate every 3-hop cycle token_in -> A -> B -> token_in.

    Args:
        pools: Pool registry, in the order enumeration should follow
        token_in: Base token the cycles start and end on
        progress: Optional observer for progress reporting
        workers: Number of worker processes; >1 partitions the outer loop

    Returns:
        Fresh list of ArbPath in nested-iteration order (identical for any
        worker count)
    """
    start_time = time.time()
    pools = list(pools)

    malformed = [p.address for p in pools if _is_malformed(p)]
    if malformed:
        logger.debug(
            f"Skipping {len(malformed)} pools with token0 == token1: {malformed}"
        )

    if progress is not None:
        progress.on_start(len(pools))

    paths: List[ArbPath] = []

    if workers <= 1 or len(pools) < 2:
        for i in range(len(pools)):
            for triple in _cycles_from_first_hop(pools, token_in, i):
                paths.append(_build_path(pools, token_in, triple))
            if progress is not None:
                progress.on_advance(i + 1, len(paths))
    else:
        bounds = _chunk_bounds(len(pools), workers)
        results = {}
        done = 0
        found = 0
        with ProcessPoolExecutor(
            max_workers=workers, initializer=_init_worker, initargs=(pools,)
        ) as executor:
            futures = [
                executor.submit(_generate_chunk, token_in, start, stop)
                for start, stop in bounds
            ]
            for (start, stop), future in zip(bounds, futures):
                chunk_start, triples = future.result()
                results[chunk_start] = triples
                done += stop - start
                found += len(triples)
                if progress is not None:
                    progress.on_advance(done, found)

        # Paths reference the caller's Pool objects, not worker copies
        for start, _ in bounds:
            for triple in results[start]:
                paths.append(_build_path(pools, token_in, triple))

    elapsed = time.time() - start_time
    if progress is not None:
        progress.on_finish(len(paths), elapsed)

    logger.info(
        f"Generated {len(paths)} 3-hop arbitrage paths in {format_duration(elapsed)}"
    )
    return paths
