"""
Pool registry and reserve snapshot loading from YAML or CSV files.

Pools file (YAML):
    pools:
      - address: "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"
        token0: "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
        token1: "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
        decimals0: 6
        decimals1: 18
        fee: 3

Reserves file (YAML), keyed by pool address or as a list with "address":
    reserves:
      "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc": {reserve0: 1000, reserve1: 2000}

CSV files use the same field names as column headers.
"""

import csv
import os
from typing import Any, Dict, List, Optional, Type

import yaml
from web3 import Web3

from .exceptions import ArbPathsError, PoolValidationError, ReserveValidationError
from .types import Pool, Reserve
from .utils import get_logger

logger = get_logger(__name__)

POOL_FIELDS = ("address", "token0", "token1", "decimals0", "decimals1", "fee")
RESERVE_FIELDS = ("reserve0", "reserve1")


def normalize_address(value: Any) -> str:
    """
    Checksum hex addresses; leave other identifiers untouched.

    YAML reads unquoted 0x... literals as integers, so ints are rendered
    back to 20-byte hex first.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        value = f"0x{value:040x}"
    value = str(value).strip()
    if Web3.is_address(value):
        return Web3.to_checksum_address(value)
    return value


def _to_int(record: Dict[str, Any], key: str, address: str) -> int:
    try:
        return int(str(record[key]).strip())
    except (TypeError, ValueError) as e:
        raise PoolValidationError(
            f"Pool {address}: field '{key}' must be an integer, got {record[key]!r}",
            address=address,
        ) from e


def pool_from_dict(record: Dict[str, Any]) -> Pool:
    """
    Parse and validate one pool record.

    Raises:
        PoolValidationError: Missing fields, non-integer values, negative
            decimals/fee or token0 == token1
    """
    missing = [key for key in POOL_FIELDS if record.get(key) in (None, "")]
    if missing:
        raise PoolValidationError(
            f"Pool record missing required fields: {missing}",
            address=record.get("address"),
        )

    address = normalize_address(record["address"])
    token0 = normalize_address(record["token0"])
    token1 = normalize_address(record["token1"])

    if token0 == token1:
        raise PoolValidationError(
            f"Pool {address} has identical tokens ({token0})", address=address
        )

    decimals0 = _to_int(record, "decimals0", address)
    decimals1 = _to_int(record, "decimals1", address)
    fee = _to_int(record, "fee", address)

    if decimals0 < 0 or decimals1 < 0:
        raise PoolValidationError(
            f"Pool {address} has negative decimals", address=address
        )
    if fee < 0:
        raise PoolValidationError(f"Pool {address} has negative fee", address=address)

    return Pool(
        address=address,
        token0=token0,
        token1=token1,
        decimals0=decimals0,
        decimals1=decimals1,
        fee=fee,
    )


def _reserve_int(record: Dict[str, Any], key: str, address: Optional[str]) -> int:
    try:
        return int(str(record[key]).strip())
    except (TypeError, ValueError) as e:
        raise ReserveValidationError(
            f"Reserve {address}: field '{key}' must be an integer, got {record[key]!r}",
            address=address,
        ) from e


def reserve_from_dict(record: Dict[str, Any], address: Optional[str] = None) -> Reserve:
    """
    Parse one reserve record ({reserve0, reserve1}).

    Raises:
        ReserveValidationError: Not a mapping, missing/non-integer fields or
            negative reserves
    """
    if not isinstance(record, dict):
        raise ReserveValidationError(
            f"Reserve {address} must be a mapping, got {record!r}", address=address
        )
    for key in RESERVE_FIELDS:
        if record.get(key) in (None, ""):
            raise ReserveValidationError(
                f"Reserve {address} missing '{key}': {record}", address=address
            )
    reserve0 = _reserve_int(record, "reserve0", address)
    reserve1 = _reserve_int(record, "reserve1", address)
    if reserve0 < 0 or reserve1 < 0:
        raise ReserveValidationError(
            f"Reserves must be non-negative: {record}", address=address
        )
    return Reserve(reserve0=reserve0, reserve1=reserve1)


def _read_records(path: str, key: str, error_cls: Type[ArbPathsError]) -> Any:
    """
    Load rows from CSV, or the `key` section (or whole doc) from YAML.

    Raises:
        FileNotFoundError: If the file does not exist
        error_cls: If the YAML cannot be parsed
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")

    if path.lower().endswith(".csv"):
        with open(path, newline="") as f:
            return list(csv.DictReader(f))

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise error_cls(f"Failed to parse YAML in {path}: {e}") from e

    if isinstance(data, dict) and key in data:
        return data[key]
    return data


def load_pools(path: str) -> List[Pool]:
    """
    Load the pool registry, keeping file order.

    Raises:
        PoolValidationError: On unparsable YAML, any malformed record or
            duplicate address
        FileNotFoundError: If the file does not exist
    """
    records = _read_records(path, "pools", PoolValidationError) or []
    if not isinstance(records, list):
        raise PoolValidationError(f"Pools file must contain a list: {path}")

    pools = []
    seen = set()
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise PoolValidationError(f"Pool record {i} must be a mapping")
        pool = pool_from_dict(record)
        if pool.address in seen:
            raise PoolValidationError(
                f"Duplicate pool address: {pool.address}", address=pool.address
            )
        seen.add(pool.address)
        pools.append(pool)

    logger.info(f"Loaded {len(pools)} pools from {path}")
    return pools


def load_reserves(path: str) -> Dict[str, Reserve]:
    """
    Load a reserve snapshot keyed by (normalized) pool address.

    Raises:
        ReserveValidationError: On unparsable YAML or any malformed record
        FileNotFoundError: If the file does not exist
    """
    records = _read_records(path, "reserves", ReserveValidationError) or {}

    reserves: Dict[str, Reserve] = {}
    if isinstance(records, dict):
        for address, record in records.items():
            address = normalize_address(address)
            reserves[address] = reserve_from_dict(record, address)
    elif isinstance(records, list):
        for i, record in enumerate(records):
            if not isinstance(record, dict) or "address" not in record:
                raise ReserveValidationError(
                    f"Reserve record {i} must be a mapping with 'address': {record!r}"
                )
            address = normalize_address(record["address"])
            reserves[address] = reserve_from_dict(record, address)
    else:
        raise ReserveValidationError(
            f"Reserves file must contain a mapping or list: {path}"
        )

    logger.info(f"Loaded reserves for {len(reserves)} pools from {path}")
    return reserves
