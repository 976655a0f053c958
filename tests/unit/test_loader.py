"""
Unit tests for arb_paths/loader.py

Verifies pool registry and reserve snapshot parsing from YAML and CSV.
"""

import os
import tempfile
import unittest

from arb_paths.exceptions import PoolValidationError, ReserveValidationError
from arb_paths.loader import (
    load_pools,
    load_reserves,
    normalize_address,
    pool_from_dict,
    reserve_from_dict,
)
from arb_paths.types import Pool, Reserve

USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
PAIR = "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"


class TestNormalizeAddress(unittest.TestCase):
    """Test address normalization."""

    def test_lowercase_hex_is_checksummed(self):
        self.assertEqual(normalize_address(WETH.lower()), WETH)

    def test_checksummed_unchanged(self):
        self.assertEqual(normalize_address(USDC), USDC)

    def test_yaml_integer_literal(self):
        """Unquoted 0x... in YAML arrives as an int."""
        self.assertEqual(normalize_address(int(WETH, 16)), WETH)

    def test_opaque_identifier_kept(self):
        self.assertEqual(normalize_address(" WETH "), "WETH")


class TestPoolFromDict(unittest.TestCase):
    """Test pool record validation."""

    def setUp(self):
        self.record = {
            "address": PAIR.lower(),
            "token0": USDC,
            "token1": WETH,
            "decimals0": 6,
            "decimals1": "18",
            "fee": 3,
        }

    def test_valid_record(self):
        pool = pool_from_dict(self.record)
        self.assertEqual(
            pool,
            Pool(
                address=PAIR,
                token0=USDC,
                token1=WETH,
                decimals0=6,
                decimals1=18,
                fee=3,
            ),
        )

    def test_identical_tokens_rejected(self):
        self.record["token1"] = USDC.lower()
        with self.assertRaises(PoolValidationError) as ctx:
            pool_from_dict(self.record)
        self.assertEqual(ctx.exception.address, PAIR)

    def test_missing_field_rejected(self):
        del self.record["fee"]
        with self.assertRaises(PoolValidationError):
            pool_from_dict(self.record)

    def test_non_integer_rejected(self):
        self.record["decimals0"] = "six"
        with self.assertRaises(PoolValidationError):
            pool_from_dict(self.record)

    def test_negative_values_rejected(self):
        self.record["fee"] = -1
        with self.assertRaises(PoolValidationError):
            pool_from_dict(self.record)
        self.record["fee"] = 3
        self.record["decimals1"] = -18
        with self.assertRaises(PoolValidationError):
            pool_from_dict(self.record)


class TestReserveFromDict(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(
            reserve_from_dict({"reserve0": "10", "reserve1": 20}), Reserve(10, 20)
        )

    def test_negative_rejected(self):
        with self.assertRaises(ReserveValidationError):
            reserve_from_dict({"reserve0": -1, "reserve1": 20})

    def test_missing_rejected(self):
        with self.assertRaises(ReserveValidationError):
            reserve_from_dict({"reserve0": 1})

    def test_non_integer_rejected(self):
        with self.assertRaises(ReserveValidationError) as ctx:
            reserve_from_dict({"reserve0": "lots", "reserve1": 1}, "P1")
        self.assertEqual(ctx.exception.address, "P1")

    def test_non_mapping_rejected(self):
        with self.assertRaises(ReserveValidationError):
            reserve_from_dict(1000, "P1")


class TestLoadFiles(unittest.TestCase):
    """Test loading registry/snapshot files from disk."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.dir = self.tmpdir.name

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, name, content):
        path = os.path.join(self.dir, name)
        with open(path, "w") as f:
            f.write(content)
        return path

    def test_load_pools_yaml(self):
        path = self._write(
            "pools.yaml",
            f"""
pools:
  - address: "{PAIR}"
    token0: "{USDC}"
    token1: "{WETH}"
    decimals0: 6
    decimals1: 18
    fee: 3
  - address: "0xP2"
    token0: "{WETH}"
    token1: "DAI"
    decimals0: 18
    decimals1: 18
    fee: 3
""",
        )
        pools = load_pools(path)
        self.assertEqual([p.address for p in pools], [PAIR, "0xP2"])
        self.assertEqual(pools[1].token1, "DAI")

    def test_load_pools_csv(self):
        path = self._write(
            "pools.csv",
            "address,token0,token1,decimals0,decimals1,fee\n"
            f"{PAIR},{USDC},{WETH},6,18,3\n",
        )
        pools = load_pools(path)
        self.assertEqual(len(pools), 1)
        self.assertEqual(pools[0].decimals1, 18)

    def test_load_pools_bare_list(self):
        path = self._write(
            "pools.yaml",
            "- {address: P1, token0: A, token1: B, decimals0: 18, decimals1: 18, fee: 3}\n",
        )
        self.assertEqual(load_pools(path)[0].address, "P1")

    def test_duplicate_pool_rejected(self):
        row = "{address: P1, token0: A, token1: B, decimals0: 18, decimals1: 18, fee: 3}"
        path = self._write("pools.yaml", f"pools:\n  - {row}\n  - {row}\n")
        with self.assertRaises(PoolValidationError):
            load_pools(path)

    def test_malformed_pool_file_rejected(self):
        path = self._write(
            "pools.yaml",
            "pools:\n  - {address: P1, token0: A, token1: A, decimals0: 18, decimals1: 18, fee: 3}\n",
        )
        with self.assertRaises(PoolValidationError):
            load_pools(path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_pools(os.path.join(self.dir, "nope.yaml"))

    def test_load_reserves_mapping(self):
        path = self._write(
            "reserves.yaml",
            f'reserves:\n  "{PAIR.lower()}": {{reserve0: 100, reserve1: 200}}\n',
        )
        self.assertEqual(load_reserves(path), {PAIR: Reserve(100, 200)})

    def test_load_reserves_csv(self):
        path = self._write(
            "reserves.csv", f"address,reserve0,reserve1\n{PAIR},5,7\nP2,1,2\n"
        )
        self.assertEqual(
            load_reserves(path), {PAIR: Reserve(5, 7), "P2": Reserve(1, 2)}
        )

    def test_unparsable_pools_yaml(self):
        path = self._write("pools.yaml", "pools: [ {address: P1, token0: A\n")
        with self.assertRaises(PoolValidationError):
            load_pools(path)

    def test_non_mapping_pool_record(self):
        path = self._write("pools.yaml", "pools:\n  - P1\n")
        with self.assertRaises(PoolValidationError):
            load_pools(path)

    def test_unparsable_reserves_yaml(self):
        path = self._write("reserves.yaml", "reserves: {P1: {reserve0: 1\n")
        with self.assertRaises(ReserveValidationError):
            load_reserves(path)

    def test_reserve_entry_not_a_mapping(self):
        path = self._write("reserves.yaml", "reserves:\n  P1: 1000\n")
        with self.assertRaises(ReserveValidationError) as ctx:
            load_reserves(path)
        self.assertEqual(ctx.exception.address, "P1")

    def test_reserve_list_entry_without_address(self):
        path = self._write("reserves.yaml", "- {reserve0: 1, reserve1: 2}\n- 7\n")
        with self.assertRaises(ReserveValidationError):
            load_reserves(path)

    def test_reserves_file_scalar(self):
        path = self._write("reserves.yaml", "just a string\n")
        with self.assertRaises(ReserveValidationError):
            load_reserves(path)
