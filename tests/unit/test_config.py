"""
Unit tests for arb_paths/config.py
"""

import os
import tempfile
import unittest

from arb_paths.amm import FEE_DENOMINATOR
from arb_paths.config import PathsConfig, load_config
from arb_paths.exceptions import ConfigError

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


class TestPathsConfig(unittest.TestCase):
    """Test config parsing and defaults."""

    def test_defaults(self):
        config = PathsConfig({"base_token": WETH, "pools_file": "pools.yaml"})

        self.assertEqual(config.base_token, WETH)
        self.assertEqual(config.pools_file, "pools.yaml")
        self.assertIsNone(config.reserves_file)
        self.assertEqual(config.amount_in, 1)
        self.assertEqual(config.fee_denominator, FEE_DENOMINATOR)
        self.assertEqual(config.workers, 1)
        self.assertEqual(config.top, 10)
        self.assertEqual(config.blacklist_tokens, [])

    def test_addresses_normalized(self):
        config = PathsConfig(
            {
                "base_token": WETH.lower(),
                "pools_file": "pools.yaml",
                "blacklist_tokens": [WETH.lower(), "SCAM"],
            }
        )
        self.assertEqual(config.base_token, WETH)
        self.assertEqual(config.blacklist_tokens, [WETH, "SCAM"])

    def test_missing_required(self):
        with self.assertRaises(ConfigError):
            PathsConfig({"pools_file": "pools.yaml"})
        with self.assertRaises(ConfigError):
            PathsConfig({"base_token": WETH})
        with self.assertRaises(ConfigError):
            PathsConfig({"base_token": None, "pools_file": "pools.yaml"})

    def test_boolean_base_token_rejected(self):
        # YAML reads `base_token: true` as a bool
        with self.assertRaises(ConfigError):
            PathsConfig({"base_token": True, "pools_file": "pools.yaml"})

    def test_invalid_values(self):
        base = {"base_token": WETH, "pools_file": "pools.yaml"}
        for key, value in [
            ("workers", 0),
            ("workers", "2"),
            ("amount_in", -1),
            ("fee_denominator", 0),
            ("top", True),
        ]:
            with self.subTest(key=key, value=value):
                with self.assertRaises(ConfigError):
                    PathsConfig(dict(base, **{key: value}))

        with self.assertRaises(ConfigError):
            PathsConfig(dict(base, blacklist_tokens="WETH"))


class TestLoadConfig(unittest.TestCase):
    """Test YAML config loading."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.dir = self.tmpdir.name

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, content):
        path = os.path.join(self.dir, "paths.yaml")
        with open(path, "w") as f:
            f.write(content)
        return path

    def test_relative_files_resolved(self):
        path = self._write(
            f'base_token: "{WETH}"\npools_file: pools.yaml\nreserves_file: reserves.yaml\nworkers: 4\n'
        )
        config = load_config(path)
        self.assertEqual(config.pools_file, os.path.join(self.dir, "pools.yaml"))
        self.assertEqual(config.reserves_file, os.path.join(self.dir, "reserves.yaml"))
        self.assertEqual(config.workers, 4)

    def test_file_not_found(self):
        with self.assertRaises(ConfigError):
            load_config(os.path.join(self.dir, "missing.yaml"))

    def test_invalid_yaml(self):
        path = self._write("base_token: [unclosed\n")
        with self.assertRaises(ConfigError):
            load_config(path)

    def test_non_mapping(self):
        path = self._write("- just\n- a list\n")
        with self.assertRaises(ConfigError):
            load_config(path)
