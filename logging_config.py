"""
Console logging setup for the generate_paths CLI.

Usage:
    import logging_config
    logging_config.setup()
"""

import logging
import sys


def setup(level=logging.INFO):
    """
    Route all output through one stdout handler on the root logger.

    arb_paths module loggers drop their own handlers so generation logs are
    not printed twice; web3 and urllib3 are held at WARNING.
    """

    # Root logger - minimal format
    root = logging.getLogger()
    root.setLevel(level)

    # Clear existing handlers
    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    # Minimal format: time + level + message
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(message)s", datefmt="%H:%M:%S"
    )
    console.setFormatter(formatter)
    root.addHandler(console)

    # Suppress noisy loggers
    logging.getLogger("web3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    # Application loggers follow the requested level and write through root
    logging.getLogger("__main__").setLevel(level)
    logging.getLogger("arb_paths").setLevel(level)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("arb_paths."):
            app_logger = logging.getLogger(name)
            app_logger.handlers.clear()
            app_logger.setLevel(level)


def setup_debug():
    """
    Console logging at DEBUG for path generation runs.

    Also lets web3 debug output through, for tracing address handling.
    """
    setup(level=logging.DEBUG)
    logging.getLogger("web3").setLevel(logging.DEBUG)
