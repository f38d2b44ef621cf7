"""Test runner for poetry scripts.

Usage:
    poetry run test-all                          # Run the whole suite
    poetry run test-all -v                       # Verbose
    poetry run test-all tests/test_driver.py     # One file
    poetry run test-all -k "exhaustive"          # Keyword filter

All arguments are forwarded to pytest unchanged.
"""

import sys

import pytest


def run_all_tests() -> None:
    """Run pytest on ``tests`` or on the given arguments and exit with its status."""
    cli_args = sys.argv[1:]
    sys.exit(pytest.main(cli_args if cli_args else ["tests"]))
