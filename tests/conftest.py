"""Shared puzzles for the test suite."""

import pytest


# A known puzzle with a unique solution
CLASSIC_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

CLASSIC_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


@pytest.fixture
def classic_puzzle():
    return CLASSIC_PUZZLE


@pytest.fixture
def classic_solution():
    return CLASSIC_SOLUTION
