"""Pytest configuration and fixtures.

The pool set mirrors a small four-token network plus a WETH pool:

    t0/t1 1000:1000    t0/t2 1000:1100    t0/t3 1000:900
    t1/t2 1200:1000    t1/t3 1200:1300    WETH/t0 1000:1000
"""

import pytest

from quoter.entities import Pair
from tests.helpers import T0, T1, T2, T3, WETH9, make_pair


@pytest.fixture
def pair_0_1() -> Pair:
    return make_pair(T0, 1000, T1, 1000)


@pytest.fixture
def pair_0_2() -> Pair:
    return make_pair(T0, 1000, T2, 1100)


@pytest.fixture
def pair_0_3() -> Pair:
    return make_pair(T0, 1000, T3, 900)


@pytest.fixture
def pair_1_2() -> Pair:
    return make_pair(T1, 1200, T2, 1000)


@pytest.fixture
def pair_1_3() -> Pair:
    return make_pair(T1, 1200, T3, 1300)


@pytest.fixture
def pair_weth_0() -> Pair:
    return make_pair(WETH9, 1000, T0, 1000)


@pytest.fixture
def empty_pair_0_1() -> Pair:
    return make_pair(T0, 0, T1, 0)
