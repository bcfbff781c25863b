"""Tests for protection fee estimation."""

import pytest

from quoter.constants import GAS_ESTIMATES, ChainId, MethodName
from quoter.entities import NativeCurrency
from quoter.errors import InvariantViolation
from quoter.fees import (
    BribeConfig,
    calculate_margin,
    calculate_miner_bribe,
    estimate_bribe_amounts,
    estimated_gas_for_method,
)
from tests.helpers import ETHER

GWEI = 10**9


class TestCalculateMargin:
    """Tests for calculate_margin."""

    @pytest.mark.parametrize(
        "value,margin,expected",
        [
            (100, 10, 110),
            (100, 0, 100),
            (7, 10, 7),
            (100 * GWEI, 25, 125 * GWEI),
        ],
    )
    def test_margin(self, value, margin, expected):
        assert calculate_margin(value, margin) == expected

    def test_accepts_strings(self):
        assert calculate_margin("1000", "5") == 1050

    def test_negative_margin(self):
        with pytest.raises(InvariantViolation, match="MARGIN"):
            calculate_margin(100, -1)


class TestCalculateMinerBribe:
    """Tests for calculate_miner_bribe."""

    def test_pays_only_the_premium(self):
        """10% over 100 gwei for 100k gas is 10 gwei * 100k."""
        assert calculate_miner_bribe(100 * GWEI, 100_000, 10) == 10 * GWEI * 100_000

    def test_zero_margin(self):
        assert calculate_miner_bribe(100 * GWEI, 100_000, 0) == 0

    def test_negative_gas_price(self):
        with pytest.raises(InvariantViolation, match="GAS_PRICE"):
            calculate_miner_bribe(-1, 100_000, 10)


class TestEstimatedGas:
    """Tests for estimated_gas_for_method."""

    def test_default_method(self):
        assert estimated_gas_for_method() == GAS_ESTIMATES[MethodName.SWAP_TOKENS_FOR_EXACT_ETH]

    def test_hops_ignored_by_default(self):
        method = MethodName.SWAP_EXACT_ETH_FOR_TOKENS
        assert estimated_gas_for_method(method, 3) == estimated_gas_for_method(method, 1)

    def test_per_hop_gas(self):
        config = BribeConfig(gas_per_hop=1_000)
        gas = estimated_gas_for_method(MethodName.SWAP_EXACT_ETH_FOR_TOKENS, 2, config)
        assert gas == GAS_ESTIMATES[MethodName.SWAP_EXACT_ETH_FOR_TOKENS] + 2_000

    def test_method_by_value(self):
        assert estimated_gas_for_method("swapExactTokensForETH") == GAS_ESTIMATES[MethodName.SWAP_EXACT_TOKENS_FOR_ETH]


class TestEstimateBribeAmounts:
    """Tests for estimate_bribe_amounts."""

    def test_every_method_estimated(self):
        estimate = estimate_bribe_amounts(GWEI, 10)
        assert set(estimate.estimates) == set(MethodName)
        for method, fee in estimate.estimates.items():
            assert fee.currency == ETHER
            assert fee.quotient == GWEI // 10 * GAS_ESTIMATES[method]

    def test_min_max_mean(self):
        estimate = estimate_bribe_amounts(GWEI, 10)
        assert estimate.min_bribe.quotient == GWEI // 10 * 143_216
        assert estimate.max_bribe.quotient == GWEI // 10 * 189_218
        assert estimate.mean_bribe.quotient == GWEI // 10 * 999_447 // 6

    def test_other_chain(self):
        estimate = estimate_bribe_amounts(GWEI, 10, ChainId.GOERLI)
        assert estimate.min_bribe.currency == NativeCurrency.on_chain(ChainId.GOERLI)

    def test_custom_config(self):
        config = BribeConfig(gas_estimates={MethodName.SWAP_EXACT_ETH_FOR_TOKENS: 100_000})
        estimate = estimate_bribe_amounts(GWEI, 10, config=config)
        assert list(estimate.estimates) == [MethodName.SWAP_EXACT_ETH_FOR_TOKENS]
        assert estimate.min_bribe == estimate.max_bribe == estimate.mean_bribe

    def test_no_estimates_configured(self):
        with pytest.raises(InvariantViolation, match="GAS_ESTIMATES"):
            estimate_bribe_amounts(GWEI, 10, config=BribeConfig(gas_estimates={}))
