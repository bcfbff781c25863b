"""Tests for the constant-product Pair."""

import pytest

from quoter.constants import ChainId, Exchange
from quoter.entities import WETH, Pair, Price, SwapStatus, Token
from quoter.errors import InsufficientInputAmountError, InsufficientReservesError, InvariantViolation
from tests.helpers import DAI, ETHER, T0, T1, T2, USDC, amount, make_pair


class TestConstruction:
    """Tests for pair construction and token ordering."""

    def test_get_address(self):
        """CREATE2 address of the mainnet USDC/DAI pair."""
        assert Pair.get_address(USDC, DAI) == "0xAE461cA67B15dc8dc81CE7615e0320dA1A9aB8D5"

    def test_get_address_is_order_independent(self):
        assert Pair.get_address(DAI, USDC) == Pair.get_address(USDC, DAI)

    def test_sushi_address_differs(self):
        assert Pair.get_address(USDC, DAI, Exchange.SUSHI) != Pair.get_address(USDC, DAI, Exchange.UNI)

    def test_tokens_are_sorted(self):
        pair = Pair(amount(USDC, 100), amount(DAI, 100))
        assert pair.token0 == DAI
        assert pair.token1 == USDC

    def test_reserves_follow_sorting(self):
        pair = Pair(amount(USDC, 100), amount(DAI, 101))
        assert pair.reserve0 == amount(DAI, 101)
        assert pair.reserve1 == amount(USDC, 100)

    def test_different_chains_rejected(self):
        with pytest.raises(InvariantViolation, match="CHAIN_IDS"):
            Pair(amount(USDC, 100), amount(WETH[ChainId.RINKEBY], 100))

    def test_native_reserve_rejected(self):
        with pytest.raises(InvariantViolation, match="TOKEN"):
            Pair(amount(ETHER, 100), amount(T0, 100))

    def test_liquidity_token(self):
        pair = make_pair(USDC, 100, DAI, 100)
        assert pair.liquidity_token.address == "0xAE461cA67B15dc8dc81CE7615e0320dA1A9aB8D5"
        assert pair.liquidity_token.symbol == "UNI-V2"
        assert pair.liquidity_token.decimals == 18


class TestAccessors:
    """Tests for prices and per-token lookups."""

    def test_token_prices(self):
        pair = Pair(amount(USDC, 101), amount(DAI, 100))
        assert pair.token0_price == Price(DAI, USDC, 100, 101)
        assert pair.token1_price == Price(USDC, DAI, 101, 100)

    def test_price_of(self):
        pair = Pair(amount(USDC, 101), amount(DAI, 100))
        assert pair.price_of(DAI) == pair.token0_price
        assert pair.price_of(USDC) == pair.token1_price

    def test_price_of_foreign_token(self, pair_0_1):
        with pytest.raises(InvariantViolation, match="TOKEN"):
            pair_0_1.price_of(T2)

    def test_reserve_of(self, pair_0_2):
        assert pair_0_2.reserve_of(T2) == amount(T2, 1100)

    def test_involves_token(self, pair_0_1):
        assert pair_0_1.involves_token(T0)
        assert pair_0_1.involves_token(T1)
        assert not pair_0_1.involves_token(T2)

    def test_chain_id(self, pair_0_1):
        assert pair_0_1.chain_id == ChainId.MAINNET


class TestSwapMath:
    """Tests for get_output_amount and get_input_amount."""

    def test_output_amount(self, pair_0_1):
        """100 in against 1000:1000 yields 90 after the 0.3% fee."""
        output, _ = pair_0_1.get_output_amount(amount(T0, 100))
        assert output == amount(T1, 90)

    def test_output_returns_new_pair(self, pair_0_1):
        _, next_pair = pair_0_1.get_output_amount(amount(T0, 100))
        assert next_pair.reserve_of(T0) == amount(T0, 1100)
        assert next_pair.reserve_of(T1) == amount(T1, 910)
        # original is untouched
        assert pair_0_1.reserve_of(T0) == amount(T0, 1000)

    def test_input_amount(self, pair_0_1):
        input_amount, next_pair = pair_0_1.get_input_amount(amount(T1, 100))
        assert input_amount == amount(T0, 112)
        assert next_pair.reserve_of(T1) == amount(T1, 900)

    def test_dust_input(self, pair_0_1):
        with pytest.raises(InsufficientInputAmountError):
            pair_0_1.get_output_amount(amount(T0, 1))

    def test_empty_reserve_output(self, empty_pair_0_1):
        with pytest.raises(InsufficientReservesError):
            empty_pair_0_1.get_output_amount(amount(T0, 100))

    def test_empty_reserve_input(self, empty_pair_0_1):
        with pytest.raises(InsufficientReservesError):
            empty_pair_0_1.get_input_amount(amount(T1, 100))

    @pytest.mark.parametrize("requested", [1000, 1001])
    def test_output_exceeds_reserve(self, pair_0_1, requested):
        with pytest.raises(InsufficientReservesError):
            pair_0_1.get_input_amount(amount(T1, requested))

    def test_foreign_token(self, pair_0_1):
        with pytest.raises(InvariantViolation, match="TOKEN"):
            pair_0_1.get_output_amount(amount(T2, 100))

    @pytest.mark.parametrize("amount_out", [1, 10, 100, 500, 999])
    def test_input_covers_output(self, pair_0_1, amount_out):
        """Selling the quoted input always yields at least the requested output."""
        required, _ = pair_0_1.get_input_amount(amount(T1, amount_out))
        output, _ = pair_0_1.get_output_amount(required)
        assert output.quotient >= amount_out


class TestSwapOutcome:
    """Tests for the non-raising swap forms."""

    def test_ok(self, pair_0_1):
        outcome = pair_0_1.try_output_amount(amount(T0, 100))
        assert outcome.is_ok
        assert outcome.amount == amount(T1, 90)
        assert outcome.pair is not None

    def test_insufficient_input(self, pair_0_1):
        outcome = pair_0_1.try_output_amount(amount(T0, 1))
        assert outcome.status is SwapStatus.INSUFFICIENT_INPUT_AMOUNT
        assert outcome.amount is None

    def test_insufficient_reserves(self, pair_0_1):
        outcome = pair_0_1.try_input_amount(amount(T1, 1000))
        assert outcome.status is SwapStatus.INSUFFICIENT_RESERVES
        assert not outcome.is_ok

    def test_reserve_overflow_is_insufficient_reserves(self):
        """A post-trade reserve beyond uint256 is reported, not raised."""
        pair = make_pair(T0, 2**256 - 10, T2, 10**30)
        outcome = pair.try_output_amount(amount(T0, 2**255))
        assert outcome.status is SwapStatus.INSUFFICIENT_RESERVES
        assert outcome.amount is None

    def test_required_input_overflow_is_insufficient_reserves(self):
        pair = make_pair(T0, 2**255, T2, 1000)
        outcome = pair.try_input_amount(amount(T2, 500))
        assert outcome.status is SwapStatus.INSUFFICIENT_RESERVES

    def test_raising_form_still_reports_overflow(self):
        pair = make_pair(T0, 2**256 - 10, T2, 10**30)
        with pytest.raises(InvariantViolation, match="AMOUNT"):
            pair.get_output_amount(amount(T0, 2**255))


class TestLiquidity:
    """Tests for liquidity minting and redemption."""

    @pytest.fixture
    def deep_pair(self) -> Pair:
        return make_pair(T0, 10000, T1, 10000)

    def test_first_mint_below_minimum(self, deep_pair):
        supply = amount(deep_pair.liquidity_token, 0)
        with pytest.raises(InsufficientInputAmountError):
            deep_pair.get_liquidity_minted(supply, amount(T0, 1000), amount(T1, 1000))

    def test_first_mint(self, deep_pair):
        """sqrt(1000001 * 1001) - MINIMUM_LIQUIDITY."""
        supply = amount(deep_pair.liquidity_token, 0)
        minted = deep_pair.get_liquidity_minted(supply, amount(T0, 1000001), amount(T1, 1001))
        assert minted.quotient == 30638

    def test_proportional_mint(self, deep_pair):
        supply = amount(deep_pair.liquidity_token, 10000)
        minted = deep_pair.get_liquidity_minted(supply, amount(T1, 2000), amount(T0, 2000))
        assert minted.quotient == 2000
        assert minted.currency == deep_pair.liquidity_token

    def test_mint_wrong_supply_token(self, deep_pair):
        with pytest.raises(InvariantViolation, match="LIQUIDITY"):
            deep_pair.get_liquidity_minted(amount(T2, 10000), amount(T0, 2000), amount(T1, 2000))

    @pytest.mark.parametrize("liquidity,expected", [(1000, 1000), (500, 500)])
    def test_liquidity_value(self, pair_0_1, liquidity, expected):
        token = pair_0_1.liquidity_token
        value = pair_0_1.get_liquidity_value(T0, amount(token, 1000), amount(token, liquidity))
        assert value == amount(T0, expected)

    def test_liquidity_value_with_fee(self, pair_0_1):
        """Protocol fee growth since k_last dilutes the supply."""
        token = pair_0_1.liquidity_token
        value = pair_0_1.get_liquidity_value(T0, amount(token, 500), amount(token, 500), True, 250000)
        assert value == amount(T0, 917)

    def test_liquidity_value_fee_requires_k_last(self, pair_0_1):
        token = pair_0_1.liquidity_token
        with pytest.raises(InvariantViolation, match="K_LAST"):
            pair_0_1.get_liquidity_value(T0, amount(token, 500), amount(token, 500), fee_on=True)

    def test_liquidity_exceeds_supply(self, pair_0_1):
        token = pair_0_1.liquidity_token
        with pytest.raises(InvariantViolation, match="LIQUIDITY"):
            pair_0_1.get_liquidity_value(T0, amount(token, 500), amount(token, 501))


def test_pair_on_other_chain():
    """Pairs work on any chain with consistent tokens."""
    a = Token(ChainId.GOERLI, T0.address, 18)
    b = Token(ChainId.GOERLI, T1.address, 18)
    pair = make_pair(a, 1000, b, 1000)
    assert pair.chain_id == ChainId.GOERLI
