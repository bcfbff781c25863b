"""Tests for address/uint256 types and the quote API models."""

import pytest
from pydantic import BaseModel, ValidationError

from quoter.constants import Exchange, TradeType
from quoter.models import Address, Uint256, is_valid_address, validate_uint256
from quoter.models.quote import BribeRequest, ExchangeName, QuoteRequest, TradeKind
from quoter.models.types import UINT256_MAX
from tests.helpers.constants import DAI_ADDRESS, USDC_ADDRESS


class AddressHolder(BaseModel):
    address: Address


class AmountHolder(BaseModel):
    amount: Uint256


class TestAddress:
    """Tests for address validation."""

    def test_lowercase_is_checksummed(self):
        assert AddressHolder(address=DAI_ADDRESS.lower()).address == DAI_ADDRESS

    @pytest.mark.parametrize(
        "value",
        [
            "0x1234",
            "6B175474E89094C44Da98b954EedeAC495271d0F",
            "0x6b175474E89094C44Da98b954EedeAC495271d0F",
            "0xZZ75474E89094C44Da98b954EedeAC495271d0F",
        ],
    )
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            AddressHolder(address=value)

    def test_is_valid_address(self):
        assert is_valid_address(USDC_ADDRESS)
        assert is_valid_address(USDC_ADDRESS.upper().replace("0X", "0x"))
        assert not is_valid_address(None)
        assert not is_valid_address(12345)


class TestUint256:
    """Tests for uint256 validation."""

    @pytest.mark.parametrize("value,expected", [(0, "0"), ("100", "100"), (UINT256_MAX, str(UINT256_MAX))])
    def test_valid(self, value, expected):
        assert validate_uint256(value) == expected
        assert AmountHolder(amount=value).amount == expected

    @pytest.mark.parametrize("value", [-1, "-1", UINT256_MAX + 1, "1.5", "abc", True, 1.0, None])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            AmountHolder(amount=value)


class TestQuoteRequest:
    """Tests for request parsing."""

    def test_camel_case_aliases(self):
        request = QuoteRequest.model_validate(
            {
                "chainId": 1,
                "kind": "exactIn",
                "currencyIn": {},
                "currencyOut": {"address": DAI_ADDRESS.lower()},
                "amount": "1000",
                "protectionFee": "10",
                "slippageBps": 100,
            }
        )
        assert request.kind.trade_type == TradeType.EXACT_INPUT
        assert request.currency_in.address is None
        assert request.currency_out.address == DAI_ADDRESS
        assert request.protection_fee == "10"
        assert request.slippage_bps == 100
        assert request.max_hops == 3
        assert request.pools == []

    def test_field_names_accepted(self):
        request = QuoteRequest(
            kind=TradeKind.EXACT_OUT,
            currency_in={"address": USDC_ADDRESS},
            currency_out={},
            amount="5",
        )
        assert request.kind.trade_type == TradeType.EXACT_OUTPUT
        assert request.protection_fee == "0"

    @pytest.mark.parametrize("field,value", [("maxHops", 0), ("maxHops", 7), ("maxNumResults", 0), ("slippageBps", -1)])
    def test_limits(self, field, value):
        payload = {"kind": "exactIn", "currencyIn": {}, "currencyOut": {}, "amount": "1", field: value}
        with pytest.raises(ValidationError):
            QuoteRequest.model_validate(payload)

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            QuoteRequest.model_validate({"kind": "sell", "currencyIn": {}, "currencyOut": {}, "amount": "1"})


class TestEnums:
    """Tests for wire enum mappings."""

    def test_exchange_names(self):
        assert ExchangeName.UNI.exchange == Exchange.UNI
        assert ExchangeName.SUSHI.exchange == Exchange.SUSHI

    def test_bribe_request_defaults(self):
        request = BribeRequest.model_validate({"gasPriceToBeat": "1000000000"})
        assert request.margin == 10
        assert request.chain_id == 1
