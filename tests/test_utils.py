"""Tests for exchange utilities, configuration and API types."""

from decimal import Decimal

import pytest

from sx_bet_sdk import ValidationError
from sx_bet_sdk.exchange import (
    EIP712_FILL_HASHER_SX,
    EXECUTOR_SX,
    MAINNET,
    TESTNET,
    USDC_SX,
    ExchangeConfig,
    FillPayload,
    Order,
    format_order_for_taker,
    format_units,
    format_usdc,
    group_orders_by_outcome,
    hash_order,
    parse_units,
    parse_usdc,
    resolve_exchange_config,
)

PERCENT = 10**18


class TestUSDCFormatting:
    """Tests for USDC formatting functions."""

    def test_format_usdc(self):
        """Test USDC formatting."""
        assert format_usdc(1000000) == "1"
        assert format_usdc(1500000) == "1.5"
        assert format_usdc(100) == "0.0001"
        assert format_usdc(0) == "0"

    def test_parse_usdc(self):
        """Test USDC parsing."""
        assert parse_usdc(1.0) == 1000000
        assert parse_usdc(1.5) == 1500000
        assert parse_usdc("0.0001") == 100
        assert parse_usdc(Decimal("10")) == 10000000

    def test_parse_usdc_no_float_drift(self):
        """Test that float inputs parse from their shortest form."""
        assert parse_usdc(0.1) == 100000
        assert parse_usdc(0.29) == 290000

    def test_parse_units_too_many_decimals(self):
        """Test that sub-unit precision is rejected rather than truncated."""
        with pytest.raises(ValidationError, match="Too many decimal places"):
            parse_usdc("1.0000001")
        assert parse_units("1.0000001", 18) == 1000000100000000000

    @pytest.mark.parametrize("amount", ["abc", "nan", "inf"])
    def test_parse_units_invalid(self, amount):
        """Test that non-numbers are rejected."""
        with pytest.raises(ValidationError):
            parse_usdc(amount)

    def test_format_units(self):
        """Test formatting with other decimals."""
        assert format_units(10**18, 18) == "1"
        assert format_units(123, 2) == "1.23"


class TestOrderDisplay:
    """Tests for describing API orders to takers."""

    API_ORDER = {
        "orderHash": "0x" + "aa" * 32,
        "totalBetSize": "100000000",
        "percentageOdds": str(25 * PERCENT),
        "fillAmount": "40000000",
        "isMakerBettingOutcomeOne": True,
    }

    def test_format_order_for_taker(self):
        """Test the taker's view of a 25% maker order."""
        view = format_order_for_taker(self.API_ORDER)

        assert view["orderHash"] == "0x" + "aa" * 32
        assert view["outcome"] == 2
        assert view["impliedOdds"] == 0.75
        assert view["impliedOddsFormatted"] == "75.00%"
        assert view["decimalOdds"] == "1.33"
        assert view["availableBetSize"] == "180"

    def test_unfilled_order(self):
        """Test that a missing fillAmount means nothing is filled."""
        order = dict(self.API_ORDER, isMakerBettingOutcomeOne=False)
        del order["fillAmount"]
        view = format_order_for_taker(order)
        assert view["outcome"] == 1
        assert view["availableBetSize"] == "300"

    def test_format_order_object_for_taker(self):
        """Test the taker view of a parsed Order keeps fill amount and hash."""
        order = Order(
            market_hash="0x" + "11" * 32,
            base_token=USDC_SX,
            total_bet_size=100,
            percentage_odds=25 * PERCENT,
            expiry=2209006800,
            salt=1,
            maker=EXECUTOR_SX,
            executor=EXECUTOR_SX,
            is_maker_betting_outcome_one=True,
            fill_amount=40,
        )
        view = format_order_for_taker(order)

        assert view["orderHash"] == hash_order(order)
        assert view["outcome"] == 2
        assert view["availableBetSize"] == "0.00018"

    def test_order_object_matches_api_view(self):
        """Test that an Order parsed from the API describes the same bet."""
        api_order = dict(
            TestApiTypes.API_ORDER,
            percentageOdds=str(25 * PERCENT),
            fillAmount="40000000",
            isMakerBettingOutcomeOne=True,
        )
        from_dict = format_order_for_taker(api_order)
        from_object = format_order_for_taker(Order.from_api(api_order))

        assert from_object["availableBetSize"] == from_dict["availableBetSize"] == "180"
        assert from_object["impliedOddsFormatted"] == from_dict["impliedOddsFormatted"]

    def test_group_orders_by_outcome(self):
        """Test grouping by the taker's outcome."""
        orders = [
            {"isMakerBettingOutcomeOne": True, "orderHash": "a"},
            {"isMakerBettingOutcomeOne": False, "orderHash": "b"},
            {"isMakerBettingOutcomeOne": True, "orderHash": "c"},
        ]
        grouped = group_orders_by_outcome(orders)
        assert [o["orderHash"] for o in grouped[2]] == ["a", "c"]
        assert [o["orderHash"] for o in grouped[1]] == ["b"]

    def test_group_order_objects(self):
        """Test grouping parsed Orders."""
        api_order = TestApiTypes.API_ORDER
        orders = [
            Order.from_api(api_order),
            Order.from_api(dict(api_order, isMakerBettingOutcomeOne=True)),
        ]
        grouped = group_orders_by_outcome(orders)
        assert grouped[1] == [orders[0]]
        assert grouped[2] == [orders[1]]


class TestExchangeConfig:
    """Tests for exchange configuration."""

    def test_mainnet_defaults(self):
        """Test mainnet protocol constants."""
        assert MAINNET.chain_id == 4162
        assert MAINNET.fill_hasher == EIP712_FILL_HASHER_SX
        assert MAINNET.fill_domain_name == "SX Bet"
        assert MAINNET.fill_domain_version == "6.0"
        assert MAINNET.cancel_domain_name == "CancelOrderV2SportX"
        assert MAINNET.base_token == USDC_SX
        assert MAINNET.executor == EXECUTOR_SX
        assert MAINNET.odds_ladder_step == 25

    def test_testnet(self):
        """Test the Toronto testnet preset."""
        assert TESTNET.chain_id == 647
        assert TESTNET.fill_hasher == "0xC8dbedb008deB9c870E871F7a470f847C67135E9"
        assert TESTNET.api_url == "https://api.toronto.sx.bet"

    def test_resolve_defaults(self):
        """Test that no config means mainnet."""
        assert resolve_exchange_config() is MAINNET
        assert resolve_exchange_config(TESTNET) is TESTNET

    def test_resolve_overrides(self):
        """Test dict overrides on top of mainnet."""
        config = resolve_exchange_config({"chain_id": 1, "executor": "0x" + "ab" * 20})
        assert isinstance(config, ExchangeConfig)
        assert config.chain_id == 1
        assert config.executor.lower() == "0x" + "ab" * 20
        assert config.fill_hasher == EIP712_FILL_HASHER_SX

    def test_resolve_on_testnet_base(self):
        """Test overrides on top of another base."""
        config = resolve_exchange_config({"odds_ladder_step": 100}, base=TESTNET)
        assert config.chain_id == 647
        assert config.odds_ladder_step == 100

    def test_unknown_setting(self):
        """Test that misspelled settings are not silently ignored."""
        with pytest.raises(ValidationError, match="chainid"):
            resolve_exchange_config({"chainid": 1})

    def test_invalid_address(self):
        """Test that contract addresses are validated."""
        with pytest.raises(ValidationError) as excinfo:
            resolve_exchange_config({"fill_hasher": "0x1234"})
        assert excinfo.value.field == "fill_hasher"

    def test_invalid_ladder_step(self):
        """Test that the ladder step must be positive."""
        with pytest.raises(ValidationError):
            ExchangeConfig(odds_ladder_step=0)


class TestApiTypes:
    """Tests for API serialization."""

    API_ORDER = {
        "marketHash": "0x" + "11" * 32,
        "baseToken": USDC_SX,
        "totalBetSize": "100000000",
        "percentageOdds": "50000000000000000000",
        "expiry": "2209006800",
        "salt": "0x" + "ff" * 32,
        "maker": EXECUTOR_SX,
        "executor": EXECUTOR_SX,
        "isMakerBettingOutcomeOne": False,
        "signature": "0x" + "12" * 65,
        "apiExpiry": 1700000000,
        "fillAmount": "25000000",
        "orderHash": "0x" + "aa" * 32,
    }

    def test_order_from_api(self):
        """Test parsing an API order, including a hex salt."""
        order = Order.from_api(self.API_ORDER)

        assert order.total_bet_size == 100_000_000
        assert order.percentage_odds == 50 * PERCENT
        assert order.salt == 2**256 - 1
        assert order.is_maker_betting_outcome_one is False
        assert order.api_expiry == 1700000000
        assert order.fill_amount == 25_000_000

    def test_order_to_api(self):
        """Test that integers are sent as decimal strings."""
        body = Order.from_api(self.API_ORDER).to_api()

        assert body["salt"] == str(2**256 - 1)
        assert body["totalBetSize"] == "100000000"
        assert body["signature"] == "0x" + "12" * 65
        assert body["apiExpiry"] == 1700000000
        assert "fillAmount" not in body

    def test_unsigned_order_to_api(self):
        """Test that optional fields are omitted when unset."""
        order = Order.from_api(self.API_ORDER)
        order.signature = None
        order.api_expiry = None
        body = order.to_api()
        assert "signature" not in body
        assert "apiExpiry" not in body

    def test_fill_payload_to_api(self):
        """Test the fill body keeps the literal placeholders."""
        payload = FillPayload(
            order_hashes=["0x" + "aa" * 32],
            taker_amounts=[5],
            taker=EXECUTOR_SX,
            taker_sig="0x" + "34" * 65,
            fill_salt=9,
        )
        assert payload.to_api() == {
            "orderHashes": ["0x" + "aa" * 32],
            "takerAmounts": ["5"],
            "taker": EXECUTOR_SX,
            "takerSig": "0x" + "34" * 65,
            "fillSalt": "9",
            "action": "N/A",
            "market": "N/A",
            "betting": "N/A",
            "stake": "N/A",
            "odds": "N/A",
            "returning": "N/A",
        }
