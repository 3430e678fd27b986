"""Tests for the fixed-point odds module."""

from decimal import Decimal

import pytest

from sx_bet_sdk import DomainError, ValidationError
from sx_bet_sdk.exchange import (
    ODDS_PRECISION,
    fill_amount_from_taker_stake,
    format_odds,
    implied_odds_to_percentage_odds,
    is_on_ladder,
    parse_usdc,
    percentage_odds_to_implied,
    remaining_taker_space,
    snap_to_odds_ladder,
    taker_implied_odds,
    to_decimal_odds,
    to_implied_odds,
)

PERCENT = 10**18

# Every 17th step of the 0.25% ladder, from 0.25% to 99.75%
LADDER_SAMPLE = [bps * 10**16 for bps in range(25, 10000, 25 * 17)] + [9975 * 10**16]


class TestConversions:
    """Tests for odds format conversions."""

    def test_to_implied_odds(self):
        """Test percentageOdds to implied probability."""
        assert to_implied_odds(50 * PERCENT) == 0.5
        assert to_implied_odds(25 * PERCENT) == 0.25

    @pytest.mark.parametrize("odds", [0, ODDS_PRECISION, -1, ODDS_PRECISION + 1])
    def test_to_implied_odds_out_of_range(self, odds):
        """Test that odds outside (0, 1e20) are rejected."""
        with pytest.raises(ValidationError, match="Invalid percentage_odds"):
            to_implied_odds(odds)

    def test_to_implied_odds_rejects_non_integers(self):
        """Test that floats and bools are not accepted as fixed-point odds."""
        with pytest.raises(ValidationError):
            to_implied_odds(5e19)
        with pytest.raises(ValidationError):
            to_implied_odds(True)

    def test_to_decimal_odds(self):
        """Test implied probability to decimal odds."""
        assert to_decimal_odds(0.5) == 2.0
        assert to_decimal_odds(0.25) == 4.0

    @pytest.mark.parametrize("implied", [0, -0.5, float("nan"), float("inf"), float("-inf")])
    def test_to_decimal_odds_domain(self, implied):
        """Test that non-positive or non-finite probabilities raise DomainError."""
        with pytest.raises(DomainError) as excinfo:
            to_decimal_odds(implied)
        assert excinfo.value.field == "implied_odds"

    def test_decimal_of_implied_round_trip(self):
        """Test decimal odds of implied odds equal 1 / (p / 1e20)."""
        for odds in LADDER_SAMPLE + [1, 123456789, ODDS_PRECISION - 1]:
            assert to_decimal_odds(to_implied_odds(odds)) == pytest.approx(
                1 / (odds / ODDS_PRECISION)
            )

    def test_taker_implied_odds(self):
        """Test that the taker gets the complementary probability."""
        assert taker_implied_odds(25 * PERCENT) == 0.75
        assert taker_implied_odds(50 * PERCENT) == 0.5

    def test_exact_decimal_conversions(self):
        """Test exact conversions between implied odds and percentageOdds."""
        assert implied_odds_to_percentage_odds("0.5025") == 5025 * 10**16
        assert implied_odds_to_percentage_odds(0.5) == 50 * PERCENT
        assert percentage_odds_to_implied(5025 * 10**16) == Decimal("0.5025")

    def test_implied_odds_to_percentage_odds_invalid(self):
        """Test that out-of-range or over-precise odds are rejected."""
        with pytest.raises(ValidationError):
            implied_odds_to_percentage_odds(1)
        with pytest.raises(ValidationError):
            implied_odds_to_percentage_odds("0.5000000000000000000001")
        with pytest.raises(ValidationError):
            implied_odds_to_percentage_odds("fifty percent")

    def test_format_odds(self):
        """Test display formatting."""
        assert format_odds(50 * PERCENT) == {
            "implied_percentage": "50.00%",
            "decimal_odds": "2.00",
        }
        assert format_odds(5025 * 10**16)["decimal_odds"] == "1.99"


class TestFillAmounts:
    """Tests for maker/taker amount conversions."""

    def test_fill_amount_even_odds(self):
        """Test that at 50% the maker fill equals the taker stake."""
        assert fill_amount_from_taker_stake(10, 50 * PERCENT) == 10

    def test_fill_amount_truncates(self):
        """Test that fill amounts truncate toward zero."""
        # 10 USDC taker stake against a 25% maker: 10 * 25 / 75
        assert fill_amount_from_taker_stake(parse_usdc(10), 25 * PERCENT) == 3_333_333

    def test_fill_amount_large_values(self):
        """Test that 18-decimal amounts times 1e20 odds stay exact."""
        stake = 10**30
        odds = 3 * PERCENT
        assert fill_amount_from_taker_stake(stake, odds) == stake * odds // (ODDS_PRECISION - odds)

    def test_fill_amount_invalid_stake(self):
        """Test that non-positive stakes are rejected."""
        with pytest.raises(ValidationError, match="taker_stake"):
            fill_amount_from_taker_stake(0, 50 * PERCENT)
        with pytest.raises(ValidationError, match="taker_stake"):
            fill_amount_from_taker_stake(-5, 50 * PERCENT)

    def test_remaining_taker_space(self):
        """Test remaining taker space on a partially filled order."""
        assert remaining_taker_space(100, 40, 25 * PERCENT) == 180

    def test_remaining_taker_space_exhausted(self):
        """Test that fully filled or overfilled orders have no space."""
        assert remaining_taker_space(100, 100, 25 * PERCENT) == 0
        assert remaining_taker_space(100, 150, 25 * PERCENT) == 0

    @pytest.mark.parametrize("total", [1, 7, 1_000_000, 123_456_789, 10**24])
    def test_filling_remaining_space_exhausts_order(self, total):
        """Test that staking the full remaining space leaves only rounding dust."""
        for odds in LADDER_SAMPLE:
            space = remaining_taker_space(total, 0, odds)
            if space == 0:
                continue
            fill = fill_amount_from_taker_stake(space, odds)

            assert fill <= total
            assert total - fill <= odds // (ODDS_PRECISION - odds) + 1
            assert remaining_taker_space(total, fill, odds) <= ODDS_PRECISION // odds


class TestOddsLadder:
    """Tests for odds ladder snapping."""

    def test_value_on_ladder_is_unchanged(self):
        """Test that 50.25% stays 50.25%."""
        assert snap_to_odds_ladder(0.5025) == 5025 * 10**16

    def test_snaps_to_nearest_step(self):
        """Test that 50.333% snaps down to 50.25%."""
        assert snap_to_odds_ladder(0.50333) == 5025 * 10**16
        assert snap_to_odds_ladder(0.50124) == 50 * PERCENT
        assert snap_to_odds_ladder(0.5038) == 5050 * 10**16

    def test_rounds_half_away_from_zero(self):
        """Test that exact midpoints round up."""
        assert snap_to_odds_ladder(0.50125) == 5025 * 10**16
        assert snap_to_odds_ladder("0.00375") == 50 * 10**16

    def test_custom_step(self):
        """Test a 1% ladder."""
        assert snap_to_odds_ladder(0.505, step_basis_points=100) == 51 * PERCENT
        assert is_on_ladder(51 * PERCENT, step_basis_points=100)

    def test_snapped_odds_are_on_ladder(self):
        """Test that snapping always yields ladder-valid odds."""
        for value in [0.0126, 0.1, 0.33333, 0.5, 0.61803, 0.87654321, 0.9974]:
            assert is_on_ladder(snap_to_odds_ladder(value))

    @pytest.mark.parametrize("value", [0, 1, 1.2, -0.3, 0.001, 0.9990, "nan"])
    def test_snap_rejects_values_off_the_open_interval(self, value):
        """Test that inputs outside (0, 1), or rounding onto 0% or 100%, fail."""
        with pytest.raises(ValidationError):
            snap_to_odds_ladder(value)

    def test_is_on_ladder(self):
        """Test exact ladder membership."""
        assert is_on_ladder(5025 * 10**16)
        assert is_on_ladder(50 * PERCENT)
        assert not is_on_ladder(5025 * 10**16 + 1)
        assert not is_on_ladder(5010 * 10**16)

    @pytest.mark.parametrize("step", [0, -25, True, 2.5])
    def test_invalid_step(self, step):
        """Test that ladder checks reject a step that is not a positive integer."""
        with pytest.raises(ValidationError) as excinfo:
            is_on_ladder(50 * PERCENT, step_basis_points=step)
        assert excinfo.value.field == "step_basis_points"
        with pytest.raises(ValidationError):
            snap_to_odds_ladder(0.5, step_basis_points=step)
