"""Fixed-point odds arithmetic for the SX Bet exchange.

Odds travel on the wire as ``percentageOdds``: the maker's implied
probability scaled by 10**20. Amounts are integers in the base token's
smallest unit. Every conversion that feeds a signed payload stays in Python
integers (or ``Decimal`` for user input) so no float rounding can leak into
an order or fill.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Dict, Union

from ..errors import DomainError, ValidationError

# Fixed-point denominator of percentageOdds
ODDS_PRECISION = 10**20

# One basis point of probability in percentageOdds units
BASIS_POINT = 10**16

# Default odds ladder step (25 bps = 0.25%)
ODDS_LADDER_STEP_SIZE = 25


def validate_percentage_odds(percentage_odds: int, field: str = "percentage_odds") -> int:
    """Check that odds are an integer strictly between 0 and 10**20.

    Raises:
        ValidationError: If the odds are not an int or are out of range
    """
    if isinstance(percentage_odds, bool) or not isinstance(percentage_odds, int):
        raise ValidationError(
            f"Invalid {field}: {percentage_odds!r}. Must be an integer", field=field
        )
    if not 0 < percentage_odds < ODDS_PRECISION:
        raise ValidationError(
            f"Invalid {field}: {percentage_odds}. Must be between 0 and {ODDS_PRECISION} exclusive",
            field=field,
        )
    return percentage_odds


def _validate_amount(amount: int, field: str, allow_zero: bool = False) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"Invalid {field}: {amount!r}. Must be an integer", field=field)
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError(f"Invalid {field}: {amount}. Must be positive", field=field)
    return amount


def to_implied_odds(percentage_odds: int) -> float:
    """Convert percentageOdds to an implied probability in (0, 1)."""
    validate_percentage_odds(percentage_odds)
    return percentage_odds / ODDS_PRECISION


def to_decimal_odds(implied_odds: float) -> float:
    """Convert an implied probability to decimal odds (0.5 -> 2.0).

    Raises:
        DomainError: If implied_odds is not a finite positive number
    """
    if not math.isfinite(implied_odds) or implied_odds <= 0:
        raise DomainError(
            f"Invalid implied_odds: {implied_odds}. Must be a finite number greater than 0",
            field="implied_odds",
        )
    return 1 / implied_odds


def taker_implied_odds(maker_percentage_odds: int) -> float:
    """Implied probability for the taker, who backs the other outcome."""
    return 1 - to_implied_odds(maker_percentage_odds)


def percentage_odds_to_implied(percentage_odds: int) -> Decimal:
    """Exact implied probability of percentageOdds as a Decimal."""
    validate_percentage_odds(percentage_odds)
    return Decimal(percentage_odds).scaleb(-20)


def implied_odds_to_percentage_odds(implied_odds: Union[float, str, Decimal]) -> int:
    """Convert an implied probability to percentageOdds without rounding.

    Raises:
        ValidationError: If the value has more than 20 decimal places or
            falls outside (0, 1)
    """
    try:
        scaled = Decimal(str(implied_odds)).scaleb(20)
    except InvalidOperation:
        raise ValidationError(
            f"Invalid implied_odds: {implied_odds!r}", field="implied_odds"
        ) from None
    if not scaled.is_finite() or scaled != scaled.to_integral_value():
        raise ValidationError(
            f"Invalid implied_odds: {implied_odds!r}. At most 20 decimal places",
            field="implied_odds",
        )
    return validate_percentage_odds(int(scaled), field="implied_odds")


def fill_amount_from_taker_stake(taker_stake: int, maker_percentage_odds: int) -> int:
    """Maker-side fill amount consumed by a taker's stake.

    fillAmount = takerStake * percentageOdds / (10**20 - percentageOdds),
    truncated.

    Args:
        taker_stake: Taker stake in base units
        maker_percentage_odds: The order's percentageOdds

    Returns:
        Fill amount from the maker's perspective, in base units
    """
    _validate_amount(taker_stake, "taker_stake")
    validate_percentage_odds(maker_percentage_odds, field="maker_percentage_odds")
    return taker_stake * maker_percentage_odds // (ODDS_PRECISION - maker_percentage_odds)


def remaining_taker_space(total_bet_size: int, fill_amount: int, percentage_odds: int) -> int:
    """Largest taker stake the order can still absorb.

    Args:
        total_bet_size: Order size in base units (maker side)
        fill_amount: Maker-side amount already filled
        percentage_odds: The order's percentageOdds

    Returns:
        Remaining taker stake in base units, 0 if the order is exhausted
    """
    _validate_amount(total_bet_size, "total_bet_size", allow_zero=True)
    _validate_amount(fill_amount, "fill_amount", allow_zero=True)
    validate_percentage_odds(percentage_odds)

    remaining_maker = total_bet_size - fill_amount
    if remaining_maker <= 0:
        return 0
    return remaining_maker * ODDS_PRECISION // percentage_odds - remaining_maker


def _validate_step(step_basis_points: int) -> int:
    is_int = isinstance(step_basis_points, int) and not isinstance(step_basis_points, bool)
    if not is_int or step_basis_points <= 0:
        raise ValidationError(
            f"Invalid step_basis_points: {step_basis_points!r}. Must be a positive integer",
            field="step_basis_points",
        )
    return step_basis_points


def snap_to_odds_ladder(
    implied_odds: Union[float, str, Decimal],
    step_basis_points: int = ODDS_LADDER_STEP_SIZE,
) -> int:
    """Round implied odds to the nearest step on the odds ladder.

    Rounds half away from zero (0.50125 -> 50.25% with a 0.25% step).

    Args:
        implied_odds: Implied probability (e.g., 0.5025)
        step_basis_points: Ladder step in basis points (25 = 0.25%)

    Returns:
        Ladder-valid percentageOdds

    Raises:
        ValidationError: If implied_odds is outside (0, 1), the step is not
            positive, or the value rounds onto 0% or 100%
    """
    _validate_step(step_basis_points)
    try:
        implied = Decimal(str(implied_odds))
    except InvalidOperation:
        raise ValidationError(
            f"Invalid implied_odds: {implied_odds!r}", field="implied_odds"
        ) from None
    if not implied.is_finite() or not 0 < implied < 1:
        raise ValidationError(
            f"Invalid implied_odds: {implied_odds}. Must be between 0 and 1",
            field="implied_odds",
        )

    basis_points = implied * 10000
    steps = (basis_points / step_basis_points).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return validate_percentage_odds(
        int(steps) * step_basis_points * BASIS_POINT, field="implied_odds"
    )


def is_on_ladder(percentage_odds: int, step_basis_points: int = ODDS_LADDER_STEP_SIZE) -> bool:
    """Check that percentageOdds fall exactly on the odds ladder.

    Raises:
        ValidationError: If the step is not a positive integer
    """
    return percentage_odds % (BASIS_POINT * _validate_step(step_basis_points)) == 0


def format_odds(percentage_odds: int) -> Dict[str, str]:
    """Display strings for a maker's odds: implied percentage and decimal odds."""
    implied = to_implied_odds(percentage_odds)
    return {
        "implied_percentage": f"{implied * 100:.2f}%",
        "decimal_odds": f"{to_decimal_odds(implied):.2f}",
    }
