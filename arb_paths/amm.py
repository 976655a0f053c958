"""
Uniswap V2 style constant-product swap math on integer base units.

Formula (fee taken from the input side):
    amountInWithFee = amountIn * (FEE_DENOMINATOR - fee)
    amountOut = amountInWithFee * reserveOut / (reserveIn * FEE_DENOMINATOR + amountInWithFee)

All arithmetic mirrors the on-chain uint256 contract: any intermediate value
above 2**256 - 1 is an overflow and the swap is reported infeasible (None)
instead of silently wrapping.
"""

from typing import Optional

FEE_DENOMINATOR = 1000  # parts-per-thousand, fee=3 -> 0.30%

U256_MAX = 2**256 - 1


def checked_mul(a: int, b: int) -> Optional[int]:
    """Multiply two uint256 values, None on overflow."""
    result = a * b
    if result > U256_MAX:
        return None
    return result


def checked_add(a: int, b: int) -> Optional[int]:
    """Add two uint256 values, None on overflow."""
    result = a + b
    if result > U256_MAX:
        return None
    return result


def is_u256(value: int) -> bool:
    return 0 <= value <= U256_MAX


def scale_amount(amount: int, decimals: int) -> Optional[int]:
    """
    Convert a whole-token amount to base units (amount * 10**decimals).

    Returns:
        Scaled amount, or None if it does not fit in a uint256
    """
    if not is_u256(amount) or decimals < 0:
        return None
    unit = 10**decimals
    if unit > U256_MAX:
        return None
    return checked_mul(amount, unit)


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee: int,
    fee_denominator: int = FEE_DENOMINATOR,
) -> Optional[int]:
    """
    Calculate output amount for a V2 swap using the constant-product formula.

    Args:
        amount_in: Input token amount (base units)
        reserve_in: Reserve of input token
        reserve_out: Reserve of output token
        fee: Fee numerator (e.g. 3 for 0.3% with the default denominator)
        fee_denominator: Fee denominator

    Returns:
        Output token amount (base units, truncated), or None when the swap
        is infeasible: zero denominator, uint256 overflow, or inputs a
        uint256 cannot hold (negative values, fee above the denominator)
    """
    if not all(is_u256(v) for v in (amount_in, reserve_in, reserve_out, fee)):
        return None
    if fee > fee_denominator:
        return None

    amount_in_with_fee = checked_mul(amount_in, fee_denominator - fee)
    if amount_in_with_fee is None:
        return None

    numerator = checked_mul(amount_in_with_fee, reserve_out)
    if numerator is None:
        return None

    scaled_reserve_in = checked_mul(reserve_in, fee_denominator)
    if scaled_reserve_in is None:
        return None

    denominator = checked_add(scaled_reserve_in, amount_in_with_fee)
    if denominator is None or denominator == 0:
        return None

    return numerator // denominator
