"""Ray (1e27) and wad (1e18) fixed-point arithmetic.

Mirrors the ledger's WadRayMath library: products and quotients round half
up, and every operand and result is kept inside uint256 so an overflow that
would revert on-chain raises here instead of silently succeeding.
"""

from reserve_oracle.data.constants import (
    BPS_DENOMINATOR,
    HALF_RAY,
    HALF_WAD,
    MAX_UINT256,
    RAY,
    WAD,
    WAD_RAY_RATIO,
)
from reserve_oracle.errors import RayMathError


def _check_operands(operation: str, *operands: int) -> None:
    for value in operands:
        if value < 0 or value > MAX_UINT256:
            raise RayMathError(operation, *operands)


def _check_result(operation: str, result: int, *operands: int) -> int:
    if result > MAX_UINT256:
        raise RayMathError(operation, *operands)
    return result


def wad_mul(a: int, b: int) -> int:
    _check_operands("wad_mul", a, b)
    return _check_result("wad_mul", (a * b + HALF_WAD) // WAD, a, b)


def wad_div(a: int, b: int) -> int:
    _check_operands("wad_div", a, b)
    if b == 0:
        raise RayMathError("wad_div", a, b)
    return _check_result("wad_div", (a * WAD + b // 2) // b, a, b)


def ray_mul(a: int, b: int) -> int:
    """Multiply two rays, rounding half up."""
    _check_operands("ray_mul", a, b)
    if b != 0 and a > (MAX_UINT256 - HALF_RAY) // b:
        raise RayMathError("ray_mul", a, b)
    return (a * b + HALF_RAY) // RAY


def ray_div(a: int, b: int) -> int:
    """Divide two rays, rounding half up."""
    _check_operands("ray_div", a, b)
    if b == 0:
        raise RayMathError("ray_div", a, b)
    if a > (MAX_UINT256 - b // 2) // RAY:
        raise RayMathError("ray_div", a, b)
    return (a * RAY + b // 2) // b


def ray_pow(x: int, n: int) -> int:
    """Raise a ray to a non-negative integer power by squaring.

    Each squaring step goes through ``ray_mul`` so intermediate rounding
    matches the ledger bit for bit.
    """
    _check_operands("ray_pow", x, n)
    z = x if n % 2 != 0 else RAY
    n //= 2
    while n != 0:
        x = ray_mul(x, x)
        if n % 2 != 0:
            z = ray_mul(z, x)
        n //= 2
    return z


def ray_to_wad(a: int) -> int:
    """Rescale a ray to a wad, rounding the dropped 9 digits half up."""
    _check_operands("ray_to_wad", a)
    return (a + WAD_RAY_RATIO // 2) // WAD_RAY_RATIO


def wad_to_ray(a: int) -> int:
    _check_operands("wad_to_ray", a)
    return _check_result("wad_to_ray", a * WAD_RAY_RATIO, a)


def ray_to_float(ray: int) -> float:
    """Convert RAY (1e27) fixed-point to a decimal fraction."""
    return ray / float(RAY)


def bps_to_ray(bps: int) -> int:
    """Convert basis points (1e4 scale) to a ray."""
    return bps * RAY // BPS_DENOMINATOR


def percent_to_ray(value: float) -> int:
    """Convert a decimal fraction (e.g. 0.45) to a ray without float drift."""
    # 1e9 resolution keeps literals such as 0.04 exact
    return round(value * 10**9) * (RAY // 10**9)
