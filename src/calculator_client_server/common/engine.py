"""Evaluate a single ``a op b`` calculation."""
from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal
import math
from typing import Union

from calculator_client_server.common.operations import Operator

# Type alias for operator functions (taking two floats, returning a float)
OperatorFn = Callable[[float, float], float]

# Sentinel returned whenever a calculation has no defined result
NAN: float = float("nan")

# Number of decimal places kept by division
DIVISION_PLACES: int = 2


def round_half_up(value: float, places: int = DIVISION_PLACES) -> float:
    """
    Round a float to a fixed number of decimal places, ties away from zero.

    The exact binary value of ``value`` is rounded, so 1.005 (stored as
    1.00499...) gives 1.0 while 0.125 gives 0.13 and -0.125 gives -0.13.

    :param float value: Value to round
    :param int places: Number of decimal places to keep

    :return: Rounded value
    :rtype: float
    """
    # Integral floats (every float above 2**52 included) need no rounding
    if not math.isfinite(value) or value.is_integer():
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _divide(a: float, b: float) -> float:
    if b == 0:
        return NAN
    return round_half_up(a / b)


def _power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except (ValueError, OverflowError):
        # Complex results, 0 ** -n and overflow have no float answer
        return NAN


OPERATIONS: dict[Operator, OperatorFn] = {
    Operator.PLUS: lambda a, b: a + b,
    Operator.MINUS: lambda a, b: a - b,
    Operator.MULTIPLY: lambda a, b: a * b,
    Operator.DIVIDE: _divide,
    Operator.EXPONENT: _power,
}


class Calculator:
    """
    Pure calculation engine used by the server route and the client fallback.

    Design constraints:
        - No eval(), no dynamic code execution
        - Never raises for numeric input: undefined results become NaN
        - Overflow gives NaN for every operator, never an infinity
        - Identical inputs always give identical outputs
    """

    @staticmethod
    def compute(a: float, b: float, op: Union[Operator, str]) -> float:
        """
        Apply ``op`` to the two operands.

        Unknown operators, division by zero, powers without a real result and
        results too large for a float (1e308 * 10, 10 ^ 400) all give NaN.

        :param float a: First operand
        :param float b: Second operand
        :param op: Operator or raw operator symbol

        :return: Computed finite value, or NaN
        :rtype: float
        """
        operation = OPERATIONS.get(Operator.parse(op))
        if operation is None:
            return NAN
        result = operation(float(a), float(b))
        return result if math.isfinite(result) else NAN


def format_result(value: float) -> str:
    """
    Render a result the way the calculator displays it.

    Integral values lose their trailing ".0", noise past 15 significant digits
    is dropped (0.1 + 0.2 shows as 0.3) and NaN shows as "NaN".

    :param float value: Result to render

    :return: Display text
    :rtype: str
    """
    if math.isnan(value):
        return "NaN"
    return f"{value:.15g}"
