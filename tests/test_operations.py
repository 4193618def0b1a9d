"""Test classes Operator, CalculationRequest and CalculationResult."""
import math

from pydantic import ValidationError
import pytest

from calculator_client_server.common.operations import CalculationRequest, CalculationResult, Operator


@pytest.mark.parametrize("symbol,expected", [
    ("+", Operator.PLUS),
    ("-", Operator.MINUS),
    ("*", Operator.MULTIPLY),
    ("/", Operator.DIVIDE),
    ("^", Operator.EXPONENT),
    ("**", Operator.UNKNOWN),
    ("%", Operator.UNKNOWN),
])
def test_operator_parse(symbol, expected) -> None:
    """Operator.parse maps known symbols and falls back to UNKNOWN."""
    assert Operator.parse(symbol) is expected


def test_calculation_request_valid() -> None:
    """Test that a valid CalculationRequest can be created."""
    req = CalculationRequest(a=2, b=3, op="^")
    assert req.a == 2.0
    assert isinstance(req.a, float)
    assert req.operator is Operator.EXPONENT
    assert str(req) == "2 ^ 3"

def test_calculation_request_keeps_unknown_symbol() -> None:
    """Unknown symbols are kept verbatim, they are not a validation error."""
    req = CalculationRequest(a=10, b=2, op="%")
    assert req.op == "%"
    assert req.operator is Operator.UNKNOWN

def test_calculation_request_missing_operand() -> None:
    """Test that a missing operand raises a validation error."""
    with pytest.raises(ValidationError):
        CalculationRequest(a=1, op="+")

def test_calculation_request_invalid_operand_type() -> None:
    """Test that a non-numeric operand raises a validation error."""
    with pytest.raises(ValidationError):
        CalculationRequest(a="one", b=2, op="+")

def test_calculation_request_is_frozen() -> None:
    """Requests cannot be modified once built."""
    req = CalculationRequest(a=1, b=2, op="+")
    with pytest.raises(ValidationError):
        req.a = 5

def test_calculation_result_accepts_nan() -> None:
    """NaN is a valid result value."""
    res = CalculationResult(request=CalculationRequest(a=2, b=3, op="%"), result=math.nan, source="local")
    assert math.isnan(res.result)

def test_calculation_result_invalid_source() -> None:
    """Test that an unknown source raises a validation error."""
    with pytest.raises(ValidationError):
        CalculationResult(request=CalculationRequest(a=1, b=1, op="+"), result=2.0, source="cache")
