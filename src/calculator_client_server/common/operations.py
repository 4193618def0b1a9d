"""Pydantic models for calculation requests and results."""
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Operator(str, Enum):
    """Closed set of supported operator symbols."""

    UNKNOWN = ""
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    EXPONENT = "^"

    @classmethod
    def parse(cls, symbol: str) -> "Operator":
        """
        Map a raw symbol to an Operator, falling back to UNKNOWN.

        :param str symbol: Operator symbol as typed by the user or sent on the wire

        :return: Matching operator, or Operator.UNKNOWN
        :rtype: Operator
        """
        if isinstance(symbol, cls):
            return symbol
        try:
            return cls(symbol)
        except ValueError:
            return cls.UNKNOWN


class CalculationRequest(BaseModel):
    """Represents a single calculation sent to the server: ``a op b``."""

    model_config = ConfigDict(frozen=True)

    a: float = Field(..., description="First operand")
    b: float = Field(..., description="Second operand")
    op: str = Field(..., description="Operator symbol, one of + - * / ^ or any other string")

    @property
    def operator(self) -> Operator:
        """Operator parsed from the raw symbol."""
        return Operator.parse(self.op)

    def __str__(self) -> str:
        return f"{self.a:g} {self.op} {self.b:g}"


class CalculationResult(BaseModel):
    """Result of a calculation together with where it was computed."""

    model_config = ConfigDict(frozen=True)

    request: CalculationRequest = Field(..., description="Original calculation")
    result: float = Field(..., description="Computed value, NaN when no result is defined")
    source: Literal["remote", "local"] = Field(..., description="Where the value was computed")
