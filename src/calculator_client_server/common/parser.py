"""Parse ``a op b`` lines from operations files."""
from typing import List

from calculator_client_server.common.operations import CalculationRequest


class OperationParser:
    """
    Turn a text line into a CalculationRequest.

    A line holds exactly one calculation, tokens separated by whitespace:

        - "3 + 4"     -> a=3.0, op="+", b=4.0
        - "-2 ^ 0.5"  -> a=-2.0, op="^", b=0.5

    Any operator symbol is accepted here: unknown operators are not a parse
    error, the engine answers them with NaN.
    """

    @staticmethod
    def tokenize(line: str) -> List[str]:
        """
        Split a line into tokens.

        :param str line: Line from an operations file

        :return: List of tokens
        :rtype: List[str]
        """
        return line.split()

    @staticmethod
    def _to_number(token: str, name: str) -> float:
        try:
            return float(token)
        except ValueError:
            raise ValueError(f"Operand {name} is not a number: {token!r}") from None

    @staticmethod
    def parse_line(line: str) -> CalculationRequest:
        """
        Parse a single calculation.

        :param str line: Line such as "21 / 7"

        :return: Parsed calculation
        :rtype: CalculationRequest
        :raises ValueError: If the line does not hold exactly two operands and an operator
        """
        tokens: List[str] = OperationParser.tokenize(line)
        if len(tokens) != 3:
            raise ValueError(f"Expected 'a op b', got {len(tokens)} token(s): {line!r}")

        a, op, b = tokens
        return CalculationRequest(
            a=OperationParser._to_number(a, "a"),
            b=OperationParser._to_number(b, "b"),
            op=op,
        )

    @staticmethod
    def parse_lines(content: str) -> List[str]:
        """
        Return the non-empty, stripped lines of an operations file.

        :param str content: Whole file content

        :return: Lines that hold a calculation
        :rtype: List[str]
        """
        return [line.strip() for line in content.splitlines() if line.strip()]
