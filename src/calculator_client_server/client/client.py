"""HTTP client with local fallback."""
import json
from pathlib import Path
from time import monotonic
from typing import List, Optional, Union

import httpx
from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field

from calculator_client_server.common.config import Settings
from calculator_client_server.common.engine import NAN, Calculator, format_result
from calculator_client_server.common.loader import load_operations
from calculator_client_server.common.logger import logger
from calculator_client_server.common.operations import CalculationRequest, CalculationResult
from calculator_client_server.common.parser import OperationParser


class MissingOperandError(ValueError):
    """Raised when an operand is left empty."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Operand {name} is missing")
        self.name = name


class RemoteSuccess(BaseModel):
    """The server answered with a result."""

    model_config = ConfigDict(frozen=True)

    value: float


class RemoteFailure(BaseModel):
    """The server could not provide a result."""

    model_config = ConfigDict(frozen=True)

    reason: str


RemoteOutcome = Union[RemoteSuccess, RemoteFailure]


def parse_operand(raw: Optional[Union[str, float]], name: str) -> float:
    """
    Validate a user-supplied operand.

    :param raw: Value as entered, a string or a number
    :param str name: Operand name used in error messages ("a" or "b")

    :return: Operand as float
    :rtype: float
    :raises MissingOperandError: If the operand is absent or blank
    :raises ValueError: If the operand is not a number
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise MissingOperandError(name)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Operand {name} is not a number: {raw!r}") from None


class CalculatorClient(BaseModel):
    """
    Client responsible for obtaining calculation results.

    The client:
    - computes locally when no endpoint is configured
    - otherwise sends exactly one request to the server, bounded by a timeout
    - falls back to the local engine once if that request fails for any reason
    """

    # Make the Pydantic instance immutable (read-only), so the endpoint and
    # credentials cannot change between two calls
    # Allow arbitrary types like httpx.BaseTransport
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    api_url: Optional[AnyHttpUrl] = Field(default=None, description="Calculation endpoint, None for local only")
    timeout: float = Field(default=3.0, gt=0, description="Seconds to wait for the server")
    username: str = Field(default="admin", description="Basic auth username")
    password: str = Field(default="admin", description="Basic auth password")
    transport: Optional[httpx.BaseTransport] = Field(default=None, description="Custom transport (tests)")

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "CalculatorClient":
        """Build a client from application settings."""
        return cls(
            api_url=settings.api_url,
            timeout=settings.api_timeout,
            username=settings.basic_auth_user,
            password=settings.basic_auth_pass,
            **kwargs,
        )

    def fetch(self, request: CalculationRequest) -> RemoteOutcome:
        """
        Send one calculation to the server.

        ``timeout`` bounds the whole request: httpx applies it to each phase
        (connect, write, read, pool) and the body is read against a deadline,
        so a server trickling bytes cannot hold the call past it.

        Never raises: every failure is reported as a RemoteFailure.

        :param CalculationRequest request: Calculation to send

        :return: RemoteSuccess with the server value, or RemoteFailure with the reason
        :rtype: RemoteOutcome
        """
        if self.api_url is None:
            return RemoteFailure(reason="no endpoint configured")

        timed_out = RemoteFailure(reason=f"timed out after {self.timeout:g}s")
        deadline: float = monotonic() + self.timeout
        chunks: List[bytes] = []

        try:
            with httpx.Client(
                timeout=self.timeout,
                auth=(self.username, self.password),
                transport=self.transport,
            ) as http:
                # pydantic writes non-finite operands as null, which the server rejects
                with http.stream(
                    "POST",
                    str(self.api_url),
                    content=request.model_dump_json(),
                    headers={"Content-Type": "application/json"},
                ) as response:
                    if not response.is_success:
                        return RemoteFailure(reason=f"HTTP {response.status_code}")
                    for chunk in response.iter_bytes():
                        chunks.append(chunk)
                        if monotonic() > deadline:
                            return timed_out
        except httpx.TimeoutException:
            return timed_out
        except httpx.HTTPError as exc:
            return RemoteFailure(reason=f"{type(exc).__name__}: {exc}")

        try:
            body = json.loads(b"".join(chunks))
        except ValueError:
            return RemoteFailure(reason="response is not JSON")

        # null is how the server encodes NaN
        if body is None:
            return RemoteSuccess(value=NAN)
        if isinstance(body, bool) or not isinstance(body, (int, float)):
            return RemoteFailure(reason=f"response is not a number: {body!r}")
        try:
            value = float(body)
        except OverflowError:
            return RemoteFailure(reason="response does not fit in a float")
        return RemoteSuccess(value=value)

    def calculate(self, a: float, b: float, op: str) -> CalculationResult:
        """
        Compute ``a op b``, remotely when possible, locally otherwise.

        :param float a: First operand
        :param float b: Second operand
        :param str op: Operator symbol

        :return: Result and where it was computed
        :rtype: CalculationResult
        """
        request = CalculationRequest(a=a, b=b, op=op)

        if self.api_url is None:
            return self._compute_locally(request)

        outcome = self.fetch(request)
        if isinstance(outcome, RemoteSuccess):
            return CalculationResult(request=request, result=outcome.value, source="remote")

        logger.warning(f"🔌⚠️ Remote calculation failed ({outcome.reason}), computing {request} locally")
        return self._compute_locally(request)

    def _compute_locally(self, request: CalculationRequest) -> CalculationResult:
        result = Calculator.compute(request.a, request.b, request.op)
        return CalculationResult(request=request, result=result, source="local")

    def send_file(self, input_file: Path, output_file: Path) -> List[str]:
        """
        Compute every calculation of an operations file and write the results.

        Each line of the output is either ``<line> = <result>`` or
        ``<line> -> ERROR: <reason>`` for lines that cannot be parsed.

        :param Path input_file: Path to a .txt file or a supported archive
        :param Path output_file: Path where results will be written

        :return: Lines written to the output file
        :rtype: List[str]
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        content: str = load_operations(input_file)
        lines: List[str] = []

        with output_file.open("w", encoding="utf-8") as f_out:
            for line in OperationParser.parse_lines(content):
                try:
                    request = OperationParser.parse_line(line)
                except ValueError as exc:
                    logger.error(f"📄❌ Skipping invalid line {line!r}: {exc}")
                    lines.append(f"{line} -> ERROR: {exc}")
                else:
                    result = self.calculate(request.a, request.b, request.op)
                    lines.append(f"{line} = {format_result(result.result)}")
                f_out.write(lines[-1] + "\n")
                # Flushing keeps finished results on disk if the run is interrupted
                f_out.flush()

        logger.info(f"✉️ {len(lines)} result(s) written to {output_file}")
        return lines
