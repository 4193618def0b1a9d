"""
Command-line entrypoint.

Subcommands:
- serve: run the calculator HTTP server
- calc A OP B: compute one calculation, through the server when API_URL is set
- batch FILE: compute every calculation of an operations file or archive

Configuration comes from the environment (see Settings.from_env).
"""

import argparse
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, FilePath, ValidationError
import uvicorn

from calculator_client_server.client.client import CalculatorClient, parse_operand
from calculator_client_server.common.config import Settings
from calculator_client_server.common.engine import format_result
from calculator_client_server.common.logger import configure_logging, logger
from calculator_client_server.server.app import create_app


class CalcArgs(BaseModel):
    """
    Pydantic model used to validate the ``calc`` arguments.

    Attributes
    ----------
    a, b : float
        Operands, rejected when missing
    op : str
        Operator symbol
    """

    a: float
    op: str
    b: float


class BatchArgs(BaseModel):
    """
    Pydantic model used to validate the ``batch`` arguments.

    Attributes
    ----------
    file_path : FilePath
        Path to the file containing calculations.
    """

    file_path: FilePath


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with its three subcommands."""
    parser = argparse.ArgumentParser(description="Calculator client/server")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Run the calculator HTTP server")

    calc = subparsers.add_parser("calc", help="Compute a single calculation")
    calc.add_argument("a", help="First operand")
    calc.add_argument("op", help="Operator: + - * / ^")
    calc.add_argument("b", help="Second operand")

    batch = subparsers.add_parser("batch", help="Compute every calculation of an operations file")
    batch.add_argument("file_path", help="Path to a .txt file or a .zip, .tar.xz or .7z archive")

    return parser


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path for an input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations.7z
    output: resources/operations_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    stem = input_path.name
    for suffix in input_path.suffixes:
        stem = stem[: -len(suffix)]
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def run_server(settings: Settings) -> None:
    """Start the calculator server and block until it stops."""
    logger.info(f"🖥️ Starting server on {settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def run_calc(parser: argparse.ArgumentParser, args: argparse.Namespace, settings: Settings) -> None:
    """Validate the operands, compute, and print the result."""
    try:
        calc_args = CalcArgs(a=parse_operand(args.a, "a"), op=args.op, b=parse_operand(args.b, "b"))
    except ValueError as exc:
        # MissingOperandError and pydantic ValidationError are both ValueErrors
        parser.error(str(exc))

    client = CalculatorClient.from_settings(settings)
    result = client.calculate(calc_args.a, calc_args.b, calc_args.op)
    print(format_result(result.result))


def run_batch(parser: argparse.ArgumentParser, args: argparse.Namespace, settings: Settings) -> Path:
    """Compute an operations file and return the results path."""
    try:
        batch_args = BatchArgs(file_path=args.file_path)
    except ValidationError as exc:
        parser.error(str(exc))

    input_path: Path = Path(batch_args.file_path)
    output_path: Path = build_output_path(input_path)

    client = CalculatorClient.from_settings(settings)
    try:
        client.send_file(input_path, output_path)
    except ValueError as exc:
        parser.error(str(exc))

    print(output_path)
    return output_path


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main function used by the console script.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        parser.error(f"Invalid configuration: {exc}")

    configure_logging(settings.log_level)

    if args.command == "serve":
        run_server(settings)
    elif args.command == "calc":
        run_calc(parser, args, settings)
    else:
        run_batch(parser, args, settings)


if __name__ == "__main__":
    main()
