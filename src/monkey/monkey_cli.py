"""
Monkey CLI Entrypoint.

Runs the Monkey front-end over a `.monkey` file or an inline string and prints
the result. Nothing is evaluated.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey -s "5 != 5;" --tokens
    monkey hello.monkey --json
    monkey --repl --mode parse

Exit status is 1 when the source has parse errors, 0 otherwise.
"""

import argparse
import json
import logging
import sys

from monkey.monkey_lexer import tokenize
from monkey.monkey_parser import parse

logger = logging.getLogger(__name__)


def run_monkey(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    as_json: bool = False,
) -> int:
    """
    Run the Monkey front-end: lex, parse, and print tokens or the program.

    Args:
        source (str): The Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        tokens (bool): If True, prints the token stream instead of the program.
        as_json (bool): If True, prints the program as JSON instead of canonical text.

    Returns:
        int: 1 if parsing recorded errors, 0 otherwise.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    if not is_string:
        logger.debug("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    if tokens:
        for tok in tokenize(source):
            print(f"{tok.line}:{tok.col}\t{tok.kind}\t{tok.literal!r}")
        return 0

    result = parse(source)
    logger.debug(
        "parsed %d statement(s), %d error(s)",
        len(result.program.statements),
        len(result.errors),
    )

    if as_json:
        print(json.dumps(result.program.to_dict(), indent=2))
    else:
        print(result.program)

    for err in result.errors:
        print(f"error: {err}", file=sys.stderr)
    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Monkey CLI.

    Launches the REPL if no source is given or `--repl` is specified,
    otherwise runs the front-end over the source.
    """
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "-t", "--tokens", action="store_true", help="Print the token stream"
    )
    output.add_argument(
        "-j", "--json", dest="as_json", action="store_true", help="Print the AST as JSON"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch the interactive REPL"
    )
    parser.add_argument(
        "--mode",
        choices=("tokens", "parse"),
        default="tokens",
        help="Initial REPL mode (default: tokens)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(mode=args.mode)
        return 0

    return run_monkey(
        source=args.source,
        is_string=args.string,
        tokens=args.tokens,
        as_json=args.as_json,
    )


if __name__ == "__main__":
    sys.exit(main())
