"""
Interactive read loop for the Monkey language.

Each line typed at the prompt is run through a fresh Lexer (and Parser in
parse mode); nothing is evaluated.

Modes:
    tokens: Print every token of the line, then "Encountered EOF.".
    parse:  Print the parsed program in canonical form, followed by any errors.

Commands:
    :tokens / :parse   Switch mode.
    exit / quit        Leave the REPL (so do Ctrl-C and Ctrl-D).
"""

import io
import traceback

from monkey.monkey_constants import TokenKind
from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import parse

PROMPT = ">> "
MODES = ("tokens", "parse")


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def print_tokens(src: str) -> None:
    lexer = Lexer(src)
    while True:
        tok = lexer.next_token()
        if tok.kind is TokenKind.EOF:
            print("Encountered EOF.")
            break
        print(tok)


def print_program(src: str) -> None:
    result = parse(src)
    for stmt in result.program.statements:
        print(stmt)
    if not result.ok:
        print("[error] >>> parser errors:")
        for err in result.errors:
            print(f"\t{err}")


def start_repl(mode: str = "tokens") -> None:
    if mode not in MODES:
        raise ValueError(f"Unknown REPL mode: {mode!r} (expected one of {MODES})")

    print(f"Monkey REPL v.0.1 [mode={mode}]")
    print("Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = input(PROMPT).strip()
            if not src:
                continue
            if src in ("exit", "quit"):
                print("Exiting Monkey REPL.")
                return
            if src.startswith(":"):
                requested = src[1:]
                if requested in MODES:
                    mode = requested
                    print(f"[mode] >>> {mode}")
                else:
                    print(f"[error] >>> Unknown command: {src}")
                continue

            try:
                if mode == "tokens":
                    print_tokens(src)
                else:
                    print_program(src)
            except Exception:
                print_traceback()

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Monkey REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
