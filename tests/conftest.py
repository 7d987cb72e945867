from collections.abc import Callable

import pytest

from monkey.monkey_ast import Program
from monkey.monkey_parser import parse


@pytest.fixture  # type: ignore[misc]
def parse_ok() -> Callable[[str], Program]:
    """Parse source that must be error-free and return its Program."""

    def _parse(source: str) -> Program:
        result = parse(source)
        assert result.errors == [], [str(e) for e in result.errors]
        return result.program

    return _parse
