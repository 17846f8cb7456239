"""Shared fixtures for autotex tests."""

import pytest

from autotex.expander import MacroExpander
from autotex.macros import MacroTable, create_macro_table
from autotex.tokens import tokens_to_text


@pytest.fixture
def table() -> MacroTable:
    """Fresh macro table over the built-in catalogue."""
    return create_macro_table()


def expand_text(source: str, table: MacroTable | None = None, **kwargs) -> str:
    """Fully expand source and join the result."""
    table = table if table is not None else create_macro_table()
    with table.group():
        return tokens_to_text(MacroExpander(source, table, **kwargs).expand())


def expand_once_text(source: str, table: MacroTable | None = None) -> str:
    """Expand the first token of source one step and join what follows."""
    expander = MacroExpander(source, table if table is not None else create_macro_table())
    expander.expand_once()
    tokens = []
    while not (token := expander.pop_token()).is_eof:
        tokens.append(token)
    return tokens_to_text(tokens)
