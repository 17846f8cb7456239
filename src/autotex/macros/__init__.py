"""Macro definitions, the built-in catalogue and the scoped macro table.

Key components:
- TemplateMacro / ProcedureMacro / MacroExpansion: macro definitions as data
- MacroExpansionContext: Protocol procedural macros are written against
- MacroTable: scoped, locked table of live definitions
- create_macro_table: table backed by the built-in catalogue

Example:
    >>> from autotex.macros import create_macro_table
    >>> table = create_macro_table({"\\\\RR": "\\\\mathbb{R}"})
    >>> "\\\\RR" in table
    True
"""

from autotex.macros.definitions import (
    MacroDefinition,
    MacroExpansion,
    MacroFunction,
    MacroResult,
    ProcedureMacro,
    TemplateMacro,
    as_definition,
)
from autotex.macros.numerals import (
    DIGIT_TO_NUMBER,
    CharCode,
    NumeralError,
    read_char_code,
)
from autotex.macros.protocol import MacroExpansionContext, Mode
from autotex.macros.registry import (
    BUILTIN_MACROS,
    MacroTable,
    builtin_macros,
    create_macro_table,
    define_macro,
    macro,
)

__all__ = [
    "BUILTIN_MACROS",
    "DIGIT_TO_NUMBER",
    "CharCode",
    "MacroDefinition",
    "MacroExpansion",
    "MacroExpansionContext",
    "MacroFunction",
    "MacroResult",
    "MacroTable",
    "Mode",
    "NumeralError",
    "ProcedureMacro",
    "TemplateMacro",
    "as_definition",
    "builtin_macros",
    "create_macro_table",
    "define_macro",
    "macro",
    "read_char_code",
]
