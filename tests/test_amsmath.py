"""Tests for the amsmath built-ins: dots, spacing, tags and mod."""

import pytest

from autotex.errors import ParseError, ParseErrorKind
from autotex.macros import MacroTable
from autotex.macros.builtins.amsmath import (
    DOTS_BY_TOKEN,
    SPACE_AFTER_DOTS,
    TAG_MACRO,
    select_dots,
)
from autotex.macros.symbols import BIN, BINARY_OPERATORS, REL, RELATIONS, symbol_group

from conftest import expand_once_text, expand_text


class TestSelectDots:
    @pytest.mark.parametrize(
        ("following", "expected"),
        [
            (",", "\\dotsc"),
            ("+", "\\dotsb"),
            ("=", "\\dotsb"),
            ("\\not", "\\dotsb"),
            ("\\notin", "\\dotsb"),
            ("\\times", "\\dotsb"),
            ("\\leq", "\\dotsb"),
            ("\\sum", "\\dotsb"),
            ("\\int", "\\dotsi"),
            ("\\DOTSX", "\\dotsx"),
            ("x", "\\dotso"),
            (")", "\\dotso"),
            ("EOF", "\\dotso"),
        ],
    )
    def test_variant(self, following: str, expected: str) -> None:
        assert select_dots(following) == expected

    @pytest.mark.parametrize(
        "symbol",
        [
            "\\triangleq",
            "\\lt",
            "\\gt",
            "\\nrightarrow",
            "\\leftrightarrows",
            "\\bumpeq",
            "\\therefore",
            "\\precsim",
            "\\succnapprox",
            "\\ntrianglelefteq",
            "\\twoheadrightarrow",
            "\\circeq",
            "\\boxplus",
            "\\barwedge",
        ],
    )
    def test_amssymb_relations_and_operators(self, symbol: str) -> None:
        assert select_dots(symbol) == "\\dotsb"

    def test_relation_through_expansion(self) -> None:
        assert expand_once_text("\\dots\\precsim") == "\\dotsb\\precsim"

    def test_symbol_groups_are_disjoint(self) -> None:
        assert BINARY_OPERATORS.isdisjoint(RELATIONS)
        assert symbol_group("\\bumpeq") == REL
        assert symbol_group("\\dotplus") == BIN
        assert symbol_group("x") is None

    def test_table_values(self) -> None:
        assert set(DOTS_BY_TOKEN.values()) == {"\\dotsc", "\\dotsb", "\\dotsi", "\\dotsx"}


class TestDots:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("\\dots+", "\\dotsb+"),
            ("\\dots,", "\\dotsc,"),
            ("\\dots x", "\\dotso x"),
            ("\\dots\\int", "\\dotsi\\int"),
            ("\\dots", "\\dotso"),
        ],
    )
    def test_selection_step(self, source: str, expected: str) -> None:
        assert expand_once_text(source) == expected

    def test_looks_through_macros(self) -> None:
        # \iff starts with \DOTSB once expanded
        assert expand_once_text("\\dots\\iff") == "\\dotsb\\DOTSB\\;\\Longleftrightarrow\\;"

    def test_looks_through_user_macros(self, table: MacroTable) -> None:
        table.set("\\plus", "+")
        assert expand_once_text("\\dots\\plus", table) == "\\dotsb+"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("\\dotso)", "\\ldots\\,)"),
            ("\\dotso;", "\\ldots\\,;"),
            ("\\dotso,", "\\ldots\\,,"),
            ("\\dotso x", "\\ldots x"),
            ("\\dotsc;", "\\ldots\\,;"),
            ("\\dotsc,", "\\ldots,"),
            ("\\cdots\\right", "\\@cdots\\,\\right"),
            ("\\cdots x", "\\@cdots x"),
        ],
    )
    def test_space_after_dots(self, source: str, expected: str) -> None:
        assert expand_once_text(source) == expected

    def test_lookahead_not_consumed(self) -> None:
        assert expand_once_text("\\dotso\\}") == "\\ldots\\,\\}"

    def test_space_set(self) -> None:
        assert {")", "]", "\\}", "\\right", "\\Biggr", "$", ";", ".", ","} <= SPACE_AFTER_DOTS

    def test_full_expansion_before_letter(self) -> None:
        assert expand_text("a\\dots z") == "a\\ldots z"

    def test_full_expansion_before_comma(self) -> None:
        assert expand_text("a,\\dots,z") == "a,\\ldots,z"

    def test_full_expansion_before_plus(self) -> None:
        assert expand_text("a\\dots+z") == "a\\@cdots+z"

    def test_full_expansion_before_integral(self) -> None:
        assert expand_text("\\dots\\int") == "\\mskip-3mu\\relax\\@cdots\\int"


class TestSpacing:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("\\,", "\\mskip+3mu\\relax"),
            ("\\thinspace", "\\mskip+3mu\\relax"),
            ("\\:", "\\mskip+4mu\\relax"),
            ("\\medspace", "\\mskip+4mu\\relax"),
            ("\\;", "\\mskip+5mu\\relax"),
            ("\\!", "\\mskip-3mu\\relax"),
            ("\\negmedspace", "\\mskip-4mu\\relax"),
            ("\\negthickspace", "\\mskip-5mu\\relax"),
            ("\\>", "\\mskip{4mu}"),
            ("\\quad", "\\hskip1em\\relax"),
            ("\\qquad", "\\hskip2em\\relax"),
            ("\\enskip", "\\hskip.5em\\relax"),
        ],
    )
    def test_math_mode(self, source: str, expected: str) -> None:
        assert expand_text(source) == expected

    def test_text_mode_uses_kern(self) -> None:
        assert expand_text("\\,", mode="text") == "\\kern+.1667em\\relax"
        assert expand_text("\\negthickspace", mode="text") == "\\kern-.277em\\relax"


class TestTag:
    def test_tag_defines_df_tag(self, table: MacroTable) -> None:
        with table.group():
            expand_text("x\\tag{1}", table)
            assert table.has(TAG_MACRO)
        # \gdef outlives the group
        assert expand_text(TAG_MACRO, table) == "\\text{({1})}"

    def test_starred_tag_is_literal(self, table: MacroTable) -> None:
        expand_text("\\tag*{A}", table)
        assert expand_text(TAG_MACRO, table) == "\\text{A}"

    def test_duplicate_tag(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            expand_text("\\tag{1}\\tag{2}")
        assert exc_info.value.kind is ParseErrorKind.DUPLICATE_TAG
        assert exc_info.value.message == "Multiple \\tag"

    def test_duplicate_literal_tag(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            expand_text("\\tag@literal{a}\\tag@literal{b}")
        assert exc_info.value.kind is ParseErrorKind.DUPLICATE_TAG

    def test_tag_expands_to_nothing(self) -> None:
        assert expand_text("x\\tag{1}y") == "xy"


class TestOtherAmsmath:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("\\pmb{x}", "\\mathbf{x}"),
            ("\\boxed{x}", "\\fbox{$\\displaystyle{x}$}"),
            ("\\substack{a}", "\\begin{subarray}{c}a\\end{subarray}"),
            ("\\pmod{p}", "\\allowbreak\\mathchoice{\\mkern18mu}{\\mkern8mu}{\\mkern8mu}"
             "{\\mkern8mu}({\\rm mod}\\mkern6mup)"),
            ("\\operatorname{sgn}", "\\operatorname@{sgn}"),
            ("\\operatorname*{sgn}", "\\operatornamewithlimits{sgn}"),
            ("\\DOTSB", "\\relax"),
        ],
    )
    def test_alias(self, source: str, expected: str) -> None:
        assert expand_text(source) == expected

    def test_implies(self) -> None:
        assert expand_text("\\implies") == "\\relax\\mskip+5mu\\relax\\Longrightarrow\\mskip+5mu\\relax"
