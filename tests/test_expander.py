"""Tests for the macro expander."""

import pytest

from autotex.errors import ParseError, ParseErrorKind
from autotex.expander import DEFAULT_MAX_EXPAND, MacroExpander, substitute_args
from autotex.lexer import tokenize
from autotex.macros import MacroExpansion, MacroExpansionContext, MacroTable
from autotex.tokens import Token

from conftest import expand_text


class TestReading:
    def test_future_does_not_consume(self, table: MacroTable) -> None:
        expander = MacroExpander("ab", table)
        assert expander.future() == Token("a")
        assert expander.pop_token() == Token("a")
        assert expander.pop_token() == Token("b")

    def test_pop_token_at_end_returns_eof(self, table: MacroTable) -> None:
        expander = MacroExpander("", table)
        assert expander.pop_token().is_eof
        assert expander.pop_token().is_eof

    def test_push_tokens_keeps_order(self, table: MacroTable) -> None:
        expander = MacroExpander("c", table)
        expander.push_tokens([Token("a"), Token("b")])
        assert [expander.pop_token().text for _ in range(3)] == ["a", "b", "c"]

    def test_consume_spaces(self, table: MacroTable) -> None:
        expander = MacroExpander("   x", table)
        expander.consume_spaces()
        assert expander.future() == Token("x")

    def test_feed_replaces_input(self, table: MacroTable) -> None:
        expander = MacroExpander("abc", table)
        expander.feed("z")
        assert expander.pop_token() == Token("z")

    def test_is_a_context(self, table: MacroTable) -> None:
        assert isinstance(MacroExpander("", table), MacroExpansionContext)


class TestArguments:
    def test_single_token_argument(self, table: MacroTable) -> None:
        assert MacroExpander("ab", table).consume_arg() == [Token("a")]

    def test_group_loses_outer_braces(self, table: MacroTable) -> None:
        arg = MacroExpander("{a{b}c}d", table).consume_arg()
        assert [t.text for t in arg] == ["a", "{", "b", "}", "c"]

    def test_leading_spaces_skipped(self, table: MacroTable) -> None:
        assert MacroExpander("  {x}", table).consume_arg() == [Token("x")]

    def test_consume_args_in_order(self, table: MacroTable) -> None:
        args = MacroExpander("{1}2{3}", table).consume_args(3)
        assert args == [[Token("1")], [Token("2")], [Token("3")]]

    def test_missing_argument(self, table: MacroTable) -> None:
        with pytest.raises(ParseError) as exc_info:
            MacroExpander("{abc", table).consume_arg()
        assert exc_info.value.kind is ParseErrorKind.MISSING_ARGUMENT

    def test_argument_at_end_of_input(self, table: MacroTable) -> None:
        with pytest.raises(ParseError) as exc_info:
            MacroExpander("", table).consume_args(1)
        assert exc_info.value.kind is ParseErrorKind.MISSING_ARGUMENT

    def test_extra_close_brace(self, table: MacroTable) -> None:
        with pytest.raises(ParseError) as exc_info:
            MacroExpander("}", table).consume_arg()
        assert exc_info.value.kind is ParseErrorKind.UNBALANCED_BRACES
        assert str(exc_info.value) == "Extra } at '}'"


class TestSubstituteArgs:
    def test_placeholders(self) -> None:
        result = substitute_args(tokenize("#2-#1"), [[Token("a")], [Token("b")]])
        assert [t.text for t in result] == ["b", "-", "a"]

    def test_escaped_hash(self) -> None:
        result = substitute_args(tokenize("a##b"), [])
        assert [t.text for t in result] == ["a", "#", "b"]

    @pytest.mark.parametrize(("body", "nargs"), [("#", 0), ("#2", 1), ("#x", 1)])
    def test_invalid_placeholder(self, body: str, nargs: int) -> None:
        with pytest.raises(ParseError) as exc_info:
            substitute_args(tokenize(body), [[Token("a")]] * nargs)
        assert exc_info.value.kind is ParseErrorKind.INVALID_PLACEHOLDER


class TestExpansion:
    def test_template_macro(self) -> None:
        table = MacroTable(macros={"\\RR": "\\mathbb{R}"})
        assert expand_text("x\\in\\RR", table) == "x\\in\\mathbb{R}"

    def test_template_with_arguments(self) -> None:
        table = MacroTable(macros={"\\pair": "(#1,#2)"})
        assert expand_text("\\pair{a}b", table) == "(a,b)"

    def test_nested_expansion(self) -> None:
        table = MacroTable(macros={"\\a": "\\b\\b", "\\b": "x"})
        assert expand_text("\\a", table) == "xx"

    def test_procedure_returning_string(self) -> None:
        table = MacroTable(macros={"\\two": lambda context: "2"})
        assert expand_text("\\two+\\two", table) == "2+2"

    def test_procedure_returning_expansion(self) -> None:
        def swap(context):
            first, second = context.consume_args(2)
            return MacroExpansion.of(second + first)

        table = MacroTable(macros={"\\swap": swap})
        assert expand_text("\\swap{ab}{cd}", table) == "cdab"

    def test_undefined_control_sequence_kept(self, table: MacroTable) -> None:
        assert expand_text("\\frac{a}{b}", table) == "\\frac{a}{b}"

    def test_active_character_expands(self, table: MacroTable) -> None:
        assert expand_text("a~b", table) == "a\\nobreakspace b"

    def test_single_character_with_catcode_does_not_expand(self) -> None:
        # % is a comment character, never a macro name
        table = MacroTable(macros={"%": "pct"})
        expander = MacroExpander("x", table)
        assert not expander.is_expandable("y")
        assert expander._get_expansion("%") is None

    def test_other_single_character_expands(self) -> None:
        table = MacroTable(macros={"x": "y"})
        assert expand_text("x", table) == "y"

    def test_unexpandable_definition(self) -> None:
        table = MacroTable(
            macros={"\\prim": MacroExpansion((Token("P"),), unexpandable=True)}
        )
        expander = MacroExpander("\\prim", table)
        assert not expander.is_expandable("\\prim")
        assert not expander.expand_once(expandable_only=True)
        assert expander.expand_once() is True
        assert expander.pop_token() == Token("P")

    def test_expand_once_reports_no_macro(self, table: MacroTable) -> None:
        expander = MacroExpander("x", table)
        assert expander.expand_once() is False
        assert expander.future() == Token("x")

    def test_expand_after_future(self) -> None:
        table = MacroTable(macros={"\\a": "\\b", "\\b": "c"})
        assert MacroExpander("\\a", table).expand_after_future() == Token("\\b")

    def test_expand_macro_as_text(self) -> None:
        table = MacroTable(macros={"\\a": "\\alpha b"})
        expander = MacroExpander("", table)
        assert expander.expand_macro_as_text("\\a") == "\\alphab"
        assert expander.expand_macro_as_text("\\undefined") is None

    def test_mode_switch(self, table: MacroTable) -> None:
        expander = MacroExpander("\\TextOrMath{t}{m}", table)
        expander.switch_mode("text")
        assert [t.text for t in expander.expand()] == ["t"]

    def test_expansion_count(self) -> None:
        table = MacroTable(macros={"\\a": "\\b", "\\b": "c"})
        expander = MacroExpander("\\a", table)
        expander.expand()
        assert expander.expansion_count == 2


class TestExpansionLimit:
    def test_default_limit(self) -> None:
        assert DEFAULT_MAX_EXPAND == 1000

    def test_self_referential_macro_stops(self) -> None:
        table = MacroTable(macros={"\\loop": "\\loop"})
        with pytest.raises(ParseError) as exc_info:
            expand_text("\\loop", table)
        assert exc_info.value.kind is ParseErrorKind.TOO_MANY_EXPANSIONS

    def test_recursive_def_stops(self, table: MacroTable) -> None:
        with pytest.raises(ParseError) as exc_info:
            expand_text("\\def\\a{x\\a}\\a", table, max_expand=50)
        assert exc_info.value.kind is ParseErrorKind.TOO_MANY_EXPANSIONS

    def test_custom_limit(self) -> None:
        table = MacroTable(macros={"\\a": "\\b", "\\b": "\\c", "\\c": "d"})
        assert expand_text("\\a", table, max_expand=3) == "d"
        with pytest.raises(ParseError):
            expand_text("\\a", table, max_expand=2)
