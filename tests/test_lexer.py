"""Tests for the TeX tokenizer and token helpers."""

import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from autotex.lexer import ACTIVE_CATCODE, DEFAULT_CATCODES, Lexer, tokenize
from autotex.tokens import EOF_TOKEN, Token, tokens_to_string, tokens_to_text


def texts(source: str) -> list[str]:
    return [token.text for token in tokenize(source)]


class TestLexer:
    def test_control_word_and_braces(self) -> None:
        assert texts("\\frac{a}{b}") == ["\\frac", "{", "a", "}", "{", "b", "}"]

    def test_control_word_swallows_whitespace(self) -> None:
        assert texts("\\alpha  \n x") == ["\\alpha", "x"]

    def test_at_sign_is_a_letter(self) -> None:
        assert texts("\\@ifnextchar*") == ["\\@ifnextchar", "*"]

    def test_whitespace_collapses(self) -> None:
        assert texts("a \t\n b") == ["a", " ", "b"]

    def test_control_symbol(self) -> None:
        assert texts("\\%\\,\\{") == ["\\%", "\\,", "\\{"]

    def test_control_symbol_keeps_following_space(self) -> None:
        assert texts("\\, x") == ["\\,", " ", "x"]

    def test_control_space(self) -> None:
        assert texts("a\\ b") == ["a", "\\ ", "b"]

    def test_combining_marks_stay_with_base(self) -> None:
        assert texts("e\u0301x") == ["e\u0301", "x"]

    def test_comment_skipped_to_end_of_line(self) -> None:
        assert texts("a% note\nb") == ["a", "b"]

    def test_unterminated_comment_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="autotex.lexer"):
            assert texts("a% trailing") == ["a"]
        assert "Comment has no terminating newline" in caplog.text

    def test_escaped_percent_is_not_a_comment(self) -> None:
        assert texts("50\\%") == ["5", "0", "\\%"]

    def test_eof_repeats(self) -> None:
        lexer = Lexer("x")
        assert lexer.lex() == Token("x")
        assert lexer.lex().is_eof
        assert lexer.lex() is EOF_TOKEN

    def test_default_catcodes(self) -> None:
        assert DEFAULT_CATCODES["~"] == ACTIVE_CATCODE
        assert Lexer("").catcodes == DEFAULT_CATCODES

    def test_catcodes_are_per_instance(self) -> None:
        lexer = Lexer("")
        lexer.catcodes["@"] = ACTIVE_CATCODE
        assert "@" not in Lexer("").catcodes

    def test_custom_catcodes(self) -> None:
        assert [t.text for t in Lexer("a%b", catcodes={}).tokenize()] == ["a", "%", "b"]

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_never_yields_eof_or_empty_tokens(self, source: str) -> None:
        for token in tokenize(source):
            assert token.text
            assert not token.is_eof


class TestToken:
    def test_flags_default_off(self) -> None:
        token = Token("\\foo")
        assert not token.noexpand
        assert not token.treat_as_relax

    def test_with_noexpand_returns_copy(self) -> None:
        token = Token("\\foo")
        marked = token.with_noexpand()
        assert marked.noexpand and marked.treat_as_relax
        assert not token.noexpand

    def test_plain_clears_flags(self) -> None:
        marked = Token("\\foo").with_noexpand()
        assert marked.plain() == Token("\\foo")
        plain = Token("x")
        assert plain.plain() is plain

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("\\alpha", True), ("\\,", True), ("\\", False), ("a", False)],
    )
    def test_is_control_sequence(self, text: str, expected: bool) -> None:
        assert Token(text).is_control_sequence is expected

    def test_is_space(self) -> None:
        assert Token(" ").is_space
        assert not Token("\\ ").is_space

    def test_repr(self) -> None:
        assert repr(Token("x")) == "Token('x')"
        assert repr(Token("x").with_noexpand()) == "Token('x', noexpand)"


class TestTokensToText:
    def test_space_after_control_word_before_letter(self) -> None:
        assert tokens_to_text(tokenize("\\alpha b")) == "\\alpha b"

    def test_no_space_before_non_letter(self) -> None:
        assert tokens_to_text(tokenize("\\alpha{b}")) == "\\alpha{b}"

    def test_control_symbol_needs_no_space(self) -> None:
        assert tokens_to_text(tokenize("\\,b")) == "\\,b"

    @pytest.mark.parametrize(
        "source",
        ["\\frac{a}{b}", "x^2 + y^2", "\\left( \\sum_{i=1}^n i \\right)", "a\\,b"],
    )
    def test_reproduces_normalized_source(self, source: str) -> None:
        assert tokens_to_text(tokenize(source)) == source

    def test_tokens_to_string_is_verbatim(self) -> None:
        assert tokens_to_string(tokenize("\\alpha b")) == "\\alphab"
