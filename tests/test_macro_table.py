"""Tests for macro definitions as data and the scoped macro table."""

import pytest

from autotex.errors import MacroScopeError
from autotex.macros import (
    BUILTIN_MACROS,
    MacroExpansion,
    MacroTable,
    ProcedureMacro,
    TemplateMacro,
    as_definition,
    builtin_macros,
    create_macro_table,
)


class TestAsDefinition:
    def test_string_becomes_template(self) -> None:
        assert as_definition("\\mathbb{R}") == TemplateMacro("\\mathbb{R}")

    def test_callable_becomes_procedure(self) -> None:
        def shout(context):
            return "!"

        definition = as_definition(shout)
        assert isinstance(definition, ProcedureMacro)
        assert definition.name == "shout"
        assert definition(None) == "!"

    def test_definitions_pass_through(self) -> None:
        expansion = MacroExpansion()
        assert as_definition(expansion) is expansion

    def test_rejects_other_values(self) -> None:
        with pytest.raises(TypeError, match="int"):
            as_definition(42)


class TestBuiltinCatalogue:
    def test_catalogue_is_read_only(self) -> None:
        catalogue = builtin_macros()
        with pytest.raises(TypeError):
            catalogue["\\new"] = TemplateMacro("x")  # type: ignore[index]

    @pytest.mark.parametrize(
        "name",
        ["\\dots", "\\char", "\\newextarrow", "\\tag@literal", "\\def", "\\bra", "\\upalpha"],
    )
    def test_catalogue_is_populated(self, name: str) -> None:
        assert name in builtin_macros()

    def test_procedures_know_their_names(self) -> None:
        builtin_macros()
        assert BUILTIN_MACROS["\\dots"].name == "\\dots"


class TestMacroTable:
    def test_seed_macros_are_coerced(self) -> None:
        table = MacroTable(macros={"\\RR": "\\mathbb{R}"})
        assert table.get("\\RR") == TemplateMacro("\\mathbb{R}")

    def test_falls_back_to_builtins(self) -> None:
        table = create_macro_table()
        assert table.has("\\quad")
        assert table.user_macros() == {}

    def test_missing_name(self) -> None:
        table = MacroTable()
        assert table.get("\\nope") is None
        assert "\\nope" not in table

    def test_local_definition_undone_at_group_end(self) -> None:
        table = MacroTable()
        table.begin_group()
        table.set("\\x", "1")
        assert table.has("\\x")
        table.end_group()
        assert not table.has("\\x")

    def test_shadowed_definition_restored(self) -> None:
        table = MacroTable(macros={"\\x": "outer"})
        table.begin_group()
        table.set("\\x", "inner")
        table.set("\\x", "inner again")
        table.end_group()
        assert table.get("\\x") == TemplateMacro("outer")

    def test_shadowed_builtin_restored(self) -> None:
        table = create_macro_table()
        original = table.get("\\quad")
        table.begin_group()
        table.set("\\quad", "Q")
        assert table.get("\\quad") == TemplateMacro("Q")
        table.end_group()
        assert table.get("\\quad") == original

    def test_global_definition_survives_groups(self) -> None:
        table = MacroTable()
        table.begin_group()
        table.begin_group()
        table.set("\\g", "1", global_=True)
        table.end_group()
        table.end_group()
        assert table.get("\\g") == TemplateMacro("1")

    def test_global_overrides_pending_local_restore(self) -> None:
        table = MacroTable()
        table.begin_group()
        table.set("\\x", "a")
        table.begin_group()
        table.set("\\x", "b", global_=True)
        table.end_group()
        assert table.get("\\x") == TemplateMacro("b")
        table.end_group()
        assert table.get("\\x") == TemplateMacro("b")

    def test_local_after_global_in_inner_group(self) -> None:
        table = MacroTable()
        table.begin_group()
        table.set("\\x", "global", global_=True)
        table.begin_group()
        table.set("\\x", "local")
        table.end_group()
        assert table.get("\\x") == TemplateMacro("global")
        table.end_group()
        assert table.get("\\x") == TemplateMacro("global")

    def test_none_undefines(self) -> None:
        table = MacroTable(macros={"\\x": "1"})
        table.set("\\x", None)
        assert not table.has("\\x")

    def test_undefine_inside_group_is_restored(self) -> None:
        table = MacroTable(macros={"\\x": "1"})
        table.begin_group()
        table.set("\\x", None)
        assert not table.has("\\x")
        table.end_group()
        assert table.get("\\x") == TemplateMacro("1")

    def test_unbalanced_end_group(self) -> None:
        table = MacroTable()
        with pytest.raises(MacroScopeError, match="Unbalanced"):
            table.end_group()

    def test_end_groups_closes_everything(self) -> None:
        table = MacroTable()
        for _ in range(3):
            table.begin_group()
            table.set("\\x", "1")
        assert table.depth == 3
        table.end_groups()
        assert table.depth == 0
        assert not table.has("\\x")

    def test_group_context_manager(self) -> None:
        table = MacroTable()
        with table.group() as inner:
            assert inner is table
            assert table.depth == 1
            table.set("\\x", "1")
            table.begin_group()  # left open on purpose
        assert table.depth == 0
        assert not table.has("\\x")

    def test_group_context_manager_on_error(self) -> None:
        table = MacroTable()
        with pytest.raises(RuntimeError), table.group():
            table.set("\\x", "1")
            raise RuntimeError("boom")
        assert table.depth == 0
        assert not table.has("\\x")

    def test_names_is_a_snapshot(self) -> None:
        table = create_macro_table({"\\RR": "R"})
        names = table.names
        table.set("\\later", "x")
        assert "\\RR" in names and "\\quad" in names
        assert "\\later" not in names
        assert len(table) == len(names) + 1

    def test_create_macro_table_reuses_table(self) -> None:
        table = create_macro_table()
        assert create_macro_table(table) is table

    def test_repr(self) -> None:
        table = MacroTable(macros={"\\a": "1"})
        table.begin_group()
        assert repr(table) == "MacroTable(user=1, depth=1)"
