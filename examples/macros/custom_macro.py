"""Add your own macros: a template with define_macro, a procedure with @macro."""

from autotex import expand
from autotex.macros import define_macro, macro
from autotex.tokens import tokens_to_string
from autotex.utils import enable_logging

enable_logging()

define_macro("\\norm", "\\left\\lVert#1\\right\\rVert")


@macro("\\twice")
def twice(context) -> str:
    """\\twice{x} expands to xx."""
    (arg,) = context.consume_args(1)
    body = tokens_to_string(arg)
    return body + body


print(expand("\\norm{v}"))
print(expand("\\twice{ab}"))
print(expand("\\newextarrow{\\xto}{5,5}{0x2192}\\xto{f}"))
