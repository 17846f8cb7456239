"""Built-in macro catalogue.

Importing this package registers every built-in macro into
autotex.macros.registry.BUILTIN_MACROS. Modules are imported in order;
a later module may override a name defined by an earlier one.

Modules:
- primitives: expansion control, ``\\char``, grouping aliases
- definitions: ``\\def``, ``\\gdef``, ``\\global``, ``\\newcommand`` family
- latex: latex.ltx and TeXbook aliases
- amsmath: ``\\dots`` family, spacing, ``\\tag``, mod family
- packages: mathtools, colonequals, braket, extpfeil, upgreek, ...
"""

from autotex.macros.builtins import (  # noqa: F401
    primitives,
    definitions,
    latex,
    amsmath,
    packages,
)
