"""Aliases from mathtools, colonequals, amsopn, statmath, braket, extpfeil,
upgreek and chemstyle."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from autotex.errors import ParseError, ParseErrorKind
from autotex.macros.registry import define_macro, macro
from autotex.tokens import tokens_to_string
from autotex.utils.logger import get_logger

if TYPE_CHECKING:
    from autotex.macros.protocol import MacroExpansionContext

logger = get_logger(__name__)

# mathtools.sty

define_macro("\\prescript", "\\pres@cript{_{#1}^{#2}}{}{#3}")

# \providecommand\ordinarycolon{:}
define_macro("\\ordinarycolon", ":")
# \def\vcentcolon{\mathrel{\mathop\ordinarycolon}}
define_macro("\\vcentcolon", "\\mathrel{\\mathop\\ordinarycolon}")
# \providecommand*\coloneq{\vcentcolon\mathrel{\mkern-1.2mu}\mathrel{-}}
define_macro("\\coloneq", '\\mathop{\\char"3a\\char"2212}')
# \providecommand*\Coloneq{\dblcolon\mathrel{\mkern-1.2mu}\mathrel{-}}
define_macro("\\Coloneq", '\\mathop{\\char"2237\\char"2212}')
# \providecommand*\Eqqcolon{=\mathrel{\mkern-1.2mu}\dblcolon}
define_macro("\\Eqqcolon", '\\mathop{\\char"3d\\char"2237}')
# \providecommand*\Eqcolon{\mathrel{-}\mathrel{\mkern-1.2mu}\dblcolon}
define_macro("\\Eqcolon", '\\mathop{\\char"2212\\char"2237}')
# \providecommand*\colonapprox{\vcentcolon\mathrel{\mkern-1.2mu}\approx}
define_macro("\\colonapprox", '\\mathop{\\char"3a\\char"2248}')
# \providecommand*\Colonapprox{\dblcolon\mathrel{\mkern-1.2mu}\approx}
define_macro("\\Colonapprox", '\\mathop{\\char"2237\\char"2248}')
# \providecommand*\colonsim{\vcentcolon\mathrel{\mkern-1.2mu}\sim}
define_macro("\\colonsim", '\\mathop{\\char"3a\\char"223c}')
# \providecommand*\Colonsim{\dblcolon\mathrel{\mkern-1.2mu}\sim}
define_macro("\\Colonsim", '\\mathop{\\char"2237\\char"223c}')

# colonequals.sty: alternate names for the mathtools macros
define_macro("\\ratio", "\\vcentcolon")
define_macro("\\coloncolon", "\\dblcolon")
define_macro("\\colonequals", "\\coloneqq")
define_macro("\\coloncolonequals", "\\Coloneqq")
define_macro("\\equalscolon", "\\eqqcolon")
define_macro("\\equalscoloncolon", "\\Eqqcolon")
define_macro("\\colonminus", "\\coloneq")
define_macro("\\coloncolonminus", "\\Coloneq")
define_macro("\\minuscolon", "\\eqcolon")
define_macro("\\minuscoloncolon", "\\Eqcolon")
# \colonapprox and \colonsim have the same name in both packages
define_macro("\\coloncolonapprox", "\\Colonapprox")
define_macro("\\coloncolonsim", "\\Colonsim")

# newtxmath, pxfonts and txfonts
define_macro("\\notni", "\\mathrel{\\char`∌}")
define_macro("\\limsup", "\\DOTSB\\operatorname*{lim\\,sup}")
define_macro("\\liminf", "\\DOTSB\\operatorname*{lim\\,inf}")

# amsopn.sty
define_macro("\\injlim", "\\DOTSB\\operatorname*{inj\\,lim}")
define_macro("\\projlim", "\\DOTSB\\operatorname*{proj\\,lim}")
define_macro("\\varlimsup", "\\DOTSB\\operatorname*{\\overline{\\text{lim}}}")
define_macro("\\varliminf", "\\DOTSB\\operatorname*{\\underline{\\text{lim}}}")
define_macro("\\varinjlim", "\\DOTSB\\operatorname*{\\underrightarrow{\\text{lim}}}")
define_macro("\\varprojlim", "\\DOTSB\\operatorname*{\\underleftarrow{\\text{lim}}}")

# statmath.sty
define_macro("\\argmin", "\\DOTSB\\operatorname*{arg\\,min}")
define_macro("\\argmax", "\\DOTSB\\operatorname*{arg\\,max}")
define_macro("\\plim", "\\DOTSB\\mathop{\\operatorname{plim}}\\limits")

# braket.sty
define_macro("\\bra", "\\mathinner{\\langle{#1}|}")
define_macro("\\ket", "\\mathinner{|{#1}\\rangle}")
define_macro("\\braket", "\\mathinner{\\langle{#1}\\rangle}")
define_macro("\\Bra", "\\left\\langle#1\\right|")
define_macro("\\Ket", "\\left|#1\\right\\rangle")

# actuarialangle.dtx
define_macro("\\angln", "{\\angl n}")

# =============================================================================
# extpfeil: \newextarrow{\name}{lspace,rspace}{charcode}, spacing in mu.
# Unlike extpfeil, there is no optional lower note.
# =============================================================================

# Number literals as a JavaScript Number() call reads them
_NUMBER_RE = re.compile(
    r"""
    [+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?
    | 0[xX][0-9a-fA-F]+
    | 0[oO][0-7]+
    | 0[bB][01]+
    """,
    re.VERBOSE,
)


def is_number(text: str) -> bool:
    """True if text is a decimal, hex, octal or binary number literal.

    Surrounding whitespace is ignored; an empty string is not a number.
    """
    return _NUMBER_RE.fullmatch(text.strip()) is not None


@macro("\\newextarrow")
def new_ext_arrow(context: MacroExpansionContext) -> str:
    """Define an extensible arrow macro in the live table.

    Raises:
        ParseError: If the spacing or the character code is not numeric
    """
    name_arg, padding_arg, char_arg = context.consume_args(3)
    if not name_arg:
        raise ParseError(
            "\\newextarrow needs an arrow name",
            ParseErrorKind.INVALID_DEFINITION,
        )
    name = name_arg[0].text

    padding = tokens_to_string(padding_arg).split(",")
    if len(padding) != 2 or not all(is_number(part) for part in padding):
        raise ParseError(
            "Invalid lspace,rspace in \\newextarrow.",
            ParseErrorKind.INVALID_ARROW_SPACING,
        )
    char_code = tokens_to_string(char_arg)
    if not is_number(char_code):
        raise ParseError(
            "Invalid Unicode character code in \\newextarrow.",
            ParseErrorKind.INVALID_ARROW_CHAR_CODE,
        )

    lspace, rspace = padding
    context.macros.set(
        name,
        f"\\ext@arrow{{{lspace}}}{{{rspace}}}{{{char_code}}}{{#1}}",
        global_=True,
    )
    logger.debug("Defined extensible arrow %s (char code %s)", name, char_code)
    return ""


# upgreek.dtx
for _letter in (
    "alpha",
    "beta",
    "gamma",
    "delta",
    "epsilon",
    "zeta",
    "eta",
    "theta",
    "iota",
    "kappa",
    "lambda",
    "mu",
    "nu",
    "xi",
    "omicron",
    "pi",
    "rho",
    "sigma",
    "tau",
    "upsilon",
    "phi",
    "chi",
    "psi",
    "omega",
):
    define_macro(f"\\up{_letter}", f"\\up@greek{{\\{_letter}}}")
del _letter

# chemstyle
define_macro("\\standardstate", "{\\tiny\\char`⦵}")
