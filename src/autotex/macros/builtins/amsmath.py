"""amsmath.sty: automatic ``\\dots``, spacing, ``\\tag`` and the mod family.

``\\dots`` follows amsmath's ``\\mdots@@``: it looks at the (expanded) next
token and picks ``\\dotsc`` before commas, ``\\dotsb`` before binary
operators and relations, ``\\dotsi`` before integrals and ``\\dotso``
otherwise. ``\\dotso``, ``\\dotsc`` and ``\\cdots`` then add a thin space
when a closing delimiter or punctuation follows.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from autotex.errors import ParseError, ParseErrorKind
from autotex.macros.registry import define_macro, macro
from autotex.macros.symbols import BIN, REL, symbol_group

if TYPE_CHECKING:
    from autotex.macros.protocol import MacroExpansionContext

# Sentinel macro holding the current formula's tag
TAG_MACRO = "\\df@tag"

define_macro("\\operatorname", "\\@ifstar\\operatornamewithlimits\\operatorname@")

# \newcommand{\substack}[1]{\subarray{c}#1\endsubarray}
define_macro("\\substack", "\\begin{subarray}{c}#1\\end{subarray}")

# \renewcommand{\colon}{\nobreak\mskip2mu\mathpunct{}\nonscript
# \mkern-\thinmuskip{:}\mskip6muplus1mu\relax}
define_macro(
    "\\colon",
    "\\nobreak\\mskip2mu\\mathpunct{}\\mathchoice{\\mkern-3mu}{\\mkern-3mu}{}{}{:}\\mskip6mu",
)

# \newcommand{\boxed}[1]{\fbox{\m@th$\displaystyle#1$}}
define_macro("\\boxed", "\\fbox{$\\displaystyle{#1}$}")

# \def\iff{\DOTSB\;\Longleftrightarrow\;}
# \def\implies{\DOTSB\;\Longrightarrow\;}
# \def\impliedby{\DOTSB\;\Longleftarrow\;}
define_macro("\\iff", "\\DOTSB\\;\\Longleftrightarrow\\;")
define_macro("\\implies", "\\DOTSB\\;\\Longrightarrow\\;")
define_macro("\\impliedby", "\\DOTSB\\;\\Longleftarrow\\;")

# =============================================================================
# \dots
# =============================================================================

_DOTSB = "\\dotsb"
_DOTSI = "\\dotsi"

DOTS_BY_TOKEN = MappingProxyType(
    {
        ",": "\\dotsc",
        "\\not": _DOTSB,
        # \keybin@ checks for the following:
        "+": _DOTSB,
        "=": _DOTSB,
        "<": _DOTSB,
        ">": _DOTSB,
        "-": _DOTSB,
        "*": _DOTSB,
        ":": _DOTSB,
        # Symbols whose definition starts with \DOTSB:
        "\\DOTSB": _DOTSB,
        "\\coprod": _DOTSB,
        "\\bigvee": _DOTSB,
        "\\bigwedge": _DOTSB,
        "\\biguplus": _DOTSB,
        "\\bigcap": _DOTSB,
        "\\bigcup": _DOTSB,
        "\\prod": _DOTSB,
        "\\sum": _DOTSB,
        "\\bigotimes": _DOTSB,
        "\\bigoplus": _DOTSB,
        "\\bigodot": _DOTSB,
        "\\bigsqcap": _DOTSB,
        "\\bigsqcup": _DOTSB,
        "\\And": _DOTSB,
        "\\longrightarrow": _DOTSB,
        "\\Longrightarrow": _DOTSB,
        "\\longleftarrow": _DOTSB,
        "\\Longleftarrow": _DOTSB,
        "\\longleftrightarrow": _DOTSB,
        "\\Longleftrightarrow": _DOTSB,
        "\\mapsto": _DOTSB,
        "\\longmapsto": _DOTSB,
        "\\hookrightarrow": _DOTSB,
        "\\doteq": _DOTSB,
        # Symbols whose definition starts with \mathbin:
        "\\mathbin": _DOTSB,
        # Symbols whose definition starts with \mathrel:
        "\\mathrel": _DOTSB,
        "\\relbar": _DOTSB,
        "\\Relbar": _DOTSB,
        "\\xrightarrow": _DOTSB,
        "\\xleftarrow": _DOTSB,
        # Symbols whose definition starts with \DOTSI:
        "\\DOTSI": _DOTSI,
        "\\int": _DOTSI,
        "\\oint": _DOTSI,
        "\\iint": _DOTSI,
        "\\iiint": _DOTSI,
        "\\iiiint": _DOTSI,
        "\\idotsint": _DOTSI,
        # Symbols whose definition starts with \DOTSX:
        "\\DOTSX": "\\dotsx",
    }
)

SPACE_AFTER_DOTS: frozenset[str] = frozenset(
    {
        # \rightdelim@ checks for the following:
        ")",
        "]",
        "\\rbrack",
        "\\}",
        "\\rbrace",
        "\\rangle",
        "\\rceil",
        "\\rfloor",
        "\\rgroup",
        "\\rmoustache",
        "\\right",
        "\\bigr",
        "\\biggr",
        "\\Bigr",
        "\\Biggr",
        # \extra@ also tests for the following:
        "$",
        # \extrap@ checks for the following:
        ";",
        ".",
        ",",
    }
)


def select_dots(next_text: str) -> str:
    """Pick the ellipsis variant for the token that follows ``\\dots``."""
    dots = DOTS_BY_TOKEN.get(next_text)
    if dots is not None:
        return dots
    if next_text.startswith("\\not"):
        return _DOTSB
    if symbol_group(next_text) in (BIN, REL):
        return _DOTSB
    return "\\dotso"


@macro("\\dots")
def dots(context: MacroExpansionContext) -> str:
    # TODO: expand to \textellipsis in text mode once \ifmmode is supported.
    return select_dots(context.expand_after_future().text)


@macro("\\dotso")
def dotso(context: MacroExpansionContext) -> str:
    if context.future().text in SPACE_AFTER_DOTS:
        return "\\ldots\\,"
    return "\\ldots"


@macro("\\dotsc")
def dotsc(context: MacroExpansionContext) -> str:
    # \dotsc uses \extra@ but not \extrap@: ';' and '.' add space, ',' does not.
    following = context.future().text
    if following in SPACE_AFTER_DOTS and following != ",":
        return "\\ldots\\,"
    return "\\ldots"


@macro("\\cdots")
def cdots(context: MacroExpansionContext) -> str:
    if context.future().text in SPACE_AFTER_DOTS:
        return "\\@cdots\\,"
    return "\\@cdots"


define_macro("\\dotsb", "\\cdots")
define_macro("\\dotsm", "\\cdots")
define_macro("\\dotsi", "\\!\\cdots")
define_macro("\\idotsint", "\\dotsi")
# amsmath has no \dotsx; \dots before a \DOTSX symbol means \dotso with the
# extra \, forced.
define_macro("\\dotsx", "\\ldots\\,")

# \let\DOTSI\relax
# \let\DOTSB\relax
# \let\DOTSX\relax
define_macro("\\DOTSI", "\\relax")
define_macro("\\DOTSB", "\\relax")
define_macro("\\DOTSX", "\\relax")

# =============================================================================
# Spacing, based on amsmath.sty's override of LaTeX defaults
# =============================================================================

# \DeclareRobustCommand{\tmspace}[3]{%
#   \ifmmode\mskip#1#2\else\kern#1#3\fi\relax}
define_macro("\\tmspace", "\\TextOrMath{\\kern#1#3}{\\mskip#1#2}\\relax")
# \renewcommand{\,}{\tmspace+\thinmuskip{.1667em}}
define_macro("\\,", "\\tmspace+{3mu}{.1667em}")
# \let\thinspace\,
define_macro("\\thinspace", "\\,")
# \def\>{\mskip\medmuskip}
# \renewcommand{\:}{\tmspace+\medmuskip{.2222em}}
define_macro("\\>", "\\mskip{4mu}")
define_macro("\\:", "\\tmspace+{4mu}{.2222em}")
# \let\medspace\:
define_macro("\\medspace", "\\:")
# \renewcommand{\;}{\tmspace+\thickmuskip{.2777em}}
define_macro("\\;", "\\tmspace+{5mu}{.2777em}")
# \let\thickspace\;
define_macro("\\thickspace", "\\;")
# \renewcommand{\!}{\tmspace-\thinmuskip{.1667em}}
define_macro("\\!", "\\tmspace-{3mu}{.1667em}")
# \let\negthinspace\!
define_macro("\\negthinspace", "\\!")
# \newcommand{\negmedspace}{\tmspace-\medmuskip{.2222em}}
define_macro("\\negmedspace", "\\tmspace-{4mu}{.2222em}")
# \newcommand{\negthickspace}{\tmspace-\thickmuskip{.2777em}}
define_macro("\\negthickspace", "\\tmspace-{5mu}{.277em}")
# \def\enspace{\kern.5em }
define_macro("\\enspace", "\\kern.5em ")
# \def\enskip{\hskip.5em\relax}
define_macro("\\enskip", "\\hskip.5em\\relax")
# \def\quad{\hskip1em\relax}
define_macro("\\quad", "\\hskip1em\\relax")
# \def\qquad{\hskip2em\relax}
define_macro("\\qquad", "\\hskip2em\\relax")

# =============================================================================
# \tag
# =============================================================================

# \tag@in@display form of \tag
define_macro("\\tag", "\\@ifstar\\tag@literal\\tag@paren")
define_macro("\\tag@paren", "\\tag@literal{({#1})}")


@macro("\\tag@literal")
def tag_literal(context: MacroExpansionContext) -> str:
    """Record the formula's tag in ``\\df@tag``.

    Raises:
        ParseError: If the formula already has a tag
    """
    if context.macros.get(TAG_MACRO) is not None:
        raise ParseError("Multiple \\tag", ParseErrorKind.DUPLICATE_TAG)
    return f"\\gdef{TAG_MACRO}{{\\text{{#1}}}}"


# =============================================================================
# mod family
# =============================================================================

# \renewcommand{\bmod}{\nonscript\mskip-\medmuskip\mkern5mu\mathbin
#   {\operator@font mod}\penalty900
#   \mkern5mu\nonscript\mskip-\medmuskip}
# \newcommand{\pod}[1]{\allowbreak
#   \if@display\mkern18mu\else\mkern8mu\fi(#1)}
# \renewcommand{\pmod}[1]{\pod{{\operator@font mod}\mkern6mu#1}}
# \newcommand{\mod}[1]{\allowbreak\if@display\mkern18mu
#   \else\mkern12mu\fi{\operator@font mod}\,\,#1}
define_macro(
    "\\bmod",
    "\\mathchoice{\\mskip1mu}{\\mskip1mu}{\\mskip5mu}{\\mskip5mu}"
    "\\mathbin{\\rm mod}"
    "\\mathchoice{\\mskip1mu}{\\mskip1mu}{\\mskip5mu}{\\mskip5mu}",
)
define_macro(
    "\\pod",
    "\\allowbreak\\mathchoice{\\mkern18mu}{\\mkern8mu}{\\mkern8mu}{\\mkern8mu}(#1)",
)
define_macro("\\pmod", "\\pod{{\\rm mod}\\mkern6mu#1}")
define_macro(
    "\\mod",
    "\\allowbreak"
    "\\mathchoice{\\mkern18mu}{\\mkern12mu}{\\mkern12mu}{\\mkern12mu}"
    "{\\rm mod}\\,\\,#1",
)

# \pmb: simulated bold
define_macro("\\pmb", "\\mathbf{#1}")
