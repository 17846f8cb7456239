"""Math symbol classes consulted by ``\\dots``.

amsmath picks the ellipsis after ``\\dots`` from the class of the next
symbol: binary operators and relations get centered dots. Only the class
matters here, so the table maps symbol names to their TeX atom group.

The sets follow the ``bin`` and ``rel`` groups of the math symbol table,
amssymb relations and negated relations included. Arrows are relations.

All tables are immutable and built once at import.
"""

from types import MappingProxyType

BIN = "bin"
REL = "rel"
OP = "op"

BINARY_OPERATORS: frozenset[str] = frozenset(
    {
        "+",
        "-",
        "*",
        "\\pm",
        "\\mp",
        "\\times",
        "\\div",
        "\\cdot",
        "\\ast",
        "\\star",
        "\\circ",
        "\\bullet",
        "\\cap",
        "\\cup",
        "\\uplus",
        "\\sqcap",
        "\\sqcup",
        "\\vee",
        "\\lor",
        "\\wedge",
        "\\land",
        "\\setminus",
        "\\smallsetminus",
        "\\wr",
        "\\diamond",
        "\\bigtriangleup",
        "\\bigtriangledown",
        "\\triangleleft",
        "\\triangleright",
        "\\lhd",
        "\\rhd",
        "\\unlhd",
        "\\unrhd",
        "\\oplus",
        "\\ominus",
        "\\otimes",
        "\\oslash",
        "\\odot",
        "\\bigcirc",
        "\\dagger",
        "\\ddagger",
        "\\amalg",
        "\\dotplus",
        "\\ltimes",
        "\\rtimes",
        "\\leftthreetimes",
        "\\rightthreetimes",
        "\\curlywedge",
        "\\curlyvee",
        "\\circleddash",
        "\\circledast",
        "\\circledcirc",
        "\\boxminus",
        "\\boxtimes",
        "\\boxdot",
        "\\boxplus",
        "\\divideontimes",
        "\\doublecup",
        "\\doublecap",
        "\\Cup",
        "\\Cap",
        "\\barwedge",
        "\\veebar",
        "\\doublebarwedge",
        "\\intercal",
        "\\centerdot",
        "\\gtrdot",
        "\\lessdot",
        "\\minuso",
        "\\cupdot",
    }
)

RELATIONS: frozenset[str] = frozenset(
    {
        "=",
        "<",
        ">",
        ":",
        "\\lt",
        "\\gt",
        "\\leq",
        "\\le",
        "\\geq",
        "\\ge",
        "\\neq",
        "\\ne",
        "\\equiv",
        "\\sim",
        "\\simeq",
        "\\approx",
        "\\cong",
        "\\propto",
        "\\varpropto",
        "\\prec",
        "\\succ",
        "\\preceq",
        "\\succeq",
        "\\ll",
        "\\gg",
        "\\lll",
        "\\ggg",
        "\\llless",
        "\\gggtr",
        "\\subset",
        "\\supset",
        "\\subseteq",
        "\\supseteq",
        "\\Subset",
        "\\Supset",
        "\\subseteqq",
        "\\supseteqq",
        "\\sqsubset",
        "\\sqsupset",
        "\\sqsubseteq",
        "\\sqsupseteq",
        "\\in",
        "\\ni",
        "\\notin",
        "\\owns",
        "\\backepsilon",
        "\\vdash",
        "\\dashv",
        "\\models",
        "\\vDash",
        "\\Vdash",
        "\\Vvdash",
        "\\perp",
        "\\mid",
        "\\parallel",
        "\\shortmid",
        "\\shortparallel",
        "\\smile",
        "\\frown",
        "\\smallsmile",
        "\\smallfrown",
        "\\asymp",
        "\\bowtie",
        "\\Join",
        "\\between",
        "\\pitchfork",
        "\\therefore",
        "\\because",
        "\\multimap",
        "\\doteq",
        "\\doteqdot",
        "\\Doteq",
        "\\risingdotseq",
        "\\fallingdotseq",
        "\\eqcirc",
        "\\circeq",
        "\\triangleq",
        "\\bumpeq",
        "\\Bumpeq",
        "\\thicksim",
        "\\thickapprox",
        "\\approxeq",
        "\\backsim",
        "\\backsimeq",
        "\\eqsim",
        "\\lesssim",
        "\\gtrsim",
        "\\lessapprox",
        "\\gtrapprox",
        "\\lessgtr",
        "\\gtrless",
        "\\lesseqgtr",
        "\\gtreqless",
        "\\lesseqqgtr",
        "\\gtreqqless",
        "\\leqq",
        "\\geqq",
        "\\leqslant",
        "\\geqslant",
        "\\eqslantless",
        "\\eqslantgtr",
        "\\preccurlyeq",
        "\\succcurlyeq",
        "\\curlyeqprec",
        "\\curlyeqsucc",
        "\\precsim",
        "\\succsim",
        "\\precapprox",
        "\\succapprox",
        "\\vartriangleleft",
        "\\vartriangleright",
        "\\trianglelefteq",
        "\\trianglerighteq",
        "\\blacktriangleleft",
        "\\blacktriangleright",
        "\\nless",
        "\\ngtr",
        "\\nleq",
        "\\ngeq",
        "\\nleqslant",
        "\\ngeqslant",
        "\\nleqq",
        "\\ngeqq",
        "\\lneq",
        "\\gneq",
        "\\lneqq",
        "\\gneqq",
        "\\lvertneqq",
        "\\gvertneqq",
        "\\lnsim",
        "\\gnsim",
        "\\lnapprox",
        "\\gnapprox",
        "\\nprec",
        "\\nsucc",
        "\\npreceq",
        "\\nsucceq",
        "\\precneqq",
        "\\succneqq",
        "\\precnsim",
        "\\succnsim",
        "\\precnapprox",
        "\\succnapprox",
        "\\nsim",
        "\\ncong",
        "\\nmid",
        "\\nshortmid",
        "\\nparallel",
        "\\nshortparallel",
        "\\nvdash",
        "\\nvDash",
        "\\nVdash",
        "\\nVDash",
        "\\ntriangleleft",
        "\\ntriangleright",
        "\\ntrianglelefteq",
        "\\ntrianglerighteq",
        "\\nsubseteq",
        "\\nsupseteq",
        "\\nsubseteqq",
        "\\nsupseteqq",
        "\\subsetneq",
        "\\supsetneq",
        "\\varsubsetneq",
        "\\varsupsetneq",
        "\\subsetneqq",
        "\\supsetneqq",
        "\\varsubsetneqq",
        "\\varsupsetneqq",
        "\\to",
        "\\gets",
        "\\leftarrow",
        "\\rightarrow",
        "\\Leftarrow",
        "\\Rightarrow",
        "\\leftrightarrow",
        "\\Leftrightarrow",
        "\\longleftarrow",
        "\\longrightarrow",
        "\\Longleftarrow",
        "\\Longrightarrow",
        "\\longleftrightarrow",
        "\\Longleftrightarrow",
        "\\mapsto",
        "\\longmapsto",
        "\\hookleftarrow",
        "\\hookrightarrow",
        "\\uparrow",
        "\\downarrow",
        "\\updownarrow",
        "\\Uparrow",
        "\\Downarrow",
        "\\Updownarrow",
        "\\nearrow",
        "\\searrow",
        "\\swarrow",
        "\\nwarrow",
        "\\leftharpoonup",
        "\\leftharpoondown",
        "\\rightharpoonup",
        "\\rightharpoondown",
        "\\upharpoonleft",
        "\\upharpoonright",
        "\\downharpoonleft",
        "\\downharpoonright",
        "\\restriction",
        "\\rightleftharpoons",
        "\\leftrightharpoons",
        "\\leftleftarrows",
        "\\rightrightarrows",
        "\\leftrightarrows",
        "\\rightleftarrows",
        "\\upuparrows",
        "\\downdownarrows",
        "\\Lleftarrow",
        "\\Rrightarrow",
        "\\twoheadleftarrow",
        "\\twoheadrightarrow",
        "\\leftarrowtail",
        "\\rightarrowtail",
        "\\looparrowleft",
        "\\looparrowright",
        "\\curvearrowleft",
        "\\curvearrowright",
        "\\circlearrowleft",
        "\\circlearrowright",
        "\\Lsh",
        "\\Rsh",
        "\\rightsquigarrow",
        "\\leadsto",
        "\\leftrightsquigarrow",
        "\\dashleftarrow",
        "\\dashrightarrow",
        "\\nleftarrow",
        "\\nrightarrow",
        "\\nLeftarrow",
        "\\nRightarrow",
        "\\nleftrightarrow",
        "\\nLeftrightarrow",
        "\\coloneqq",
        "\\Coloneqq",
        "\\eqqcolon",
        "\\Eqqcolon",
        "\\dblcolon",
        "\\vcentcolon",
        "\\eqcolon",
        "\\Eqcolon",
        "\\coloneq",
        "\\Coloneq",
    }
)

LARGE_OPERATORS: frozenset[str] = frozenset(
    {
        "\\sum",
        "\\prod",
        "\\coprod",
        "\\int",
        "\\oint",
        "\\iint",
        "\\iiint",
        "\\oiint",
        "\\oiiint",
        "\\bigcap",
        "\\bigcup",
        "\\bigvee",
        "\\bigwedge",
        "\\bigodot",
        "\\bigoplus",
        "\\bigotimes",
        "\\biguplus",
        "\\bigsqcup",
    }
)


def _build_groups() -> dict[str, str]:
    groups: dict[str, str] = {}
    for name in LARGE_OPERATORS:
        groups[name] = OP
    for name in BINARY_OPERATORS:
        groups[name] = BIN
    for name in RELATIONS:
        groups[name] = REL
    return groups


MATH_SYMBOL_GROUPS = MappingProxyType(_build_groups())


def symbol_group(name: str) -> str | None:
    """Atom group of a math symbol, or None for unknown names."""
    return MATH_SYMBOL_GROUPS.get(name)


__all__ = [
    "BIN",
    "BINARY_OPERATORS",
    "LARGE_OPERATORS",
    "MATH_SYMBOL_GROUPS",
    "OP",
    "REL",
    "RELATIONS",
    "symbol_group",
]
