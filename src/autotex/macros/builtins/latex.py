"""Aliases from latex.ltx, the LaTeX2e sources and the TeXbook."""

from autotex.macros.registry import define_macro

# Symbols from latex.ltx:
# \def~{\nobreakspace{}}
# \def\lq{`}
# \def\rq{'}
# \def \aa {\r a}
# \def \AA {\r A}
define_macro("~", "\\nobreakspace")
define_macro("\\lq", "`")
define_macro("\\rq", "'")
define_macro("\\aa", "\\r a")
define_macro("\\AA", "\\r A")

define_macro("\\Bbbk", "\\Bbb{k}")

# \llap and \rlap render their contents in text mode
define_macro("\\llap", "\\mathllap{\\textrm{#1}}")
define_macro("\\rlap", "\\mathrlap{\\textrm{#1}}")
define_macro("\\clap", "\\mathclap{\\textrm{#1}}")

# \mathstrut from the TeXbook, p 360
define_macro("\\mathstrut", "\\vphantom{(}")

# \underbar from TeXbook p 353
define_macro("\\underbar", "\\underline{\\text{#1}}")

# \vdots{\vbox{\baselineskip4\p@  \lineskiplimit\z@
# \kern6\p@\hbox{.}\hbox{.}\hbox{.}}}
# \varvdots is the glyph; the zero-width rule stands in for the 6pt kern.
define_macro("\\vdots", "\\mathord{\\varvdots\\rule{0pt}{15pt}}")
define_macro("\u22ee", "\\vdots")

# \DeclareRobustCommand\newline{\@normalcr\relax}
define_macro("\\newline", "\\\\\\relax")

# \def\TeX{T\kern-.1667em\lower.5ex\hbox{E}\kern-.125emX\@}
define_macro("\\TeX", "\\textrm{T}\\kern-.1667em\\raisebox{-.5ex}{E}\\kern-.125em\\textrm{X}")

define_macro(
    "\\LaTeX",
    "\\textrm{L}\\kern-.35em\\raisebox{0.2em}{\\scriptstyle A}\\kern-.15em\\TeX",
)

define_macro(
    "\\Temml",
    "\\textrm{T}\\kern-0.2em\\lower{0.2em}\\textrm{E}\\kern-0.08em{\\textrm{M}"
    "\\kern-0.08em\\raise{0.2em}\\textrm{M}\\kern-0.08em\\textrm{L}}",
)

# \DeclareRobustCommand\hspace{\@ifstar\@hspacer\@hspace}
# \def\@hspace#1{\hskip  #1\relax}
# \def\@hspacer#1{\vrule \@width\z@\nobreak
#                 \hskip #1\hskip \z@skip}
define_macro("\\hspace", "\\@ifstar\\@hspacer\\@hspace")
define_macro("\\@hspace", "\\hskip #1\\relax")
define_macro("\\@hspacer", "\\rule{0pt}{0pt}\\hskip #1\\relax")
