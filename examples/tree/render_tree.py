"""Render the math inside an element tree, skipping code blocks."""

from autotex import Element, Text, render_math_in_element
from autotex.config import RenderConfig

root = Element(
    "article",
    [
        Element("p", [Text("Define $\\gdef\\e{\\mathrm{e}}\\e^x$ once.")]),
        Element("code", [Text("$not math$")]),
        Element("p", [Text("Reuse it: \\[\\e^{i\\pi}=-1\\]")]),
    ],
)

render_math_in_element(root, RenderConfig(fences="all"))

for node in root.iter_math():
    print("display" if node.display else "inline", node.math.expansion)
