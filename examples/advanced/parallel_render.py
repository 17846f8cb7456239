"""Thread safe: render 1000 snippets in parallel with one AutoRender."""

from concurrent.futures import ThreadPoolExecutor

from autotex import AutoRender

auto = AutoRender(fences="$", macros={"\\RR": "\\mathbb{R}"})
texts = [f"Point {i}: $x_{{{i}}}\\in\\RR^{{{i}}}$" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(auto, texts))

print(f"Rendered {len(results)} snippets in parallel")
print("Last expansion:", results[-1][1].expansion)
