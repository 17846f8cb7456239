"""Find and expand the math in a sentence in 3 lines."""

from autotex import AutoRender

parts = AutoRender(fences="$")("Sum it up: $a_1+\\dots+a_n$, then $$\\boxed{x}$$")
for part in parts:
    print(repr(part))
