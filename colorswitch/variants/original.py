"""Write the input unchanged as <stem>-original.png.

Runs the identity transform, so the original goes through the same decode,
caption and PNG path as the colour variants and can be compared with them
pixel for pixel.

Example:
    colorswitch original ./out cells.jpg
"""

from colorswitch.core.render import render_variant
from colorswitch.core.types import TransformMode, Variant

variant = Variant(
    name='original',
    help='Write the input unchanged (identity transform).',
    mode=TransformMode.IDENTITY,
    suffix='original',
)


@variant.run
def run(source, report, settings, out_dir: str) -> None:
    render_variant(variant, source, report, settings, out_dir)
