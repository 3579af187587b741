"""Stretch hue away from 216 degrees and boost saturation 4x. Writes <stem>-stretch.png.

Each hue is placed on the unit circle and re-measured as the angle seen
from a reference point at 216 degrees, radius 0.8. Hues close to the
reference are spread far apart, which separates the blue/purple tones of
hydroxynaphthol blue (HNB) colorimetric assays. Hues on the reference ray
(216) and opposite it (36) keep their value.

Example:
    colorswitch stretch ./out assay.png
"""

from colorswitch.core.render import render_variant
from colorswitch.core.types import TransformMode, Variant

variant = Variant(
    name='stretch',
    help='Stretch hue around 216 degrees, saturation x4.',
    mode=TransformMode.HUE_STRETCH,
    suffix='stretch',
    caption='Color Stretched',
)


@variant.run
def run(source, report, settings, out_dir: str) -> None:
    render_variant(variant, source, report, settings, out_dir)
