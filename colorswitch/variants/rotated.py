"""Rotate hue by 180 degrees and boost saturation 4x. Writes <stem>-rotated.png.

Matches the manual "colorswitch" of stained micrographs in FIJI's Color
Inspector 3D plugin: Color Rotation 180, Saturation 4.0. Pixels are read
as sRGB and converted to HSL without gamma decoding.

Greys, black and white are unchanged. Saturation above 1 after the boost
is clamped unless --no-clamp (or COLORSWITCH_CLAMP_SATURATION=0) is set.

Example:
    colorswitch rotated ./out cells.jpg
    colorswitch rotated ./out cells.jpg --no-clamp --caption
"""

from colorswitch.core.render import render_variant
from colorswitch.core.types import TransformMode, Variant

variant = Variant(
    name='rotated',
    help='Rotate hue 180 degrees, saturation x4.',
    mode=TransformMode.ROTATE_SATURATE,
    suffix='rotated',
    caption='Color Rotated',
)


@variant.run
def run(source, report, settings, out_dir: str) -> None:
    render_variant(variant, source, report, settings, out_dir)
