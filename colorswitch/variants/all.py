"""Write every image variant: original, rotated, stretch.

Produces <stem>-original.png, <stem>-rotated.png and <stem>-stretch.png
side by side in the output directory, in that order.

Example:
    colorswitch all ./out cells.jpg
    colorswitch all ./out cells.jpg --json --caption
"""

from colorswitch.core.types import Report, SourceImage, Variant

variant = Variant(
    name='all',
    help='Write original, rotated and stretch variants.',
)


@variant.run
def run(source: SourceImage, report: Report, settings, out_dir: str) -> None:
    from colorswitch.registry import image_variants

    for var in image_variants():
        var.execute(source, report, settings, out_dir)
