"""Render one variant of a source image to a PNG file."""

import os
import time

from colorswitch.core.config import Settings
from colorswitch.core.engine import transform
from colorswitch.core.imageio import add_caption, caption_text, output_filename, save_png, to_image
from colorswitch.core.types import Report, SourceImage, Variant


def render_variant(variant: Variant, source: SourceImage, report: Report, settings: Settings, out_dir: str) -> str:
    """Transform source with the variant's mode, write <stem>-<suffix>.png, record it in report."""
    if variant.mode is None:
        raise ValueError(f'Variant {variant.name} has no transform mode')

    start = time.perf_counter()
    data = transform(
        source.data,
        variant.mode,
        width=source.width,
        height=source.height,
        clamp_saturation=settings.clamp_saturation,
        max_workers=settings.max_workers,
    )
    elapsed_ms = round((time.perf_counter() - start) * 1000.0, 1)

    label = caption_text(source.fname, variant.caption)
    image = to_image(data, source.width, source.height)
    if settings.caption:
        image = add_caption(image, label)

    path = save_png(image, os.path.join(out_dir, output_filename(source.fname, variant.suffix)))
    report.add(
        variant.name,
        {
            'mode': variant.mode.value,
            'file': path,
            'label': label,
            'elapsed_ms': elapsed_ms,
        },
    )
    return path
