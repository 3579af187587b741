"""Image decode/encode around the engine, via PIL.

The engine only sees raw RGBA8 bytes. This module turns image files into
SourceImage buffers, buffers back into PIL images, and names and captions
the PNGs written for each variant.
"""

import os
from pathlib import PurePath

from PIL import Image, ImageDraw, ImageFont

from colorswitch.core.types import SourceImage

CAPTION_HEIGHT_PX = 20
CAPTION_PAD_PX = 2
CAPTION_FONT_SIZE = 16


def load_image(path: str) -> SourceImage:
    """Decode an image file to RGBA8. Raises OSError if PIL cannot read it."""
    with Image.open(path) as img:
        rgba = img.convert('RGBA')
    return SourceImage(
        fname=os.path.basename(path),
        width=rgba.width,
        height=rgba.height,
        data=rgba.tobytes(),
    )


def to_image(data: bytes, width: int, height: int) -> Image.Image:
    return Image.frombytes('RGBA', (width, height), data)


def output_basename(fname: str, suffix: str) -> str:
    """'cells.jpg' + 'rotated' -> 'cells-rotated'."""
    stem = PurePath(fname).stem or fname
    return f'{stem}-{suffix}'


def output_filename(fname: str, suffix: str) -> str:
    return f'{output_basename(fname, suffix)}.png'


def caption_text(fname: str, caption: str | None) -> str:
    """Label drawn under a variant: the file name, plus the variant caption if any."""
    if caption:
        return f'{fname}: {caption}'
    return fname


def add_caption(image: Image.Image, text: str) -> Image.Image:
    """Return a copy of image with a white text strip appended below it."""
    out = Image.new('RGBA', (image.width, image.height + CAPTION_HEIGHT_PX), (255, 255, 255, 255))
    out.paste(image, (0, 0))
    draw = ImageDraw.Draw(out)
    font = ImageFont.load_default(size=CAPTION_FONT_SIZE)
    draw.text((0, image.height + CAPTION_PAD_PX), text, fill=(0, 0, 0, 255), font=font)
    return out


def save_png(image: Image.Image, path: str) -> str:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    image.save(path, format='PNG')
    return path
