"""Calibration chart with a colour spot in each corner.

A spot is a 6x6 grid of cells coloured rgb(0, i*255/6, j*255/6) for row i
and column j, inset one grid step from the spot edges, with a 2x2 black
registration dot centred in each corner step. Photographing the chart next
to a sample gives known green/blue references for checking a transform.
"""

from PIL import Image, ImageDraw

N_STEPS = 6
DOT_HALF = 1.0


def draw_calibration_spot(image: Image.Image, x: float, y: float, w: float, h: float) -> None:
    """Draw one spot into image with its top-left corner at (x, y)."""
    draw = ImageDraw.Draw(image)
    x_step = w / (N_STEPS + 2)
    y_step = h / (N_STEPS + 2)
    c_step = 255.0 / N_STEPS

    for i in range(2):
        for j in range(2):
            dx = j * (N_STEPS + 1) * x_step + 0.5 * x_step - DOT_HALF + x
            dy = i * (N_STEPS + 1) * y_step + 0.5 * y_step - DOT_HALF + y
            _fill_rect(draw, dx, dy, 2 * DOT_HALF, 2 * DOT_HALF, (0, 0, 0, 255))

    for i in range(N_STEPS):
        for j in range(N_STEPS):
            colour = (0, round(i * c_step), round(j * c_step), 255)
            _fill_rect(draw, (j + 1) * x_step + x, (i + 1) * y_step + y, x_step, y_step, colour)


def _fill_rect(draw: ImageDraw.ImageDraw, x: float, y: float, w: float, h: float, fill: tuple) -> None:
    # Pixel-aligned: covers pixels whose origin lies in [x, x + w)
    x0, y0 = round(x), round(y)
    x1, y1 = round(x + w), round(y + h)
    if x1 <= x0 or y1 <= y0:
        return
    draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill=fill)


def calibration_chart(
    width: int = 1024,
    height: int = 600,
    spot_width: int = 50,
    spot_height: int = 100,
) -> Image.Image:
    """White RGBA canvas with a calibration spot in each corner."""
    if spot_width > width or spot_height > height:
        raise ValueError(f'spot {spot_width}x{spot_height} does not fit in {width}x{height}')
    image = Image.new('RGBA', (width, height), (255, 255, 255, 255))
    for x in (0, width - spot_width):
        for y in (0, height - spot_height):
            draw_calibration_spot(image, x, y, spot_width, spot_height)
    return image
