"""Image to sample snapshot.

The image is resampled to a fixed 80x80 canvas and every 4th pixel is kept in
row-major order, giving 1600 RGB samples regardless of the source size.
Alpha is discarded.
"""

from pathlib import Path

import numpy as np
from PIL import Image

from deltae_vision.core.types import RGB, Subject

CANVAS_SIZE = 80
SAMPLE_STRIDE = 4


def make_canvas(image: Image.Image) -> Image.Image:
    """Resample to the fixed analysis canvas."""
    return image.convert('RGB').resize((CANVAS_SIZE, CANVAS_SIZE), Image.Resampling.BILINEAR)


def sample_canvas(canvas: Image.Image) -> tuple[RGB, ...]:
    """Every SAMPLE_STRIDE-th pixel of the canvas as an immutable tuple of int triples."""
    pixels = np.asarray(canvas.convert('RGB'), dtype=np.uint8).reshape(-1, 3)[::SAMPLE_STRIDE]
    return tuple((int(r), int(g), int(b)) for r, g, b in pixels.tolist())


def canvas_point(image_size: tuple[int, int], x: float, y: float) -> tuple[int, int]:
    """Map a coordinate on the full-size image to the canvas pixel that covers it."""
    width, height = image_size
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f'Point ({x}, {y}) is outside the {width}x{height} image')
    return int(x * CANVAS_SIZE / width), int(y * CANVAS_SIZE / height)


def load_subject(path: str, name: str | None = None) -> Subject:
    """Open an image file and take its sample snapshot."""
    with Image.open(path) as img:
        image = img.convert('RGB')
    return subject_from_image(image, name=name or Path(path).stem, path=path)


def subject_from_image(image: Image.Image, name: str, path: str = '') -> Subject:
    canvas = make_canvas(image)
    return Subject(name=name, path=path, image=image, canvas=canvas, samples=sample_canvas(canvas))
