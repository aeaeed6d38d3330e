"""
Save rendered colour grids as images.
"""

import numpy as np
from PIL import Image


def to_image(colors, scale=1):
    """Convert a ``(height, width, 3)`` colour grid to a PIL image."""
    img = Image.fromarray(np.ascontiguousarray(colors, dtype=np.uint8))
    if scale != 1:
        img = img.resize((img.width * scale, img.height * scale), Image.NEAREST)
    return img


def save_frames(frames, output_path, scale=1, duration_ms=50):
    """Write one frame as a still image or several as a looping GIF.

    The format follows the file extension for a single frame; several frames
    are always written as an animated GIF.
    """
    if not frames:
        raise ValueError("no frames to save")

    images = [to_image(f, scale) for f in frames]
    if len(images) == 1:
        images[0].save(output_path)
        return output_path

    images[0].save(
        output_path,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=duration_ms,
        loop=0,
    )
    return output_path
