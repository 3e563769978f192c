"""CHIP-8 rendering utilities for visualization."""

import numpy as np
from typing import Tuple

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT


def display_to_rgb(
    frame: np.ndarray,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (255, 255, 255),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert a CHIP-8 framebuffer to an RGB array with optional upscaling.

    Args:
        frame: 2048 cells in row-major order, or an already shaped (32, 64) grid
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: white)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    pixels = np.asarray(frame).astype(np.bool_).reshape(SCREEN_HEIGHT, SCREEN_WIDTH)

    rgb_frame = np.where(
        pixels[..., None], np.array(on_color, dtype=np.uint8), np.array(off_color, dtype=np.uint8)
    )

    # Nearest neighbour upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


# (on, off) pairs
COLOR_SCHEMES = {
    "classic": ((255, 255, 255), (0, 0, 0)),
    "phosphor": ((51, 255, 102), (0, 20, 0)),
    "amber": ((255, 176, 0), (24, 12, 0)),
    "lcd": ((40, 56, 24), (160, 176, 96)),
}


def create_color_scheme(
    scheme: str = "classic", invert: bool = False
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Look up the (on_color, off_color) pair for a named scheme.

    ``invert`` swaps the pair, drawing dark sprites on a lit background.
    """
    if scheme not in COLOR_SCHEMES:
        raise ValueError(f"Unknown color scheme '{scheme}'. Available: {sorted(COLOR_SCHEMES)}")
    on_color, off_color = COLOR_SCHEMES[scheme]
    return (off_color, on_color) if invert else (on_color, off_color)
