"""CHIP-8 display: 64x32 monochrome framebuffer."""

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FRAME_SIZE, SPRITE_WIDTH

# Pre-computed coordinate grids, row-major like the framebuffer
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='xy')
xx, yy = xx.ravel(), yy.ravel()

MAX_SPRITE_HEIGHT = 16


class Display(PyTreeNode):
    """Framebuffer of FRAME_SIZE cells (0 or 1) at ``x + y * 64``."""
    frame: jnp.ndarray = field(default_factory=lambda: jnp.zeros(FRAME_SIZE, dtype=jnp.uint8))
    redraw: bool = False


def create_display() -> Display:
    return Display()


def clear(display: Display) -> Display:
    """Zero every cell and request a redraw."""
    return display.replace(frame=jnp.zeros_like(display.frame), redraw=True)


@jax.jit
def blit(frame: jnp.ndarray, x, y, rows: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """XOR ``rows`` into ``frame`` at (x, y); compiled once per sprite height."""
    height = rows.shape[0]
    padded = jnp.zeros(MAX_SPRITE_HEIGHT, dtype=jnp.uint8).at[:height].set(rows)

    in_sprite = (xx >= x) & (xx < x + SPRITE_WIDTH) & (yy >= y) & (yy < y + height)

    row_offset = jnp.clip(yy - y, 0, MAX_SPRITE_HEIGHT - 1)
    col_offset = jnp.clip(xx - x, 0, SPRITE_WIDTH - 1)
    sprite_bytes = padded[row_offset].astype(jnp.int32)
    sprite = jnp.astype(((sprite_bytes >> (7 - col_offset)) & 1) * in_sprite, jnp.uint8)

    return frame ^ sprite, jnp.any(frame & sprite)


def draw_sprite(display: Display, x: int, y: int, rows: jnp.ndarray) -> tuple[Display, bool]:
    """XOR an 8-pixel-wide sprite onto the framebuffer.

    Args:
        display: Current display state
        x: Left column of the sprite
        y: Top row of the sprite
        rows: One byte per sprite row, most significant bit leftmost

    Returns:
        Tuple of (new display, collision) where collision is True if any lit
        pixel was switched off. Pixels falling past the right or bottom edge
        are clipped, not wrapped.
    """
    frame, collision = blit(display.frame, int(x), int(y), jnp.asarray(rows, dtype=jnp.uint8))
    return display.replace(frame=frame, redraw=True), bool(collision)


def acknowledge(display: Display) -> Display:
    """Clear the redraw flag once the host has consumed a frame."""
    return display.replace(redraw=False)


def as_grid(display: Display) -> jnp.ndarray:
    """Framebuffer as a (height, width) array."""
    return display.frame.reshape(SCREEN_HEIGHT, SCREEN_WIDTH)
