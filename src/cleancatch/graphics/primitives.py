"""Drawing primitives for the container frame buffer.

Buffers are numpy uint8 arrays shaped (height, width, 3). Every
primitive clips to the buffer, so callers may draw partly off-screen
(drops entering from above, for instance).
"""

from functools import lru_cache
from typing import Mapping, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]
Mask = NDArray[np.bool_]

GLYPH_HEIGHT = 5
SPACE_ADVANCE = 4

# 3x5 glyphs, rows separated by "/"
GLYPHS: dict[str, str] = {
    "A": "010/101/111/101/101", "B": "110/101/110/101/110", "C": "011/100/100/100/011",
    "D": "110/101/101/101/110", "E": "111/100/110/100/111", "F": "111/100/110/100/100",
    "G": "011/100/101/101/011", "H": "101/101/111/101/101", "I": "111/010/010/010/111",
    "J": "001/001/001/101/010", "K": "101/101/110/101/101", "L": "100/100/100/100/111",
    "M": "101/111/101/101/101", "N": "101/111/111/101/101", "O": "010/101/101/101/010",
    "P": "110/101/110/100/100", "Q": "010/101/101/111/011", "R": "110/101/110/101/101",
    "S": "011/100/010/001/110", "T": "111/010/010/010/010", "U": "101/101/101/101/010",
    "V": "101/101/101/010/010", "W": "101/101/101/111/101", "X": "101/101/010/101/101",
    "Y": "101/101/010/010/010", "Z": "111/001/010/100/111",
    "0": "010/101/101/101/010", "1": "010/110/010/010/111", "2": "010/101/001/010/111",
    "3": "110/001/010/001/110", "4": "101/101/111/001/001", "5": "111/100/110/001/110",
    "6": "011/100/110/101/010", "7": "111/001/010/010/010", "8": "010/101/010/101/010",
    "9": "010/101/011/001/110",
    "?": "010/101/001/000/010", "!": "010/010/010/000/010", ".": "000/000/000/000/010",
    ":": "000/010/000/010/000", "-": "000/000/111/000/000", "/": "001/001/010/100/100",
    "<": "001/010/100/010/001", ">": "100/010/001/010/100",
}

Font = Mapping[str, Mask]


def parse_glyph(pattern: str) -> Mask:
    """Turn a ``"010/101/..."`` pattern into a boolean mask."""
    return np.array([[bit == "1" for bit in row] for row in pattern.split("/")], dtype=bool)


@lru_cache(maxsize=1)
def default_font() -> Font:
    return {char: parse_glyph(pattern) for char, pattern in GLYPHS.items()}


def fill(buffer: Buffer, color: Color) -> None:
    buffer[:, :] = color


def _clip(buffer: Buffer, x: int, y: int, width: int, height: int) -> Tuple[int, int, int, int]:
    h, w = buffer.shape[:2]
    return max(0, x), max(0, y), min(w, x + width), min(h, y + height)


def blit_mask(buffer: Buffer, mask: Mask, x: int, y: int, color: Color) -> None:
    """Paint ``color`` wherever ``mask`` is set, with its top-left at (x, y)."""
    mh, mw = mask.shape
    x1, y1, x2, y2 = _clip(buffer, x, y, mw, mh)
    if x2 <= x1 or y2 <= y1:
        return
    buffer[y1:y2, x1:x2][mask[y1 - y:y2 - y, x1 - x:x2 - x]] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Axis-aligned rectangle; ``filled=False`` draws a ``thickness``-pixel border."""
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    t = max(1, thickness)
    buffer[y1:min(y1 + t, y2), x1:x2] = color
    buffer[max(y2 - t, y1):y2, x1:x2] = color
    buffer[y1:y2, x1:min(x1 + t, x2)] = color
    buffer[y1:y2, max(x2 - t, x1):x2] = color


def blend_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    alpha: float = 0.5,
) -> None:
    """Tint a region towards ``color`` (overlay panels)."""
    x1, y1, x2, y2 = _clip(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    region = buffer[y1:y2, x1:x2].astype(np.float32)
    tint = np.array(color, dtype=np.float32)
    buffer[y1:y2, x1:x2] = (region * (1 - alpha) + tint * alpha).astype(np.uint8)


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
    filled: bool = True,
) -> None:
    """Disc (or one-pixel ring) centred on (cx, cy)."""
    if radius < 0:
        return
    dy, dx = np.ogrid[-radius:radius + 1, -radius:radius + 1]
    dist_sq = dx * dx + dy * dy
    mask = dist_sq <= radius * radius
    if not filled:
        mask &= dist_sq >= (radius - 1) ** 2
    blit_mask(buffer, mask, cx - radius, cy - radius, color)


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Straight segment sampled once per pixel along its longer axis."""
    steps = max(abs(x2 - x1), abs(y2 - y1)) + 1
    xs = np.rint(np.linspace(x1, x2, steps)).astype(int)
    ys = np.rint(np.linspace(y1, y2, steps)).astype(int)

    if thickness <= 1:
        h, w = buffer.shape[:2]
        inside = (xs >= 0) & (xs < w) & (ys >= 0) & (ys < h)
        buffer[ys[inside], xs[inside]] = color
        return

    half = thickness // 2
    for px, py in zip(xs, ys):
        draw_rect(buffer, int(px) - half, int(py) - half, thickness, thickness, color)


def _glyph(char: str, font: Font) -> Optional[Mask]:
    if char == " ":
        return None
    return font.get(char.upper(), font.get("?"))


def _advance(glyph: Optional[Mask], scale: int) -> int:
    if glyph is None:
        return SPACE_ADVANCE * scale
    return (glyph.shape[1] + 1) * scale


def measure_text(text: str, scale: int = 1, font: Optional[Font] = None) -> Tuple[int, int]:
    """Pixel size ``draw_text`` would cover, without drawing."""
    font = font or default_font()
    width = sum(_advance(_glyph(char, font), scale) for char in text)
    return width, GLYPH_HEIGHT * scale


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    font: Optional[Font] = None,
    scale: int = 1,
) -> Tuple[int, int]:
    """Bitmap text with its top-left at (x, y).

    Unknown characters render as ``?``. Each glyph pixel becomes a
    ``scale`` x ``scale`` block.

    Returns:
        (width, height) covered, same as ``measure_text``
    """
    font = font or default_font()
    cursor = x
    for char in text:
        glyph = _glyph(char, font)
        if glyph is not None:
            scaled = np.repeat(np.repeat(glyph, scale, axis=0), scale, axis=1)
            blit_mask(buffer, scaled, cursor, y, color)
        cursor += _advance(glyph, scale)
    return cursor - x, GLYPH_HEIGHT * scale


def draw_centered_text(
    buffer: Buffer,
    text: str,
    y: int,
    color: Color,
    scale: int = 1,
    font: Optional[Font] = None,
) -> Tuple[int, int]:
    """``draw_text`` centred horizontally in the buffer."""
    text_w, _ = measure_text(text, scale, font)
    x = max(0, (buffer.shape[1] - text_w) // 2)
    return draw_text(buffer, text, x, y, color, font=font, scale=scale)
