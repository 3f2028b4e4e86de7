"""Text draw requests and a small rich-text markup parser."""

from __future__ import annotations

import enum
import itertools
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .math2d import PINK, WHITE, Color, Vec2

__all__ = [
    "TextAlign",
    "FontId",
    "TextParams",
    "FontHandle",
    "ProTextParams",
    "StyledGlyph",
    "RichText",
    "DrawText",
    "draw_text_internal",
    "consume_text_queue",
    "draw_text_ex",
    "draw_text",
    "draw_text_pro_experimental",
    "gen_font_handle",
    "simple_styled_text",
]


class TextAlign(enum.Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"
    CENTER = "center"


@dataclass(frozen=True, slots=True)
class FontId:
    """Font size and family for text rendered by the UI layer."""

    size: float
    family: str = "proportional"


@dataclass(frozen=True)
class TextParams:
    font: FontId = FontId(20.0, "monospace")
    rotation: float = 0.0
    color: Color = WHITE
    z_index: int = 0


@dataclass(frozen=True, slots=True)
class FontHandle:
    """Opaque handle to a user font."""

    value: int


@dataclass(frozen=True, slots=True)
class ProTextParams:
    font: FontHandle
    font_size: float


@dataclass(frozen=True, slots=True)
class StyledGlyph:
    char: str
    wiggle: bool
    color: Optional[Color] = None


@dataclass
class RichText:
    clean_text: str
    styled_glyphs: List[StyledGlyph] = field(default_factory=list)


TextData = Union[str, RichText]


@dataclass
class DrawText:
    """A queued request to draw text."""

    text: TextData
    position: Vec2
    font: FontId
    color: Color
    align: TextAlign
    z_index: int
    pro_params: Optional[ProTextParams] = None


_queue_lock = threading.Lock()
_text_queue: List[DrawText] = []


def draw_text_internal(
    text: TextData,
    position: Vec2,
    align: TextAlign,
    pro_params: Optional[ProTextParams],
    params: TextParams,
) -> None:
    request = DrawText(
        text=text,
        position=position,
        font=params.font,
        color=params.color,
        align=align,
        z_index=params.z_index,
        pro_params=pro_params,
    )
    with _queue_lock:
        _text_queue.append(request)


def consume_text_queue() -> List[DrawText]:
    """Take all queued text requests, leaving the queue empty."""
    global _text_queue
    with _queue_lock:
        taken, _text_queue = _text_queue, []
    return taken


def draw_text_ex(text: str, position: Vec2, align: TextAlign, params: TextParams) -> None:
    draw_text_internal(str(text), position, align, None, params)


def draw_text(text: str, position: Vec2, color: Color, align: TextAlign) -> None:
    draw_text_internal(str(text), position, align, None, TextParams(color=color))


def draw_text_pro_experimental(
    text: RichText,
    position: Vec2,
    color: Color,
    align: TextAlign,
    font_size: float,
    font: FontHandle,
    z_index: int,
) -> None:
    """Queue rich text drawn with a user font; the API is not yet stable."""
    draw_text_internal(
        text,
        position,
        align,
        ProTextParams(font=font, font_size=font_size),
        TextParams(color=color, z_index=z_index),
    )


_font_handles = itertools.count()
_font_handles_lock = threading.Lock()


def gen_font_handle() -> FontHandle:
    with _font_handles_lock:
        return FontHandle(next(_font_handles))


def simple_styled_text(text: str) -> RichText:
    """Parse text where a ``*`` makes the following character wiggle.

    A trailing ``*`` with nothing after it is dropped.
    """
    clean: List[str] = []
    glyphs: List[StyledGlyph] = []
    chars = iter(text)

    for c in chars:
        if c == "*":
            following = next(chars, None)
            if following is None:
                break
            c = following
            glyphs.append(StyledGlyph(c, True, PINK.boost(4.0)))
        else:
            glyphs.append(StyledGlyph(c, False, None))
        clean.append(c)

    return RichText("".join(clean), glyphs)