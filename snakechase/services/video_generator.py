"""
Video Generation Service for snakechase sessions

This service turns sampled RenderFrames into an MP4 by:
1. Rendering each frame using PIL (Pillow), blending previous and current
   positions by the frame's interpolation factors
2. Encoding frames to video using MoviePy/FFmpeg

The rendering follows the browser version of the game:
- Arena centred on a fixed-size canvas that leaves the shrunk border dark
- Snake drawn as a thick rounded path with a darker head and eyes
- Food drawn as a round pellet
- Score banner above the arena
"""

import logging
import os
import tempfile
from typing import Iterable, List, Optional, Tuple

import numpy as np
from moviepy import ImageSequenceClip
from PIL import Image, ImageDraw, ImageFont

from snakechase.domain.constants import (
    CELL_SIZE,
    DOWN,
    INITIAL_ARENA_HEIGHT,
    INITIAL_ARENA_WIDTH,
    LEFT,
    RIGHT,
    UP,
)
from snakechase.domain.game_state import RenderFrame
from snakechase.services.notifier import game_over_message

logger = logging.getLogger(__name__)

# Video settings
DEFAULT_FPS = 30
BANNER_HEIGHT = 40


class ColorScheme:
    """Color configuration matching the browser canvas"""

    OUTSIDE = "#1F2430"
    BACKGROUND = "#2C3E50"
    GRID_LINE = "#34495E"
    FOOD = "#E74C3C"
    FOOD_BORDER = "#C0392B"
    SNAKE_BODY = "#E74C3C"
    SNAKE_BORDER = "#C0392B"
    SNAKE_HEAD = "#C0392B"
    EYE = "#FFFFFF"
    PUPIL = "#000000"
    TEXT = "#ECF0F1"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


# Eye offsets (x, y) per direction, in units of eye spacing
EYE_LAYOUT = {
    UP: ((-1, -1), (1, -1)),
    DOWN: ((-1, 1), (1, 1)),
    LEFT: ((-1, -1), (-1, 1)),
    RIGHT: ((1, -1), (1, 1)),
}
PUPIL_SHIFT = {UP: (0, -1), DOWN: (0, 1), LEFT: (-1, 0), RIGHT: (1, 0)}


class SessionVideoGenerator:
    """Render session frames and encode them as MP4"""

    def __init__(
        self,
        arena_width: int = INITIAL_ARENA_WIDTH,
        arena_height: int = INITIAL_ARENA_HEIGHT,
        fps: int = DEFAULT_FPS,
        cell_size: int = CELL_SIZE
    ):
        self.arena_width = arena_width
        self.arena_height = arena_height
        self.fps = fps
        self.cell_size = cell_size
        self.width = arena_width
        self.height = arena_height + BANNER_HEIGHT

        try:
            self.font = ImageFont.truetype("DejaVuSans-Bold.ttf", 20)
        except OSError:
            self.font = ImageFont.load_default()

    def arena_origin(self, frame: RenderFrame) -> Tuple[int, int]:
        """Top-left pixel of the (possibly shrunk) arena on the canvas."""
        x = (self.arena_width - frame.width) // 2
        y = BANNER_HEIGHT + (self.arena_height - frame.height) // 2
        return x, y

    def render_frame(self, frame: RenderFrame) -> Image.Image:
        """Render a single frame of the session"""
        img = Image.new('RGB', (self.width, self.height), hex_to_rgb(ColorScheme.OUTSIDE))
        draw = ImageDraw.Draw(img)
        ox, oy = self.arena_origin(frame)

        self._draw_arena(draw, ox, oy, frame)
        self._draw_food(draw, ox, oy, frame)
        self._draw_snake(draw, ox, oy, frame)
        self._draw_banner(draw, frame)

        return img

    def _draw_arena(self, draw: ImageDraw.ImageDraw, ox: int, oy: int, frame: RenderFrame):
        draw.rectangle(
            [ox, oy, ox + frame.width - 1, oy + frame.height - 1],
            fill=hex_to_rgb(ColorScheme.BACKGROUND)
        )
        grid = hex_to_rgb(ColorScheme.GRID_LINE)
        for x in range(0, frame.width + 1, frame.cell_size):
            draw.line([ox + x, oy, ox + x, oy + frame.height], fill=grid, width=1)
        for y in range(0, frame.height + 1, frame.cell_size):
            draw.line([ox, oy + y, ox + frame.width, oy + y], fill=grid, width=1)

    def _draw_food(self, draw: ImageDraw.ImageDraw, ox: int, oy: int, frame: RenderFrame):
        fx, fy = frame.display_food()
        cx = ox + fx + frame.cell_size / 2
        cy = oy + fy + frame.cell_size / 2
        radius = frame.cell_size / 2.5
        draw.ellipse(
            [cx - radius, cy - radius, cx + radius, cy + radius],
            fill=hex_to_rgb(ColorScheme.FOOD),
            outline=hex_to_rgb(ColorScheme.FOOD_BORDER),
            width=2
        )

    def _centres(self, ox: int, oy: int, frame: RenderFrame) -> List[Tuple[float, float]]:
        half = frame.cell_size / 2
        return [(ox + x + half, oy + y + half) for x, y in frame.display_segments()]

    def _draw_snake(self, draw: ImageDraw.ImageDraw, ox: int, oy: int, frame: RenderFrame):
        """Draw body as a rounded path, then the head and its eyes"""
        centres = self._centres(ox, oy, frame)
        if not centres:
            return

        border = hex_to_rgb(ColorScheme.SNAKE_BORDER)
        body = hex_to_rgb(ColorScheme.SNAKE_BODY)
        outer = frame.cell_size - 4
        inner = frame.cell_size - 8

        if len(centres) > 1:
            draw.line(centres, fill=border, width=outer, joint="curve")
            draw.line(centres, fill=body, width=inner, joint="curve")
        # Rounded tail cap
        tx, ty = centres[-1]
        for width, color in ((outer, border), (inner, body)):
            r = width / 2
            draw.ellipse([tx - r, ty - r, tx + r, ty + r], fill=color)

        hx, hy = centres[0]
        head_radius = outer / 2
        draw.ellipse(
            [hx - head_radius, hy - head_radius, hx + head_radius, hy + head_radius],
            fill=hex_to_rgb(ColorScheme.SNAKE_HEAD),
            outline=border
        )
        self._draw_eyes(draw, hx, hy, head_radius, frame.direction)

    def _draw_eyes(self, draw: ImageDraw.ImageDraw, hx: float, hy: float, head_radius: float, direction: str):
        eye_size = head_radius / 3
        pupil_size = eye_size / 2
        spacing = head_radius / 2.5
        shift_x, shift_y = PUPIL_SHIFT[direction]

        for sx, sy in EYE_LAYOUT[direction]:
            ex = hx + sx * spacing
            ey = hy + sy * spacing
            draw.ellipse(
                [ex - eye_size, ey - eye_size, ex + eye_size, ey + eye_size],
                fill=hex_to_rgb(ColorScheme.EYE),
                outline=hex_to_rgb(ColorScheme.PUPIL)
            )
            px = ex + shift_x * eye_size / 2
            py = ey + shift_y * eye_size / 2
            draw.ellipse(
                [px - pupil_size, py - pupil_size, px + pupil_size, py + pupil_size],
                fill=hex_to_rgb(ColorScheme.PUPIL)
            )

    def _draw_banner(self, draw: ImageDraw.ImageDraw, frame: RenderFrame):
        text = game_over_message(frame.score) if frame.is_over else f"Score: {frame.score}"
        draw.text((10, 10), text, fill=hex_to_rgb(ColorScheme.TEXT), font=self.font)

    def generate_video(
        self,
        frames: Iterable[RenderFrame],
        output_path: Optional[str] = None,
        name: str = "session"
    ) -> str:
        """
        Generate a video from sampled frames

        Args:
            frames: RenderFrames in playback order
            output_path: Optional output path (if None, uses temp file)
            name: Used for the temp file name

        Returns:
            Path to the generated video file
        """
        images = []
        for i, frame in enumerate(frames):
            if i % 100 == 0:
                logger.info(f"Rendering frame {i + 1}")
            images.append(np.array(self.render_frame(frame)))

        if not images:
            raise ValueError("No frames to encode.")

        logger.info(f"Rendered {len(images)} frames, creating video...")

        if output_path is None:
            output_path = os.path.join(tempfile.gettempdir(), f"{name}.mp4")
        else:
            parent = os.path.dirname(output_path)
            if parent:
                os.makedirs(parent, exist_ok=True)

        clip = ImageSequenceClip(images, fps=self.fps)
        clip.write_videofile(
            output_path,
            codec='libx264',
            audio=False,
            logger=None
        )

        logger.info(f"Video created successfully at {output_path}")
        return output_path
