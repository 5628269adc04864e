"""Window and drawing services backed by pygame."""

from __future__ import annotations

import os
from typing import Optional, Sequence, Tuple

import pygame


class GraphicsError(RuntimeError):
    """Raised when the window, an image or a text surface cannot be created."""


RectLike = Sequence[int]


class Graphics:
    """Owns the game window and draws textures, text and lines onto it."""

    SCREEN_WIDTH = 1024
    SCREEN_HEIGHT = 896
    WINDOW_TITLE = "Galaga"

    def __init__(
        self,
        title: str = WINDOW_TITLE,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
    ) -> None:
        try:
            pygame.display.init()
            self.screen = pygame.display.set_mode((width, height))
            pygame.display.set_caption(title)
            pygame.font.init()
        except pygame.error as exc:
            raise GraphicsError(f"Unable to create window: {exc}") from exc
        self.width = width
        self.height = height
        self.draw_color = (0, 0, 0, 255)

    def __enter__(self) -> "Graphics":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def load_texture(self, path) -> pygame.Surface:
        """Load an image file into a surface suited to the window."""
        try:
            surface = pygame.image.load(os.fspath(path))
        except (pygame.error, OSError) as exc:
            raise GraphicsError(f"Unable to load {path}: {exc}") from exc
        return surface.convert_alpha()

    def create_text_texture(self, font: pygame.font.Font, text: str, color) -> pygame.Surface:
        """Render ``text`` with ``font`` in ``color`` without antialiasing."""
        try:
            return font.render(text, False, color)
        except pygame.error as exc:
            raise GraphicsError(f"Unable to render text {text!r}: {exc}") from exc

    def draw_texture(
        self,
        texture: pygame.Surface,
        src_rect: Optional[RectLike] = None,
        dst_rect: Optional[RectLike] = None,
        angle: float = 0.0,
        flip: Tuple[bool, bool] = (False, False),
    ) -> None:
        """Draw part of ``texture`` stretched into ``dst_rect``, rotated clockwise by ``angle`` degrees."""
        image = texture
        if src_rect is not None:
            clip = pygame.Rect(src_rect).clip(texture.get_rect())
            if clip.width <= 0 or clip.height <= 0:
                return
            image = texture.subsurface(clip)
        dst = pygame.Rect(dst_rect) if dst_rect is not None else self.screen.get_rect()
        if dst.width <= 0 or dst.height <= 0:
            return
        if image.get_size() != dst.size:
            image = pygame.transform.scale(image, dst.size)
        if flip[0] or flip[1]:
            image = pygame.transform.flip(image, bool(flip[0]), bool(flip[1]))
        if angle:
            image = pygame.transform.rotate(image, -angle)
        self.screen.blit(image, image.get_rect(center=dst.center))

    def draw_line(self, start_x: float, start_y: float, end_x: float, end_y: float) -> None:
        """Draw a black line between two points."""
        pygame.draw.line(
            self.screen,
            (0, 0, 0),
            (int(start_x), int(start_y)),
            (int(end_x), int(end_y)),
        )

    def clear_back_buffer(self) -> None:
        """Clear the frame being built."""
        self.screen.fill(self.draw_color)

    def present(self) -> None:
        """Show the frame that has been drawn."""
        pygame.display.flip()

    def close(self) -> None:
        """Close the window and release the font system."""
        pygame.font.quit()
        pygame.display.quit()