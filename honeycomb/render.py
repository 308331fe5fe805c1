"""Drawing the honeycomb: gradient backdrop, glowing hexagons."""
from __future__ import annotations

import math
from typing import Dict, Iterable, Optional, Tuple

import pygame
from PIL import Image, ImageDraw, ImageFilter

from honeycomb.geometry import WHITE, Color, hex_vertices, lerp_color
from honeycomb.grid import MAX_ENERGY, Cell


def cell_color(energy: float, base_color: Color) -> Color:
    return lerp_color(base_color, WHITE, max(0.0, min(1.0, energy / MAX_ENERGY)))


def glow_params(energy: float, max_blur: float, max_opacity: float) -> Tuple[float, float]:
    """Blur radius and opacity of a cell's glow, both proportional to its energy."""
    if energy <= 0:
        return (0.0, 0.0)
    t = min(1.0, energy / MAX_ENERGY)
    return (max_blur * t, max_opacity * t)


def make_glow_sprite(radius: float, blur: float, opacity: float, color: Color) -> pygame.Surface:
    pad = int(math.ceil(blur * 2)) + 2
    size = int(math.ceil(radius * 2)) + pad * 2
    image = Image.new("RGBA", (size, size), color + (0,))
    draw = ImageDraw.Draw(image, "RGBA")
    draw.polygon(hex_vertices((size / 2, size / 2), radius), fill=color + (int(255 * opacity),))
    if blur > 0:
        image = image.filter(ImageFilter.GaussianBlur(blur))
    return pygame.image.frombuffer(image.tobytes(), image.size, "RGBA").copy()


def gradient_surface(size: Tuple[int, int], top: Color, bottom: Color) -> pygame.Surface:
    w, h = size
    surf = pygame.Surface((max(1, w), max(1, h)))
    for y in range(h):
        pygame.draw.line(surf, lerp_color(top, bottom, y / max(1, h - 1)), (0, y), (w, y))
    return surf


class Renderer:
    """Redraws every cell each frame; never touches cell state."""

    def __init__(self, config: Dict):
        self.radius = float(config["hex_radius"])
        self.base_color = tuple(config["cell_base_color"])
        self.outline_color = tuple(config["active_outline_color"])
        self.glow_color = tuple(config["glow_color"])
        self.max_blur = float(config["glow_max_blur"])
        self.max_opacity = float(config["glow_max_opacity"])
        self.levels = max(1, int(config["glow_levels"]))
        self.background_top = tuple(config["background_top"])
        self.background_bottom = tuple(config["background_bottom"])
        self._background: Optional[pygame.Surface] = None
        self._glow_cache: Dict[int, pygame.Surface] = {}

    def glow_level(self, energy: float) -> int:
        """Nearest of ``levels`` glow steps; below half a step there is no glow."""
        if energy <= 0:
            return 0
        return min(self.levels, int(round(energy / MAX_ENERGY * self.levels)))

    def glow_sprite(self, energy: float) -> Optional[pygame.Surface]:
        level = self.glow_level(energy)
        if level == 0:
            return None
        sprite = self._glow_cache.get(level)
        if sprite is None:
            blur, opacity = glow_params(level / self.levels * MAX_ENERGY, self.max_blur, self.max_opacity)
            sprite = make_glow_sprite(self.radius, blur, opacity, self.glow_color)
            self._glow_cache[level] = sprite
        return sprite

    def background(self, size: Tuple[int, int]) -> pygame.Surface:
        if self._background is None or self._background.get_size() != size:
            self._background = gradient_surface(size, self.background_top, self.background_bottom)
        return self._background

    def draw(self, surface: pygame.Surface, cells: Iterable[Cell]) -> None:
        surface.blit(self.background(surface.get_size()), (0, 0))
        for cell in cells:
            sprite = self.glow_sprite(cell.energy)
            if sprite is not None:
                surface.blit(sprite, sprite.get_rect(center=(int(cell.x), int(cell.y))))
            pts = [(int(x), int(y)) for x, y in cell.vertices]
            pygame.draw.polygon(surface, cell_color(cell.energy, self.base_color), pts)
            if cell.active:
                pygame.draw.polygon(surface, self.outline_color, pts, 2)
