# visualization.py
import logging
import math
from typing import Iterable, List, Sequence, Tuple

import pygame

from config import config
from input_control import resolve_key
from simulation import RenderItem


def compute_view_scale(ship_positions: Iterable[Sequence[float]], width: float, height: float,
                       current_scale: float, margin: float = config.Visualization.VIEW_MARGIN_FACTOR) -> float:
    """World units per pixel that keep every ship on screen.

    The scale never drops below 1. It is only changed when a ship leaves the
    view or the view has become more than twice as large as needed, so the
    camera does not zoom on every frame.
    """
    needed = 1.0
    for x, y in ship_positions:
        needed = max(needed, abs(x) / width * margin, abs(y) / height * margin)
    if needed > current_scale or needed < current_scale / 2.0:
        return needed
    return current_scale


class Visualization:
    """Renders the exported frame of the simulation with pygame.

    The world origin sits in the middle of the window. Every object is drawn
    as its sprite scaled to its size, rotated to its orientation and centered
    on its position. The camera zooms out automatically to keep ships visible.

    Attributes:
        screen (pygame.Surface): The display surface.
        clock (pygame.time.Clock): Limits the frame rate to `config.Visualization.FPS`.
        scale (float): Current world units per pixel.

    Raises:
        ConfigurationError: If the configured key names are unknown.
        pygame.error: If the display cannot be created.
    """
    def __init__(self):
        pygame.init()
        try:
            self.screen = pygame.display.set_mode(
                (config.Visualization.SCREEN_WIDTH_PX, config.Visualization.SCREEN_HEIGHT_PX),
                pygame.RESIZABLE,
            )
        except pygame.error as e_disp:
            logging.critical(f"Error setting display mode: {e_disp}", exc_info=True)
            raise
        pygame.display.set_caption(config.Visualization.WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.scale = 1.0
        self.fullscreen_key = resolve_key(config.Controls.FULLSCREEN_KEY)
        self.quit_key = resolve_key(config.Controls.QUIT_KEY)
        self._sprite_cache = {}
        logging.info(f"Visualization initialized at {self.screen.get_width()}x{self.screen.get_height()}.")

    def handle_events(self) -> bool:
        """Processes the event queue.

        Returns:
            bool: `False` if the window was closed or the quit key released,
                  `True` otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("QUIT event received via Pygame window. Signaling shutdown.")
                return False
            if event.type == pygame.KEYUP:
                if event.key == self.quit_key:
                    logging.info("Quit key released. Signaling shutdown.")
                    return False
                if event.key == self.fullscreen_key:
                    pygame.display.toggle_fullscreen()
                    logging.info("Toggled fullscreen.")
        return True

    def world_to_screen(self, position: Tuple[float, float]) -> Tuple[float, float]:
        w, h = self.screen.get_size()
        return (w / 2.0 + position[0] / self.scale, h / 2.0 + position[1] / self.scale)

    def render(self, frame: List[RenderItem], ship_positions: Iterable[Sequence[float]]):
        w, h = self.screen.get_size()
        self.scale = compute_view_scale(ship_positions, w, h, self.scale)
        self.screen.fill(config.Visualization.BACKGROUND_COLOR)

        for item in frame:
            pixels = max(1, int(round(item.size / self.scale)))
            image = self._scaled_sprite(item.sprite, pixels)
            # Screen y points down, so a positive angle turns clockwise on screen.
            rotated = pygame.transform.rotate(image, -math.degrees(item.orientation))
            rect = rotated.get_rect(center=self.world_to_screen(item.position))
            self.screen.blit(rotated, rect)

        pygame.display.flip()
        self.clock.tick(config.Visualization.FPS)

    def _scaled_sprite(self, sprite: pygame.Surface, pixels: int) -> pygame.Surface:
        key = (id(sprite), pixels)
        cached = self._sprite_cache.get(key)
        if cached is None:
            if len(self._sprite_cache) > 256:
                self._sprite_cache.clear()
            cached = pygame.transform.scale(sprite, (pixels, pixels))
            self._sprite_cache[key] = cached
        return cached

    def close(self):
        pygame.quit()
