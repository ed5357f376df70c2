# assets.py
import logging
import os
from typing import Dict, Optional

import pygame

from config import config
from space_object import ShipSprites

PLACEHOLDER_SIZE = 64


def load_sprites(asset_dir: Optional[str] = None) -> Dict[str, pygame.Surface]:
    """Loads every sprite named in `config.Visualization.SPRITE_FILES`.

    A missing or unreadable image is replaced by a drawn placeholder so the
    simulation can still start; the substitution is logged as a warning.
    """
    asset_dir = asset_dir if asset_dir is not None else config.Visualization.ASSET_DIR
    sprites = {}
    for name, file_name in config.Visualization.SPRITE_FILES.items():
        path = os.path.join(asset_dir, file_name)
        try:
            surface = pygame.image.load(path)
            if pygame.display.get_surface() is not None:
                surface = surface.convert_alpha()
            logging.debug(f"Loaded sprite '{name}' from {path}")
        except (pygame.error, FileNotFoundError) as e_load:
            logging.warning(f"Could not load sprite '{name}' from {path} ({e_load}). Using placeholder.")
            surface = placeholder_sprite(name)
        sprites[name] = surface
    return sprites


def ship_sprites(sprites: Dict[str, pygame.Surface]) -> ShipSprites:
    return ShipSprites(idle=sprites['ship'], powered=sprites['ship_power'], projectile=sprites['projectile'])


def placeholder_sprite(name: str) -> pygame.Surface:
    """Draws a simple stand-in facing +x, the direction an angle of 0 points to."""
    surface = pygame.Surface((PLACEHOLDER_SIZE, PLACEHOLDER_SIZE), pygame.SRCALPHA)
    s = PLACEHOLDER_SIZE
    if name == 'sun':
        pygame.draw.circle(surface, (255, 220, 80), (s // 2, s // 2), s // 2)
    elif name in ('ship', 'ship_power'):
        if name == 'ship_power':
            pygame.draw.polygon(surface, (255, 140, 0), [(0, s // 2), (s // 4, s // 3), (s // 4, 2 * s // 3)])
        pygame.draw.polygon(surface, (200, 200, 220), [(s - 1, s // 2), (s // 4, s // 8), (s // 4, 7 * s // 8)])
    else:
        pygame.draw.circle(surface, (255, 80, 80), (s // 2, s // 2), s // 2)
    return surface
