# scenario.py
import logging
from typing import Any, List, Optional

from config import SimulationSettings, config
from space_object import SpaceObject


def create_initial_objects(sun_sprite: Any, ship_sprite: Any,
                           settings: Optional[SimulationSettings] = None) -> List[SpaceObject]:
    """Builds the starting live set from `config.Scenario`: the sun, then every ship."""
    settings = settings or SimulationSettings.from_config(config)
    sun_cfg = config.Scenario.SUN
    objects = [SpaceObject.body(sun_cfg['position'], sun_cfg['velocity'],
                                sun_cfg['mass'], sun_cfg['size'], sun_sprite)]
    for ship_cfg in config.Scenario.SHIPS:
        objects.append(SpaceObject.ship(ship_cfg['position'], ship_cfg['velocity'], ship_sprite,
                                        ship_cfg['channel'], settings=settings))
        logging.debug(f"Created ship on channel {ship_cfg['channel']} at {ship_cfg['position']}")
    return objects
