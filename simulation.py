# simulation.py
import logging
from typing import Any, List, NamedTuple, Optional, Tuple

import numpy as np

from config import SimulationSettings, config
from gravity import GravityEngine
from input_control import InputSource
from physics_utils import PhysicsError
from space_object import ShipSprites, SpaceObject


class RenderItem(NamedTuple):
    """Pose, size and sprite of one live object, exported after every tick."""
    position: Tuple[float, float]
    orientation: float
    size: float
    sprite: Any


class OrbitsSimulation:
    """Owns the live set of space objects and advances it one tick at a time.

    Every tick runs, in order:
    1.  `interact()`: each ship applies the control signals of its input channel.
        Spawned projectiles are buffered and appended after all ships ran.
    2.  `update()`: forces and Euler integration over the whole live set
        (projectiles spawned this tick included), then collision resolution,
        then culling of destroyed and escaped objects.
    3.  `render_frame()`: the pose of every remaining object for the renderer.

    Collision resolution is split into a detection pass, which records how many
    overlaps each object took part in, and an application pass, so the outcome
    does not depend on the order pairs are visited. A pair that keeps
    overlapping is counted again on every tick.

    Attributes:
        objects (List[SpaceObject]): The live set. Only the simulation mutates it.
        input_source (InputSource): Provides control signals per channel.
        sprites (ShipSprites): Sprite handles ships switch between.
        settings (SimulationSettings): Tunable constants.
        gravity (GravityEngine): Force and integration engine.
        step_count (int): Number of completed ticks.
    """

    def __init__(self, input_source: InputSource, sprites: ShipSprites,
                 settings: Optional[SimulationSettings] = None,
                 objects: Optional[List[SpaceObject]] = None):
        self.settings = settings or SimulationSettings.from_config(config)
        self.input_source = input_source
        self.sprites = sprites
        self.gravity = GravityEngine(self.settings.gravity_constant)
        self.objects: List[SpaceObject] = []
        self.step_count = 0
        for obj in objects or []:
            self.add_object(obj)
        logging.info(f"OrbitsSimulation initialized with {len(self.objects)} objects, "
                     f"G={self.settings.gravity_constant}.")

    def add_object(self, obj: SpaceObject):
        """Adds an object to the live set. Ships must be bound to a channel the input source provides."""
        if obj.is_ship() and not self.input_source.has_channel(obj.role.input_channel):
            raise PhysicsError(f"Ship bound to input channel {obj.role.input_channel}, "
                               "which the input source does not provide.")
        self.objects.append(obj)

    def ships(self) -> List[SpaceObject]:
        """Live ships, in live-set order."""
        return [obj for obj in self.objects if obj.is_ship()]

    def interact(self) -> List[SpaceObject]:
        """Reads every ship's controls and appends the projectiles they fired."""
        shots = []
        for obj in self.objects:
            if obj.is_ship():
                control = self.input_source.control_state(obj.role.input_channel)
                shots.extend(obj.interact(control, self.sprites, self.settings))
        self.objects.extend(shots)
        return shots

    def update(self):
        """Integrates gravity, resolves collisions and culls the live set."""
        self.gravity.step(self.objects)
        self.resolve_collisions()
        self.cull()
        self.step_count += 1

        if self.settings.monitor_conservation and self.step_count % self.settings.monitor_interval_steps == 0:
            self._log_conservation()

    def tick(self) -> List[RenderItem]:
        """Runs one full tick (controls, physics, collisions, culling) and returns the new frame."""
        self.interact()
        self.update()
        return self.render_frame()

    def resolve_collisions(self) -> int:
        """Registers one collision on both objects of every overlapping pair.

        Returns:
            int: Number of overlapping pairs found this tick.
        """
        n = len(self.objects)
        hits = np.zeros(n, dtype=np.int64)
        pairs = 0
        for i in range(n):
            for j in range(i + 1, n):
                if self.objects[i].overlaps(self.objects[j]):
                    hits[i] += 1
                    hits[j] += 1
                    pairs += 1

        for obj, count in zip(self.objects, hits):
            if count:
                obj.register_collision(int(count))
        if pairs:
            logging.debug(f"Step {self.step_count}: {pairs} overlapping pair(s).")
        return pairs

    def cull(self) -> List[SpaceObject]:
        """Removes destroyed objects and non-exempt objects beyond the escape bound."""
        survivors, removed = [], []
        for obj in self.objects:
            if not obj.collisions_left():
                logging.info(f"Step {self.step_count}: {type(obj.role).__name__} destroyed at "
                             f"{np.round(obj.position, 2).tolist()}.")
                removed.append(obj)
            elif self._escaped(obj):
                logging.debug(f"Step {self.step_count}: {type(obj.role).__name__} left the region at "
                              f"{np.round(obj.position, 2).tolist()}.")
                removed.append(obj)
            else:
                survivors.append(obj)
        self.objects = survivors
        return removed

    def _escaped(self, obj: SpaceObject) -> bool:
        if obj.is_ship() and self.settings.ships_exempt_from_escape:
            return False
        return obj.distance_from_origin() > self.settings.escape_distance_bound

    def render_frame(self) -> List[RenderItem]:
        """Position, orientation, size and sprite of every live object, in live-set order."""
        return [
            RenderItem((float(obj.position[0]), float(obj.position[1])), float(obj.angle), obj.size, obj.sprite)
            for obj in self.objects
        ]

    def _log_conservation(self):
        momentum = self.gravity.total_momentum(self.objects)
        energy = self.gravity.total_energy(self.objects)
        logging.info(f"CONSERVATION CHECK (Step {self.step_count}): {len(self.objects)} objects, "
                     f"momentum={momentum.tolist()}, energy={energy:.6e}")
