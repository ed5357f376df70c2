# space_object.py
import logging
from dataclasses import dataclass, field
from typing import Any, List, NamedTuple, Optional, Union

import numpy as np

from config import SimulationSettings, config
from input_control import ControlState
from physics_utils import PhysicsError, clamp, forward_vector


class ShipSprites(NamedTuple):
    """Sprite handles a ship swaps between; never interpreted by the core."""
    idle: Any
    powered: Any
    projectile: Any


@dataclass
class BodyRole:
    """A non-controllable celestial body."""
    pass


@dataclass
class ShipRole:
    """Control state carried only by ships.

    Attributes:
        input_channel (int): Channel queried on the input source every tick.
        shot_cooldown (float): Ticks-worth of cooldown left on the weapon,
                               kept within [0, cooldown max].
    """
    input_channel: int
    shot_cooldown: float = 0.0


@dataclass
class ProjectileRole:
    """A shot fired by a ship."""
    pass


Role = Union[BodyRole, ShipRole, ProjectileRole]


@dataclass(eq=False)
class SpaceObject:
    """Describes a physical object in space.

    Attributes:
        position (np.ndarray): 2-D position in world units.
        velocity (np.ndarray): 2-D velocity in world units per tick.
        angle (float): Orientation in radians, relative to the (1, 0) axis.
        mass (float): Gravitational and inertial mass.
        size (float): Diameter used for drawing and the collision test.
        sprite (Any): Opaque render handle.
        role (Role): Body, ship or projectile.
        collisions (Optional[int]): Collisions this object can still absorb;
                                    None means it cannot be destroyed.
    """
    position: np.ndarray
    velocity: np.ndarray
    mass: float
    size: float
    sprite: Any
    role: Role = field(default_factory=BodyRole)
    angle: float = 0.0
    collisions: Optional[int] = None

    def __post_init__(self):
        self.position = np.array(self.position, dtype=np.float64)
        self.velocity = np.array(self.velocity, dtype=np.float64)
        if self.position.shape != (2,) or self.velocity.shape != (2,):
            raise PhysicsError(f"Position and velocity must be 2-D vectors, got {self.position} and {self.velocity}.")
        if not self.mass > 0:
            raise PhysicsError(f"Mass must be positive, got {self.mass}.")
        if not self.size > 0:
            raise PhysicsError(f"Size must be positive, got {self.size}.")

    @classmethod
    def body(cls, position, velocity, mass: float, size: float, sprite) -> 'SpaceObject':
        """Creates a celestial body: non-controllable and indestructible."""
        return cls(position, velocity, mass, size, sprite, role=BodyRole(), collisions=None)

    @classmethod
    def ship(cls, position, velocity, sprite, input_channel: int,
             settings: Optional[SimulationSettings] = None) -> 'SpaceObject':
        """Creates a ship facing along +x with the configured mass and size.

        The number of collisions it survives is `settings.ship_survivability`;
        None makes the ship indestructible.
        """
        settings = settings or SimulationSettings()
        return cls(position, velocity, config.Ship.MASS, config.Ship.SIZE, sprite,
                   role=ShipRole(input_channel=input_channel), angle=0.0,
                   collisions=settings.ship_survivability)

    @classmethod
    def projectile(cls, position, velocity, angle: float, sprite,
                   settings: Optional[SimulationSettings] = None) -> 'SpaceObject':
        """Creates a projectile with the configured mass, size and survivability."""
        settings = settings or SimulationSettings()
        return cls(position, velocity, settings.projectile_mass, settings.projectile_size, sprite,
                   role=ProjectileRole(), angle=angle, collisions=settings.projectile_survivability)

    def is_ship(self) -> bool:
        return isinstance(self.role, ShipRole)

    def is_projectile(self) -> bool:
        return isinstance(self.role, ProjectileRole)

    def get_position(self) -> np.ndarray:
        return self.position.copy()

    def get_velocity(self) -> np.ndarray:
        return self.velocity.copy()

    def get_mass(self) -> float:
        return self.mass

    def forward(self) -> np.ndarray:
        return forward_vector(self.angle)

    def distance_from_origin(self) -> float:
        return float(np.linalg.norm(self.position))

    def interact(self, control: ControlState, sprites: ShipSprites,
                 settings: SimulationSettings) -> List['SpaceObject']:
        """Applies one tick of control signals to a ship.

        Accelerating pushes the ship along its forward vector and shows the
        powered sprite. Turning changes the angle. Firing spawns a projectile
        ahead of the ship if the weapon is cooled down. The cooldown decays
        every tick whether or not the ship fired.

        Returns:
            List[SpaceObject]: Projectiles spawned this tick. The caller appends
                               them to the live set.
        """
        spawns = []
        if not self.is_ship():
            return spawns

        ship_info = self.role
        forward = self.forward()

        if control.accelerate:
            self.velocity += forward * settings.linear_acceleration
            self.sprite = sprites.powered
        else:
            self.sprite = sprites.idle

        if control.turn_left:
            self.angle += settings.rotational_acceleration
        if control.turn_right:
            self.angle -= settings.rotational_acceleration

        if control.fire and ship_info.shot_cooldown <= 0.0:
            spawns.append(SpaceObject.projectile(
                position=self.position + forward * self.size / settings.spawn_offset_factor,
                velocity=self.velocity + forward * settings.muzzle_speed,
                angle=self.angle,
                sprite=sprites.projectile,
                settings=settings,
            ))
            ship_info.shot_cooldown = settings.projectile_cooldown_max
            logging.debug(f"Ship on channel {ship_info.input_channel} fired from {self.position.tolist()}")

        ship_info.shot_cooldown = clamp(ship_info.shot_cooldown - settings.cooldown_decay,
                                        0.0, settings.projectile_cooldown_max)
        return spawns

    def perform_movement(self, force: Optional[np.ndarray] = None):
        """Moves the object by its velocity. If a force is passed, it is first accelerated accordingly."""
        if force is not None:
            self.velocity += force / self.mass
        self.position += self.velocity

    def overlaps(self, other: 'SpaceObject') -> bool:
        """Circle overlap: center distance is less than the sum of both radii."""
        return float(np.linalg.norm(self.position - other.position)) * 2.0 < self.size + other.size

    def register_collision(self, count: int = 1):
        """Reduces the allowed collisions by `count` if this object is destructible."""
        if self.collisions is not None:
            self.collisions = max(0, self.collisions - count)

    def collisions_left(self) -> bool:
        """Returns whether this object can still survive, i.e. it is indestructible or has collisions left."""
        return self.collisions is None or self.collisions > 0
