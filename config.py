# config.py
import logging
from dataclasses import dataclass, fields
from typing import Optional

# Configure basic logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(module)s - %(message)s')


class ConfigurationError(Exception):
    """Custom exception for simulation configuration errors.

    Raised by `SimulationConfig.validate()`, `SimulationSettings.validate()` and
    other configuration-dependent components when settings are invalid,
    inconsistent, or missing, which would prevent the simulation from running
    correctly.

    Attributes:
        message (str): A human-readable explanation of the configuration error.
                       This is the first argument passed to the exception constructor.
    """
    pass


class SimulationConfig:
    """Centralized, hierarchical configuration for the Orbits simulation.

    All parameters live in nested static classes (e.g., `SimulationConfig.Physics`,
    `SimulationConfig.Ship`, `SimulationConfig.Scenario`). An instance named
    `config` is created at the end of this module, making it globally available
    via `from config import config`.

    The constructor invokes `validate()`, which raises `ConfigurationError` if
    any value is out of range or inconsistent.

    Example Usage:
        >>> from config import config
        >>> print(f"Gravity constant: {config.Physics.GRAVITY_CONSTANT}")
        >>> print(f"Ship collisions: {config.Ship.SURVIVABILITY}")
    """

    # --- Physics Configuration ---
    class Physics:
        """Configuration for the gravity and integration engine.

        The simulation advances at a fixed unit timestep: velocities are in world
        units per tick and every call to the update step is exactly one tick.

        Attributes:
            GRAVITY_CONSTANT (float): Tunable constant G of the inverse-square law.
            ESCAPE_DISTANCE_BOUND (float): Distance from the origin beyond which an
                                           object counts as having left the region.
            SHIPS_EXEMPT_FROM_ESCAPE (bool): If True, ships are never removed for
                                             leaving the region.
        """
        GRAVITY_CONSTANT = 0.1
        ESCAPE_DISTANCE_BOUND = 1000.0
        SHIPS_EXEMPT_FROM_ESCAPE = True

    # --- Ship Configuration ---
    class Ship:
        """Configuration for player-controlled ships.

        Attributes:
            MASS (float): Mass of every ship.
            SIZE (float): Diameter of every ship.
            LINEAR_ACCELERATION (float): Velocity gained per tick while accelerating.
            ROTATIONAL_ACCELERATION (float): Radians turned per tick while turning.
            SURVIVABILITY (Optional[int]): Collisions a ship survives; None makes
                                           ships invulnerable.
        """
        MASS = 1.0
        SIZE = 16.0
        LINEAR_ACCELERATION = 0.001
        ROTATIONAL_ACCELERATION = 0.05
        SURVIVABILITY = 3

    # --- Projectile Configuration ---
    class Projectile:
        """Configuration for projectiles fired by ships.

        Attributes:
            MASS (float): Mass of a projectile.
            SIZE (float): Diameter of a projectile.
            MUZZLE_SPEED (float): Speed added along the ship's forward vector.
            SPAWN_OFFSET_FACTOR (float): Projectiles spawn `ship.size / factor`
                                         ahead of the ship's center.
            COOLDOWN_MAX (float): Cooldown set on the firing ship.
            COOLDOWN_DECAY_PER_TICK (float): Cooldown removed from every ship each tick.
            SURVIVABILITY (int): Collisions a projectile survives.
        """
        MASS = 0.01
        SIZE = 4.0
        MUZZLE_SPEED = 0.8
        SPAWN_OFFSET_FACTOR = 1.5
        COOLDOWN_MAX = 1.0
        COOLDOWN_DECAY_PER_TICK = 0.01
        SURVIVABILITY = 1

    # --- Controls Configuration ---
    class Controls:
        """Keyboard bindings per input channel.

        Attributes:
            KEYMAPS (Dict[int, Tuple[str, str, str, str]]): Maps an input channel to
                pygame key names for (accelerate, turn_left, turn_right, fire).
                Names are resolved as `pygame.K_<name>`.
            FULLSCREEN_KEY (str): Key name toggling fullscreen.
            QUIT_KEY (str): Key name closing the window.
        """
        KEYMAPS = {
            0: ("w", "a", "d", "s"),
            1: ("UP", "LEFT", "RIGHT", "DOWN"),
        }
        FULLSCREEN_KEY = "F11"
        QUIT_KEY = "ESCAPE"

    # --- Scenario Configuration ---
    class Scenario:
        """Initial contents of the live set.

        Attributes:
            SUN (Dict): Position, velocity, mass and size of the central body.
            SHIPS (List[Dict]): Position, velocity and input channel of each ship.
        """
        SUN = {'position': (0.0, 0.0), 'velocity': (0.0, 0.0), 'mass': 1024.0, 'size': 96.0}
        SHIPS = [
            {'position': (256.0, 0.0), 'velocity': (0.0, 0.6), 'channel': 0},
            {'position': (-256.0, 0.0), 'velocity': (0.0, -0.6), 'channel': 1},
        ]

    # --- Visualization Configuration ---
    class Visualization:
        """Configuration for the pygame window and sprites.

        Attributes:
            SCREEN_WIDTH_PX (int): Initial window width in pixels.
            SCREEN_HEIGHT_PX (int): Initial window height in pixels.
            FPS (int): Frames (and therefore simulation ticks) per second.
            WINDOW_TITLE (str): Caption of the window.
            ASSET_DIR (str): Directory holding the sprite images.
            SPRITE_FILES (Dict[str, str]): Sprite role to file name.
            VIEW_MARGIN_FACTOR (float): Ships are kept inside the view with this
                                        margin factor when auto-zooming.
            BACKGROUND_COLOR (Tuple[int, int, int]): Clear color.
        """
        SCREEN_WIDTH_PX = 1280
        SCREEN_HEIGHT_PX = 1024
        FPS = 60
        WINDOW_TITLE = "Orbits"
        ASSET_DIR = "assets"
        SPRITE_FILES = {
            'sun': "sun.png",
            'ship': "ship.png",
            'ship_power': "ship_power.png",
            'projectile': "projectile.png",
        }
        VIEW_MARGIN_FACTOR = 2.2
        BACKGROUND_COLOR = (0, 0, 0)

    # --- Monitoring Configuration ---
    class Monitoring:
        """Configuration for system resource monitoring.

        Attributes:
            MEMORY_USAGE_WARN_MB (int): Memory usage threshold in Megabytes. If exceeded,
                                        a warning is logged.
            MEMORY_CHECK_INTERVAL_STEPS (int): Frequency (in ticks) at which
                                               memory usage is checked.
        """
        MEMORY_USAGE_WARN_MB = 512
        MEMORY_CHECK_INTERVAL_STEPS = 600

    # --- Debug Configuration ---
    class Debug:
        """Configuration for debugging features and logging verbosity.

        Attributes:
            MONITOR_CONSERVATION (bool): If True, periodically logs total momentum
                                         and energy of the live set.
            MONITOR_INTERVAL_STEPS (int): Frequency (ticks) for those checks.
        """
        MONITOR_CONSERVATION = True
        MONITOR_INTERVAL_STEPS = 600

    def __init__(self):
        """Initializes the `SimulationConfig` instance and validates it.

        Raises:
            ConfigurationError: If `self.validate()` detects any issues with the
                                configuration values.
        """
        self.validate()

    def validate(self):
        """Performs validation of all configuration settings.

        -   **Physics**: G and the escape bound are positive.
        -   **Ship / Projectile**: masses and sizes are positive, accelerations
            non-negative, survivability is None or a positive integer for ships
            and a positive integer for projectiles, cooldown values are ordered.
        -   **Controls**: every keymap has exactly four key names.
        -   **Scenario**: the sun has positive mass/size and every ship refers to
            a channel that has a keymap.
        -   **Visualization / Monitoring / Debug**: positive sizes and intervals.

        Raises:
            ConfigurationError: If any configuration setting is found to be invalid.
        """
        # Physics validation
        if self.Physics.GRAVITY_CONSTANT <= 0:
            raise ConfigurationError("Physics.GRAVITY_CONSTANT must be positive.")
        if self.Physics.ESCAPE_DISTANCE_BOUND <= 0:
            raise ConfigurationError("Physics.ESCAPE_DISTANCE_BOUND must be positive.")

        # Ship validation
        if self.Ship.MASS <= 0 or self.Ship.SIZE <= 0:
            raise ConfigurationError("Ship.MASS and Ship.SIZE must be positive.")
        if self.Ship.LINEAR_ACCELERATION < 0 or self.Ship.ROTATIONAL_ACCELERATION < 0:
            raise ConfigurationError("Ship accelerations must be non-negative.")
        _check_survivability("Ship.SURVIVABILITY", self.Ship.SURVIVABILITY, allow_none=True)

        # Projectile validation
        if self.Projectile.MASS <= 0 or self.Projectile.SIZE <= 0:
            raise ConfigurationError("Projectile.MASS and Projectile.SIZE must be positive.")
        if self.Projectile.SPAWN_OFFSET_FACTOR <= 0:
            raise ConfigurationError("Projectile.SPAWN_OFFSET_FACTOR must be positive.")
        if not (0 < self.Projectile.COOLDOWN_DECAY_PER_TICK <= self.Projectile.COOLDOWN_MAX):
            raise ConfigurationError(
                f"Projectile.COOLDOWN_DECAY_PER_TICK ({self.Projectile.COOLDOWN_DECAY_PER_TICK}) must be "
                f"positive and not exceed COOLDOWN_MAX ({self.Projectile.COOLDOWN_MAX})."
            )
        _check_survivability("Projectile.SURVIVABILITY", self.Projectile.SURVIVABILITY, allow_none=False)

        # Controls validation
        for channel, keymap in self.Controls.KEYMAPS.items():
            if len(keymap) != 4:
                raise ConfigurationError(
                    f"Controls.KEYMAPS[{channel}] must name 4 keys (accelerate, left, right, fire), got {len(keymap)}."
                )

        # Scenario validation
        if self.Scenario.SUN['mass'] <= 0 or self.Scenario.SUN['size'] <= 0:
            raise ConfigurationError("Scenario.SUN mass and size must be positive.")
        for ship_cfg in self.Scenario.SHIPS:
            if ship_cfg['channel'] not in self.Controls.KEYMAPS:
                raise ConfigurationError(
                    f"Scenario ship at {ship_cfg['position']} uses channel {ship_cfg['channel']} "
                    "which has no entry in Controls.KEYMAPS."
                )

        # Visualization
        if self.Visualization.SCREEN_WIDTH_PX <= 0 or self.Visualization.SCREEN_HEIGHT_PX <= 0:
            raise ConfigurationError("Visualization screen dimensions (SCREEN_WIDTH_PX, SCREEN_HEIGHT_PX) must be positive.")
        if self.Visualization.FPS <= 0:
            raise ConfigurationError("Visualization.FPS must be positive.")
        if self.Visualization.VIEW_MARGIN_FACTOR <= 0:
            raise ConfigurationError("Visualization.VIEW_MARGIN_FACTOR must be positive.")

        if self.Monitoring.MEMORY_CHECK_INTERVAL_STEPS <= 0 or self.Debug.MONITOR_INTERVAL_STEPS <= 0:
            raise ConfigurationError("Monitoring and debug intervals must be positive.")

        logging.info("Configuration validated successfully.")


def _check_survivability(name, value, allow_none):
    if value is None:
        if not allow_none:
            raise ConfigurationError(f"{name} must be a positive integer.")
        return
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{name} ({value}) must be {'None or ' if allow_none else ''}a positive integer.")


@dataclass
class SimulationSettings:
    """Tunable constants consumed by the simulation core.

    Defaults mirror `SimulationConfig`; use `from_config()` to snapshot the
    global configuration, or construct directly to override single values.
    """
    gravity_constant: float = SimulationConfig.Physics.GRAVITY_CONSTANT
    linear_acceleration: float = SimulationConfig.Ship.LINEAR_ACCELERATION
    rotational_acceleration: float = SimulationConfig.Ship.ROTATIONAL_ACCELERATION
    projectile_cooldown_max: float = SimulationConfig.Projectile.COOLDOWN_MAX
    cooldown_decay: float = SimulationConfig.Projectile.COOLDOWN_DECAY_PER_TICK
    muzzle_speed: float = SimulationConfig.Projectile.MUZZLE_SPEED
    spawn_offset_factor: float = SimulationConfig.Projectile.SPAWN_OFFSET_FACTOR
    projectile_mass: float = SimulationConfig.Projectile.MASS
    projectile_size: float = SimulationConfig.Projectile.SIZE
    projectile_survivability: int = SimulationConfig.Projectile.SURVIVABILITY
    ship_survivability: Optional[int] = SimulationConfig.Ship.SURVIVABILITY
    escape_distance_bound: float = SimulationConfig.Physics.ESCAPE_DISTANCE_BOUND
    ships_exempt_from_escape: bool = SimulationConfig.Physics.SHIPS_EXEMPT_FROM_ESCAPE
    monitor_conservation: bool = SimulationConfig.Debug.MONITOR_CONSERVATION
    monitor_interval_steps: int = SimulationConfig.Debug.MONITOR_INTERVAL_STEPS

    def __post_init__(self):
        self.validate()

    @classmethod
    def from_config(cls, cfg: SimulationConfig) -> 'SimulationSettings':
        return cls(
            gravity_constant=cfg.Physics.GRAVITY_CONSTANT,
            linear_acceleration=cfg.Ship.LINEAR_ACCELERATION,
            rotational_acceleration=cfg.Ship.ROTATIONAL_ACCELERATION,
            projectile_cooldown_max=cfg.Projectile.COOLDOWN_MAX,
            cooldown_decay=cfg.Projectile.COOLDOWN_DECAY_PER_TICK,
            muzzle_speed=cfg.Projectile.MUZZLE_SPEED,
            spawn_offset_factor=cfg.Projectile.SPAWN_OFFSET_FACTOR,
            projectile_mass=cfg.Projectile.MASS,
            projectile_size=cfg.Projectile.SIZE,
            projectile_survivability=cfg.Projectile.SURVIVABILITY,
            ship_survivability=cfg.Ship.SURVIVABILITY,
            escape_distance_bound=cfg.Physics.ESCAPE_DISTANCE_BOUND,
            ships_exempt_from_escape=cfg.Physics.SHIPS_EXEMPT_FROM_ESCAPE,
            monitor_conservation=cfg.Debug.MONITOR_CONSERVATION,
            monitor_interval_steps=cfg.Debug.MONITOR_INTERVAL_STEPS,
        )

    def validate(self):
        """Checks the same ranges as `SimulationConfig.validate()` for the core tunables.

        Raises:
            ConfigurationError: If any value is out of range.
        """
        for name in ('gravity_constant', 'escape_distance_bound', 'projectile_cooldown_max',
                     'projectile_mass', 'projectile_size', 'spawn_offset_factor', 'cooldown_decay'):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"SimulationSettings.{name} ({getattr(self, name)}) must be positive.")
        for name in ('linear_acceleration', 'rotational_acceleration', 'muzzle_speed'):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"SimulationSettings.{name} ({getattr(self, name)}) must be non-negative.")
        if self.cooldown_decay > self.projectile_cooldown_max:
            raise ConfigurationError(
                f"SimulationSettings.cooldown_decay ({self.cooldown_decay}) must not exceed "
                f"projectile_cooldown_max ({self.projectile_cooldown_max})."
            )
        if self.monitor_interval_steps <= 0:
            raise ConfigurationError("SimulationSettings.monitor_interval_steps must be positive.")
        _check_survivability("SimulationSettings.ship_survivability", self.ship_survivability, allow_none=True)
        _check_survivability("SimulationSettings.projectile_survivability", self.projectile_survivability,
                             allow_none=False)

    def as_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


# --- Instantiate the configuration ---
# This makes the config object available for import and runs validation.
# e.g., from config import config
try:
    config = SimulationConfig()
except ConfigurationError as e:
    logging.error(f"FATAL CONFIGURATION ERROR: {e}", exc_info=True)
    raise
