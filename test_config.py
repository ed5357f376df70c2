import unittest
from config import SimulationConfig, SimulationSettings, ConfigurationError, config


class NegativeGravityConfig(SimulationConfig):
    class Physics(SimulationConfig.Physics):
        GRAVITY_CONSTANT = -0.1


class ZeroShipSurvivabilityConfig(SimulationConfig):
    class Ship(SimulationConfig.Ship):
        SURVIVABILITY = 0


class InvulnerableShipConfig(SimulationConfig):
    class Ship(SimulationConfig.Ship):
        SURVIVABILITY = None


class UnboundChannelConfig(SimulationConfig):
    class Scenario(SimulationConfig.Scenario):
        SHIPS = [{'position': (0.0, 0.0), 'velocity': (0.0, 0.0), 'channel': 7}]


class ShortKeymapConfig(SimulationConfig):
    class Controls(SimulationConfig.Controls):
        KEYMAPS = {0: ("w", "a", "d")}


class TestSimulationConfig(unittest.TestCase):

    def test_global_config_is_valid(self):
        config.validate()

    def test_default_tunables(self):
        self.assertAlmostEqual(config.Physics.GRAVITY_CONSTANT, 0.1)
        self.assertAlmostEqual(config.Physics.ESCAPE_DISTANCE_BOUND, 1000.0)
        self.assertAlmostEqual(config.Projectile.COOLDOWN_MAX, 1.0)
        self.assertEqual(config.Projectile.SURVIVABILITY, 1)

    def test_negative_gravity_rejected(self):
        with self.assertRaises(ConfigurationError):
            NegativeGravityConfig()

    def test_zero_ship_survivability_rejected(self):
        with self.assertRaises(ConfigurationError):
            ZeroShipSurvivabilityConfig()

    def test_invulnerable_ships_allowed(self):
        InvulnerableShipConfig()

    def test_ship_channel_without_keymap_rejected(self):
        with self.assertRaises(ConfigurationError):
            UnboundChannelConfig()

    def test_keymap_needs_four_keys(self):
        with self.assertRaises(ConfigurationError):
            ShortKeymapConfig()


class TestSimulationSettings(unittest.TestCase):

    def test_from_config_matches_config(self):
        settings = SimulationSettings.from_config(config)
        self.assertEqual(settings.gravity_constant, config.Physics.GRAVITY_CONSTANT)
        self.assertEqual(settings.ship_survivability, config.Ship.SURVIVABILITY)
        self.assertEqual(settings.ships_exempt_from_escape, config.Physics.SHIPS_EXEMPT_FROM_ESCAPE)

    def test_override_single_value(self):
        settings = SimulationSettings(gravity_constant=1.0)
        self.assertEqual(settings.gravity_constant, 1.0)
        self.assertEqual(settings.linear_acceleration, config.Ship.LINEAR_ACCELERATION)

    def test_non_positive_gravity_rejected(self):
        with self.assertRaises(ConfigurationError):
            SimulationSettings(gravity_constant=0.0)

    def test_negative_acceleration_rejected(self):
        with self.assertRaises(ConfigurationError):
            SimulationSettings(linear_acceleration=-0.001)

    def test_zero_cooldown_decay_rejected(self):
        # The weapon would never cool down after its first shot.
        with self.assertRaises(ConfigurationError):
            SimulationSettings(cooldown_decay=0.0)

    def test_cooldown_decay_above_max_rejected(self):
        # The weapon would be ready again on every tick.
        with self.assertRaises(ConfigurationError):
            SimulationSettings(cooldown_decay=2.0, projectile_cooldown_max=1.0)

    def test_cooldown_decay_equal_to_max_allowed(self):
        settings = SimulationSettings(cooldown_decay=1.0, projectile_cooldown_max=1.0)
        self.assertEqual(settings.cooldown_decay, 1.0)

    def test_projectile_survivability_must_be_bounded(self):
        with self.assertRaises(ConfigurationError):
            SimulationSettings(projectile_survivability=None)

    def test_ship_survivability_none_allowed(self):
        self.assertIsNone(SimulationSettings(ship_survivability=None).ship_survivability)

    def test_as_dict_lists_every_field(self):
        values = SimulationSettings().as_dict()
        self.assertIn('escape_distance_bound', values)
        self.assertIn('projectile_cooldown_max', values)


if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
