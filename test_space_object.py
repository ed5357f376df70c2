import math
import unittest
import numpy as np
from config import SimulationSettings, config
from input_control import ControlState
from physics_utils import PhysicsError
from space_object import SpaceObject, ShipSprites, ShipRole, ProjectileRole

SPRITES = ShipSprites(idle="ship", powered="ship_power", projectile="shot")


class TestConstructors(unittest.TestCase):

    def test_body_is_indestructible(self):
        sun = SpaceObject.body((0, 0), (0, 0), 1024.0, 96.0, "sun")
        self.assertIsNone(sun.collisions)
        self.assertFalse(sun.is_ship())
        self.assertEqual(sun.get_mass(), 1024.0)

    def test_ship_defaults(self):
        ship = SpaceObject.ship((256, 0), (0, 0.6), "ship", input_channel=0)
        self.assertTrue(ship.is_ship())
        self.assertEqual(ship.angle, 0.0)
        self.assertEqual(ship.mass, 1.0)
        self.assertEqual(ship.size, 16.0)
        self.assertEqual(ship.collisions, config.Ship.SURVIVABILITY)
        self.assertEqual(ship.role.shot_cooldown, 0.0)

    def test_invulnerable_ship(self):
        ship = SpaceObject.ship((0, 0), (0, 0), "ship", input_channel=0,
                                settings=SimulationSettings(ship_survivability=None))
        self.assertIsNone(ship.collisions)

    def test_ship_survivability_follows_settings(self):
        ship = SpaceObject.ship((0, 0), (0, 0), "ship", 0, settings=SimulationSettings(ship_survivability=5))
        self.assertEqual(ship.collisions, 5)

    def test_projectile_survives_one_collision(self):
        shot = SpaceObject.projectile((0, 0), (1, 0), 0.0, "shot")
        self.assertIsInstance(shot.role, ProjectileRole)
        self.assertEqual(shot.collisions, 1)
        self.assertTrue(shot.is_projectile())

    def test_non_positive_mass_rejected(self):
        with self.assertRaises(PhysicsError):
            SpaceObject.body((0, 0), (0, 0), 0.0, 10.0, "sun")

    def test_non_positive_size_rejected(self):
        with self.assertRaises(PhysicsError):
            SpaceObject.body((0, 0), (0, 0), 1.0, -1.0, "sun")

    def test_accessors_return_copies(self):
        body = SpaceObject.body((1, 2), (3, 4), 1.0, 1.0, None)
        position = body.get_position()
        position[0] = 99.0
        np.testing.assert_array_equal(body.get_position(), np.array([1.0, 2.0]))
        np.testing.assert_array_equal(body.get_velocity(), np.array([3.0, 4.0]))


class TestMovementAndCollision(unittest.TestCase):

    def test_perform_movement_without_force(self):
        body = SpaceObject.body((0, 0), (1, 2), 2.0, 1.0, None)
        body.perform_movement()
        np.testing.assert_array_almost_equal(body.position, np.array([1.0, 2.0]))

    def test_perform_movement_divides_force_by_mass(self):
        body = SpaceObject.body((0, 0), (0, 0), 2.0, 1.0, None)
        body.perform_movement(np.array([1.0, 0.0]))
        np.testing.assert_array_almost_equal(body.velocity, np.array([0.5, 0.0]))
        np.testing.assert_array_almost_equal(body.position, np.array([0.5, 0.0]))

    def test_overlap_uses_sum_of_radii(self):
        a = SpaceObject.ship((0, 0), (0, 0), "ship", 0)
        b = SpaceObject.ship((15, 0), (0, 0), "ship", 1)
        c = SpaceObject.ship((16, 0), (0, 0), "ship", 2)
        self.assertTrue(a.overlaps(b))
        self.assertFalse(a.overlaps(c))  # 16 * 2 == 32 is not strictly less

    def test_register_collision_counts_down(self):
        ship = SpaceObject.ship((0, 0), (0, 0), "ship", 0, settings=SimulationSettings(ship_survivability=2))
        ship.register_collision()
        self.assertTrue(ship.collisions_left())
        ship.register_collision()
        self.assertFalse(ship.collisions_left())
        ship.register_collision()
        self.assertEqual(ship.collisions, 0)

    def test_indestructible_ignores_collisions(self):
        sun = SpaceObject.body((0, 0), (0, 0), 1.0, 1.0, None)
        sun.register_collision(5)
        self.assertTrue(sun.collisions_left())


class TestShipInteract(unittest.TestCase):

    def setUp(self):
        self.settings = SimulationSettings()
        self.ship = SpaceObject.ship((0, 0), (0, 0), "ship", 0)

    def test_accelerate_pushes_along_forward_and_shows_power_sprite(self):
        self.ship.interact(ControlState(accelerate=True), SPRITES, self.settings)
        np.testing.assert_array_almost_equal(self.ship.velocity, np.array([self.settings.linear_acceleration, 0.0]))
        self.assertEqual(self.ship.sprite, "ship_power")
        self.ship.interact(ControlState(), SPRITES, self.settings)
        self.assertEqual(self.ship.sprite, "ship")

    def test_turning(self):
        self.ship.interact(ControlState(turn_left=True), SPRITES, self.settings)
        self.assertAlmostEqual(self.ship.angle, self.settings.rotational_acceleration)
        self.ship.interact(ControlState(turn_right=True), SPRITES, self.settings)
        self.ship.interact(ControlState(turn_right=True), SPRITES, self.settings)
        self.assertAlmostEqual(self.ship.angle, -self.settings.rotational_acceleration)

    def test_fire_spawns_projectile_ahead_of_ship(self):
        self.ship.angle = math.pi / 2
        self.ship.velocity = np.array([0.1, 0.0])
        spawns = self.ship.interact(ControlState(fire=True), SPRITES, self.settings)
        self.assertEqual(len(spawns), 1)
        shot = spawns[0]
        np.testing.assert_array_almost_equal(shot.position, np.array([0.0, 16.0 / 1.5]))
        np.testing.assert_array_almost_equal(shot.velocity, np.array([0.1, self.settings.muzzle_speed]))
        self.assertAlmostEqual(shot.angle, math.pi / 2)
        self.assertEqual(shot.mass, self.settings.projectile_mass)
        self.assertEqual(shot.size, self.settings.projectile_size)
        self.assertEqual(shot.sprite, "shot")
        self.assertEqual(shot.collisions, 1)

    def test_cooldown_blocks_second_shot(self):
        first = self.ship.interact(ControlState(fire=True), SPRITES, self.settings)
        self.assertAlmostEqual(self.ship.role.shot_cooldown, 0.99)
        second = self.ship.interact(ControlState(fire=True), SPRITES, self.settings)
        self.assertEqual(len(first), 1)
        self.assertEqual(second, [])
        self.assertAlmostEqual(self.ship.role.shot_cooldown, 0.98)

    def test_cooldown_floors_at_zero(self):
        self.ship.role.shot_cooldown = 0.005
        self.ship.interact(ControlState(), SPRITES, self.settings)
        self.assertEqual(self.ship.role.shot_cooldown, 0.0)

    def test_non_ship_does_not_interact(self):
        sun = SpaceObject.body((0, 0), (0, 0), 1.0, 1.0, "sun")
        self.assertEqual(sun.interact(ControlState(fire=True, accelerate=True), SPRITES, self.settings), [])
        self.assertEqual(sun.sprite, "sun")
        self.assertNotIsInstance(sun.role, ShipRole)


if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
