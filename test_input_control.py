import collections
import unittest
import pygame
from config import ConfigurationError
from input_control import ControlState, KeyboardInput, ScriptedInput, IDLE, resolve_key
from physics_utils import PhysicsError


class TestScriptedInput(unittest.TestCase):

    def test_unset_channels_are_idle(self):
        self.assertEqual(ScriptedInput().control_state(4), IDLE)

    def test_set_and_release(self):
        controls = ScriptedInput()
        controls.set(0, accelerate=True, fire=True)
        self.assertEqual(controls.control_state(0), ControlState(accelerate=True, fire=True))
        controls.release(0)
        self.assertEqual(controls.control_state(0), IDLE)


class TestKeyboardInput(unittest.TestCase):

    def setUp(self):
        self.keyboard = KeyboardInput({0: ("w", "a", "d", "s"), 1: ("UP", "LEFT", "RIGHT", "DOWN")})

    def test_idle_before_first_poll(self):
        self.assertEqual(self.keyboard.control_state(0), IDLE)

    def test_reads_pressed_keys_per_channel(self):
        self.keyboard._pressed = collections.defaultdict(bool, {pygame.K_w: True, pygame.K_LEFT: True,
                                                                 pygame.K_DOWN: True})
        self.assertEqual(self.keyboard.control_state(0), ControlState(accelerate=True))
        self.assertEqual(self.keyboard.control_state(1), ControlState(turn_left=True, fire=True))

    def test_unknown_channel_raises(self):
        self.assertFalse(self.keyboard.has_channel(2))
        with self.assertRaises(PhysicsError):
            self.keyboard.control_state(2)

    def test_resolve_key(self):
        self.assertEqual(resolve_key("F11"), pygame.K_F11)
        with self.assertRaises(ConfigurationError):
            resolve_key("not_a_key")


if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
