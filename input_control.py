# input_control.py
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import pygame

from config import config, ConfigurationError
from physics_utils import PhysicsError


@dataclass(frozen=True)
class ControlState:
    """Control signals for one input channel during one tick."""
    accelerate: bool = False
    turn_left: bool = False
    turn_right: bool = False
    fire: bool = False


IDLE = ControlState()


class InputSource:
    """Source of per-tick control signals, queried by channel id.

    The simulation only calls `control_state()`; how the signals are produced
    (keyboard, scripted test input, replay) is up to the subclass.
    """

    def control_state(self, channel_id: int) -> ControlState:
        raise NotImplementedError

    def has_channel(self, channel_id: int) -> bool:
        raise NotImplementedError


class KeyboardInput(InputSource):
    """Reads control signals from the pygame keyboard state.

    Each channel maps to four pygame key names in the order
    (accelerate, turn_left, turn_right, fire), e.g. ("w", "a", "d", "s").
    `poll()` must be called once per frame after the event queue was pumped.
    """

    def __init__(self, keymaps: Optional[Dict[int, Sequence[str]]] = None):
        keymaps = keymaps if keymaps is not None else config.Controls.KEYMAPS
        self.keymaps: Dict[int, Tuple[int, int, int, int]] = {
            channel: tuple(resolve_key(name) for name in names)
            for channel, names in keymaps.items()
        }
        self._pressed = None
        logging.info(f"KeyboardInput bound channels: {sorted(self.keymaps)}")

    def poll(self):
        self._pressed = pygame.key.get_pressed()

    def has_channel(self, channel_id: int) -> bool:
        return channel_id in self.keymaps

    def control_state(self, channel_id: int) -> ControlState:
        if channel_id not in self.keymaps:
            raise PhysicsError(f"No keymap bound to input channel {channel_id}.")
        if self._pressed is None:
            return IDLE
        accelerate, left, right, fire = self.keymaps[channel_id]
        pressed = self._pressed
        return ControlState(
            accelerate=bool(pressed[accelerate]),
            turn_left=bool(pressed[left]),
            turn_right=bool(pressed[right]),
            fire=bool(pressed[fire]),
        )


class ScriptedInput(InputSource):
    """Control signals set programmatically; used for headless runs and tests.

    Channels without a state set report `IDLE`. States persist until changed.
    """

    def __init__(self, states: Optional[Dict[int, ControlState]] = None):
        self.states: Dict[int, ControlState] = dict(states or {})

    def set(self, channel_id: int, **signals):
        self.states[channel_id] = ControlState(**signals)

    def release(self, channel_id: int):
        self.states[channel_id] = IDLE

    def has_channel(self, channel_id: int) -> bool:
        return True

    def control_state(self, channel_id: int) -> ControlState:
        return self.states.get(channel_id, IDLE)


def resolve_key(name: str) -> int:
    """Turns a key name such as "w" or "UP" into its pygame key constant."""
    try:
        return getattr(pygame, f"K_{name}")
    except AttributeError:
        raise ConfigurationError(f"Unknown key name '{name}' in Controls configuration.")
