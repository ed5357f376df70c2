# main.py
import argparse
import cProfile
import logging
import os
from typing import Optional

import psutil  # For memory monitoring

from assets import load_sprites, ship_sprites
from config import config, ConfigurationError, SimulationSettings
from input_control import KeyboardInput, ScriptedInput
from scenario import create_initial_objects
from simulation import OrbitsSimulation


class OrbitsGame:
    """Runs the Orbits simulation inside a pygame window, or headless.

    Each frame the game:
    1.  Handles window events (quit, fullscreen toggle).
    2.  Polls the keyboard so every ship's input channel has fresh signals.
    3.  Advances the simulation by one tick (`OrbitsSimulation.tick`).
    4.  Draws the exported render frame.
    5.  Periodically logs the process memory usage.

    In headless mode no window is opened, every ship receives idle controls
    and the loop runs as fast as possible for the requested number of ticks.

    Attributes:
        simulation (OrbitsSimulation): The simulation core.
        visualization (Visualization | None): Renderer; None when headless.
        keyboard (KeyboardInput | None): Keyboard collaborator; None when headless.
        running (bool): Cleared when the user closes the window.
        process (psutil.Process): Used for memory monitoring.
    """
    def __init__(self, headless: bool = False):
        settings = SimulationSettings.from_config(config)
        logging.info(f"Simulation settings: {settings.as_dict()}")

        if headless:
            self.visualization = None
            self.keyboard = None
            input_source = ScriptedInput()
        else:
            from visualization import Visualization
            self.visualization = Visualization()
            self.keyboard = KeyboardInput()
            input_source = self.keyboard

        sprites = load_sprites()
        self.simulation = OrbitsSimulation(
            input_source,
            ship_sprites(sprites),
            settings=settings,
            objects=create_initial_objects(sprites['sun'], sprites['ship'], settings),
        )
        self.running = True
        self.process = psutil.Process(os.getpid())
        logging.info("OrbitsGame initialized successfully.")

    def run(self, max_steps: Optional[int] = None) -> int:
        """Runs frames until the window closes or `max_steps` ticks were simulated.

        Returns:
            int: Number of ticks simulated.
        """
        steps = 0
        while self.running and (max_steps is None or steps < max_steps):
            if self.visualization is not None:
                if not self.visualization.handle_events():
                    self.running = False
                    break
                self.keyboard.poll()

            frame = self.simulation.tick()
            steps += 1

            if self.visualization is not None:
                ship_positions = [obj.position for obj in self.simulation.ships()]
                self.visualization.render(frame, ship_positions)

            if steps % config.Monitoring.MEMORY_CHECK_INTERVAL_STEPS == 0:
                self._check_memory()

        logging.info(f"Run finished after {steps} ticks with {len(self.simulation.objects)} live objects.")
        return steps

    def _check_memory(self):
        memory_mb = self.process.memory_info().rss / (1024 * 1024)
        if memory_mb > config.Monitoring.MEMORY_USAGE_WARN_MB:
            logging.warning(f"Memory usage {memory_mb:.1f} MB exceeds {config.Monitoring.MEMORY_USAGE_WARN_MB} MB.")
        else:
            logging.debug(f"Memory usage {memory_mb:.1f} MB.")

    def close(self):
        if self.visualization is not None:
            self.visualization.close()


def main():
    """Entry point: parses arguments, runs the game and reports fatal errors."""
    parser = argparse.ArgumentParser(description="Run the Orbits gravity simulation.")
    parser.add_argument("--headless", action="store_true",
                        help="Run without a window; ships receive no input.")
    parser.add_argument("--steps", type=int, default=None,
                        help="Stop after this many ticks (default: run until the window is closed).")
    parser.add_argument("--profile", action="store_true",
                        help="Enable profiling. Statistics will be saved to 'simulation_profile.prof'.")
    parser.add_argument("--debug", action="store_true", help="Log per-tick details.")
    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    profiler = None
    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        logging.info("cProfile profiling enabled. Output will be saved to simulation_profile.prof upon completion.")

    game = None
    try:
        game = OrbitsGame(headless=args.headless)
        game.run(max_steps=args.steps)
    except ConfigurationError as e_config_main:
        logging.critical(f"Orbits could not be started due to a ConfigurationError: {e_config_main}", exc_info=True)
        print(f"FATAL CONFIGURATION ERROR: {e_config_main}. Simulation cannot start. Check logs for details.")
    except Exception as e_main:
        logging.critical(f"An unexpected critical error occurred in the main loop: {e_main}", exc_info=True)
        print(f"FATAL UNEXPECTED ERROR: {e_main}. Simulation terminated. Check logs for details.")
        raise
    finally:
        if game is not None:
            game.close()
        if profiler:
            profiler.disable()
            profiler.dump_stats("simulation_profile.prof")
            logging.info("Profiling data saved to simulation_profile.prof")


if __name__ == "__main__":
    main()
