# gravity.py
"""
Gravity and integration engine.

Computes the net inverse-square force on every object from every other object
and advances all objects with explicit Euler integration at unit timestep:

    F_i = sum_j normalize(p_j - p_i) * G * m_i * m_j / |p_j - p_i|^2
    v_i += F_i / m_i
    p_i += v_i

All forces of a tick are computed from one snapshot of the positions before any
object moves. Coincident objects exert no force on each other. Everything is
float64 so that runs with identical inputs produce identical trajectories.
"""
import logging
from typing import List, Sequence

import numpy as np

from config import ConfigurationError, config
from physics_utils import normalize_vector
from space_object import SpaceObject


class GravityEngine:
    def __init__(self, gravity_constant: float = config.Physics.GRAVITY_CONSTANT):
        if gravity_constant <= 0:
            raise ConfigurationError(f"Gravity constant must be positive, got {gravity_constant}.")
        self.gravity_constant = float(gravity_constant)

    def compute_forces(self, objects: Sequence[SpaceObject]) -> np.ndarray:
        """
        Calculates the gravitational force on every object.

        Only reads positions and masses, so the result is independent of the
        order in which objects move afterwards.

        Returns:
            np.ndarray: (n, 2) array of forces, same order as `objects`.
        """
        n = len(objects)
        positions = np.array([obj.position for obj in objects], dtype=np.float64).reshape(n, 2)
        masses = np.array([obj.mass for obj in objects], dtype=np.float64)
        forces = np.zeros((n, 2), dtype=np.float64)

        for i in range(n):
            for j in range(n):
                if i == j:
                    continue
                dist_vector = positions[j] - positions[i]
                dist_sq = float(np.dot(dist_vector, dist_vector))
                if dist_sq == 0.0:
                    continue
                magnitude = self.gravity_constant * masses[i] * masses[j] / dist_sq
                forces[i] += normalize_vector(dist_vector) * magnitude

        return forces

    def integrate(self, objects: Sequence[SpaceObject], forces: np.ndarray):
        """Applies precomputed forces, then moves every object by its velocity."""
        for obj, force in zip(objects, forces):
            obj.perform_movement(force)

    def step(self, objects: Sequence[SpaceObject]) -> np.ndarray:
        """Advances all objects by one tick and returns the forces that were applied."""
        forces = self.compute_forces(objects)
        self.integrate(objects, forces)
        return forces

    def total_momentum(self, objects: Sequence[SpaceObject]) -> np.ndarray:
        """Sum of mass * velocity over all objects."""
        momentum = np.zeros(2, dtype=np.float64)
        for obj in objects:
            momentum += obj.mass * obj.velocity
        return momentum

    def total_energy(self, objects: List[SpaceObject]) -> float:
        """
        Total mechanical energy (kinetic + pairwise potential) of the objects.

        Coincident pairs have no defined potential and are skipped with a debug
        message.
        """
        kinetic = sum(0.5 * obj.mass * float(np.dot(obj.velocity, obj.velocity)) for obj in objects)
        potential = 0.0
        for i in range(len(objects)):
            for j in range(i + 1, len(objects)):
                distance = float(np.linalg.norm(objects[j].position - objects[i].position))
                if distance == 0.0:
                    logging.debug(f"Objects {i} and {j} coincide; skipping their potential energy.")
                    continue
                potential -= self.gravity_constant * objects[i].mass * objects[j].mass / distance
        return kinetic + potential
