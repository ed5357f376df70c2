# physics_utils.py

import numpy as np

class PhysicsError(Exception):
    """Custom exception for physics-related contract violations.

    Raised when an object is constructed with non-positive mass or size, or when
    a ship is bound to an input channel the input source does not know.
    """
    pass

def normalize_vector(vector, epsilon=0.0):
    """
    Normalizes a vector to unit length.

    Args:
        vector (np.ndarray): The vector to normalize.
        epsilon (float): Magnitudes at or below this are treated as zero. The
                         default only catches exactly coincident points.

    Returns:
        np.ndarray: The normalized vector, or a zero vector if its magnitude is zero.
    """
    if not isinstance(vector, np.ndarray):
        vector = np.array(vector, dtype=np.float64)

    norm = np.linalg.norm(vector)
    if norm <= epsilon:
        return np.zeros_like(vector, dtype=np.float64)
    return vector / norm

def forward_vector(angle):
    """Unit vector (cos θ, sin θ) an object with orientation `angle` faces."""
    return np.array([np.cos(angle), np.sin(angle)], dtype=np.float64)

def clamp(value, lower, upper):
    """Clamp value to the inclusive range [lower, upper]."""
    return max(lower, min(upper, value))
