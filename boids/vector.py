"""3D vector helpers on top of numpy arrays."""

import math
import numpy as np

EPSILON = 1e-12


def normalize(v: np.ndarray) -> np.ndarray:
    """Return the unit vector of v, or the zero vector when v has no length."""
    n = np.linalg.norm(v)
    if n < EPSILON or not np.isfinite(n):
        return np.zeros(3)
    return v / n


def clamp_length(v: np.ndarray, min_len: float, max_len: float) -> np.ndarray:
    """Scale v so its length falls inside [min_len, max_len]."""
    n = np.linalg.norm(v)
    if n < EPSILON:
        return np.zeros(3)
    clamped = max(min_len, min(max_len, n))
    return v * (clamped / n)


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    return a + (b - a) * t


def random_unit_vector(rng: np.random.Generator) -> np.ndarray:
    """Uniformly distributed direction on the unit sphere."""
    while True:
        v = rng.normal(size=3)
        n = np.linalg.norm(v)
        if n > 1e-6:
            return v / n


def any_perpendicular(v: np.ndarray) -> np.ndarray:
    """A unit vector perpendicular to v (picked against its least aligned basis axis)."""
    axis = np.zeros(3)
    axis[int(np.argmin(np.abs(v)))] = 1.0
    return normalize(np.cross(v, axis))


def rotate_axis_angle(v: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    """
    Rotate v about axis by angle (radians) using Rodrigues' formula.

    A zero-length axis leaves v unchanged.
    """
    k = normalize(axis)
    if not k.any():
        return v.copy()
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return v * cos_a + np.cross(k, v) * sin_a + k * np.dot(k, v) * (1.0 - cos_a)


def angle_between(a: np.ndarray, b: np.ndarray) -> float:
    """Angle in radians between two vectors; 0 when either has no length."""
    na = np.linalg.norm(a)
    nb = np.linalg.norm(b)
    if na < EPSILON or nb < EPSILON:
        return 0.0
    cos_t = np.dot(a, b) / (na * nb)
    return math.acos(max(-1.0, min(1.0, float(cos_t))))


def quaternion_from_unit_vectors(v_from: np.ndarray, v_to: np.ndarray) -> np.ndarray:
    """
    Shortest-arc rotation taking unit vector v_from onto unit vector v_to.

    Returns:
        Quaternion as (x, y, z, w)
    """
    r = float(np.dot(v_from, v_to)) + 1.0
    if r < 1e-6:
        # Opposite vectors: rotate 180 degrees about any perpendicular axis
        axis = any_perpendicular(v_from)
        q = np.array([axis[0], axis[1], axis[2], 0.0])
    else:
        c = np.cross(v_from, v_to)
        q = np.array([c[0], c[1], c[2], r])
    return q / np.linalg.norm(q)


def quaternion_to_matrix(q: np.ndarray) -> np.ndarray:
    """Convert an (x, y, z, w) quaternion into a 3x3 rotation matrix."""
    x, y, z, w = q
    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    wx, wy, wz = w * x, w * y, w * z
    return np.array([
        [1 - 2 * (yy + zz), 2 * (xy - wz), 2 * (xz + wy)],
        [2 * (xy + wz), 1 - 2 * (xx + zz), 2 * (yz - wx)],
        [2 * (xz - wy), 2 * (yz + wx), 1 - 2 * (xx + yy)],
    ])


def euler_to_matrix(rx: float, ry: float, rz: float) -> np.ndarray:
    """Rotation matrix for XYZ-ordered Euler angles (radians)."""
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)
    mx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    my = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    mz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return mx @ my @ mz
