"""Camera system for 3D navigation."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *
from config import boids as config


class Camera:
    """
    Orbital camera with smooth zoom, plus a follow mode that trails one boid.

    In follow mode the eye and look-at point are lerped a small fraction of
    the way toward the followed boid's position and position + velocity each
    frame.
    """

    def __init__(self):
        self.radius = config.CAMERA["initial_radius"]
        self.target_radius = self.radius
        self.theta = config.CAMERA["initial_theta"]
        self.phi = config.CAMERA["initial_phi"]
        self.target = np.array([0.0, 0.0, 0.0])
        self.zoom_smoothing = 8.0

        self.follow = True
        self.follow_lerp = config.CAMERA["follow_lerp"]
        self.follow_position = np.zeros(3)
        self.follow_look_at = np.zeros(3)

    def get_direction(self) -> np.ndarray:
        """Get the normalized direction vector from target to camera."""
        theta_rad = math.radians(self.theta)
        phi_rad = math.radians(self.phi)
        x = math.cos(phi_rad) * math.cos(theta_rad)
        y = math.sin(phi_rad)
        z = math.cos(phi_rad) * math.sin(theta_rad)
        return np.array([x, y, z])

    def get_position(self) -> np.ndarray:
        """Get the camera's world position."""
        if self.follow:
            return self.follow_position
        return self.target + self.radius * self.get_direction()

    def toggle_follow(self):
        self.follow = not self.follow

    def rotate(self, d_theta: float, d_phi: float):
        """Rotate the camera by the given angles in degrees."""
        self.theta = (self.theta + d_theta) % 360
        self.phi = max(
            config.CAMERA["min_phi"],
            min(config.CAMERA["max_phi"], self.phi + d_phi)
        )

    def zoom(self, delta: float):
        """Immediately zoom by the given amount."""
        self.radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.radius + delta)
        )
        self.target_radius = self.radius

    def zoom_smooth(self, delta: float):
        """Smoothly zoom by the given amount."""
        self.target_radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.target_radius + delta)
        )

    def track(self, position: np.ndarray, velocity: np.ndarray):
        """Pull the follow eye toward a boid and the look-at point toward where it is heading."""
        # Both points move only follow_lerp of the way each frame
        self.follow_position = self.follow_position + (position - self.follow_position) * self.follow_lerp
        ahead = position + velocity
        self.follow_look_at = self.follow_look_at + (ahead - self.follow_look_at) * self.follow_lerp

    def update(self, dt: float):
        """Update camera state (called each frame)."""
        # Ease the orbit radius toward the zoom target
        self.radius += (self.target_radius - self.radius) * self.zoom_smoothing * dt
        self.radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.radius)
        )

    def apply(self):
        """Apply the camera transformation to the OpenGL modelview matrix."""
        glLoadIdentity()
        pos = self.get_position()
        look_at = self.follow_look_at if self.follow else self.target

        # Eye on the look-at point has no view direction
        if np.allclose(pos, look_at):
            look_at = pos + np.array([0.0, 0.0, -1.0])

        gluLookAt(
            pos[0], pos[1], pos[2],
            look_at[0], look_at[1], look_at[2],
            0, 1, 0
        )
