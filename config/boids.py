"""Configuration for the 3D boids flocking simulation."""

import math

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "3D Boids"
}

CAMERA = {
    "fov": 75.0,
    "near_clip": 0.1,
    "far_clip": 600.0,
    "initial_radius": 160.0,
    "initial_theta": 45.0,
    "initial_phi": 25.0,
    "min_radius": 5.0,
    "max_radius": 500.0,
    "min_phi": -89.0,
    "max_phi": 89.0,
    "keyboard_rotate_speed": 60.0,
    "keyboard_zoom_speed": 40.0,
    "mouse_sensitivity": 0.3,
    "follow_lerp": 0.01,       # Per-frame lerp toward the followed boid
    "follow_switch_frames": 1000,  # Pick a new boid to follow this often
}

GRID = {
    "color": (0.35, 0.35, 0.4)
}

BOIDS = {
    "count": 300,
    "bounds": 80.0,            # Half-size of the containment cube
    "base_max_speed": 0.1,     # Scaled by TUNING speed_factor each frame
    "base_max_force": 0.008,   # Scaled by TUNING force_factor each frame
    "spawn_spread": 0.25,      # Spawn inside this fraction of the bounds
    "groups": 4,               # Number of group tags handed out at spawn (0 = untagged)
    "velocity_smoothing": 0.9,
    "jitter_fraction": 0.001,  # Random force as a fraction of max force
    "fov_half_angle": 45.0,    # Degrees
    "avoid_angle": 30.0,       # Degrees the hit normal is turned away
    "neighbor_selector": "grid",  # "linear" or "grid"
    "seed": None,
    "size": 0.6,
}

# Initial per-frame tuning values and the (min, max) range each may take
TUNING = {
    "defaults": {
        "align_weight": 1.0,
        "cohere_weight": 2.0,
        "separate_weight": 3.0,
        "avoid_weight": 3.0,
        "keep_to_center_weight": 1.0,
        "speed_factor": 2.0,
        "force_factor": 1.0,
        "perception_radius": 7.0,
        "field_of_view": False,
        "keep_to_center": False,
    },
    "ranges": {
        "align_weight": (0.0, 10.0),
        "cohere_weight": (0.0, 10.0),
        "separate_weight": (0.0, 10.0),
        "avoid_weight": (0.0, 10.0),
        "keep_to_center_weight": (0.0, 10.0),
        "speed_factor": (0.0, 10.0),
        "force_factor": (0.0, 10.0),
        "perception_radius": (0.0, 50.0),
    },
    "weight_step": 0.25,
    "speed_step": 0.25,
}


def obstacle_layout(dim: float) -> list:
    """
    Obstacle scene for a containment cube of half-size dim.

    Each entry is a dict with "kind" ("box" or "sphere"), "center",
    "size" (box edge lengths) or "radius", optional "rotation" (XYZ Euler
    radians) and "wall" (translucent bounds face).
    """
    quarter = math.pi / 4
    third = math.pi / 3
    half = math.pi / 2
    return [
        {"kind": "box", "center": (dim - 12, -dim + 15, -dim + 12), "size": (2, 30, 10), "rotation": (0, quarter, 0)},
        {"kind": "sphere", "center": (8 - dim / 2, -dim - 18, -dim / 2), "radius": 32},
        {"kind": "box", "center": (-14, dim - 25, 0), "size": (2, 10, 2 * dim), "rotation": (0, 0, half)},
        {"kind": "box", "center": (0, -dim + 20, 15), "size": (2, 20, 2 * dim), "rotation": (third, third, 0)},
        {"kind": "box", "center": (0, dim - 15, -dim + 12), "size": (2, 10, 2 * dim), "rotation": (0, half, half)},
        # Bounds walls
        {"kind": "box", "center": (-dim, 0, 0), "size": (1, 2 * dim, 2 * dim), "wall": True},
        {"kind": "box", "center": (dim, 0, 0), "size": (1, 2 * dim, 2 * dim), "wall": True},
        {"kind": "box", "center": (0, -dim, 0), "size": (2 * dim, 1, 2 * dim)},
        {"kind": "box", "center": (0, dim, 0), "size": (2 * dim, 1, 2 * dim), "wall": True},
        {"kind": "box", "center": (0, 0, -dim), "size": (2 * dim, 2 * dim, 1), "wall": True},
        {"kind": "box", "center": (0, 0, dim), "size": (2 * dim, 2 * dim, 1), "wall": True},
    ]


COLORS = {
    "background": (0.02, 0.02, 0.04, 1.0),
    "text": (0.9, 0.9, 0.9),
    "groups": [
        (1.0, 0.9, 0.2),   # yellow
        (1.0, 0.41, 0.71),  # hotpink
        (0.54, 0.81, 0.94),  # babyblue
        (0.15, 0.15, 0.15),  # black
    ],
    "untagged": (1.0, 0.9, 0.2),
    "obstacle": (0.6, 0.75, 0.3),
    "wall": (1.0, 1.0, 1.0),
}
