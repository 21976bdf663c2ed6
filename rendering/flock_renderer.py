"""Boid cone rendering from the flock's render states."""

import numpy as np
from numba import njit, prange
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import boids as config


@njit(cache=True)
def rotate_by_quaternion(qx, qy, qz, qw, vx, vy, vz):
    """Rotate (vx, vy, vz) by the unit quaternion (qx, qy, qz, qw)."""
    # t = 2 * cross(q.xyz, v)
    tx = 2.0 * (qy * vz - qz * vy)
    ty = 2.0 * (qz * vx - qx * vz)
    tz = 2.0 * (qx * vy - qy * vx)
    rx = vx + qw * tx + (qy * tz - qz * ty)
    ry = vy + qw * ty + (qz * tx - qx * tz)
    rz = vz + qw * tz + (qx * ty - qy * tx)
    return rx, ry, rz


@njit(parallel=True, fastmath=True, cache=True)
def build_vertices_numba(
    positions: np.ndarray,
    orientations: np.ndarray,
    colors: np.ndarray,
    vertices: np.ndarray,
    vert_colors: np.ndarray,
    cone_length: float,
    cone_radius: float,
    num_boids: int
):
    """Build two crossed triangles per boid pointing along its orientation."""
    for i in prange(num_boids):
        px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
        qx, qy, qz, qw = orientations[i, 0], orientations[i, 1], orientations[i, 2], orientations[i, 3]

        fx, fy, fz = rotate_by_quaternion(qx, qy, qz, qw, 0.0, 0.0, -1.0)
        rx, ry, rz = rotate_by_quaternion(qx, qy, qz, qw, 1.0, 0.0, 0.0)
        ux, uy, uz = rotate_by_quaternion(qx, qy, qz, qw, 0.0, 1.0, 0.0)

        tip_x = px + fx * cone_length
        tip_y = py + fy * cone_length
        tip_z = pz + fz * cone_length

        r = cone_radius
        base = i * 6

        # Triangle 1: tip, right, left
        vertices[base, 0] = tip_x
        vertices[base, 1] = tip_y
        vertices[base, 2] = tip_z
        vertices[base + 1, 0] = px + rx * r
        vertices[base + 1, 1] = py + ry * r
        vertices[base + 1, 2] = pz + rz * r
        vertices[base + 2, 0] = px - rx * r
        vertices[base + 2, 1] = py - ry * r
        vertices[base + 2, 2] = pz - rz * r

        # Triangle 2: tip, up, down
        vertices[base + 3, 0] = tip_x
        vertices[base + 3, 1] = tip_y
        vertices[base + 3, 2] = tip_z
        vertices[base + 4, 0] = px + ux * r
        vertices[base + 4, 1] = py + uy * r
        vertices[base + 4, 2] = pz + uz * r
        vertices[base + 5, 0] = px - ux * r
        vertices[base + 5, 1] = py - uy * r
        vertices[base + 5, 2] = pz - uz * r

        for v in range(6):
            vert_colors[base + v, 0] = colors[i, 0]
            vert_colors[base + v, 1] = colors[i, 1]
            vert_colors[base + v, 2] = colors[i, 2]


class FlockRenderer:
    """Draws every boid as a small cone using VBOs, with an immediate-mode fallback."""

    verts_per_boid = 6

    def __init__(self):
        self.cone_length = float(config.BOIDS["size"])
        self.cone_radius = float(config.BOIDS["size"] * 0.35)
        self.group_colors = np.array(config.COLORS["groups"], dtype=np.float32)
        self.untagged_color = np.array(config.COLORS["untagged"], dtype=np.float32)

        self._capacity = 0
        self._vertices = np.zeros((0, 3), dtype=np.float32)
        self._vert_colors = np.zeros((0, 3), dtype=np.float32)
        self._vbo_vertices = None
        self._vbo_colors = None
        self._vbos_initialized = False
        self._vbo_failed = False

    def _color_for(self, group) -> np.ndarray:
        if group is None:
            return self.untagged_color
        return self.group_colors[hash(group) % len(self.group_colors)]

    def _ensure_capacity(self, count: int):
        if count <= self._capacity:
            return
        self._capacity = count
        self._vertices = np.zeros((count * self.verts_per_boid, 3), dtype=np.float32)
        self._vert_colors = np.zeros((count * self.verts_per_boid, 3), dtype=np.float32)
        self._release_vbos()

    def _release_vbos(self):
        """Free the GPU buffers so the next draw re-creates them at the new size."""
        for buffer in (self._vbo_vertices, self._vbo_colors):
            if buffer is not None:
                buffer.delete()
        self._vbo_vertices = None
        self._vbo_colors = None
        self._vbos_initialized = False

    def _init_vbos(self):
        """Initialize VBOs for fast GPU rendering."""
        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbo_colors = vbo.VBO(self._vert_colors, usage=GL_DYNAMIC_DRAW)
            self._vbos_initialized = True
        except Exception as e:
            print(f"[Render] VBO init failed, using immediate mode: {e}")
            self._vbo_vertices = None
            self._vbo_colors = None
            self._vbos_initialized = False
            self._vbo_failed = True

    def draw(self, states):
        """Render the render states produced by Flock.render_states()."""
        n = len(states)
        if n == 0:
            return

        self._ensure_capacity(n)
        if not self._vbos_initialized and not self._vbo_failed:
            self._init_vbos()

        positions = np.array([s.position for s in states], dtype=np.float64)
        orientations = np.array([s.orientation for s in states], dtype=np.float64)
        colors = np.array([self._color_for(s.group) for s in states], dtype=np.float32)

        build_vertices_numba(
            positions, orientations, colors,
            self._vertices, self._vert_colors,
            self.cone_length, self.cone_radius, n
        )
        total_verts = n * self.verts_per_boid

        if self._vbos_initialized and self._vbo_vertices is not None:
            self._vbo_vertices.set_array(self._vertices[:total_verts])
            self._vbo_colors.set_array(self._vert_colors[:total_verts])

            self._vbo_vertices.bind()
            glEnableClientState(GL_VERTEX_ARRAY)
            glVertexPointer(3, GL_FLOAT, 0, None)

            self._vbo_colors.bind()
            glEnableClientState(GL_COLOR_ARRAY)
            glColorPointer(3, GL_FLOAT, 0, None)

            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            self._vbo_vertices.unbind()
            self._vbo_colors.unbind()
            glDisableClientState(GL_VERTEX_ARRAY)
            glDisableClientState(GL_COLOR_ARRAY)
        else:
            glEnableClientState(GL_VERTEX_ARRAY)
            glEnableClientState(GL_COLOR_ARRAY)

            glVertexPointer(3, GL_FLOAT, 0, self._vertices[:total_verts])
            glColorPointer(3, GL_FLOAT, 0, self._vert_colors[:total_verts])
            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            glDisableClientState(GL_VERTEX_ARRAY)
            glDisableClientState(GL_COLOR_ARRAY)
