"""Neighbor validity rules and swappable candidate selectors."""

import math
import numpy as np
from numba import njit, prange
from typing import List, Sequence

from config import boids as config
from .vector import angle_between

FOV_HALF_ANGLE = math.radians(config.BOIDS["fov_half_angle"])


def is_valid_neighbor(agent, other, ignore_group: bool = False) -> bool:
    """
    Decide whether other influences agent this frame.

    Rules are checked in order and the first failure rejects:
        1. other is a different object than agent
        2. distance is strictly inside agent's perception radius
        3. unless ignore_group, tagged agents only see the same tag
        4. with field of view on, neighbors whose bearing from agent's heading
           is less than the half-angle are skipped

    Rule 4 deliberately rejects the forward cone rather than keeping it.
    """
    if other is agent:
        return False

    offset = other.position - agent.position
    distance = math.sqrt(float(np.dot(offset, offset)))
    if not distance < agent.perception_radius:
        return False

    if not ignore_group and agent.group is not None and other.group is not None:
        if agent.group != other.group:
            return False

    if agent.field_of_view and np.any(agent.velocity):
        if angle_between(agent.velocity, offset) < FOV_HALF_ANGLE:
            return False

    return True


# ============================================================================
# NUMBA JIT-COMPILED SPATIAL GRID FUNCTIONS
# ============================================================================

@njit(cache=True)
def get_cell_coord(value: float, origin: float, cell_size: float, grid_dim: int) -> int:
    """Clamp a world coordinate to its cell coordinate along one axis."""
    c = int((value - origin) / cell_size)
    return max(0, min(c, grid_dim - 1))


@njit(parallel=True, cache=True)
def assign_cells(
    positions: np.ndarray,
    cell_indices: np.ndarray,
    origin: np.ndarray,
    cell_size: float,
    grid_dim: np.ndarray,
    num_agents: int
):
    """Assign each agent to a flat cell index."""
    for i in prange(num_agents):
        cx = get_cell_coord(positions[i, 0], origin[0], cell_size, grid_dim[0])
        cy = get_cell_coord(positions[i, 1], origin[1], cell_size, grid_dim[1])
        cz = get_cell_coord(positions[i, 2], origin[2], cell_size, grid_dim[2])
        cell_indices[i] = cx + cy * grid_dim[0] + cz * grid_dim[0] * grid_dim[1]


@njit(cache=True)
def build_cell_lists(
    cell_indices: np.ndarray,
    sorted_indices: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    num_agents: int,
    num_cells: int
):
    """Build cell start indices and counts after sorting."""
    for i in range(num_cells):
        cell_starts[i] = -1
        cell_counts[i] = 0

    for i in range(num_agents):
        cell = cell_indices[sorted_indices[i]]
        if cell_starts[cell] == -1:
            cell_starts[cell] = i
        cell_counts[cell] += 1


@njit(cache=True)
def collect_candidates(
    px: float, py: float, pz: float,
    origin: np.ndarray,
    cell_size: float,
    grid_dim: np.ndarray,
    sorted_indices: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    out: np.ndarray
) -> int:
    """Write indices of agents in the 27 cells around a point into out; return the count."""
    cx = get_cell_coord(px, origin[0], cell_size, grid_dim[0])
    cy = get_cell_coord(py, origin[1], cell_size, grid_dim[1])
    cz = get_cell_coord(pz, origin[2], cell_size, grid_dim[2])

    n = 0
    for ncz in range(max(0, cz - 1), min(grid_dim[2], cz + 2)):
        for ncy in range(max(0, cy - 1), min(grid_dim[1], cy + 2)):
            for ncx in range(max(0, cx - 1), min(grid_dim[0], cx + 2)):
                cell = ncx + ncy * grid_dim[0] + ncz * grid_dim[0] * grid_dim[1]
                start = cell_starts[cell]
                if start == -1:
                    continue
                for k in range(cell_counts[cell]):
                    out[n] = sorted_indices[start + k]
                    n += 1
    return n


# ============================================================================
# SELECTORS
# ============================================================================

class LinearScanSelector:
    """Every agent is a candidate for every other agent (O(N) per query)."""

    name = "linear"

    def __init__(self):
        self._agents: List = []

    def rebuild(self, agents: Sequence):
        self._agents = list(agents)

    def candidates(self, agent) -> Sequence:
        return self._agents


class SpatialGridSelector:
    """
    Uniform spatial hash over the frame's positions.

    Cells are at least one perception radius wide, so the 27 cells around an
    agent always hold every agent that can pass the distance rule. Candidates
    still go through is_valid_neighbor, which keeps results identical to
    LinearScanSelector.
    """

    name = "grid"

    def __init__(self, max_cells_per_axis: int = 64):
        self.max_cells_per_axis = max_cells_per_axis
        self._agents: List = []
        self._origin = np.zeros(3, dtype=np.float64)
        self._grid_dim = np.ones(3, dtype=np.int64)
        self._cell_size = 1.0
        self._sorted_indices = np.zeros(0, dtype=np.int64)
        self._cell_starts = np.zeros(1, dtype=np.int64)
        self._cell_counts = np.zeros(1, dtype=np.int64)
        self._scratch = np.zeros(0, dtype=np.int64)

    def rebuild(self, agents: Sequence):
        """Hash the current positions of agents into the grid."""
        self._agents = list(agents)
        n = len(self._agents)
        if n == 0:
            return

        positions = np.array([a.position for a in self._agents], dtype=np.float64)
        radius = max(a.perception_radius for a in self._agents)

        lo = positions.min(axis=0)
        span = positions.max(axis=0) - lo
        cell_size = max(radius, float(span.max()) / self.max_cells_per_axis, 1e-6)

        self._origin = lo
        self._cell_size = cell_size
        self._grid_dim = (np.floor(span / cell_size).astype(np.int64) + 1)
        num_cells = int(np.prod(self._grid_dim))

        cell_indices = np.zeros(n, dtype=np.int64)
        assign_cells(positions, cell_indices, self._origin, cell_size, self._grid_dim, n)

        self._sorted_indices = np.argsort(cell_indices, kind="stable").astype(np.int64)
        self._cell_starts = np.zeros(num_cells, dtype=np.int64)
        self._cell_counts = np.zeros(num_cells, dtype=np.int64)
        build_cell_lists(
            cell_indices, self._sorted_indices,
            self._cell_starts, self._cell_counts,
            n, num_cells
        )
        self._scratch = np.zeros(n, dtype=np.int64)

    def candidates(self, agent) -> Sequence:
        if not self._agents:
            return []
        p = agent.position
        count = collect_candidates(
            float(p[0]), float(p[1]), float(p[2]),
            self._origin, self._cell_size, self._grid_dim,
            self._sorted_indices, self._cell_starts, self._cell_counts,
            self._scratch
        )
        return [self._agents[i] for i in self._scratch[:count]]


def make_selector(name: str):
    """Build a selector by config name."""
    if name == "linear":
        return LinearScanSelector()
    if name == "grid":
        return SpatialGridSelector()
    raise ValueError(f"Unknown neighbor selector: {name!r}")
