"""
Charging problem definition: a base station and a field of sensor nodes.
"""

from typing import List, Optional

import numpy as np

from .config import FLOAT_DTYPE
from .models import Point, SensorNode, DEFAULT_V_MAX, DEFAULT_V_THRESHOLD


class ChargingProblem:
    """
    Defines a charging problem with a base station and deployed sensor nodes.
    """

    def __init__(self, base: Optional[Point] = None, nodes: Optional[List[SensorNode]] = None):
        """
        Initialize a charging problem.

        Args:
            base: Base station position (defaults to the origin)
            nodes: List of deployed sensor nodes
        """
        self.base = base or Point(0.0, 0.0)
        self.nodes = nodes or []

    def add_node(self, node: SensorNode):
        """Add a sensor node to the problem."""
        self.nodes.append(node)

    def clear(self):
        """Remove all sensor nodes."""
        self.nodes = []

    def requesting_nodes(self) -> List[SensorNode]:
        """Nodes that still request charge, in deployment order."""
        return [node for node in self.nodes if node.requesting]

    @staticmethod
    def generate_random_problem(
        num_nodes: int,
        area_size: float = 1000.0,
        request_ratio: float = 0.5,
        base: Optional[Point] = None,
        seed: Optional[int] = None
    ) -> 'ChargingProblem':
        """
        Generate a random sensor field.

        Nodes are spread uniformly over a square area. About ``request_ratio``
        of them start below their request threshold, the rest start between
        the threshold and full charge.

        Args:
            num_nodes: Number of sensor nodes to create
            area_size: Side of the square area [m]
            request_ratio: Expected share of nodes requesting charge
            base: Base station position (defaults to the area center)
            seed: Random seed for reproducibility

        Returns:
            ChargingProblem with randomly deployed nodes
        """
        if not 0.0 <= request_ratio <= 1.0:
            msg = "request_ratio must be between 0 and 1"
            raise ValueError(msg)

        rng = np.random.default_rng(seed)
        xy = rng.uniform(0.0, area_size, size=(num_nodes, 2))
        low = rng.random(num_nodes) < request_ratio
        voltages = np.where(
            low,
            rng.uniform(0.5, DEFAULT_V_THRESHOLD, size=num_nodes),
            rng.uniform(DEFAULT_V_THRESHOLD, DEFAULT_V_MAX, size=num_nodes),
        )

        nodes = [
            SensorNode(node_id=i, position=Point(xy[i, 0], xy[i, 1]), voltage=float(voltages[i]))
            for i in range(num_nodes)
        ]
        if base is None:
            base = Point(area_size / 2.0, area_size / 2.0)
        return ChargingProblem(base=base, nodes=nodes)

    def get_distance_matrix(self) -> np.ndarray:
        """
        Pairwise distances between the base station and all nodes.

        Returns:
            (n + 1) x (n + 1) array; index 0 is the base, index i + 1 is node i
        """
        points = [self.base] + [node.position for node in self.nodes]
        coords = np.array([[p.x, p.y, p.z] for p in points], dtype=FLOAT_DTYPE)
        diff = coords[:, np.newaxis, :] - coords[np.newaxis, :, :]
        return np.sqrt((diff ** 2).sum(axis=-1))

    def __repr__(self) -> str:
        return (f"ChargingProblem(nodes={len(self.nodes)}, "
                f"requesting={len(self.requesting_nodes())})")
