"""
Path strategies that decide the order in which requesting nodes are visited.

These are simple stand-ins for a real clustering planner; the PDV itself
never reorders the path it is given.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from .models import Point
from .problem import ChargingProblem


class PathStrategy(ABC):
    """Base class for path strategies."""

    def __init__(self, max_targets: Optional[int] = None):
        """
        Args:
            max_targets: Upper bound on path length (None for no limit)
        """
        self.max_targets = max_targets

    @abstractmethod
    def plan(self, problem: ChargingProblem) -> List[Point]:
        """
        Plan a visiting order.

        Args:
            problem: The charging problem to plan for

        Returns:
            Target positions in visiting order
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return the name of the strategy."""
        pass

    def _truncate(self, path: List[Point]) -> List[Point]:
        if self.max_targets is None:
            return path
        return path[:self.max_targets]


class RequestOrderPath(PathStrategy):
    """Visits requesting nodes in deployment order."""

    def get_name(self) -> str:
        return "Request Order"

    def plan(self, problem: ChargingProblem) -> List[Point]:
        return self._truncate([node.position for node in problem.requesting_nodes()])


class NearestNeighborPath(PathStrategy):
    """Greedy tour: always fly to the closest unvisited requesting node."""

    def get_name(self) -> str:
        return "Nearest Neighbor"

    def plan(self, problem: ChargingProblem) -> List[Point]:
        """Build the tour from the base using the problem's distance matrix."""
        candidates = [i for i, node in enumerate(problem.nodes) if node.requesting]
        if not candidates:
            return []

        dist = problem.get_distance_matrix()
        remaining = set(candidates)
        path = []
        current = 0  # base station row
        while remaining:
            order = sorted(remaining)
            rows = np.array(order) + 1
            nearest = order[int(np.argmin(dist[current, rows]))]
            path.append(problem.nodes[nearest].position)
            remaining.remove(nearest)
            current = nearest + 1
        return self._truncate(path)


class UserDefinedPath(PathStrategy):
    """Visits the nodes whose ids are given, in the given order."""

    def __init__(self, node_ids: List[int], max_targets: Optional[int] = None):
        """
        Args:
            node_ids: Node ids in visiting order; unknown ids are skipped
            max_targets: Upper bound on path length (None for no limit)
        """
        super().__init__(max_targets)
        self.node_ids = node_ids

    def get_name(self) -> str:
        return "User-Defined Path"

    def plan(self, problem: ChargingProblem) -> List[Point]:
        lookup = {node.node_id: node for node in problem.nodes}
        path = [lookup[i].position for i in self.node_ids if i in lookup]
        return self._truncate(path)
