"""
Core data models for the PDV charging simulator.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import math

DEFAULT_CAPACITANCE = 50.0  # Receiving supercapacitor [F]
DEFAULT_V_MAX = 5.0  # Fully charged voltage [V]
DEFAULT_V_THRESHOLD = 3.0  # Nodes below this voltage request charge [V]


@dataclass(frozen=True)
class Point:
    """Represents a 3D position in meters; z defaults to ground level."""
    x: float
    y: float
    z: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "z", float(self.z))

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.sqrt(
            (self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2
        )

    def bearing_to(self, other: 'Point') -> float:
        """Planar heading to another point in degrees, clockwise from +y."""
        return math.degrees(math.atan2(other.x - self.x, other.y - self.y)) % 360.0

    def __repr__(self) -> str:
        return f"Point({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"


@dataclass
class SensorNode:
    """
    A wireless sensor node with a capacitor charged by inductive power transfer.

    The node requests charge once its voltage drops below ``v_threshold``.
    ``requesting`` is kept as a plain flag so that a path planner can clear it
    when a node is scheduled elsewhere.
    """
    node_id: int
    position: Point
    voltage: float = DEFAULT_V_MAX
    capacitance: float = DEFAULT_CAPACITANCE
    v_max: float = DEFAULT_V_MAX
    v_threshold: float = DEFAULT_V_THRESHOLD
    requesting: Optional[bool] = None

    def __post_init__(self):
        if self.capacitance <= 0:
            msg = "Capacitance must be positive"
            raise ValueError(msg)
        if not 0 <= self.voltage <= self.v_max:
            msg = "Voltage must be between 0 and v_max"
            raise ValueError(msg)
        self.voltage = float(self.voltage)
        if self.requesting is None:
            self.refresh_request()

    @property
    def energy(self) -> float:
        """Energy stored in the capacitor [Wh]."""
        return self.capacitance * self.voltage ** 2 / 7200.0

    @property
    def energy_deficit(self) -> float:
        """Stored energy missing to a full charge [Wh]."""
        return self.capacitance * (self.v_max ** 2 - self.voltage ** 2) / 7200.0

    def refresh_request(self) -> bool:
        """Recompute the request flag from the current voltage."""
        self.requesting = self.voltage < self.v_threshold
        return self.requesting

    def charge_full(self):
        """Bring the node to ``v_max`` and clear its request."""
        self.voltage = float(self.v_max)
        self.requesting = False

    def __repr__(self) -> str:
        return (f"SensorNode(id={self.node_id}, pos={self.position}, "
                f"V={self.voltage:.2f}/{self.v_max:.2f}, requesting={self.requesting})")


@dataclass
class ChargeLedger:
    """Running totals owned by the caller and accumulated across flights."""
    charged_energy: float = 0.0
    flight_time: float = 0.0

    def add_charged_energy(self, e: float):
        self.charged_energy += e

    def add_flight_time(self, t: float):
        self.flight_time += t


@dataclass(frozen=True)
class FlightResult:
    """Contains the outcome of one simulated flight."""
    completion: float
    targets_total: int
    targets_charged: int
    charged_energy: float
    flight_time: float
    flight_distance: float
    remaining_energy: float
    aborted: bool
    rth_executed: bool
    visited: List[int] = field(default_factory=list)
    label: str = "flight"

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the flight result."""
        return {
            "label": self.label,
            "completion": self.completion,
            "targets_total": self.targets_total,
            "targets_charged": self.targets_charged,
            "charged_energy": self.charged_energy,
            "flight_time": self.flight_time,
            "flight_distance": self.flight_distance,
            "remaining_energy": self.remaining_energy,
            "aborted": self.aborted,
            "rth_executed": self.rth_executed,
        }

    def __repr__(self) -> str:
        return (f"FlightResult(label={self.label}, "
                f"completion={self.completion:.1f}%, "
                f"charged={self.targets_charged}/{self.targets_total}, "
                f"aborted={self.aborted})")
