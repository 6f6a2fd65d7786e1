"""
PDV Charging Simulator
Flight and energy simulation of a drone recharging wireless sensor nodes.
"""

from .config import PDVConfig
from .models import Point, SensorNode, ChargeLedger, FlightResult
from .pdv import PDV
from .problem import ChargingProblem
from .strategies import (
    PathStrategy,
    RequestOrderPath,
    NearestNeighborPath,
    UserDefinedPath
)
from .campaign import ChargingCampaign, CampaignResult
from .analyzer import FlightAnalyzer

__version__ = "0.1.0"

__all__ = [
    "PDVConfig",
    "Point",
    "SensorNode",
    "ChargeLedger",
    "FlightResult",
    "PDV",
    "ChargingProblem",
    "PathStrategy",
    "RequestOrderPath",
    "NearestNeighborPath",
    "UserDefinedPath",
    "ChargingCampaign",
    "CampaignResult",
    "FlightAnalyzer",
]
