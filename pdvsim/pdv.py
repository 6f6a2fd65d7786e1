"""Powered delivery vehicle (PDV) flight and energy simulation.

This module provides the PDV class, a single charging drone that departs from a
fixed base station, visits sensor nodes in the order given by a planned path,
recharges each one through inductive power transfer (IPT) and returns home.

Energy Model:
    Travel:
        Every leg of ``t`` hours costs ``P * (t + overhead)`` watt-hours, where
        the overhead covers takeoff, landing and stabilization. Distance only
        enters through ``t = d / speed``.

    Inductive power transfer:
        Charging a node from ``V`` to ``V_max`` costs
        ``C * (V_max - V)^2 / (2 * eta_rf2dc * 3600)`` watt-hours.

Return-To-Home Rule:
    Before each target the PDV estimates the outbound leg, the transfer and the
    leg from that target back to base. If the remaining energy cannot cover all
    three, the rest of the path is abandoned and the PDV flies home from where
    it is. The home leg is therefore always reserved, and remaining energy never
    drops below zero.

    A leg of zero length does not take off, so it costs neither time nor
    overhead energy. In particular returning home while already at the base
    station is free.

Example:
    >>> from pdvsim import PDV, Point, SensorNode
    >>> pdv = PDV()
    >>> nodes = [SensorNode(0, Point(100, 0), voltage=2.0)]
    >>> result = pdv.flight_simulation(nodes, [Point(100, 0)])
    >>> result.completion
    100.0
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

from .config import PDVConfig
from .models import ChargeLedger, FlightResult, Point, SensorNode

logger = logging.getLogger(__name__)


class PDV:
    """A charging drone with position, flight time, flight distance and energy state.

    The vehicle is reusable: call ``reset()`` between independent simulation
    runs. State is only changed through the ``update_*`` mutators, which reject
    negative deltas so that flight time and distance never decrease and energy
    never increases during a run.

    Attributes:
        config (PDVConfig): Fixed vehicle parameters.
        base (Point): Base station the PDV departs from and returns to.
    """

    def __init__(self, config: Optional[PDVConfig] = None, base: Optional[Point] = None):
        self._config = config or PDVConfig()
        self._base = base or Point(0.0, 0.0)
        self.reset()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def reset(self):
        """Reset PDV status to the initial values."""
        self._position = self._base
        self._flight_time = 0.0
        self._energy = float(self._config.full_energy)
        self._flight_distance = 0.0
        self._rth_count = 0

    @property
    def config(self) -> PDVConfig:
        return self._config

    @property
    def base(self) -> Point:
        return self._base

    @property
    def position(self) -> Point:
        return self._position

    @property
    def flight_time(self) -> float:
        """Cumulative time airborne [h]."""
        return self._flight_time

    @property
    def remaining_energy(self) -> float:
        """Energy left onboard [Wh]."""
        return self._energy

    @property
    def flight_distance(self) -> float:
        """Cumulative distance flown [m]."""
        return self._flight_distance

    @property
    def rth_count(self) -> int:
        """Number of return-to-home legs flown since the last reset."""
        return self._rth_count

    @property
    def speed(self) -> float:
        return self._config.speed

    @property
    def power(self) -> float:
        return self._config.power

    @property
    def altitude(self) -> float:
        return self._config.altitude

    @property
    def min_charge_num(self) -> int:
        return self._config.min_charge_num

    def task_check(self, sn_list: Sequence[SensorNode]) -> bool:
        """Check whether enough sensor nodes are requesting charge to start a task.

        Args:
            sn_list: All sensor nodes in the field.

        Returns:
            bool: True if strictly more than ``min_charge_num`` nodes are
            requesting. False means no new task should be issued.
        """
        requests = sum(1 for sn in sn_list if sn.requesting)
        return requests > self._config.min_charge_num

    def update_position(self, p: Point):
        self._position = p

    def update_flight_time(self, *dts: float):
        """Add one or more non-negative time intervals [h] to the flight time."""
        self._flight_time += _sum_deltas(dts, "Flight time")

    def update_energy(self, *des: float):
        """Deplete the onboard energy by one or more non-negative amounts [Wh].

        Raises:
            ValueError: If any amount is negative or the total exceeds the
                remaining energy.
        """
        total = _sum_deltas(des, "Energy consumption")
        if total > self._energy:
            msg = (f"Energy consumption {total:.6f} Wh exceeds remaining "
                   f"energy {self._energy:.6f} Wh")
            raise ValueError(msg)
        self._energy -= total

    def update_flight_distance(self, *dds: float):
        """Add one or more non-negative distances [m] to the flight distance."""
        self._flight_distance += _sum_deltas(dds, "Flight distance")

    # ------------------------------------------------------------------
    # Cost model
    # ------------------------------------------------------------------

    def calc_energy_cost(self, t: float) -> float:
        """Calculate the energy consumed by a leg lasting ``t`` hours.

        Related formula: E = P * (t + overhead)

        Args:
            t: Spent time [h].

        Returns:
            float: The consumed energy [Wh].
        """
        if t < 0:
            msg = "Flight time cannot be negative"
            raise ValueError(msg)
        return self._config.power * (t + self._config.leg_overhead)

    def ipt_energy_cost(self, next_sn: SensorNode) -> float:
        """Calculate the energy needed to charge ``next_sn`` to its full voltage.

        Related formula: E = 1 / (2 * eta_rf2dc * 3600) * C * (V_max - V)^2

        Returns:
            float: Transfer energy [Wh].
        """
        dv = next_sn.v_max - next_sn.voltage
        return next_sn.capacitance * dv * dv / (2.0 * self._config.eta_rf2dc * 3600.0)

    def travel_time(self, a: Point, b: Point) -> float:
        """Time to fly from ``a`` to ``b`` at the approach speed [h]."""
        return a.distance_to(b) / self._config.speed

    def leg_cost(self, a: Point, b: Point) -> Tuple[float, float, float]:
        """Distance [m], travel time [h] and energy [Wh] of the leg ``a -> b``.

        A zero-length leg is not flown and costs nothing.
        """
        d = a.distance_to(b)
        if d == 0.0:
            return 0.0, 0.0, 0.0
        t = self.travel_time(a, b)
        return d, t, self.calc_energy_cost(t)

    def check_energy(self, target: SensorNode) -> Tuple[bool, float]:
        """Feasibility check for visiting ``target`` from the current position.

        Returns:
            tuple: ``(feasible, required)`` where ``required`` is the energy for
            the outbound leg, the transfer and the return from the target [Wh].
        """
        _, _, e_go = self.leg_cost(self._position, target.position)
        e_ipt = self.ipt_energy_cost(target)
        _, _, e_back = self.leg_cost(target.position, self._base)
        # Same operation order as the committed updates, so a feasible step
        # can never round below zero when it is actually flown.
        feasible = (self._energy - (e_go + e_ipt)) - e_back >= 0.0
        return feasible, e_go + e_ipt + e_back

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def fly_to(self, p: Point, *extra_energy: float) -> float:
        """Fly to ``p`` and deplete the leg energy plus ``extra_energy``.

        Returns:
            float: Leg time including overhead [h].
        """
        d, t, e = self.leg_cost(self._position, p)
        leg_time = t + self._config.leg_overhead if d > 0.0 else 0.0
        self.update_energy(e, *extra_energy)
        self.update_position(p)
        self.update_flight_time(leg_time)
        self.update_flight_distance(d)
        return leg_time

    def return_to_home(self) -> float:
        """Fly back to the base station. Returns the leg time [h]."""
        leg_time = self.fly_to(self._base)
        self._rth_count += 1
        return leg_time

    def charge_node(self, sn: SensorNode, ledger: Optional[ChargeLedger] = None) -> float:
        """Travel to ``sn``, transfer energy to it and book the transfer.

        The caller is expected to have passed ``check_energy`` first.

        Returns:
            float: Energy transferred [Wh].
        """
        e_ipt = self.ipt_energy_cost(sn)
        leg_time = self.fly_to(sn.position, e_ipt)
        sn.charge_full()
        if ledger is not None:
            ledger.add_charged_energy(e_ipt)
        logger.debug("Charged node %s with %.4f Wh after %.4f h leg, %.3f Wh left",
                     sn.node_id, e_ipt, leg_time, self._energy)
        return e_ipt

    def flight_simulation(
        self,
        sn_list: List[SensorNode],
        path: Sequence[Point],
        ledger: Optional[ChargeLedger] = None,
    ) -> FlightResult:
        """Simulate the whole charging round.

        The PDV departs from its current position and visits the sensor nodes in
        ``path`` one by one. Before each visit it checks that its energy covers
        the visit, the power transfer and the return to base; if not it returns
        home immediately. Once the path is done it returns home.

        Every node the path reaches is charged to ``v_max``, whether or not it
        was requesting charge; selecting the targets is up to the planner. Only
        a path with no requesting node at all is skipped as already complete.

        Each point is matched to a node when the PDV gets there, preferring a
        node still requesting charge, so co-located nodes are served in turn.

        Args:
            sn_list: All sensor nodes; visited nodes are charged in place.
            path: Target positions in visiting order.
            ledger: Optional running totals for charged energy and flight time.

        Returns:
            FlightResult: Completion percentage and the round's totals.

        Raises:
            IndexError: If a path point does not match any sensor node.
        """
        return self._fly_path(sn_list, list(path), ledger, "flight")

    def single_stage_flight(
        self,
        sn_list: List[SensorNode],
        path: Sequence[Point],
        ledger: Optional[ChargeLedger] = None,
    ) -> FlightResult:
        """Fly to the first target of ``path`` only, charge it and return home."""
        return self._fly_path(sn_list, list(path[:1]), ledger, "single-stage")

    def _fly_path(
        self,
        sn_list: List[SensorNode],
        path: List[Point],
        ledger: Optional[ChargeLedger],
        label: str,
    ) -> FlightResult:
        # Fail on unknown points before anything is flown.
        for p in path:
            _target_index(sn_list, p)

        start_time = self._flight_time
        start_distance = self._flight_distance

        stops = set(path)
        if not any(sn.requesting for sn in sn_list if sn.position in stops):
            # Nothing left to serve: vacuously complete, nothing is flown.
            return FlightResult(
                completion=100.0,
                targets_total=len(path),
                targets_charged=len(path),
                charged_energy=0.0,
                flight_time=0.0,
                flight_distance=0.0,
                remaining_energy=self._energy,
                aborted=False,
                rth_executed=False,
                label=label,
            )

        charged_energy = 0.0
        visited = []
        aborted = False
        for p in path:
            sn = sn_list[_target_index(sn_list, p)]
            feasible, required = self.check_energy(sn)
            if not feasible:
                logger.info("RTH at %s: %.3f Wh needed for node %s, %.3f Wh left",
                            self._position, required, sn.node_id, self._energy)
                aborted = True
                break
            charged_energy += self.charge_node(sn, ledger)
            visited.append(sn.node_id)

        if not aborted:
            logger.info("RTH at %s: path complete", self._position)
        self.return_to_home()

        flight_time = self._flight_time - start_time
        if ledger is not None:
            ledger.add_flight_time(flight_time)

        result = FlightResult(
            completion=len(visited) / len(path) * 100.0,
            targets_total=len(path),
            targets_charged=len(visited),
            charged_energy=charged_energy,
            flight_time=flight_time,
            flight_distance=self._flight_distance - start_distance,
            remaining_energy=self._energy,
            aborted=aborted,
            rth_executed=True,
            visited=visited,
            label=label,
        )
        logger.info("Flight finished: %r", result)
        return result


def _sum_deltas(deltas: Sequence[float], what: str) -> float:
    total = 0.0
    for d in deltas:
        if not math.isfinite(d) or d < 0:
            msg = f"{what} delta must be finite and non-negative: {d}"
            raise ValueError(msg)
        total += d
    return total


def _target_index(sn_list: Sequence[SensorNode], p: Point) -> int:
    """Index of the node at ``p``, preferring one that still requests charge."""
    fallback = None
    for i, sn in enumerate(sn_list):
        if sn.position == p:
            if sn.requesting:
                return i
            if fallback is None:
                fallback = i
    if fallback is None:
        msg = f"No sensor node at {p!r}"
        raise IndexError(msg)
    return fallback
