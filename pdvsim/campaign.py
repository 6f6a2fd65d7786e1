"""
Round-based driver that keeps sending the PDV out while nodes request charge.
"""

from dataclasses import dataclass
from typing import List, Optional
import logging
import time

from .models import ChargeLedger, FlightResult
from .pdv import PDV
from .problem import ChargingProblem
from .strategies import PathStrategy

logger = logging.getLogger(__name__)

STOP_TASK_CHECK = "task_check"
STOP_EMPTY_PATH = "empty_path"
STOP_NO_PROGRESS = "no_progress"
STOP_MAX_ROUNDS = "max_rounds"


@dataclass
class CampaignResult:
    """Contains the rounds flown by a campaign and why it stopped."""
    rounds: List[FlightResult]
    ledger: ChargeLedger
    stop_reason: str
    computation_time: float
    strategy_name: str
    remaining_requests: int = 0

    @property
    def nodes_charged(self) -> int:
        return sum(r.targets_charged for r in self.rounds)

    def get_summary(self) -> dict:
        """Get a summary of the campaign."""
        return {
            "strategy": self.strategy_name,
            "num_rounds": len(self.rounds),
            "nodes_charged": self.nodes_charged,
            "charged_energy": self.ledger.charged_energy,
            "flight_time": self.ledger.flight_time,
            "remaining_requests": self.remaining_requests,
            "stop_reason": self.stop_reason,
            "computation_time": self.computation_time,
        }


class ChargingCampaign:
    """
    Runs charging rounds until the field no longer justifies a task.

    Each round checks ``PDV.task_check``, plans a path, flies it into a
    shared ledger and resets the PDV for the next round.
    """

    def __init__(
        self,
        pdv: PDV,
        problem: ChargingProblem,
        strategy: PathStrategy,
        max_rounds: int = 100,
        ledger: Optional[ChargeLedger] = None
    ):
        """
        Args:
            pdv: Vehicle to fly; it is reset before every round
            problem: Sensor field, charged in place
            strategy: Path strategy used for every round
            max_rounds: Safety bound on the number of rounds
            ledger: Running totals to accumulate into (a new one if None)
        """
        if max_rounds < 1:
            msg = "max_rounds must be at least 1"
            raise ValueError(msg)
        if pdv.base != problem.base:
            # Paths are planned from the problem's base station.
            msg = f"PDV base {pdv.base!r} differs from problem base {problem.base!r}"
            raise ValueError(msg)
        self.pdv = pdv
        self.problem = problem
        self.strategy = strategy
        self.max_rounds = max_rounds
        self.ledger = ledger if ledger is not None else ChargeLedger()

    def run(self) -> CampaignResult:
        """Fly rounds until a stop condition is met."""
        start_time = time.time()
        rounds = []
        stop_reason = STOP_MAX_ROUNDS

        for round_no in range(self.max_rounds):
            if not self.pdv.task_check(self.problem.nodes):
                stop_reason = STOP_TASK_CHECK
                break

            path = self.strategy.plan(self.problem)
            if not path:
                stop_reason = STOP_EMPTY_PATH
                break

            self.pdv.reset()
            result = self.pdv.flight_simulation(self.problem.nodes, path, self.ledger)
            rounds.append(result)
            logger.info("Round %d: %.1f%% of %d targets charged",
                        round_no, result.completion, result.targets_total)

            if result.targets_charged == 0:
                logger.warning("Round %d charged no node; stopping campaign", round_no)
                stop_reason = STOP_NO_PROGRESS
                break

        self.pdv.reset()
        return CampaignResult(
            rounds=rounds,
            ledger=self.ledger,
            stop_reason=stop_reason,
            computation_time=time.time() - start_time,
            strategy_name=self.strategy.get_name(),
            remaining_requests=len(self.problem.requesting_nodes()),
        )
