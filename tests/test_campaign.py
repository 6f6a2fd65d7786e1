"""
Tests for round-based charging campaigns.
"""

import unittest
from pdvsim.campaign import (
    ChargingCampaign,
    STOP_TASK_CHECK,
    STOP_NO_PROGRESS,
    STOP_MAX_ROUNDS,
    STOP_EMPTY_PATH
)
from pdvsim.config import PDVConfig
from pdvsim.models import Point, SensorNode, ChargeLedger
from pdvsim.pdv import PDV
from pdvsim.problem import ChargingProblem
from pdvsim.strategies import RequestOrderPath, NearestNeighborPath, UserDefinedPath

LEG = 216.0


def line_problem(n):
    nodes = [SensorNode(i, Point(LEG * (i + 1), 0), voltage=2.0) for i in range(n)]
    return ChargingProblem(base=Point(0, 0), nodes=nodes)


class TestChargingCampaign(unittest.TestCase):
    """Test ChargingCampaign class."""

    def test_no_task_issued(self):
        """Default minimum of 20 requests is not reached."""
        campaign = ChargingCampaign(PDV(), line_problem(5), RequestOrderPath())
        result = campaign.run()
        self.assertEqual(len(result.rounds), 0)
        self.assertEqual(result.stop_reason, STOP_TASK_CHECK)
        self.assertEqual(result.remaining_requests, 5)

    def test_single_round_serves_everything(self):
        pdv = PDV(PDVConfig(min_charge_num=0))
        problem = line_problem(5)
        result = ChargingCampaign(pdv, problem, RequestOrderPath()).run()

        self.assertEqual(len(result.rounds), 1)
        self.assertEqual(result.rounds[0].completion, 100.0)
        self.assertEqual(result.nodes_charged, 5)
        self.assertEqual(result.remaining_requests, 0)
        self.assertEqual(result.stop_reason, STOP_TASK_CHECK)
        self.assertAlmostEqual(result.ledger.charged_energy, result.rounds[0].charged_energy)
        self.assertEqual(result.strategy_name, "Request Order")

    def test_pdv_reset_after_campaign(self):
        pdv = PDV(PDVConfig(min_charge_num=0))
        ChargingCampaign(pdv, line_problem(3), NearestNeighborPath()).run()
        self.assertEqual(pdv.flight_time, 0.0)
        self.assertEqual(pdv.remaining_energy, pdv.config.full_energy)

    def test_stops_without_progress(self):
        """Enough energy for the first node only; the rest are out of reach."""
        pdv = PDV(PDVConfig(min_charge_num=0, full_energy=15.0))
        problem = line_problem(3)
        result = ChargingCampaign(pdv, problem, RequestOrderPath()).run()

        self.assertEqual(len(result.rounds), 2)
        self.assertEqual(result.rounds[0].targets_charged, 1)
        self.assertEqual(result.rounds[1].targets_charged, 0)
        self.assertEqual(result.stop_reason, STOP_NO_PROGRESS)
        self.assertEqual(result.remaining_requests, 2)

    def test_max_rounds(self):
        pdv = PDV(PDVConfig(min_charge_num=0, full_energy=15.0))
        result = ChargingCampaign(pdv, line_problem(3), RequestOrderPath(), max_rounds=1).run()
        self.assertEqual(len(result.rounds), 1)
        self.assertEqual(result.stop_reason, STOP_MAX_ROUNDS)

    def test_empty_path(self):
        pdv = PDV(PDVConfig(min_charge_num=0))
        result = ChargingCampaign(pdv, line_problem(3), UserDefinedPath([42])).run()
        self.assertEqual(result.stop_reason, STOP_EMPTY_PATH)
        self.assertEqual(len(result.rounds), 0)

    def test_shared_ledger(self):
        ledger = ChargeLedger(charged_energy=1.0)
        pdv = PDV(PDVConfig(min_charge_num=0))
        result = ChargingCampaign(pdv, line_problem(2), RequestOrderPath(), ledger=ledger).run()
        self.assertIs(result.ledger, ledger)
        self.assertGreater(ledger.charged_energy, 1.0)
        self.assertAlmostEqual(ledger.flight_time, sum(r.flight_time for r in result.rounds))

    def test_get_summary(self):
        pdv = PDV(PDVConfig(min_charge_num=0))
        summary = ChargingCampaign(pdv, line_problem(2), RequestOrderPath()).run().get_summary()
        self.assertEqual(summary["num_rounds"], 1)
        self.assertEqual(summary["nodes_charged"], 2)
        self.assertEqual(summary["stop_reason"], STOP_TASK_CHECK)

    def test_base_mismatch_rejected(self):
        """Paths planned from the field's base must be flown from that base."""
        problem = ChargingProblem.generate_random_problem(num_nodes=60, area_size=2000.0, seed=5)
        with self.assertRaises(ValueError):
            ChargingCampaign(PDV(), problem, NearestNeighborPath())
        campaign = ChargingCampaign(PDV(base=problem.base), problem, NearestNeighborPath())
        self.assertEqual(campaign.pdv.base, problem.base)

    def test_invalid_max_rounds(self):
        with self.assertRaises(ValueError):
            ChargingCampaign(PDV(), line_problem(1), RequestOrderPath(), max_rounds=0)


if __name__ == '__main__':
    unittest.main()
