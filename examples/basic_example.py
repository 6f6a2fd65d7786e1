"""
Basic example of using the PDV charging simulator.
"""

import logging

from pdvsim import (
    PDV,
    PDVConfig,
    ChargeLedger,
    ChargingProblem,
    ChargingCampaign,
    FlightAnalyzer,
    NearestNeighborPath,
    RequestOrderPath,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")

    print("=" * 80)
    print("PDV Charging Simulator - Basic Example")
    print("=" * 80)

    # Generate a random sensor field
    print("\nGenerating random sensor field...")
    problem = ChargingProblem.generate_random_problem(
        num_nodes=120,
        area_size=4000.0,
        request_ratio=0.4,
        seed=42
    )
    print(f"Created {problem}")

    pdv = PDV(PDVConfig(), base=problem.base)
    analyzer = FlightAnalyzer()

    # One hop only
    print("\n" + "-" * 80)
    print("Single-stage flight to the nearest requesting node...")
    path = NearestNeighborPath().plan(problem)
    ledger = ChargeLedger()
    result = pdv.single_stage_flight(problem.nodes, path, ledger)
    analyzer.add_result(result)
    print(f"Completion: {result.completion:.1f}%")
    print(f"Flight Time: {result.flight_time:.4f} h")
    print(f"Remaining Energy: {result.remaining_energy:.2f} Wh")

    # Full campaign
    print("\n" + "-" * 80)
    print("Running charging campaign...")
    pdv.reset()
    campaign = ChargingCampaign(pdv, problem, NearestNeighborPath(), ledger=ledger)
    campaign_result = campaign.run()
    analyzer.add_results(campaign_result.rounds)
    for key, value in campaign_result.get_summary().items():
        print(f"  {key}: {value}")

    # Request order for comparison on a fresh field
    fresh = ChargingProblem.generate_random_problem(num_nodes=120, area_size=4000.0, request_ratio=0.4, seed=42)
    pdv.reset()
    baseline = pdv.flight_simulation(fresh.nodes, RequestOrderPath().plan(fresh))
    print(f"\nRequest-order round on a fresh field: {baseline.completion:.1f}%")

    analyzer.print_summary()

    print("\n" + "=" * 80)
    print("Example completed!")
    print("=" * 80)


if __name__ == "__main__":
    main()
