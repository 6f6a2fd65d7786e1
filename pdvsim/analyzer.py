"""
Analyzer for summarizing and visualizing PDV flight results.
"""

from typing import List, Dict, Any, Optional, Sequence
import json

import numpy as np
import pandas as pd

from .config import FLOAT_DTYPE
from .models import FlightResult, Point
from .problem import ChargingProblem


class FlightAnalyzer:
    """Collects flight results and reports on them."""

    def __init__(self):
        """Initialize the analyzer."""
        self.results: List[FlightResult] = []

    def add_result(self, result: FlightResult):
        """Add a result to analyze."""
        self.results.append(result)

    def add_results(self, results: Sequence[FlightResult]):
        """Add several results, e.g. the rounds of a campaign."""
        self.results.extend(results)

    def clear_results(self):
        """Clear all stored results."""
        self.results = []

    def to_dataframe(self) -> pd.DataFrame:
        """One row per flight with the columns of ``FlightResult.get_summary``."""
        return pd.DataFrame([result.get_summary() for result in self.results])

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistical summary of all results.

        Returns:
            Dictionary with statistical metrics
        """
        if not self.results:
            return {}

        def describe(values) -> Dict[str, float]:
            arr = np.asarray(values, dtype=FLOAT_DTYPE)
            return {
                "min": float(arr.min()),
                "max": float(arr.max()),
                "avg": float(arr.mean()),
                "total": float(arr.sum()),
            }

        return {
            "num_flights": len(self.results),
            "num_aborted": sum(1 for r in self.results if r.aborted),
            "completion": describe([r.completion for r in self.results]),
            "charged_energy": describe([r.charged_energy for r in self.results]),
            "flight_time": describe([r.flight_time for r in self.results]),
            "flight_distance": describe([r.flight_distance for r in self.results]),
            "targets_charged": describe([r.targets_charged for r in self.results]),
        }

    def print_summary(self):
        """Print a formatted summary of all flights."""
        if not self.results:
            print("No results to summarize.")
            return

        print("=" * 80)
        print("PDV FLIGHT SUMMARY")
        print("=" * 80)

        for idx, result in enumerate(self.results):
            print(f"\nFlight {idx}: {result.label}")
            print("-" * 80)
            print(f"  Targets Charged:   {result.targets_charged}/{result.targets_total}")
            print(f"  Completion:        {result.completion:.1f}%")
            print(f"  Charged Energy:    {result.charged_energy:.4f} Wh")
            print(f"  Flight Time:       {result.flight_time:.4f} h")
            print(f"  Flight Distance:   {result.flight_distance:.1f} m")
            print(f"  Remaining Energy:  {result.remaining_energy:.2f} Wh")
            print(f"  Early RTH:         {'yes' if result.aborted else 'no'}")

        stats = self.get_statistics()
        print("\n" + "=" * 80)
        print("TOTALS")
        print("=" * 80)
        print(f"  Flights:           {stats['num_flights']} ({stats['num_aborted']} aborted)")
        print(f"  Average Completion:{stats['completion']['avg']:>7.1f}%")
        print(f"  Charged Energy:    {stats['charged_energy']['total']:.4f} Wh")
        print(f"  Flight Time:       {stats['flight_time']['total']:.4f} h")
        print("=" * 80)

    def export_to_json(self, filepath: str):
        """
        Export results to JSON file.

        Args:
            filepath: Path to output JSON file
        """
        data = {
            "statistics": self.get_statistics(),
            "results": [result.get_summary() for result in self.results],
        }

        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    def visualize(
        self,
        problem: ChargingProblem,
        path: Optional[Sequence[Point]] = None,
        save_path: Optional[str] = None
    ):
        """
        Plot the sensor field, the base station and optionally a planned path.

        Args:
            problem: Sensor field to draw
            path: Target positions in visiting order (drawn as a closed tour)
            save_path: Path to save the figure (if None, displays interactively)
        """
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(7, 7))

        charged = [n for n in problem.nodes if not n.requesting]
        requesting = problem.requesting_nodes()
        if charged:
            ax.scatter([n.position.x for n in charged], [n.position.y for n in charged],
                       c='green', marker='o', s=40, label='Charged', alpha=0.7)
        if requesting:
            ax.scatter([n.position.x for n in requesting], [n.position.y for n in requesting],
                       c='red', marker='o', s=40, label='Requesting', alpha=0.7)
        ax.scatter([problem.base.x], [problem.base.y], c='blue', marker='^', s=120, label='Base')

        if path:
            tour = [problem.base] + list(path) + [problem.base]
            ax.plot([p.x for p in tour], [p.y for p in tour], 'k--', alpha=0.4, label='Path')

        title = "Sensor field"
        if self.results:
            title += f"\nLast completion: {self.results[-1].completion:.1f}%"
        ax.set_title(title)
        ax.set_xlabel("X [m]")
        ax.set_ylabel("Y [m]")
        ax.legend()
        ax.grid(True, alpha=0.3)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            plt.close(fig)
            print(f"Visualization saved to {save_path}")
        else:
            plt.show()
