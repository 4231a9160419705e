"""
Headless pasture run.

Loads data/pasture.yaml (validated against schemas/), runs until a cap,
the tick limit or extinction, and prints a summary table of the
population time series.
"""

import argparse
from pathlib import Path

from pasture.simulation import PastureSimulation
from pasture.runner import RunController


REPO_ROOT = Path(__file__).parent.parent


def main():
    """Run one pasture simulation from the command line."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=Path, default=REPO_ROOT / "data" / "pasture.yaml")
    parser.add_argument("--schemas", type=Path, default=REPO_ROOT / "schemas")
    parser.add_argument("--summary-every", type=int, default=100)
    args = parser.parse_args()

    print("=" * 70)
    print("Pasture Simulation")
    print("=" * 70)

    sim = PastureSimulation.from_file(args.config, schema_dir=args.schemas)
    controller = RunController(sim, summary_interval=args.summary_every)
    final = controller.run_to_completion()

    stats = sim.get_tick_stats()
    print()
    print("=" * 70)
    print("RESULTS")
    print("=" * 70)
    print(f"  Total ticks:      {stats['tick_count']}")
    print(f"  Avg tick time:    {stats['avg_tick_time_ms']:.3f} ms")
    if final is not None:
        print(f"  Stop reason:      {final.stop_reason.value}")
    print()

    species_ids = list(sim.get_counts())
    print("| Tick | " + " | ".join(f"{s:>8}" for s in species_ids) + " |")
    print("|------|" + "|".join("-" * 10 for _ in species_ids) + "|")
    step = max(1, len(controller.history) // 20)
    for tick, counts in enumerate(controller.history):
        if tick % step == 0 or tick == len(controller.history) - 1:
            print(f"| {tick:4d} | " + " | ".join(f"{counts[s]:8d}" for s in species_ids) + " |")


if __name__ == '__main__':
    main()
