"""
Run controller: drives ticks and decides when to stop.

Stop conditions are checked between ticks only: a capped species
reaching its cap, the tick limit, or every species dying out. Each
finished tick produces a TickSnapshot that is appended to the count
history and handed to registered listeners (renderers, charts).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

from .data_types import RunLimits, ConfigError
from .simulation import PastureSimulation
from .constants import TICK_SUMMARY_INTERVAL


class StopReason(Enum):
    CAP_REACHED = "cap_reached"
    TICK_LIMIT = "tick_limit"
    EXTINCTION = "extinction"


@dataclass
class TickSnapshot:
    """Read-only summary of one finished tick"""
    tick: int
    counts: Dict[str, int]
    events: Dict[str, Dict[str, int]] = field(default_factory=dict)
    stop_reason: Optional[StopReason] = None
    stop_species: Optional[str] = None  # Species that hit its cap

    @property
    def finished(self) -> bool:
        return self.stop_reason is not None


class RunController:
    """
    Tick driver for a PastureSimulation.

    Usage:
        controller = RunController(sim)
        for snapshot in controller.run():
            chart.push(snapshot.counts)
    """

    def __init__(
        self,
        sim: PastureSimulation,
        limits: Optional[RunLimits] = None,
        summary_interval: Optional[int] = TICK_SUMMARY_INTERVAL
    ):
        """
        Args:
            sim: Simulation to drive
            limits: Stop conditions (defaults to sim.config.limits)
            summary_interval: Print a tick summary every N ticks (None = silent)
        """
        self.sim = sim
        self.limits = limits if limits is not None else sim.config.limits
        self.summary_interval = summary_interval

        unknown_caps = [s for s in self.limits.caps if s not in sim.species_registry]
        if unknown_caps:
            raise ConfigError(f"limits: caps name unknown species {', '.join(unknown_caps)}")

        self.history: List[Dict[str, int]] = [sim.get_counts()]
        self.stop_reason: Optional[StopReason] = None
        self.stop_species: Optional[str] = None
        self._listeners: List[Callable[[TickSnapshot], None]] = []

    def add_listener(self, callback: Callable[[TickSnapshot], None]):
        """Register a callback invoked with every TickSnapshot"""
        self._listeners.append(callback)

    def check_stop(self) -> Optional[StopReason]:
        """
        Evaluate stop conditions against the current state.

        Caps are checked in configuration order; the first species at or
        over its cap is recorded in stop_species.
        """
        counts = self.sim.get_counts()
        self.stop_species = None

        for species_id, cap in self.limits.caps.items():
            if counts[species_id] >= cap:
                self.stop_species = species_id
                return StopReason.CAP_REACHED

        if self.limits.max_ticks is not None and self.sim.tick_count >= self.limits.max_ticks:
            return StopReason.TICK_LIMIT

        if self.limits.stop_on_extinction and sum(counts.values()) == 0:
            return StopReason.EXTINCTION

        return None

    def should_continue(self) -> bool:
        """True while no stop condition holds"""
        self.stop_reason = self.check_stop()
        return self.stop_reason is None

    def step(self) -> TickSnapshot:
        """Run one tick, record it, notify listeners"""
        self.sim.tick()
        counts = self.sim.get_counts()
        self.history.append(counts)

        reason = self.check_stop()
        self.stop_reason = reason
        snapshot = TickSnapshot(
            tick=self.sim.tick_count,
            counts=counts,
            events=self.sim.last_tick_events,
            stop_reason=reason,
            stop_species=self.stop_species if reason is StopReason.CAP_REACHED else None
        )

        for callback in self._listeners:
            callback(snapshot)

        if self.summary_interval and self.sim.tick_count % self.summary_interval == 0:
            self.sim.print_tick_summary()
        if reason is not None:
            self._announce(snapshot)

        return snapshot

    def run(self) -> Iterator[TickSnapshot]:
        """Yield a snapshot per tick until a stop condition holds"""
        while self.should_continue():
            yield self.step()

    def run_to_completion(self) -> Optional[TickSnapshot]:
        """
        Drive the simulation until it stops.

        Returns:
            Final snapshot, or None if a stop condition held before the first tick
        """
        last = None
        for snapshot in self.run():
            last = snapshot
        return last

    def _announce(self, snapshot: TickSnapshot):
        if snapshot.stop_reason is StopReason.CAP_REACHED:
            print(f"[STOP] The {snapshot.stop_species} have inherited the earth! "
                  f"(tick {snapshot.tick}, {snapshot.counts[snapshot.stop_species]} alive)")
        elif snapshot.stop_reason is StopReason.TICK_LIMIT:
            print(f"[STOP] Tick limit {self.limits.max_ticks} reached")
        else:
            print(f"[STOP] Every species died out at tick {snapshot.tick}")
