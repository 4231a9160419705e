"""
Pasture simulation kernel.

Main simulation class that owns the resource field, the occupancy index
and the population store, and advances them one tick at a time.
"""

import numpy as np
import os
import time
from typing import Dict, List, Optional
from pathlib import Path

from .entity import Agent
from .data_types import SimulationConfig, Species, HerbivoreSpecies, PredatorSpecies
from .terrain import ResourceField
from .occupancy import OccupancyIndex
from .population import PopulationStore, AgentNotFoundError
from .spatial import wrap_point
from .rng import make_rng, random_offset, random_cell, random_energy
from .loader import load_config
from .constants import (
    TICK_TIME_WINDOW,
    PREY_POLICY_BOTH,
)


class PastureSimulation:
    """
    Main simulation class for the pasture ecosystem.

    Holds the three shared mutable structures (grass field, prey
    occupancy grids, population store) and applies the per-agent rule
    set to every live agent once per tick.
    """

    def __init__(
        self,
        config: SimulationConfig,
        rng: Optional[np.random.Generator] = None,
        seed_populations: bool = True
    ):
        """
        Initialize simulation from a validated configuration.

        Args:
            config: Simulation configuration (grid, species, limits)
            rng: Generator for every stochastic choice; derived from
                 config.seed when omitted
            seed_populations: If False, start with an empty pasture (for tests)
        """
        self.config = config
        self.rng = rng if rng is not None else make_rng(config.seed, config.name)

        self.species_registry: Dict[str, Species] = {
            s.species_id: s for s in config.all_species()
        }
        self._prey_of: Dict[str, List[str]] = {
            p.species_id: config.prey_of(p) for p in config.predators
        }

        # Shared grids (mutated in place by every agent update)
        self.field = ResourceField(config.grid)
        self.occupancy = OccupancyIndex(
            config.grid.width,
            config.grid.height,
            [h.species_id for h in config.herbivores]
        )
        self.population = PopulationStore(self.species_registry, self.occupancy)

        # Simulation state
        self.tick_count: int = 0

        # Performance metrics
        self._tick_times: List[float] = []
        self._tick_time_sum: float = 0.0
        self._tick_time_window: int = TICK_TIME_WINDOW  # Rolling average window

        # Telemetry for the tick just finished
        self.last_tick_events: Dict[str, Dict[str, int]] = self._empty_events()
        self._totals: Dict[str, Dict[str, int]] = self._empty_events()

        if seed_populations:
            print("Seeding populations...")
            self._seed_populations()

        print(f"[OK] Simulation initialized: {len(self.population)} agents on "
              f"{config.grid.width}x{config.grid.height}, seed={config.seed}")

    @classmethod
    def from_file(
        cls,
        config_path: Path,
        schema_dir: Optional[Path] = None,
        rng: Optional[np.random.Generator] = None
    ) -> 'PastureSimulation':
        """Load a YAML configuration and build a simulation from it"""
        print(f"Loading configuration {config_path}...")
        return cls(load_config(config_path, schema_dir), rng=rng)

    def _empty_events(self) -> Dict[str, Dict[str, int]]:
        return {
            kind: {species_id: 0 for species_id in self.species_registry}
            for kind in ('births', 'deaths', 'kills')
        }

    def _seed_populations(self):
        """Spawn initial_count agents per species, herbivores first"""
        for species in self.config.all_species():
            for _ in range(species.initial_count):
                self.spawn(species.species_id)
            print(f"  {species.species_id}: spawned {species.initial_count} agents")

    def spawn(
        self,
        species_id: str,
        x: Optional[int] = None,
        y: Optional[int] = None,
        energy: Optional[float] = None
    ) -> Agent:
        """
        Add one agent, drawing any missing attribute from the RNG.

        Position defaults to a uniform random cell; energy defaults to
        uniform [0, 2 * gain_from_food).

        Returns:
            The spawned Agent
        """
        species = self.species_registry[species_id]
        if x is None or y is None:
            rx, ry = random_cell(self.rng, self.config.grid.width, self.config.grid.height)
            x = rx if x is None else x
            y = ry if y is None else y
        x, y = wrap_point(x, y, self.config.grid.width, self.config.grid.height)
        if energy is None:
            energy = random_energy(self.rng, species.gain_from_food)
        return self.population.spawn(species_id, x, y, energy, born_tick=self.tick_count)

    def tick(self):
        """
        Advance simulation by one time step.

        SINGLE-PASS TICK CONTRACT:

        1. Snapshot live ids in insertion order. Agents born during this
           tick are not in the snapshot and first act next tick.
        2. Visit each id once, sequentially, against the live grids.
           Ids removed earlier in the tick (eaten, starved) are skipped.
           Later agents see every change made by earlier ones.
        3. Regrow the grass field as one separate pass.
        """
        start_time = time.perf_counter()
        events = self._empty_events()

        for instance_id in self.population.ids():
            try:
                agent = self.population.get(instance_id)
            except AgentNotFoundError:
                continue  # Removed earlier this tick

            match self.species_registry[agent.species_id]:
                case HerbivoreSpecies() as species:
                    self._tick_herbivore(agent, species, events)
                case PredatorSpecies() as species:
                    self._tick_predator(agent, species, events)

        self.field.regrow()

        # Increment tick count
        self.tick_count += 1
        self.last_tick_events = events
        for kind, per_species in events.items():
            for species_id, n in per_species.items():
                self._totals[kind][species_id] += n

        # Record timing
        elapsed = time.perf_counter() - start_time
        self._record_tick_time(elapsed)

        # Debug invariant check (zero perf impact when env var not set)
        if os.getenv('SIM_DEBUG_INVARIANTS') == '1':
            self.check_invariants()

    # ========================================================================
    # Per-agent rules
    # ========================================================================

    def _tick_herbivore(self, agent: Agent, species: HerbivoreSpecies, events: dict):
        """Move, metabolize, starve or graze, then maybe breed"""
        self._move(agent, species.move_step)

        agent.energy -= species.metabolic_cost
        if agent.energy < species.death_threshold:
            self.population.remove(agent.instance_id)
            events['deaths'][species.species_id] += 1
            return

        agent.energy += self.field.forage(agent.x, agent.y, species.gain_from_food)

        self._maybe_reproduce(agent, species, events)

    def _tick_predator(self, agent: Agent, species: PredatorSpecies, events: dict):
        """Move, metabolize, starve or hunt, then maybe breed"""
        self._move(agent, species.move_step)

        agent.energy -= species.metabolic_cost
        if agent.energy < species.death_threshold:
            self.population.remove(agent.instance_id)
            events['deaths'][species.species_id] += 1
            return

        self._hunt(agent, species, events)

        self._maybe_reproduce(agent, species, events)

    def _move(self, agent: Agent, step: int):
        """Random walk of up to `step` cells per axis, wrapped"""
        dx = random_offset(self.rng, step)
        dy = random_offset(self.rng, step)
        x, y = wrap_point(agent.x + dx, agent.y + dy,
                          self.config.grid.width, self.config.grid.height)
        self.population.move(agent, x, y)

    def _hunt(self, agent: Agent, species: PredatorSpecies, events: dict) -> int:
        """
        Eat prey found in the predation window.

        "biased": one prey species is drawn (first with probability
        prey_bias); if it has no candidate in range, nothing is eaten.
        "both": one candidate of every prey species in range is eaten.

        Returns:
            Number of prey eaten
        """
        prey_ids = self._prey_of[species.species_id]
        found = {
            prey_id: self.occupancy.query_radius(
                prey_id, agent.x, agent.y, species.predation_radius
            )
            for prey_id in prey_ids
        }
        if not any(found.values()):
            return 0

        if species.prey_policy == PREY_POLICY_BOTH:
            targets = [prey_id for prey_id in prey_ids if found[prey_id]]
        else:
            chosen = self._choose_prey_species(prey_ids, species.prey_bias)
            targets = [chosen] if found[chosen] else []

        eaten = 0
        for prey_id in targets:
            candidates = found[prey_id]
            pick = candidates[int(self.rng.integers(len(candidates)))]
            try:
                self.population.remove(pick)
            except AgentNotFoundError:
                continue  # Stale reference

            agent.energy += species.gain_from_food
            events['kills'][prey_id] += 1
            eaten += 1

        return eaten

    def _choose_prey_species(self, prey_ids: List[str], bias: float) -> str:
        if len(prey_ids) == 1:
            return prey_ids[0]
        if self.rng.random() < bias:
            return prey_ids[0]
        rest = prey_ids[1:]
        if len(rest) == 1:
            return rest[0]
        return rest[int(self.rng.integers(len(rest)))]

    def _maybe_reproduce(self, parent: Agent, species: Species, events: dict):
        """Coin flip, optional energy gate, split parent energy, spawn at random"""
        if self.rng.random() >= species.reproduce_probability:
            return
        threshold = species.reproduce_energy_threshold
        if threshold is not None and parent.energy <= threshold:
            return

        parent.energy /= species.energy_split
        x, y = random_cell(self.rng, self.config.grid.width, self.config.grid.height)
        energy = random_energy(self.rng, species.gain_from_food)
        self.population.spawn(species.species_id, x, y, energy, born_tick=self.tick_count + 1)
        events['births'][species.species_id] += 1

    # ========================================================================
    # Read-only accessors for renderers and charts
    # ========================================================================

    def get_counts(self) -> Dict[str, int]:
        """Population counters per species"""
        return self.population.counts()

    def resource_values(self) -> np.ndarray:
        """Read-only (height, width) grass grid"""
        return self.field.values()

    def resource_colors(self) -> np.ndarray:
        """(height, width, 4) RGBA grass colours"""
        return self.field.colors()

    def positions(self, species_id: str) -> np.ndarray:
        """
        Cell positions of one species.

        Returns:
            (N, 2) int array of [x, y] rows
        """
        agents = self.population.agents_of(species_id)
        if not agents:
            return np.empty((0, 2), dtype=np.int64)
        return np.array([[a.x, a.y] for a in agents], dtype=np.int64)

    def check_invariants(self):
        """
        Assert store/index consistency.

        - counters equal live agents per species
        - every occupied slot names a live agent of that species at that cell
        - every grass value lies in [0, grass_max]
        """
        counts = self.population.counts()
        for species_id in self.species_registry:
            live = len(self.population.agents_of(species_id))
            assert counts[species_id] == live, \
                f"count[{species_id}] ({counts[species_id]}) != live agents ({live})"

        for species_id in self.occupancy.species_ids:
            for x, y, instance_id in self.occupancy.occupied_slots(species_id):
                agent = self.population.find(instance_id)
                assert agent is not None, \
                    f"{species_id} slot ({x}, {y}) references removed agent {instance_id}"
                assert agent.species_id == species_id and agent.position == (x, y), \
                    f"{species_id} slot ({x}, {y}) references agent {instance_id} at {agent.position}"

        grass = self.field.values()
        assert grass.min() >= 0.0 and grass.max() <= self.field.grass_max, \
            f"grass out of range [{grass.min()}, {grass.max()}]"

    def get_tick_stats(self) -> dict:
        """
        Get current tick timing statistics.

        Returns:
            Dict with tick_count, avg_tick_time_ms, last_tick_time_ms
        """
        if not self._tick_times:
            return {
                'tick_count': self.tick_count,
                'avg_tick_time_ms': 0.0,
                'last_tick_time_ms': 0.0
            }

        avg_time = self._tick_time_sum / len(self._tick_times)
        last_time = self._tick_times[-1]

        return {
            'tick_count': self.tick_count,
            'avg_tick_time_ms': avg_time * 1000.0,
            'last_tick_time_ms': last_time * 1000.0
        }

    def _record_tick_time(self, elapsed: float):
        """
        Record tick timing for rolling average.

        Args:
            elapsed: Tick time in seconds
        """
        self._tick_times.append(elapsed)
        self._tick_time_sum += elapsed

        # Maintain rolling window
        if len(self._tick_times) > self._tick_time_window:
            removed = self._tick_times.pop(0)
            self._tick_time_sum -= removed

    def get_snapshot(self, include_agents: bool = False) -> dict:
        """
        Get simulation state snapshot.

        Args:
            include_agents: Also serialize every live agent (slow at scale)

        Returns:
            Dict with tick_count, counts, last-tick events, totals, grass, timing
        """
        snapshot = {
            'tick_count': self.tick_count,
            'agent_count': len(self.population),
            'counts': self.get_counts(),
            'events': self.last_tick_events,
            'totals': self._totals,
            'grass_mean': self.field.mean(),
            'timing': self.get_tick_stats()
        }
        if include_agents:
            snapshot['agents'] = [a.to_dict() for a in self.population]
        return snapshot

    def print_tick_summary(self):
        """Print tick summary to console (lightweight monitoring)"""
        stats = self.get_tick_stats()
        counts = " ".join(f"{k}={v}" for k, v in self.get_counts().items())
        print(f"Tick {stats['tick_count']:5d} | "
              f"Avg: {stats['avg_tick_time_ms']:7.3f} ms | "
              f"Last: {stats['last_tick_time_ms']:7.3f} ms | "
              f"Grass: {self.field.mean():6.1f} | {counts}")
