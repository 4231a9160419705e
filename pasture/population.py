"""
Population store: sole owner of every live agent.

Agents are keyed by instance_id and kept in insertion order, which is
the order the step engine visits them. Per-species counters move with
every spawn and removal, and indexed (prey) species are mirrored into
the OccupancyIndex at their current cell.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from .entity import Agent
from .occupancy import OccupancyIndex
from .spatial import in_bounds


class AgentNotFoundError(KeyError):
    """Raised when an instance_id does not name a live agent"""
    pass


class PopulationStore:
    """
    Live agents plus per-species counters.

    Invariant: counts()[s] == number of live agents with species_id s,
    for every registered species s.
    """

    def __init__(self, species_ids: Iterable[str], occupancy: OccupancyIndex):
        self.occupancy = occupancy
        self._agents: Dict[int, Agent] = {}
        self._counts: Dict[str, int] = {species_id: 0 for species_id in species_ids}
        self._next_id: int = 0

    def spawn(self, species_id: str, x: int, y: int, energy: float, born_tick: int = 0) -> Agent:
        """
        Create and insert a new agent.

        Args:
            species_id: Registered species
            x: In-range column
            y: In-range row
            energy: Starting energy
            born_tick: Tick of birth, kept for snapshots

        Returns:
            The new Agent (already indexed if its species is prey)
        """
        if species_id not in self._counts:
            raise KeyError(f"Unknown species '{species_id}'")
        assert in_bounds(x, y, self.occupancy.width, self.occupancy.height), \
            f"spawn({species_id}) out of range: ({x}, {y})"

        agent = Agent(
            instance_id=self._next_id,
            species_id=species_id,
            x=x,
            y=y,
            energy=energy,
            born_tick=born_tick
        )
        self._next_id += 1

        self._agents[agent.instance_id] = agent
        self._counts[species_id] += 1
        if species_id in self.occupancy:
            self.occupancy.place(species_id, agent.x, agent.y, agent.instance_id)
        return agent

    def remove(self, instance_id: int) -> Agent:
        """
        Delete an agent, decrement its counter and clear its slot.

        Raises:
            AgentNotFoundError: instance_id was never issued or already removed
        """
        agent = self._agents.pop(instance_id, None)
        if agent is None:
            raise AgentNotFoundError(instance_id)

        self._counts[agent.species_id] -= 1
        if agent.species_id in self.occupancy:
            self.occupancy.clear(agent.species_id, agent.x, agent.y)
        return agent

    def move(self, agent: Agent, x: int, y: int):
        """Relocate agent to an in-range cell, keeping its slot current"""
        indexed = agent.species_id in self.occupancy
        if indexed:
            self.occupancy.clear(agent.species_id, agent.x, agent.y)
        agent.x = x
        agent.y = y
        if indexed:
            self.occupancy.place(agent.species_id, x, y, agent.instance_id)

    def get(self, instance_id: int) -> Agent:
        """
        Look up a live agent.

        Raises:
            AgentNotFoundError: agent was removed (e.g. eaten earlier this tick)
        """
        agent = self._agents.get(instance_id)
        if agent is None:
            raise AgentNotFoundError(instance_id)
        return agent

    def find(self, instance_id: int) -> Optional[Agent]:
        """Like get(), but None for stale identifiers"""
        return self._agents.get(instance_id)

    def ids(self) -> List[int]:
        """Snapshot of live identifiers in visiting order"""
        return list(self._agents)

    def agents_of(self, species_id: str) -> List[Agent]:
        return [a for a in self._agents.values() if a.species_id == species_id]

    def count(self, species_id: str) -> int:
        return self._counts[species_id]

    def counts(self) -> Dict[str, int]:
        """Copy of the per-species counters"""
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, instance_id: int) -> bool:
        return instance_id in self._agents

    def __iter__(self) -> Iterator[Agent]:
        return iter(list(self._agents.values()))
