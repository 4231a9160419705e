"""
Agent runtime representation.

Agents are spawned from species definitions and live in the
PopulationStore. Each agent has a unique integer instance_id, an integer
cell position on the toroidal field, and a real-valued energy.
"""

from dataclasses import dataclass


@dataclass
class Agent:
    """
    Runtime agent in simulation.

    Attributes:
        instance_id: Unique identifier within the PopulationStore (never reused)
        species_id: Species definition ID (e.g., "sheep", "wolf")
        x: Column in [0, width)
        y: Row in [0, height)
        energy: Current energy; may dip below zero before death is processed
        born_tick: Tick at which the agent was spawned (0 for the seed population)
    """
    instance_id: int
    species_id: str
    x: int
    y: int
    energy: float
    born_tick: int = 0

    def __post_init__(self):
        """Ensure integer cell coordinates and float energy"""
        self.x = int(self.x)
        self.y = int(self.y)
        self.energy = float(self.energy)

    @property
    def position(self) -> tuple:
        return self.x, self.y

    def to_dict(self) -> dict:
        """
        Serialize agent to JSON-compatible dict.

        Returns:
            Dict with all agent fields
        """
        return {
            'instance_id': self.instance_id,
            'species_id': self.species_id,
            'x': self.x,
            'y': self.y,
            'energy': self.energy,
            'born_tick': self.born_tick,
        }
