"""
Inline builders shared by the pasture tests.

Small grids, explicit seeds, no populations unless a test asks for them.
"""

from pasture.data_types import (
    SimulationConfig, GridConfig, HerbivoreSpecies, PredatorSpecies, RunLimits
)
from pasture.simulation import PastureSimulation
from pasture.rng import make_rng


def sheep(**overrides) -> HerbivoreSpecies:
    """Sheep that stay put and never breed unless told otherwise"""
    params = dict(
        species_id="sheep",
        gain_from_food=10.0,
        reproduce_probability=0.0,
        move_step=0,
    )
    params.update(overrides)
    return HerbivoreSpecies(**params)


def goat(**overrides) -> HerbivoreSpecies:
    params = dict(
        species_id="goat",
        gain_from_food=11.0,
        reproduce_probability=0.0,
        move_step=0,
    )
    params.update(overrides)
    return HerbivoreSpecies(**params)


def wolf(**overrides) -> PredatorSpecies:
    params = dict(
        species_id="wolf",
        gain_from_food=20.0,
        reproduce_probability=0.0,
        move_step=0,
        predation_radius=3,
    )
    params.update(overrides)
    return PredatorSpecies(**params)


def make_config(herbivores=None, predators=None, limits=None, width=20, height=10, **grid) -> SimulationConfig:
    return SimulationConfig(
        grid=GridConfig(width=width, height=height, **grid),
        herbivores=herbivores if herbivores is not None else [sheep()],
        predators=predators if predators is not None else [],
        limits=limits if limits is not None else RunLimits(max_ticks=None),
    )


def make_sim(config: SimulationConfig, seed: int = 42, seed_populations: bool = False) -> PastureSimulation:
    return PastureSimulation(config, rng=make_rng(seed, "test"), seed_populations=seed_populations)
