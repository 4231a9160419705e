"""
Data types mirroring the YAML configuration structure.

These dataclasses are populated by loader.py from YAML files, or built
directly in code. Each one validates itself on construction so a bad
configuration fails before the first tick.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .constants import (
    GRID_WIDTH_DEFAULT,
    GRID_HEIGHT_DEFAULT,
    GRASS_MAX,
    GRASS_INITIAL,
    GRASS_REGROWTH_PER_TICK,
    GRASS_TRAMPLE,
    GRASS_CENTER_MULTIPLIER,
    GOAT_GAIN_FROM_FOOD,
    GOAT_REPRODUCE,
    GOAT_INITIAL_COUNT,
    MAX_GOAT,
    SHEEP_GAIN_FROM_FOOD,
    SHEEP_REPRODUCE,
    SHEEP_INITIAL_COUNT,
    MAX_SHEEP,
    WOLF_GAIN_FROM_FOOD,
    WOLF_REPRODUCE,
    WOLF_INITIAL_COUNT,
    MOVE_STEP_DEFAULT,
    METABOLIC_COST_DEFAULT,
    DEATH_THRESHOLD_DEFAULT,
    ENERGY_SPLIT_DEFAULT,
    PREDATION_RADIUS_DEFAULT,
    PREY_POLICIES,
    PREY_POLICY_BIASED,
    PREY_BIAS_DEFAULT,
    MAX_TICKS_DEFAULT,
    WORLD_SEED_DEFAULT,
)


class ConfigError(ValueError):
    """Raised when a configuration value is out of range or inconsistent"""
    pass


def _require_non_negative(owner: str, **values):
    for name, value in values.items():
        if value is not None and value < 0:
            raise ConfigError(f"{owner}: {name} must be >= 0, got {value}")


def _require_int(owner: str, **values):
    for name, value in values.items():
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ConfigError(f"{owner}: {name} must be an integer, got {value!r}")


def _require_probability(owner: str, name: str, value: float):
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"{owner}: {name} must be in [0, 1], got {value}")


# ============================================================================
# Grid Definition
# ============================================================================

@dataclass
class GridConfig:
    """Toroidal field dimensions and grass dynamics"""
    width: int = GRID_WIDTH_DEFAULT
    height: int = GRID_HEIGHT_DEFAULT
    grass_max: float = GRASS_MAX
    grass_initial: float = GRASS_INITIAL
    regrowth_rate: float = GRASS_REGROWTH_PER_TICK  # Added to every cell per tick
    trample: float = GRASS_TRAMPLE  # Subtracted from the 3x3 block per grazing event
    center_multiplier: float = GRASS_CENTER_MULTIPLIER

    def __post_init__(self):
        _require_int("grid", width=self.width, height=self.height)
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(
                f"grid: width and height must be positive, got {self.width}x{self.height}"
            )
        _require_non_negative(
            "grid",
            grass_max=self.grass_max,
            grass_initial=self.grass_initial,
            regrowth_rate=self.regrowth_rate,
            trample=self.trample,
            center_multiplier=self.center_multiplier,
        )
        if self.grass_initial > self.grass_max:
            raise ConfigError(
                f"grid: grass_initial ({self.grass_initial}) exceeds grass_max ({self.grass_max})"
            )


# ============================================================================
# Species Definitions
# ============================================================================

@dataclass(frozen=True)
class HerbivoreSpecies:
    """Constants for a grazing species (goat, sheep, ...)"""
    species_id: str
    gain_from_food: float
    reproduce_probability: float
    initial_count: int = 0
    reproduce_energy_threshold: Optional[float] = None  # None = no energy gate
    energy_split: float = ENERGY_SPLIT_DEFAULT
    death_threshold: float = DEATH_THRESHOLD_DEFAULT
    metabolic_cost: float = METABOLIC_COST_DEFAULT
    move_step: int = MOVE_STEP_DEFAULT

    def __post_init__(self):
        _validate_common(self)


@dataclass(frozen=True)
class PredatorSpecies:
    """Constants for a hunting species (wolf)"""
    species_id: str
    gain_from_food: float  # Energy gained per prey eaten
    reproduce_probability: float
    initial_count: int = 0
    reproduce_energy_threshold: Optional[float] = None
    energy_split: float = ENERGY_SPLIT_DEFAULT
    death_threshold: float = DEATH_THRESHOLD_DEFAULT
    metabolic_cost: float = METABOLIC_COST_DEFAULT
    move_step: int = MOVE_STEP_DEFAULT
    predation_radius: int = PREDATION_RADIUS_DEFAULT
    prey_policy: str = PREY_POLICY_BIASED
    prey_bias: float = PREY_BIAS_DEFAULT  # P(first prey species) under "biased"
    prey: Optional[tuple] = None  # Prey species ids; None = every herbivore

    def __post_init__(self):
        _validate_common(self)
        _require_int(self.species_id, predation_radius=self.predation_radius)
        _require_non_negative(self.species_id, predation_radius=self.predation_radius)
        if self.prey_policy not in PREY_POLICIES:
            raise ConfigError(
                f"{self.species_id}: unknown prey_policy '{self.prey_policy}' "
                f"(expected one of {', '.join(PREY_POLICIES)})"
            )
        _require_probability(self.species_id, "prey_bias", self.prey_bias)
        if self.prey is not None and not isinstance(self.prey, tuple):
            # Keep the dataclass hashable
            object.__setattr__(self, 'prey', tuple(self.prey))


Species = Union[HerbivoreSpecies, PredatorSpecies]


def _validate_common(species: Species):
    owner = species.species_id
    if not owner:
        raise ConfigError("species_id must be a non-empty string")
    _require_int(owner, initial_count=species.initial_count, move_step=species.move_step)
    _require_non_negative(
        owner,
        gain_from_food=species.gain_from_food,
        initial_count=species.initial_count,
        metabolic_cost=species.metabolic_cost,
        move_step=species.move_step,
        reproduce_energy_threshold=species.reproduce_energy_threshold,
    )
    _require_probability(owner, "reproduce_probability", species.reproduce_probability)
    if species.energy_split <= 0:
        raise ConfigError(f"{owner}: energy_split must be positive, got {species.energy_split}")


# ============================================================================
# Run Definition
# ============================================================================

@dataclass
class RunLimits:
    """Termination conditions checked between ticks"""
    max_ticks: Optional[int] = MAX_TICKS_DEFAULT  # None = unlimited
    caps: Dict[str, int] = field(default_factory=dict)  # {species_id: population cap}
    stop_on_extinction: bool = True

    def __post_init__(self):
        _require_int("limits", max_ticks=self.max_ticks)
        _require_non_negative("limits", max_ticks=self.max_ticks)
        for species_id, cap in self.caps.items():
            if isinstance(cap, bool) or not isinstance(cap, int):
                raise ConfigError(f"limits: cap for '{species_id}' must be an integer, got {cap!r}")
            if cap <= 0:
                raise ConfigError(f"limits: cap for '{species_id}' must be positive, got {cap}")


@dataclass
class SimulationConfig:
    """Complete simulation configuration"""
    grid: GridConfig
    herbivores: List[HerbivoreSpecies]
    predators: List[PredatorSpecies]
    limits: RunLimits = field(default_factory=RunLimits)
    seed: int = WORLD_SEED_DEFAULT
    name: str = "pasture"
    description: Optional[str] = None

    def __post_init__(self):
        ids = [s.species_id for s in self.all_species()]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ConfigError(f"duplicate species ids: {', '.join(duplicates)}")

        herbivore_ids = {s.species_id for s in self.herbivores}
        for predator in self.predators:
            prey = self.prey_of(predator)
            if not prey:
                raise ConfigError(f"{predator.species_id}: predator has no prey species")
            unknown = [p for p in prey if p not in herbivore_ids]
            if unknown:
                raise ConfigError(
                    f"{predator.species_id}: unknown prey species {', '.join(unknown)}"
                )

        unknown_caps = [s for s in self.limits.caps if s not in ids]
        if unknown_caps:
            raise ConfigError(f"limits: caps name unknown species {', '.join(unknown_caps)}")

    def all_species(self) -> List[Species]:
        """Herbivores first, then predators (spawn and report order)"""
        return list(self.herbivores) + list(self.predators)

    def get_species(self, species_id: str) -> Species:
        for species in self.all_species():
            if species.species_id == species_id:
                return species
        raise KeyError(species_id)

    def prey_of(self, predator: PredatorSpecies) -> List[str]:
        """Prey species ids hunted by predator, in configuration order"""
        if predator.prey is None:
            return [h.species_id for h in self.herbivores]
        return list(predator.prey)

    @classmethod
    def default(cls) -> 'SimulationConfig':
        """
        Build the stock two-grazer, one-predator pasture.

        Returns:
            SimulationConfig with sheep, goats and wolves on a 600x300 field
        """
        sheep = HerbivoreSpecies(
            species_id="sheep",
            gain_from_food=SHEEP_GAIN_FROM_FOOD,
            reproduce_probability=SHEEP_REPRODUCE,
            initial_count=SHEEP_INITIAL_COUNT,
        )
        goat = HerbivoreSpecies(
            species_id="goat",
            gain_from_food=GOAT_GAIN_FROM_FOOD,
            reproduce_probability=GOAT_REPRODUCE,
            initial_count=GOAT_INITIAL_COUNT,
        )
        wolf = PredatorSpecies(
            species_id="wolf",
            gain_from_food=WOLF_GAIN_FROM_FOOD,
            reproduce_probability=WOLF_REPRODUCE,
            initial_count=WOLF_INITIAL_COUNT,
        )
        return cls(
            grid=GridConfig(),
            herbivores=[sheep, goat],
            predators=[wolf],
            limits=RunLimits(caps={"goat": MAX_GOAT, "sheep": MAX_SHEEP}),
        )
