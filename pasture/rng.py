"""
Deterministic RNG utilities for pasture simulation.

Uses SHA256 hashing to derive stable seeds from hierarchical components
(world_seed, run label, ...). All randomness flows through one
numpy.random.Generator(PCG64) per simulation, handed to the engine
explicitly, so runs are reproducible from a single seed.
"""

import hashlib
import numpy as np
from typing import Any


def make_seed(*components: Any) -> int:
    """
    Generate deterministic 64-bit seed from hierarchical components.

    Uses SHA256 to hash components into stable seed value.

    Args:
        *components: Seed components (world_seed, label, replicate index, etc.)

    Returns:
        64-bit integer seed for numpy RNG

    Example:
        run_seed = make_seed(world_seed, "pasture", replicate)
    """
    # Join all components with colon separator
    hash_input = ":".join(str(c) for c in components)

    # SHA256 hash and extract 64-bit integer
    hash_bytes = hashlib.sha256(hash_input.encode('utf-8')).digest()
    seed = int.from_bytes(hash_bytes[:8], byteorder='big')

    return seed


def make_rng(*components: Any) -> np.random.Generator:
    """
    Build a PCG64 generator seeded from hierarchical components.

    Returns:
        Fresh numpy Generator; same components give the same stream
    """
    return np.random.Generator(np.random.PCG64(make_seed(*components)))


def random_offset(rng: np.random.Generator, step: int) -> int:
    """Uniform integer in [-step, step], both ends inclusive"""
    return int(rng.integers(-step, step + 1))


def random_cell(rng: np.random.Generator, width: int, height: int) -> tuple:
    """Uniform cell (x, y) on the grid"""
    return int(rng.integers(0, width)), int(rng.integers(0, height))


def random_energy(rng: np.random.Generator, gain_from_food: float) -> float:
    """Newborn energy, uniform in [0, 2 * gain_from_food)"""
    return float(rng.random() * 2.0 * gain_from_food)
