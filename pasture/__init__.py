"""
Pasture Simulation

A seeded, headless predator-prey simulator on a toroidal grass field.
Grazers move, eat and breed; predators hunt them through per-species
occupancy grids.

Architecture: the simulation core is the source of truth. Renderers and
charts are consumers of per-tick snapshots.
"""

__version__ = "0.1.0"
