"""
Central configuration constants for pasture simulation.

Defines default values used when a configuration is built without a
YAML file, plus engine-wide tuning parameters.
"""

# ============================================================================
# Grid Configuration
# ============================================================================

GRID_WIDTH_DEFAULT = 600
GRID_HEIGHT_DEFAULT = 300

# Resource field (grass biomass per cell)
GRASS_MAX = 255.0            # Cap for every cell (full green)
GRASS_INITIAL = 255.0        # Value written by init()
GRASS_REGROWTH_PER_TICK = 1.0
GRASS_TRAMPLE = 15.0         # Subtracted from each cell of the 3x3 block when grazing
GRASS_CENTER_MULTIPLIER = 8.0  # Center cell rewritten as g - 8 * eaten
GRASS_FLOOR = 0.0


# ============================================================================
# Species Defaults
# ============================================================================

GOAT_GAIN_FROM_FOOD = 11.0
GOAT_REPRODUCE = 0.03
GOAT_INITIAL_COUNT = 300
MAX_GOAT = 6000

SHEEP_GAIN_FROM_FOOD = 10.0
SHEEP_REPRODUCE = 0.03
SHEEP_INITIAL_COUNT = 300
MAX_SHEEP = 6000

WOLF_GAIN_FROM_FOOD = 20.0
WOLF_REPRODUCE = 0.2
WOLF_INITIAL_COUNT = 100

# Shared per-agent defaults
MOVE_STEP_DEFAULT = 3           # Max displacement per axis per tick
METABOLIC_COST_DEFAULT = 1.0    # Energy spent per tick
DEATH_THRESHOLD_DEFAULT = 0.0   # Dies when energy < threshold
ENERGY_SPLIT_DEFAULT = 2.0      # Parent energy divisor on reproduction
PREDATION_RADIUS_DEFAULT = 6    # Half-width of the square hunting window

# Prey selection policies
PREY_POLICY_BIASED = "biased"   # Pick one prey species per tick
PREY_POLICY_BOTH = "both"       # Eat from every prey species found
PREY_POLICIES = (PREY_POLICY_BIASED, PREY_POLICY_BOTH)
PREY_BIAS_DEFAULT = 0.5         # P(first prey species) under the biased policy


# ============================================================================
# Run Configuration
# ============================================================================

MAX_TICKS_DEFAULT = 3000
WORLD_SEED_DEFAULT = 12345

# Spatial occupancy slot value meaning "no occupant"
EMPTY_SLOT = -1


# ============================================================================
# Performance Configuration
# ============================================================================

# Tick timing window for rolling average
TICK_TIME_WINDOW = 100  # Number of ticks to average

# Default tick summary interval (print every N ticks)
TICK_SUMMARY_INTERVAL = 100
