"""Actor sizing, steering and predation constants."""

# Smallest width/height an actor can have, in pixels
MIN_ACTOR_SIZE = 32

# Noise-driven steering defaults
DEFAULT_NOISE_SPEED = 0.35  # noise phase units per second
DEFAULT_SPEED_SCALE = 100.0  # px/sec at full throttle
DEFAULT_TURN_SPEED = 1.8  # rad/sec at full turn

# Range new noise phases are drawn from
NOISE_PHASE_RANGE = 1000.0

# Predation geometry
MOUTH_RADIUS_FACTOR = 0.12  # fraction of the smaller side
MIN_MOUTH_RADIUS = 8.0

# Growth applied to an actor every time it eats
GROWTH_FACTOR = 1.15
MAX_SCALE = 4.0
