"""World and timing configuration constants."""

# World rectangle in pixels. Actor positions wrap around this rectangle and
# clients render relative to it.
WORLD_WIDTH = 1920
WORLD_HEIGHT = 1080

# Fixed simulation timestep rate (ticks per second)
TICK_HZ = 30

# Snapshot broadcast rate (snapshots per second), must not exceed TICK_HZ
BROADCAST_HZ = 15

# Upper bound on ticks executed in one driver batch after a host stall
MAX_CATCH_UP_STEPS = 30
