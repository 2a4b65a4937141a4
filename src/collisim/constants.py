"""
Run Defaults for the Colliding-Particle Simulation

All lengths are in enclosure units; durations in seconds.
"""

# ==================== ENCLOSURE ====================

ENCLOSURE_SIZE = 10.0  # Side length of the square enclosure
COLLISION_THRESHOLD = 0.1  # Pair distance at or below which a collision is counted

# ==================== POPULATION ====================

NUM_PARTICLES = 100

# ==================== PARALLELISM ====================

NUM_WORKERS = 4  # Worker threads in the pool (also the default chunk length)

# ==================== RUN CONTROL ====================

RUN_DURATION = 10.0  # Wall-clock run length [s]

# ==================== RANDOM WALK ====================

# Each axis step is drawn from (-STEP_HALF_WIDTH, +STEP_HALF_WIDTH)
STEP_HALF_WIDTH = 1.0

# ==================== LOGGING ====================

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 5
