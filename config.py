# config.py
import os

# ======= Piece geometry =======
SHAPE_SIZE = int(os.getenv("KN_SHAPE_SIZE", "4"))

# ======= Search strategy =======
# exhaustive | nearby | cp_sat
STRATEGY      = os.getenv("KN_STRATEGY", "exhaustive").strip().lower()
PRUNE_REGIONS = int(os.getenv("KN_PRUNE_REGIONS", "1")) != 0

# ======= Bounded-radius (approximate) search =======
NEARBY_RADIUS       = int(os.getenv("KN_NEARBY_RADIUS", "2"))
NEARBY_MAX_ATTEMPTS = int(os.getenv("KN_NEARBY_MAX_ATTEMPTS", "100"))

# ======= Random scatter =======
SCATTER_ATTEMPTS   = int(os.getenv("KN_SCATTER_ATTEMPTS", "50"))
SCATTER_MIN_PIECES = int(os.getenv("KN_SCATTER_MIN_PIECES", "2"))
SCATTER_MAX_PIECES = int(os.getenv("KN_SCATTER_MAX_PIECES", "4"))

# ======= CP-SAT =======
CP_SAT_SECONDS = float(os.getenv("KN_CP_SAT_SECONDS", "30"))
WORKERS        = int(os.getenv("KN_WORKERS", "1"))
MAX_MEMORY_MB  = int(os.getenv("KN_MAX_MEMORY_MB", "2048"))
RANDOM_SEED    = int(os.getenv("KN_RANDOM_SEED", "0"))

# ======= Child-process budget =======
# Extra seconds granted beyond the requested budget for process spawn/teardown.
ISOLATE_GRACE_SECONDS = float(os.getenv("KN_ISOLATE_GRACE_SECONDS", "5"))

# ======= External data / logs =======
PIECES_FILE = os.getenv("KN_PIECES_FILE", "")
ATTEMPT_LOG = os.getenv("KN_ATTEMPT_LOG", "")

class CFG:
    SHAPE_SIZE = SHAPE_SIZE

    STRATEGY      = STRATEGY
    PRUNE_REGIONS = PRUNE_REGIONS

    NEARBY_RADIUS       = NEARBY_RADIUS
    NEARBY_MAX_ATTEMPTS = NEARBY_MAX_ATTEMPTS

    SCATTER_ATTEMPTS   = SCATTER_ATTEMPTS
    SCATTER_MIN_PIECES = SCATTER_MIN_PIECES
    SCATTER_MAX_PIECES = SCATTER_MAX_PIECES

    CP_SAT_SECONDS = CP_SAT_SECONDS
    WORKERS        = WORKERS
    MAX_MEMORY_MB  = MAX_MEMORY_MB
    RANDOM_SEED    = RANDOM_SEED

    ISOLATE_GRACE_SECONDS = ISOLATE_GRACE_SECONDS

    PIECES_FILE = PIECES_FILE
    ATTEMPT_LOG = ATTEMPT_LOG

__all__ = ["CFG"]
