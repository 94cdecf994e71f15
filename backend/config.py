"""
Engine configuration.

Algorithm constants are fixed: they are the contract every parity
implementation reproduces, so they are not read from the environment.

Deployment knobs come from env vars (e.g. in .env):
  CADENCE_RATE_BASIS=keystrokes        # keystrokes | sessions | minutes
  CADENCE_RANGE_TOLERANCE_MS=1000
  LOG_LEVEL=INFO
  CADENCE_CORS_ORIGINS=http://localhost:5173   # comma-separated
"""

import os

# ---------- Algorithm constants ----------

IDLE_THRESHOLD_MS = 30_000
DEEP_FOCUS_MIN_MS = 120_000
MICRO_SESSION_MS = 30_000

NOTIFICATION_LAMBDA = 1.0 / 60.0   # notification sensitivity
SWITCH_MU = 1.0 / 30.0             # task-switch tolerance
TASK_SWITCH_COST_CAP_MS = 10_000

# behavioral_distraction_score weights
W_TASK_SWITCH = 0.35
W_NOTIFICATION = 0.30
W_FRAGMENTATION = 0.20
W_SCROLL_JITTER = 0.15

INTERRUPTION_TYPES = frozenset({"notification", "call", "app_switch"})

# ---------- Deployment settings ----------

RATE_BASES = ("keystrokes", "sessions", "minutes")


def _rate_basis() -> str:
    basis = os.environ.get("CADENCE_RATE_BASIS", "keystrokes").strip().lower()
    if basis not in RATE_BASES:
        raise ValueError(
            f"CADENCE_RATE_BASIS must be one of {RATE_BASES}, got {basis!r}"
        )
    return basis


RATE_BASIS = _rate_basis()
RANGE_TOLERANCE_MS = int(os.environ.get("CADENCE_RANGE_TOLERANCE_MS", "1000"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("CADENCE_CORS_ORIGINS", "http://localhost:5173").split(",")
    if o.strip()
]
