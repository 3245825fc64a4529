"""
Configuration constants for the graph algorithm visualizer.

Everything tunable lives here and can be overridden from the environment.
The secret key is generated per process unless SECRET_KEY is set.
"""

import os
import secrets

# =============================================================================
# Server
# =============================================================================

HOST = os.environ.get("VISUALIZER_HOST", "127.0.0.1")
PORT = int(os.environ.get("VISUALIZER_PORT", "5000"))
DEBUG = os.environ.get("VISUALIZER_DEBUG", "0").lower() in ("1", "true", "yes")

# Signs the session cookie that carries the workspace token
SECRET_KEY = os.environ.get("SECRET_KEY") or secrets.token_hex(32)

# =============================================================================
# Visualizer defaults
# =============================================================================

DEFAULT_ALGORITHM = os.environ.get("DEFAULT_ALGORITHM", "bfs")

# One of engine.SPEED_PRESETS
DEFAULT_SPEED = os.environ.get("DEFAULT_SPEED", "medium")

# Upper bound for "run to the end" so a request can never spin forever
MAX_AUTO_STEPS = int(os.environ.get("MAX_AUTO_STEPS", "10000"))

# Workspaces kept in memory; the least recently used one is dropped first
MAX_WORKSPACES = int(os.environ.get("MAX_WORKSPACES", "500"))

# Canvas the random generator lays nodes out on
CANVAS_WIDTH = 900
CANVAS_HEIGHT = 700

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
