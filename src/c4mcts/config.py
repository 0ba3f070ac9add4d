# src/c4mcts/config.py

from __future__ import annotations

# Board geometry (one 64-bit word per player)
COLUMNS = 8
RANKS = 8
CONNECT_N = 4

# Engine identity, reported on the c4i handshake
ENGINE_NAME = "c4mcts"
ENGINE_VERSION = "0.1.0"
ENGINE_AUTHOR = "c4mcts developers"

# Search defaults
EXPLORATION_C = 2.0
CHECK_INTERVAL = 1024  # rounds between time / stop checks
SEARCH_BUSY_WAIT_SEC = 0.5  # bounded wait when a search is already running

# Arena defaults
ARENA_GAMES = 10
ARENA_TIME_MS = 100
ENGINE_EXIT_WAIT_SEC = 2.0

# Console
USE_COLOR = True
