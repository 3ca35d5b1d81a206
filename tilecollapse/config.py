# config.py
import os

# ======= Board =======
ROWS  = int(os.getenv("TC_ROWS", "50"))
COLS  = int(os.getenv("TC_COLS", "50"))
RULES = os.getenv("TC_RULES", "prototypes.json")

# ======= Rendering =======
# Seconds to pause after each drawn frame, and the minimum gap between frames.
RENDER_DELAY    = float(os.getenv("TC_RENDER_DELAY", "0.01"))
RENDER_INTERVAL = float(os.getenv("TC_RENDER_INTERVAL", "0"))

# ======= Search guards =======
# Cap on candidate placements per solve; 0 disables the cap.
NODE_LIMIT = int(os.getenv("TC_NODE_LIMIT", "0"))

# ======= Logging =======
LOG_LEVEL = os.getenv("TC_LOG_LEVEL", "WARNING")


class CFG:
    ROWS  = ROWS
    COLS  = COLS
    RULES = RULES

    RENDER_DELAY    = RENDER_DELAY
    RENDER_INTERVAL = RENDER_INTERVAL

    NODE_LIMIT = NODE_LIMIT

    LOG_LEVEL = LOG_LEVEL


__all__ = ["CFG"]
