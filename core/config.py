import logging
import os

# --- Canvas Configuration ---

WIDTH = 800
HEIGHT = 600

# --- Graphics Settings ---
WINDOW_TITLE = "Plasma - Perlin Noise"
FPS_CAP = 60
PERFORMANCE_MONITOR = True  # Show FPS / frame time overlay
DEBUG_MODE = False          # Profile the render loop with yappi
LOG_LEVEL = logging.INFO

# --- Scene ---
VARIANT = "plasma"  # horizon (1D), static (2D) or plasma (3D)

# --- Band Rendering ---
BAND_COUNT = 40  # Number of row bands per frame
WORKER_COUNT = os.cpu_count() or 4
PARALLEL_RENDER = True

# --- Animation ---
TIME_DIVISOR = 2000.0  # Milliseconds per lattice cell on the time axis
TIME_MODULUS = 10      # Lattice extent of the 3D time axis
SCROLL_DIVISOR = 10.0  # Milliseconds per scrolled pixel (horizon variant)

# --- Colors ---
COLOR_FPS = (255, 255, 0)
COLOR_BAND_GRID = (80, 80, 80)
