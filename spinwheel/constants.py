# Window settings
WINDOW_WIDTH = 1000
WINDOW_HEIGHT = 800
FPS = 60

# Wheel geometry
WHEEL_RADIUS = 300
FULL_TURN = 360

# Section scaling (roster size -> number of wedges)
INDIVIDUAL_SLICE_LIMIT = 6     # One wedge per entry up to here
MEDIUM_ROSTER_LIMIT = 50
LARGE_ROSTER_LIMIT = 500
MEDIUM_MAX_SECTIONS = 6
LARGE_ENTRIES_PER_SECTION = 10
LARGE_MAX_SECTIONS = 12
HUGE_LOG_FACTOR = 3
HUGE_MAX_SECTIONS = 20

# Elimination pacing (fraction of eliminable population removed per spin)
ELIMINATION_RATES = {
    'medium': 0.20,
    'large': 0.15,
    'huge': 0.10,
}

# Spin timing (seconds) and flourish (full turns, both ends inclusive)
REGULAR_SPIN_ROTATIONS = (20, 35)
REGULAR_SPIN_DURATION = (4.0, 6.0)
FINAL_SPIN_ROTATIONS = (25, 35)
FINAL_SPIN_DURATION = (6.0, 8.0)

# Ease-out curve used for the spin animation: cubic-bezier(0.25, 0.46, 0.45, 0.94)
EASE_OUT_BEZIER = (0.25, 0.46, 0.45, 0.94)

# Safety net
RESPIN_COOLDOWN = 0.5
MAX_AUTO_RESPINS = 5

# Removal reasons
REMOVED_BY_SPIN = 'spin'
REMOVED_MANUALLY = 'manual'

# Spin kinds
SPIN_REGULAR = 'regular'
SPIN_FINAL = 'final'

# Banner text
STATUS_INDIVIDUAL = "Individual slices - Each name has its own section!"
STATUS_FINAL_SPIN = "Final spin - Last chance!"
STATUS_PLAYING = "Game in progress - Keep spinning!"
STATUS_REVEALED = "Final winner revealed!"
STATUS_EMPTY = "Add some names to get started"

# Colors
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
UI_BG = (25, 25, 35)
UI_PANEL = (40, 40, 55)
UI_TEXT = (230, 230, 240)
UI_TEXT_DIM = (150, 150, 160)
POINTER = (255, 215, 0)
POINTER_DARK = (180, 140, 30)
RIM = (80, 80, 90)
VICTORY_GOLD = (255, 215, 0)

SECTION_COLORS = [
    (255, 87, 87),    # Red
    (87, 167, 255),   # Blue
    (87, 255, 137),   # Green
    (255, 215, 87),   # Gold
    (215, 87, 255),   # Purple
    (255, 147, 87),   # Orange
    (87, 255, 255),   # Cyan
    (255, 87, 200),   # Pink
    (167, 255, 87),   # Lime
    (255, 167, 167),  # Light red
    (167, 200, 255),  # Light blue
    (200, 167, 255),  # Lavender
]

# Font sizes
FONT_SIZES = {
    'tiny': 16,
    'small': 20,
    'medium': 28,
    'large': 42,
}
