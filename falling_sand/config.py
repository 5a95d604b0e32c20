# ---------- World settings ----------
W, H = 200, 150            # initial window size in cells. y increases downward
PIXEL_SCALE = 4            # starting camera zoom (screen pixels per cell)
ZOOM_MIN, ZOOM_MAX = 1, 16
PAN_STEP = 8               # screen pixels per arrow-key press
FPS = 60

# ---------- Brush ----------
BRUSH_DEFAULT = 3
BRUSH_MIN = 1

# ---------- Physics ----------
LATERAL_RANGE = 2          # lateral offset is drawn from [-LATERAL_RANGE, LATERAL_RANGE]
DRIFT_CHANCE = 10          # percent chance a lateral candidate also drops one row

# ---------- Display ----------
BACKGROUND = (0, 0, 0)
HUD_COLOR = (80, 140, 255)
