PROG_NAME = "Py3D Demo"
EXEC_NAME = "py3d-demo"
VMAJOR = 0
VMINOR = 5
LOG_PREFIX = "DEMO"

WIDTH = 1000
HEIGHT = 600
FULLSCREEN = False
TARGET_FPS = 60
VSYNC = False

DATA_DIR_NAME = "data"
LOGO_IMAGE = "images/logo_32.png"

# Scene defaults restored on every demo switch
BACKGROUND_COLOR = (0.6, 0.6, 0.6, 1.0)
AMBIENT_COLOR = (1.0, 1.0, 1.0)
AMBIENT_INTENSITY = 0.5
PERSP_POSITION = (0.0, 0.0, 5.0)
ORTHO_POSITION = (0.0, 0.0, 3.0)
ORTHO_ZOOM = 1.0
FOV = 65
NEAR = 0.01
FAR = 1000.0

# FPS display refresh in milliseconds (-updatefps)
UPDATE_FPS_MS = 1000
# Statistics sampling interval in seconds
STATS_INTERVAL = 1.0

# GUI
HEADER_HEIGHT = 40
HEADER_FONT_SIZE = 20
TREE_WIDTH = 175
HEADER_COLOR = (13.0 / 256.0, 41.0 / 256.0, 62.0 / 256.0, 1.0)
LIGHT_TEXT_COLOR = (0.8, 0.8, 0.8, 1.0)

# Orbit control
ORBIT_ROTATE_SPEED = 0.005
ORBIT_ZOOM_SPEED = 0.1
ORBIT_MIN_DISTANCE = 0.01
ORBIT_MAX_DISTANCE = 1000.0
