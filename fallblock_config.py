
CONFIG = {
    "FIELD_WIDTH": 10,
    "FIELD_HEIGHT": 20,
    "FRAME_RATE": 60,
    "FIX_BLOCK_FRAME_DELAY": 10,
    "MOVE_KEY_CHECK_FRAME": 3,
    "ROTATION_KEY_CHECK_FRAME": 5,
    "WINDOW_SIZE": (800, 720),
    "SEED": None,
    "BGM_PATH": None,
    "BGM_VOLUME": 0.5,
    "SHOW_GRID": False,
    "SHOW_DEBUG": False,
}
