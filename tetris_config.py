CONFIG = {
    "CELL_SIZE": 30,
    "FPS": 60,
    "KEY_REPEAT_DELAY_MS": 170,
    "KEY_REPEAT_INTERVAL_MS": 50,
    "DROP_BASE_MS": 1000,
    "DROP_STEP_MS": 50,
    "DROP_FLOOR_MS": None,
    "SEED": None,
    "SWIPE_THRESHOLD_PX": 10,
    "DOUBLE_TAP_MS": 300,
    "LOG_LEVEL": "INFO",
}
