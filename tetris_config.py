CONFIG = {
    # Board
    "BOARD_WIDTH": 10,
    "BOARD_HEIGHT": 20,

    # Window
    "CELL_SIZE": 30,
    "FPS": 60,

    # Gravity: interval = max(MIN, BASE - (level-1) * STEP)
    "BASE_DROP_MS": 800,
    "MIN_DROP_MS": 50,
    "DROP_STEP_MS": 50,

    # Scoring
    "LINES_PER_LEVEL": 10,
    "LINE_SCORES": (0, 100, 300, 500, 800),
    "COMBO_BONUS": 50,
    "HARD_DROP_PER_CELL": 2,

    # Piece randomizer; None => seeded from OS entropy
    "SEED": None,

    # Audio
    "SOUND_ENABLED": True,
    "PLACEMENT_VOLUME": 0.3,
    "LINE_CLEAR_VOLUME": 0.5,
    "BACKGROUND_VOLUME": 0.2,

    "LOG_LEVEL": "WARNING",
}
