"""
Investment Graph - Settings Module
===================================

Usage:
    from config.settings import settings

    width = settings.VIEWPORT_WIDTH
    if settings.is_production:
        ...
"""

import os
from pathlib import Path
from dotenv import load_dotenv


class Settings:
    def __init__(self):
        self.ENV = os.getenv('GRAPH_ENV', 'development')

        # Try config folder first, then root
        config_dir = Path(__file__).parent
        env_file = config_dir / f'.env.{self.ENV}'
        if not env_file.exists():
            env_file = config_dir.parent / '.env'
        if env_file.exists():
            load_dotenv(env_file)

        # Output
        self.OUTPUT_DIR = os.getenv('OUTPUT_DIR', 'data/graph')

        # Viewport
        self.VIEWPORT_WIDTH = float(os.getenv('VIEWPORT_WIDTH', 1600))
        self.VIEWPORT_HEIGHT = float(os.getenv('VIEWPORT_HEIGHT', 1000))

        # Simulation
        seed = os.getenv('LAYOUT_SEED', '')
        self.LAYOUT_SEED = int(seed) if seed else None
        self.ALPHA_DECAY = float(os.getenv('ALPHA_DECAY', 0.02))
        self.ALPHA_MIN = float(os.getenv('ALPHA_MIN', 0.001))
        self.VELOCITY_DECAY = float(os.getenv('VELOCITY_DECAY', 0.3))
        self.MAX_TICKS = int(os.getenv('MAX_TICKS', 1000))
        self.DRAG_ALPHA_TARGET = float(os.getenv('DRAG_ALPHA_TARGET', 0.3))

        # Forces
        self.CHARGE_STRENGTH = float(os.getenv('CHARGE_STRENGTH', -300))
        self.LINK_DISTANCE = float(os.getenv('LINK_DISTANCE', 150))
        self.LINK_STRENGTH = float(os.getenv('LINK_STRENGTH', 0.3))
        self.COLLISION_PADDING = float(os.getenv('COLLISION_PADDING', 10))
        self.COLLISION_STRENGTH = float(os.getenv('COLLISION_STRENGTH', 0.9))
        self.CLUSTER_STRENGTH = float(os.getenv('CLUSTER_STRENGTH', 0.3))
        self.BOX_PADDING = float(os.getenv('BOX_PADDING', 100))
        self.CENTER_STRENGTH = float(os.getenv('CENTER_STRENGTH', 0.1))

        # Visual
        self.SIZE_MODE = os.getenv('SIZE_MODE', 'magnitude')

        # Logging
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
        self.LOG_FILE = os.getenv('LOG_FILE', '')

    @property
    def is_production(self): return self.ENV == 'production'

    @property
    def is_development(self): return self.ENV == 'development'

    @property
    def is_test(self): return self.ENV == 'test'


settings = Settings()
