import sys, os

# Headless SDL so pygame surfaces and the mixer work without a display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Ensure the project root is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tests.helpers import RecordingAudio, ScriptedShapes, make_engine

__all__ = [
    "RecordingAudio",
    "ScriptedShapes",
    "make_engine",
]
