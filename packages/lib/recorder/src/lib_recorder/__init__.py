"""lib_recorder package exports for the recording session scenes.

The app registers the start, record and review scenes with a
`SequenceManager` and drives them from its pygame loop.
"""

from .recording import Recording
from .scenes.record import RecordScene
from .scenes.review import ReviewScene
from .scenes.start import StartScene
from .sequence import GlobalState, SceneInterface, SequenceManager

__all__ = [
    "Recording",
    "SequenceManager",
    "SceneInterface",
    "GlobalState",
    "StartScene",
    "RecordScene",
    "ReviewScene",
]
