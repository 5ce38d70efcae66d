"""
Sticky board portability: portable JSON export/import and recovery of
notes from a rendered snapshot of the board.
"""

from .models import Note, BoundingBox, RecognizedFragment, NOTE_COLORS, SECTIONS
from .errors import (
    StickyBoardError,
    ConfigError,
    ImportFailed,
    FormatError,
    VersionError,
    SamplingError,
    EngineError,
)
from .palette import classify_color
from .zones import locate_section
from .text_filter import is_note_text
from .recovery import BoardRecovery, recover_notes
from .codec import export_document, dumps_document, loads_document

__version__ = "0.1.0"
