"""
Data model shared by the codec and the recovery pipeline
"""

import uuid
from dataclasses import dataclass
from typing import Optional

# Closed sets, in their canonical order
NOTE_COLORS = ('yellow', 'pink', 'blue', 'green')
SECTIONS = ('keep', 'stop', 'start', 'less', 'more', 'puzzling')


def new_note_id() -> str:
    """Generate a collision-free note identifier"""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Note:
    id: str
    text: str
    color: str
    section: str
    x: Optional[float] = None
    y: Optional[float] = None

    def __post_init__(self):
        if self.color not in NOTE_COLORS:
            raise ValueError(f"unknown note color: {self.color!r}")
        if self.section not in SECTIONS:
            raise ValueError(f"unknown section: {self.section!r}")

    def to_dict(self):
        data = {
            'id': self.id,
            'text': self.text,
            'color': self.color,
            'section': self.section,
        }
        # Position hints are optional and only written when present
        if self.x is not None:
            data['x'] = self.x
        if self.y is not None:
            data['y'] = self.y
        return data


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box with corners (x0, y0) and (x1, y1)"""
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self):
        return self.x1 - self.x0

    @property
    def height(self):
        return self.y1 - self.y0

    @property
    def center(self):
        return (self.x0 + self.width / 2, self.y0 + self.height / 2)

    def normalized(self, image_width, image_height):
        """Return (x, y, width, height) relative to the full image size"""
        return (
            self.x0 / image_width,
            self.y0 / image_height,
            self.width / image_width,
            self.height / image_height,
        )


@dataclass(frozen=True)
class RecognizedFragment:
    """One OCR-detected text region in absolute pixel units"""
    text: str
    bbox: BoundingBox
