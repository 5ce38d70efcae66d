"""
Maps normalized note positions onto the fixed zones of the board
"""

from typing import Dict, Tuple

DEFAULT_SECTION = 'puzzling'

# (x, y, width, height) per section, normalized to the board size.
# Scanned in declaration order; the first rectangle containing the
# point wins.
SECTION_BOUNDS: Dict[str, Tuple[float, float, float, float]] = {
    'keep': (0.25, 0.0, 0.5, 0.3),
    'stop': (0.0, 0.3, 0.3, 0.4),
    'start': (0.7, 0.3, 0.3, 0.4),
    'less': (0.0, 0.7, 0.35, 0.3),
    'more': (0.65, 0.7, 0.35, 0.3),
    'puzzling': (0.4, 0.4, 0.2, 0.2),
}


def section_at(center_x, center_y, bounds=SECTION_BOUNDS, default=DEFAULT_SECTION):
    """Return the section whose rectangle contains the point (edges inclusive)"""
    for section, (x, y, width, height) in bounds.items():
        if x <= center_x <= x + width and y <= center_y <= y + height:
            return section
    return default


def locate_section(x, y, width, height, bounds=SECTION_BOUNDS, default=DEFAULT_SECTION):
    """Resolve the section for a normalized box by its center point"""
    return section_at(x + width / 2, y + height / 2, bounds, default)
