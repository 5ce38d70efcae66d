"""
Nearest-palette color classification for sampled note pixels
"""

import numpy as np

# Reference RGB per note color. Order matters: on equal distance the
# earlier entry wins.
COLOR_REFERENCES = {
    'yellow': (255, 215, 0),
    'pink': (255, 153, 204),
    'blue': (102, 179, 255),
    'green': (102, 255, 102),
}

# Drawing colors for overlays, in BGR for OpenCV
OVERLAY_COLORS = {
    'yellow': (0, 215, 255),
    'pink': (204, 153, 255),
    'blue': (255, 179, 102),
    'green': (102, 255, 102),
}


def color_distances(rgb, references=COLOR_REFERENCES):
    """Euclidean distance in RGB space from a sample to every reference"""
    sample = np.asarray(rgb, dtype=np.float64)
    table = np.array(list(references.values()), dtype=np.float64)
    return np.linalg.norm(table - sample, axis=1)


def classify_color(rgb, references=COLOR_REFERENCES):
    """Return the palette label closest to an (r, g, b) sample"""
    labels = list(references.keys())
    distances = color_distances(rgb, references)
    # argmin returns the first minimum, so ties follow palette order
    return labels[int(np.argmin(distances))]
