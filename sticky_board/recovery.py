"""
Recovery of structured notes from a rendered board snapshot.

Given the decoded board image and the text fragments an OCR engine found
on it, each fragment is filtered, placed into a section by its position
and colored by the pixel under its center.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from .errors import SamplingError
from .models import Note, RecognizedFragment, new_note_id
from .palette import COLOR_REFERENCES, OVERLAY_COLORS, classify_color
from .text_filter import CHROME_LABELS, keep_fragment
from .zones import DEFAULT_SECTION, SECTION_BOUNDS, locate_section

logger = logging.getLogger(__name__)

DISCARDED = 'discarded'
SAMPLING_FAILED = 'sampling_failed'


class BoardRecovery:
    """Turns OCR fragments over a board image into notes"""

    def __init__(self, image, id_factory=new_note_id, section_bounds=None,
                 color_references=None, denylist=None, default_section=DEFAULT_SECTION,
                 max_workers=1):
        # RGB array of shape (height, width, 3); never written to
        self.image = np.asarray(image)
        if self.image.ndim != 3 or self.image.shape[2] < 3:
            raise ValueError(f"expected an RGB image, got shape {self.image.shape}")
        self.height, self.width = self.image.shape[:2]
        if self.width == 0 or self.height == 0:
            raise ValueError("image has no pixels")

        self.id_factory = id_factory
        self.section_bounds = section_bounds if section_bounds is not None else SECTION_BOUNDS
        self.color_references = color_references if color_references is not None else COLOR_REFERENCES
        self.denylist = denylist if denylist is not None else CHROME_LABELS
        self.default_section = default_section
        self.max_workers = max(1, int(max_workers))

        self.stats = {
            'fragments': 0,
            DISCARDED: 0,
            SAMPLING_FAILED: 0,
            'recovered': 0,
        }

    def sample_color(self, x, y) -> Tuple[int, int, int]:
        """Return the (r, g, b) of the pixel at absolute coordinates (x, y)"""
        px, py = int(np.floor(x)), int(np.floor(y))
        if not (0 <= px < self.width and 0 <= py < self.height):
            raise SamplingError(f"sample point ({x:.1f}, {y:.1f}) outside {self.width}x{self.height} image")
        r, g, b = self.image[py, px, :3]
        return int(r), int(g), int(b)

    def classify_fragment(self, fragment: RecognizedFragment):
        """
        Resolve one fragment without assigning an identifier.

        Returns a (text, color, section) tuple, or DISCARDED / SAMPLING_FAILED
        when the fragment does not become a note.
        """
        if not keep_fragment(fragment, self.denylist):
            logger.debug("Discarded fragment %r", fragment.text)
            return DISCARDED

        bbox = fragment.bbox
        x, y, w, h = bbox.normalized(self.width, self.height)
        section = locate_section(x, y, w, h, self.section_bounds, self.default_section)

        try:
            if bbox.width <= 0 or bbox.height <= 0:
                raise SamplingError(f"degenerate bounding box {bbox}")
            rgb = self.sample_color(*bbox.center)
        except SamplingError as e:
            logger.debug("Skipped fragment %r: %s", fragment.text, e)
            return SAMPLING_FAILED

        color = classify_color(rgb, self.color_references)
        return fragment.text.strip(), color, section

    def resolve_fragment(self, fragment: RecognizedFragment) -> Optional[Note]:
        """Build the note for one fragment, or None if it yields no note"""
        result = self.classify_fragment(fragment)
        if isinstance(result, str):
            return None
        text, color, section = result
        return Note(id=self.id_factory(), text=text, color=color, section=section)

    def recover_with_sources(self, fragments: Sequence[RecognizedFragment]) -> List[Tuple[Note, RecognizedFragment]]:
        """Like recover(), but pair every note with the fragment it came from"""
        fragments = list(fragments)

        if self.max_workers > 1 and len(fragments) > 1:
            # map() yields results in input order regardless of completion order
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                results = list(pool.map(self.classify_fragment, fragments))
        else:
            results = [self.classify_fragment(f) for f in fragments]

        # Identifiers are handed out after reassembly, in emission order
        recovered = []
        for fragment, result in zip(fragments, results):
            if isinstance(result, str):
                self.stats[result] += 1
                continue
            text, color, section = result
            note = Note(id=self.id_factory(), text=text, color=color, section=section)
            recovered.append((note, fragment))

        self.stats['fragments'] += len(fragments)
        self.stats['recovered'] += len(recovered)
        logger.info("Recovered %d notes from %d fragments", len(recovered), len(fragments))
        if self.stats[SAMPLING_FAILED]:
            logger.warning("%d fragments skipped: color sample outside the image",
                           self.stats[SAMPLING_FAILED])
        return recovered

    def recover(self, fragments: Sequence[RecognizedFragment]) -> List[Note]:
        """Recover notes in the order the OCR engine emitted the fragments"""
        return [note for note, _ in self.recover_with_sources(fragments)]

    def create_overlay_image(self, recovered, output_path=None):
        """Draw each recovered note's box in its palette color with its section label"""
        overlay = cv2.cvtColor(np.ascontiguousarray(self.image[:, :, :3]), cv2.COLOR_RGB2BGR)

        for i, (note, fragment) in enumerate(recovered):
            b = fragment.bbox
            top_left = (int(b.x0), int(b.y0))
            bottom_right = (int(b.x1), int(b.y1))
            color = OVERLAY_COLORS.get(note.color, (0, 0, 0))

            cv2.rectangle(overlay, top_left, bottom_right, color, 3)
            cv2.putText(overlay, f"{i + 1} {note.section}", (top_left[0], max(12, top_left[1] - 6)),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.5, color, 1)

        if output_path:
            cv2.imwrite(str(output_path), overlay)
        return overlay


def recover_notes(image, fragments, id_factory=new_note_id, **kwargs) -> List[Note]:
    """Recover notes from an RGB image and its OCR fragments"""
    return BoardRecovery(image, id_factory=id_factory, **kwargs).recover(fragments)
