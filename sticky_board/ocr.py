"""
Raster loading and the Tesseract OCR engine used for board recovery.

Any object with a ``recognize(image, language)`` method returning a list of
RecognizedFragment can stand in for TesseractEngine.
"""

import logging
import os
from typing import List

import cv2
import numpy as np
import pytesseract

from .errors import EngineError
from .models import BoundingBox, RecognizedFragment

logger = logging.getLogger(__name__)


def decode_image(data: bytes):
    """Decode PNG/JPEG bytes into an RGB array"""
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
    if image is None:
        raise EngineError("Could not decode image data")
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def load_image(image_path):
    """Read an image file into an RGB array"""
    if not os.path.exists(image_path):
        raise EngineError(f"Image file '{image_path}' not found")
    image = cv2.imread(str(image_path), cv2.IMREAD_COLOR)
    if image is None:
        raise EngineError(f"Failed to load '{image_path}' as an image")
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


class TesseractEngine:
    """Block-level text recognition with pytesseract"""

    def __init__(self, tesseract_path=None, config='--psm 3 --oem 3'):
        if tesseract_path:
            pytesseract.pytesseract.tesseract_cmd = tesseract_path
        self.config = config

    def recognize(self, image, language='eng') -> List[RecognizedFragment]:
        try:
            data = pytesseract.image_to_data(
                image,
                lang=language,
                config=self.config,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            raise EngineError(f"Tesseract failed: {e}") from e

        return self.blocks_from_data(data)

    @staticmethod
    def blocks_from_data(data) -> List[RecognizedFragment]:
        """Group tesseract word rows into one fragment per text block"""
        blocks = {}
        order = []
        for i in range(len(data['text'])):
            word = str(data['text'][i]).strip()
            conf = float(data['conf'][i])
            # conf is -1 for layout rows that carry no word
            if not word or conf < 0:
                continue

            key = (data['page_num'][i], data['block_num'][i])
            if key not in blocks:
                blocks[key] = {'lines': {}, 'box': None}
                order.append(key)
            block = blocks[key]

            line_key = (data['par_num'][i], data['line_num'][i])
            block['lines'].setdefault(line_key, []).append(word)

            left, top = data['left'][i], data['top'][i]
            right, bottom = left + data['width'][i], top + data['height'][i]
            if block['box'] is None:
                block['box'] = [left, top, right, bottom]
            else:
                box = block['box']
                box[0], box[1] = min(box[0], left), min(box[1], top)
                box[2], box[3] = max(box[2], right), max(box[3], bottom)

        fragments = []
        for key in order:
            block = blocks[key]
            text = '\n'.join(' '.join(words) for words in block['lines'].values())
            fragments.append(RecognizedFragment(text=text, bbox=BoundingBox(*block['box'])))

        logger.debug("Tesseract returned %d text blocks", len(fragments))
        return fragments
