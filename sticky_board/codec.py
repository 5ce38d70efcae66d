"""
Portable JSON document for exporting and importing a board's notes.

Export keeps identifiers as they are. Import always replaces them so the
same document can be loaded into any board, any number of times, without
colliding with notes already there.
"""

import json
import logging
import math
import os
from datetime import datetime, timezone

from .errors import FormatError, VersionError
from .models import NOTE_COLORS, SECTIONS, Note, new_note_id

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = '1.0'
SUPPORTED_VERSIONS = (DOCUMENT_VERSION,)


def _iso_timestamp(moment=None):
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def export_document(notes, now=None):
    """Build the portable document dict for a sequence of notes"""
    return {
        'version': DOCUMENT_VERSION,
        'exportDate': _iso_timestamp(now),
        'notes': [note.to_dict() for note in notes],
    }


def dumps_document(notes, now=None):
    """Serialize notes to portable document text"""
    # allow_nan=False keeps Infinity/NaN tokens out of the output
    return json.dumps(export_document(notes, now), indent=2, ensure_ascii=False, allow_nan=False)


def _parse_note(raw, index, id_factory):
    if not isinstance(raw, dict):
        raise FormatError(f"note {index} is not an object")

    text = raw.get('text')
    if not isinstance(text, str):
        raise FormatError(f"note {index} has no text")
    color = raw.get('color')
    if color not in NOTE_COLORS:
        raise FormatError(f"note {index} has unknown color {color!r}")
    section = raw.get('section')
    if section not in SECTIONS:
        raise FormatError(f"note {index} has unknown section {section!r}")

    hints = {}
    for key in ('x', 'y'):
        value = raw.get(key)
        if value is None:
            continue
        # bool is an int subclass but never a position
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise FormatError(f"note {index} has non-numeric {key}: {value!r}")
        if isinstance(value, float) and not math.isfinite(value):
            raise FormatError(f"note {index} has non-finite {key}: {value!r}")
        hints[key] = value

    return Note(id=id_factory(), text=text, color=color, section=section, **hints)


def loads_document(data, id_factory=new_note_id):
    """
    Parse portable document text or bytes into notes with fresh identifiers.

    Raises FormatError when the input is not a well-formed document and
    VersionError when its version is missing or unsupported. Nothing is
    returned unless every note parses.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise FormatError(f"document is not UTF-8 text: {e}") from e

    try:
        document = json.loads(data)
    except (json.JSONDecodeError, RecursionError) as e:
        raise FormatError(f"Invalid retrospective file format: {e}") from e

    if not isinstance(document, dict):
        raise FormatError("Invalid retrospective file format: expected an object")

    version = document.get('version')
    if version not in SUPPORTED_VERSIONS:
        raise VersionError(version)

    raw_notes = document.get('notes')
    if not isinstance(raw_notes, list):
        raise FormatError("Invalid retrospective file format: 'notes' must be a list")

    notes = [_parse_note(raw, i, id_factory) for i, raw in enumerate(raw_notes)]
    logger.debug("Parsed %d notes from version %s document", len(notes), version)
    return notes


def export_filename(board_name=None, today=None):
    """File name for a saved export, e.g. 'Sprint 12-2024-05-01.json'"""
    today = today or datetime.now().date()
    return f"{board_name or 'retrospective'}-{today.isoformat()}.json"


def save_document(notes, path, now=None):
    """Write notes to path as a portable document and return the path"""
    notes = list(notes)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(dumps_document(notes, now))
    logger.info("Exported %d notes to %s", len(notes), path)
    return path


def load_document(path, id_factory=new_note_id):
    """Open a saved portable document; only .json files are accepted"""
    if os.path.splitext(str(path))[1].lower() != '.json':
        raise FormatError(f"Please select a .json file exported from this application: {path}")
    with open(path, 'rb') as f:
        return loads_document(f.read(), id_factory)
