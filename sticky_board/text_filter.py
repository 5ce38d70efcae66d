"""
Separates note text from board chrome picked up by OCR
"""

# Zone titles, the application title and button captions rendered on the
# board. Matched as case-sensitive substrings.
CHROME_LABELS = (
    'KEEP',
    'STOP',
    'START',
    'LESS',
    'MORE',
    'Team Retrospective Board',
    'Help',
    'Export',
    'Import',
)


def is_note_text(text, denylist=CHROME_LABELS):
    """True if the recognized text should become a note"""
    if not text or not text.strip():
        return False
    return not any(label in text for label in denylist)


def keep_fragment(fragment, denylist=CHROME_LABELS):
    return is_note_text(fragment.text, denylist)
