import json
from datetime import date, datetime, timezone

import pytest

from sticky_board.codec import (
    dumps_document,
    export_document,
    export_filename,
    load_document,
    loads_document,
    save_document,
)
from sticky_board.errors import FormatError, ImportFailed, VersionError
from sticky_board.models import Note


@pytest.fixture
def notes():
    return [
        Note(id='a', text='Keep pairing', color='yellow', section='keep', x=12.5, y=40),
        Note(id='b', text='Long standups', color='pink', section='stop'),
        Note(id='c', text='Écrire des tests', color='blue', section='start', x=0, y=0),
        Note(id='d', text='', color='green', section='puzzling'),
    ]


def document(**overrides):
    doc = {
        'version': '1.0',
        'exportDate': '2024-05-01T10:00:00.000Z',
        'notes': [{'id': 'x', 'text': 'hello', 'color': 'blue', 'section': 'less'}],
    }
    doc.update(overrides)
    return json.dumps(doc)


def test_export_keeps_ids_and_order(notes):
    doc = export_document(notes, now=datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc))

    assert doc['version'] == '1.0'
    assert doc['exportDate'] == '2024-05-01T10:00:00.000Z'
    assert [n['id'] for n in doc['notes']] == ['a', 'b', 'c', 'd']
    assert doc['notes'][0] == {'id': 'a', 'text': 'Keep pairing', 'color': 'yellow',
                               'section': 'keep', 'x': 12.5, 'y': 40}
    # absent position hints are omitted
    assert 'x' not in doc['notes'][1]


def test_export_date_defaults_to_now():
    stamp = export_document([])['exportDate']
    parsed = datetime.fromisoformat(stamp.replace('Z', '+00:00'))
    assert abs((datetime.now(timezone.utc) - parsed).total_seconds()) < 60


def test_round_trip_regenerates_ids(notes, id_factory):
    imported = loads_document(dumps_document(notes), id_factory=id_factory)

    assert len(imported) == len(notes)
    for original, copy in zip(notes, imported):
        assert (copy.text, copy.color, copy.section, copy.x, copy.y) == \
               (original.text, original.color, original.section, original.x, original.y)

    new_ids = [n.id for n in imported]
    assert len(set(new_ids)) == len(new_ids)
    assert not set(new_ids) & {n.id for n in notes}


def test_round_trip_with_default_ids(notes):
    first = loads_document(dumps_document(notes))
    second = loads_document(dumps_document(notes))
    ids = [n.id for n in first + second]
    assert len(set(ids)) == len(ids)


def test_accepts_bytes(notes):
    imported = loads_document(dumps_document(notes).encode('utf-8'))
    assert imported[2].text == 'Écrire des tests'


def test_unsupported_version():
    with pytest.raises(VersionError) as excinfo:
        loads_document(document(version='2.0'))
    assert excinfo.value.version == '2.0'


def test_missing_version():
    doc = json.loads(document())
    del doc['version']
    with pytest.raises(VersionError):
        loads_document(json.dumps(doc))


@pytest.mark.parametrize("data", [
    "{not json",
    b"\xff\xfe\x00garbage",
    "[1, 2, 3]",
    "",
])
def test_malformed_input(data):
    with pytest.raises(FormatError):
        loads_document(data)


@pytest.mark.parametrize("note", [
    {'id': 'x', 'text': 'hi', 'color': 'purple', 'section': 'keep'},
    {'id': 'x', 'text': 'hi', 'color': 'blue', 'section': 'later'},
    {'id': 'x', 'color': 'blue', 'section': 'keep'},
    {'id': 'x', 'text': 'hi', 'color': 'blue', 'section': 'keep', 'x': 'left'},
    {'id': 'x', 'text': 'hi', 'color': 'blue', 'section': 'keep', 'y': True},
    "just a string",
])
def test_invalid_notes_are_rejected(note):
    with pytest.raises(FormatError):
        loads_document(document(notes=[note]))


def test_notes_must_be_a_list():
    with pytest.raises(FormatError):
        loads_document(document(notes={'id': 'x'}))


def test_errors_share_import_failed_base():
    for data in ("nope", document(version='0.9')):
        with pytest.raises(ImportFailed):
            loads_document(data)


def test_failed_import_leaves_existing_notes_alone(notes):
    board = list(notes)
    for bad in ("{", document(version='2.0')):
        try:
            board = loads_document(bad)
        except ImportFailed:
            pass
    assert board == notes


def test_export_filename():
    assert export_filename('Sprint 12', date(2024, 5, 1)) == 'Sprint 12-2024-05-01.json'
    assert export_filename(None, date(2024, 5, 1)) == 'retrospective-2024-05-01.json'


def test_save_and_load_file(notes, tmp_path, id_factory):
    path = tmp_path / 'board.json'
    save_document(notes, path)

    loaded = load_document(path, id_factory=id_factory)

    assert [n.text for n in loaded] == [n.text for n in notes]
    assert loaded[0].id == 'note-1'
    assert json.loads(path.read_text(encoding='utf-8'))['version'] == '1.0'


def test_load_rejects_other_extensions(notes, tmp_path):
    path = tmp_path / 'board.pdf'
    path.write_text(dumps_document(notes), encoding='utf-8')
    with pytest.raises(FormatError):
        load_document(path)


@pytest.mark.parametrize("hints", ['"x": 1e400', '"y": NaN', '"x": -Infinity'])
def test_non_finite_hints_are_rejected(hints):
    raw = '{"version": "1.0", "notes": [{"id": "a", "text": "hi", "color": "blue", ' \
          '"section": "keep", %s}]}' % hints
    with pytest.raises(FormatError):
        loads_document(raw)


def test_export_never_writes_non_json_numbers():
    note = Note(id='a', text='hi', color='blue', section='keep', x=float('inf'))
    with pytest.raises(ValueError):
        dumps_document([note])


def test_deeply_nested_input_is_a_format_error():
    with pytest.raises(FormatError):
        loads_document("[" * 200000)


def test_large_integer_hint_is_kept():
    raw = '{"version": "1.0", "notes": [{"id": "a", "text": "hi", "color": "blue", ' \
          '"section": "keep", "x": 1%s}]}' % ('0' * 400)
    assert loads_document(raw)[0].x == 10 ** 400
