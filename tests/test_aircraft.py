import pytest

from fleetboard.models.aircraft import (
    FLEET,
    AircraftEntry,
    AircraftRegistry,
    is_valid_tracker_id,
    load_registry_csv,
)


def test_default_registry_preserves_order():
    registry = AircraftRegistry.default()

    assert [(e.tail_number, e.tracker_id) for e in registry.entries()] == list(FLEET)
    assert registry.entries() == AircraftRegistry.default().entries()


def test_entries_are_immutable():
    entry = AircraftEntry('N1', 'abc123')

    with pytest.raises(AttributeError):
        entry.tail_number = 'N2'


def test_duplicate_tail_numbers_rejected():
    with pytest.raises(ValueError):
        AircraftRegistry.from_pairs([('N1', 'abc123'), ('N1', 'abc124')])


def test_from_pairs_lowercases_tracker_id():
    registry = AircraftRegistry.from_pairs([('N1', 'ABC123')])

    assert registry.entries()[0].tracker_id == 'abc123'


@pytest.mark.parametrize('value, expected', [
    ('a835af', True),
    ('A835AF', True),
    ('a835a', False),
    ('a835afx', False),
    ('g835af', False),
    ('', False),
])
def test_is_valid_tracker_id(value, expected):
    assert is_valid_tracker_id(value) is expected


def test_load_registry_csv(tmp_path):
    path = tmp_path / 'fleet.csv'
    path.write_text(
        'tail_number,tracker_id\n'
        'n628ts,A835AF\n'
        ',abc123\n'
        'N999,nothex\n'
        'N272BG,a2ae0a\n'
    )

    registry = load_registry_csv(path)

    assert [(e.tail_number, e.tracker_id) for e in registry] == [
        ('N628TS', 'a835af'),
        ('N272BG', 'a2ae0a'),
    ]


def test_load_registry_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_registry_csv(tmp_path / 'missing.csv')


def test_load_registry_csv_skips_duplicate_tail(tmp_path):
    path = tmp_path / 'fleet.csv'
    path.write_text(
        'tail_number,tracker_id\n'
        'N628TS,a835af\n'
        'N272BG,a2ae0a\n'
        'n628ts,abc123\n'
    )

    registry = load_registry_csv(path)

    assert [(e.tail_number, e.tracker_id) for e in registry] == [
        ('N628TS', 'a835af'),
        ('N272BG', 'a2ae0a'),
    ]
