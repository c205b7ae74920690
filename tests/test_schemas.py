import json
from datetime import date, datetime
import pytest
from schema import SchemaError
from training_manager.errors import (ConfigError, InvalidWindow,
                                     MalformedDate, UnknownGroupReference)
from training_manager.schemas import build, load_config, parse_date, Window


def test_build_baseline(config_halves):
    assert list(config_halves.groups) == ['team_a', 'team_b']
    assert config_halves.groups['team_a'] == ('alice@example.com',
                                              'bob@example.com')
    assert config_halves.schedule['team_a'] == (
        Window('team_a', date(2023, 1, 1), date(2023, 6, 30)),
        Window('team_a', date(2023, 7, 1), date(2023, 12, 31)),
    )


def test_build_preserves_declared_order(groups_raw):
    schedule = {
        'team_b': [{
            'from': '2023-05-01',
            'to': '2023-05-31'
        }, {
            'from': '2023-01-01',
            'to': '2023-01-31'
        }],
        'team_a': [{
            'from': '2023-03-01',
            'to': '2023-03-31'
        }]
    }
    config = build(groups_raw, schedule)
    assert list(config.schedule) == ['team_b', 'team_a']
    assert [w.start.month for w in config.windows()] == [5, 1, 3]


def test_build_does_not_mutate_input(groups_raw, schedule_halves_raw):
    before = json.dumps([groups_raw, schedule_halves_raw])
    build(groups_raw, schedule_halves_raw)
    assert json.dumps([groups_raw, schedule_halves_raw]) == before


def test_build_is_read_only(config_halves):
    with pytest.raises(TypeError):
        config_halves.groups['team_c'] = ('eve@example.com', )
    with pytest.raises(TypeError):
        config_halves.schedule['team_b'] = ()
    with pytest.raises(AttributeError):
        config_halves.schedule['team_a'][0].start = date(2020, 1, 1)


def test_build_unknown_group(groups_raw, schedule_halves_raw):
    schedule_halves_raw['team_c'] = [{'from': '2023-01-01', 'to': '2023-01-02'}]
    with pytest.raises(UnknownGroupReference) as ex:
        build(groups_raw, schedule_halves_raw)
    assert ex.value.group == 'team_c'


def test_build_window_start_after_end(groups_raw, schedule_halves_raw):
    schedule_halves_raw['team_a'][0] = {'from': '2023-07-01', 'to': '2023-06-30'}
    with pytest.raises(InvalidWindow):
        build(groups_raw, schedule_halves_raw)


def test_build_single_day_window(groups_raw):
    config = build(groups_raw,
                   {'team_a': [{
                       'from': '2023-02-28',
                       'to': '2023-02-28'
                   }]})
    assert config.schedule['team_a'][0].covers(date(2023, 2, 28))


@pytest.mark.parametrize('value', [
    'invalid_date', '2023-1-01', '2023/01/01', '2023-13-01', '2023-02-30',
    '2023-01-01T10:00:00', ''
])
def test_build_malformed_date(groups_raw, schedule_halves_raw, value):
    schedule_halves_raw['team_a'][1]['from'] = value
    with pytest.raises(MalformedDate):
        build(groups_raw, schedule_halves_raw)


def test_malformed_date_is_invalid_window(groups_raw, schedule_halves_raw):
    schedule_halves_raw['team_a'][0]['to'] = 'June'
    with pytest.raises(InvalidWindow):
        build(groups_raw, schedule_halves_raw)


def test_build_native_dates(groups_raw):
    config = build(
        groups_raw,
        {'team_a': [{
            'from': date(2023, 1, 1),
            'to': date(2023, 1, 31)
        }]})
    assert config.schedule['team_a'][0].end == date(2023, 1, 31)


def test_build_datetime_rejected(groups_raw):
    with pytest.raises(MalformedDate):
        build(groups_raw, {
            'team_a': [{
                'from': datetime(2023, 1, 1, 8),
                'to': date(2023, 1, 31)
            }]
        })


def test_build_group_without_schedule(groups_raw):
    config = build(groups_raw, {})
    assert list(config.groups) == ['team_a', 'team_b']
    assert list(config.windows()) == []


@pytest.mark.parametrize('groups', [
    {'team_a': 'alice@example.com'},
    {'team_a': [1, 2]},
    ['team_a'],
])
def test_build_malformed_groups(groups, schedule_halves_raw):
    with pytest.raises(SchemaError):
        build(groups, schedule_halves_raw)


@pytest.mark.parametrize('window', [
    {'from': '2023-01-01'},
    {'to': '2023-01-01'},
    {'from': 20230101, 'to': '2023-01-02'},
])
def test_build_malformed_window(groups_raw, window):
    with pytest.raises(SchemaError) as ex:
        build(groups_raw, {'team_a': [window]})
    # Shape errors are reported by the schema, not by the semantic checks.
    assert type(ex.value) is SchemaError


def test_config_errors_are_schema_errors(groups_raw, schedule_halves_raw):
    schedule_halves_raw['team_c'] = []
    with pytest.raises(SchemaError) as ex:
        build(groups_raw, schedule_halves_raw)
    assert isinstance(ex.value, ConfigError)
    assert 'team_c' in ex.value.message


def test_parse_date():
    assert parse_date('2024-02-29') == date(2024, 2, 29)
    assert parse_date('9999-12-31') == date(9999, 12, 31)
    assert parse_date('0999-01-01') == date(999, 1, 1)
    with pytest.raises(MalformedDate):
        parse_date('2023-02-29')


def test_window_intersection():
    first = Window('a', date(2023, 1, 1), date(2023, 1, 31))
    assert first.intersection(Window('b', date(2023, 1, 31),
                                     date(2023, 2, 28))) == (date(2023, 1, 31),
                                                             date(2023, 1, 31))
    assert first.intersection(Window('b', date(2023, 2, 1),
                                     date(2023, 2, 28))) is None


def test_load_config_toml(tmp_path, toml_config_text):
    path = tmp_path / 'config.toml'
    path.write_text(toml_config_text)
    config = load_config(path)
    assert len(config.groups) == 2
    assert len(config.schedule['team_a']) == 2
    assert config.schedule['team_b'][0].start == date(2024, 1, 1)


def test_load_config_toml_native_dates(tmp_path):
    path = tmp_path / 'config.toml'
    path.write_text('[groups]\nteam_a = ["alice@example.com"]\n'
                    '[schedule]\n'
                    'team_a = [{ from = 2023-01-01, to = 2023-12-31 }]\n')
    config = load_config(path)
    assert config.schedule['team_a'][0].end == date(2023, 12, 31)


def test_load_config_json(tmp_path, groups_raw, schedule_halves_raw):
    path = tmp_path / 'config.json'
    path.write_text(
        json.dumps({
            'groups': groups_raw,
            'schedule': schedule_halves_raw
        }))
    config = load_config(str(path))
    assert list(config.schedule) == ['team_a']


def test_load_config_missing_section(tmp_path):
    path = tmp_path / 'config.toml'
    path.write_text('[groups]\nteam_a = ["alice@example.com"]\n')
    with pytest.raises(SchemaError):
        load_config(path)


def test_load_config_not_found(tmp_path):
    with pytest.raises(OSError):
        load_config(tmp_path / 'not_found.toml')


def test_build_window_extra_keys_ignored(groups_raw):
    config = build(groups_raw, {
        'team_a': [{
            'from': '2023-01-01',
            'to': '2023-01-31',
            'note': 'January'
        }]
    })
    assert config.schedule['team_a'][0].start == date(2023, 1, 1)


def test_build_window_missing_key_among_valid(groups_raw, schedule_halves_raw):
    schedule_halves_raw['team_a'].append({'from': '2024-01-01'})
    with pytest.raises(SchemaError) as ex:
        build(groups_raw, schedule_halves_raw)
    assert type(ex.value) is SchemaError


def test_build_open_ended_window(groups_raw):
    config = build(groups_raw,
                   {'team_a': [{
                       'from': '2023-01-01',
                       'to': '9999-12-31'
                   }]})
    assert config.schedule['team_a'][0].covers(date(2500, 1, 1))


@pytest.mark.parametrize('value', ['2023-13-01', '2023-00-10', '0000-01-01'])
def test_parse_date_impossible_days(value):
    with pytest.raises(MalformedDate):
        parse_date(value)
