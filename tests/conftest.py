""""Common fixtures for unit tests."""
import pytest
from training_manager.schemas import build


@pytest.fixture
def groups_raw():
    """Two groups with two members each."""
    return {
        'team_a': ['alice@example.com', 'bob@example.com'],
        'team_b': ['charlie@example.com', 'david@example.com']
    }


@pytest.fixture
def schedule_halves_raw():
    """`team_a` on duty for both halves of 2023 (adjacent windows)."""
    return {
        'team_a': [{
            'from': '2023-01-01',
            'to': '2023-06-30'
        }, {
            'from': '2023-07-01',
            'to': '2023-12-31'
        }]
    }


@pytest.fixture
def schedule_overlap_raw(schedule_halves_raw):
    """`team_b` on duty for all of 2023, on top of `team_a`."""
    return {
        **schedule_halves_raw, 'team_b': [{
            'from': '2023-01-01',
            'to': '2023-12-31'
        }]
    }


@pytest.fixture
def config_halves(groups_raw, schedule_halves_raw):
    """A built configuration with no overlapping groups."""
    return build(groups_raw, schedule_halves_raw)


@pytest.fixture
def config_overlap(groups_raw, schedule_overlap_raw):
    """A built configuration where `team_b` overlaps all of `team_a`."""
    return build(groups_raw, schedule_overlap_raw)


@pytest.fixture
def toml_config_text():
    return '''
[groups]
team_a = ["alice@example.com", "bob@example.com"]
team_b = ["charlie@example.com", "david@example.com"]

[schedule]
team_a = [
    { from = "2023-01-01", to = "2023-06-30" },
    { from = "2023-07-01", to = "2023-12-31" },
]
team_b = [
    { from = "2024-01-01", to = "2024-12-31" },
]
'''
