import pytest
from pydantic import ValidationError

from engine.rules_schema import Difficulty, MatchConfig, RevealVariant


def test_defaults():
    config = MatchConfig()
    assert config.variant is RevealVariant.AUTO_REVEAL
    assert config.difficulty is Difficulty.MEDIUM
    assert len(config.player_names) == 4
    assert config.max_decision_attempts == 3
    assert not config.hold_completed_tricks


def test_values_are_coerced_from_strings():
    config = MatchConfig(variant="optional_reveal", difficulty="low", human_seats=[2, 0])
    assert config.variant is RevealVariant.OPTIONAL_REVEAL
    assert config.difficulty is Difficulty.LOW
    assert config.human_seats == [0, 2]
    assert config.is_human(2)
    assert not config.is_human(1)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"player_names": ["a", "b", "c"]},
        {"player_names": ["a", "b", " ", "d"]},
        {"human_seats": [4]},
        {"human_seats": [1, 1]},
        {"starting_dealer": 4},
        {"max_decision_attempts": 0},
        {"variant": "no_trump"},
    ],
)
def test_invalid_configs_rejected(kwargs):
    with pytest.raises(ValidationError):
        MatchConfig(**kwargs)
