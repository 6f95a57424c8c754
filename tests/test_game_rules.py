import pytest

from catan_boards.exceptions import ValidationError
from catan_boards.ledger import new_game_id, validate_participants
from catan_boards.schemas import Participant


def players(*rows):
    return [Participant(name=name, points=points) for name, points in rows]


def test_valid_game_returns_winner_and_trimmed_players():
    result, winner = validate_participants(players((' Alice ', 10), ('Bob', 7), ('', 3), ('   ', 10)))
    assert winner == 'Alice'
    assert [(p.name, p.points) for p in result] == [('Alice', 10), ('Bob', 7)]


@pytest.mark.parametrize('rows, rule', [
    ([('Alice', 10)], 'min_players'),
    ([('Alice', 10), ('', 5)], 'min_players'),
    ([('Alice', 11), ('Bob', 10)], 'max_points'),
    ([('Alice', 10), ('Bob', -1)], 'min_points'),
    ([('Alice', 9), ('Bob', 7)], 'no_winner'),
    ([('Alice', 10), ('Bob', 10)], 'multiple_winners'),
    ([('Alice', 10), ('Alice', 4)], 'duplicate_player'),
])
def test_rule_violations(rows, rule):
    with pytest.raises(ValidationError) as info:
        validate_participants(players(*rows))
    assert info.value.rule == rule


def test_first_broken_rule_is_reported():
    # Too few players and over the limit: player count comes first
    with pytest.raises(ValidationError) as info:
        validate_participants(players(('Alice', 12)))
    assert info.value.rule == 'min_players'

    # Over the limit and two winners: points range comes first
    with pytest.raises(ValidationError) as info:
        validate_participants(players(('Alice', 10), ('Bob', 10), ('Cara', 11)))
    assert info.value.rule == 'max_points'


def test_messages_describe_the_violation():
    with pytest.raises(ValidationError) as info:
        validate_participants(players(('A', 10), ('B', 10)))
    assert 'only one winner allowed' in info.value.message.lower()

    with pytest.raises(ValidationError) as info:
        validate_participants(players(('A', 9), ('B', 8)))
    assert 'exactly one player must have 10 points' in info.value.message


def test_game_ids_are_unique():
    ids = {new_game_id() for _ in range(200)}
    assert len(ids) == 200
