import pytest

from catan_boards.keyspace import KeySpace, info_pattern, slug_from_info_key


def test_board_keys_layout():
    ks = KeySpace.for_board('river-traders')
    assert ks.info() == 'board:river-traders:info'
    assert ks.game('171-abc') == 'board:river-traders:game:171-abc'
    assert ks.player('Alice') == 'board:river-traders:player:Alice'
    assert ks.profile('Alice') == 'board:river-traders:profile:Alice'
    assert ks.pattern('player') == 'board:river-traders:player:*'
    assert ks.namespace_pattern() == 'board:river-traders:*'


def test_kinds_never_collide_for_same_name():
    ks = KeySpace.for_board('b1')
    keys = {ks.game('x'), ks.player('x'), ks.profile('x'), ks.info()}
    assert len(keys) == 4


def test_board_prefixes_are_disjoint():
    # "a" must not enumerate "a-b"
    a = KeySpace.for_board('a')
    ab = KeySpace.for_board('a-b')
    assert not ab.player('Zed').startswith(a.namespace_pattern()[:-1])


def test_legacy_namespace_is_ungrouped():
    legacy = KeySpace.legacy()
    assert legacy.player('Alice') == 'player:Alice'
    assert legacy.game('game-1') == 'game:game-1'
    assert legacy.pattern('profile') == 'profile:*'
    assert not legacy.player('board').startswith('board:')
    with pytest.raises(ValueError):
        legacy.info()
    with pytest.raises(ValueError):
        legacy.namespace_pattern()


def test_entity_id_strips_prefix_and_keeps_colons():
    ks = KeySpace.for_board('b1')
    assert ks.entity_id('player', ks.player('Mr: Sheep')) == 'Mr: Sheep'
    with pytest.raises(ValueError):
        ks.entity_id('player', 'board:b2:player:Alice')


def test_invalid_slug_and_kind_rejected():
    with pytest.raises(ValueError):
        KeySpace.for_board('Bad Slug')
    with pytest.raises(ValueError):
        KeySpace.for_board('abc\n')
    with pytest.raises(ValueError):
        KeySpace.for_board('b1').entity('city', 'x')


def test_slug_from_info_key():
    assert info_pattern() == 'board:*:info'
    assert slug_from_info_key('board:river-traders:info') == 'river-traders'
    # A player named "info" matches the glob but is not a board record
    assert slug_from_info_key('board:river-traders:player:info') is None
    assert slug_from_info_key('player:info') is None
    assert slug_from_info_key('board:Bad:info') is None
    assert slug_from_info_key('board:abc\n:info') is None
