import pytest
from pyrn.core import ReactionStruct, ReactantStruct, MalformedReaction
from pyrn.expr import Atom, symbols, tup, arrow, call
from pyrn.reactions import expand, classify_arrow, FORWARD, BACKWARD, \
    BIDIRECTIONAL, FORWARD_ARROWS, BACKWARD_ARROWS, DOUBLE_ARROWS, \
    PURE_RATE_ARROWS

X, Y, XY, X1, Y1, X2, Y2, k, k1, k2 = symbols(
    'X Y XY X1 Y1 X2 Y2 k k1 k2')


def _r(species, n=1):
    return ReactantStruct(species, n)


def test_classify_arrow():
    assert classify_arrow('→') == (FORWARD, True)
    assert classify_arrow('-->') == (FORWARD, True)
    assert classify_arrow('>') == (FORWARD, True)
    assert classify_arrow('←') == (BACKWARD, True)
    assert classify_arrow('↔') == (BIDIRECTIONAL, True)
    assert classify_arrow('⇒') == (FORWARD, False)
    assert classify_arrow('⟽') == (BACKWARD, False)
    assert classify_arrow('⟺') == (BIDIRECTIONAL, False)
    with pytest.raises(MalformedReaction):
        classify_arrow('=')


def test_arrow_sets():
    assert PURE_RATE_ARROWS <= FORWARD_ARROWS | BACKWARD_ARROWS | \
        DOUBLE_ARROWS
    assert not FORWARD_ARROWS & BACKWARD_ARROWS
    assert not DOUBLE_ARROWS & (FORWARD_ARROWS | BACKWARD_ARROWS)


def test_forward():
    reactions = expand(k, X + Y >> XY)
    assert reactions == [ReactionStruct([_r('X'), _r('Y')], [_r('XY')], k)]
    assert reactions[0].mass_action
    assert expand(k, arrow('-->', X + Y, XY)) == reactions


def test_pure_rate_arrow():
    reactions = expand(k, arrow('⇒', 2 * X, Y))
    assert len(reactions) == 1
    assert reactions[0].only_use_rate
    assert reactions[0].substrates == (_r('X', 2), )


def test_backward_swaps_sides():
    reactions = expand(k, X << Y + Y)
    assert reactions == [ReactionStruct([_r('Y', 2)], [_r('X')], k)]
    assert expand(k, arrow('⇐', X, Y))[0] == \
        ReactionStruct([_r('Y')], [_r('X')], k, mass_action=False)


def test_bidirectional():
    reactions = expand(tup(k1, k2), X + Y | XY)
    assert reactions == [
        ReactionStruct([_r('X'), _r('Y')], [_r('XY')], k1),
        ReactionStruct([_r('XY')], [_r('X'), _r('Y')], k2),
    ]
    # Python tuples are accepted for the rate pair
    assert expand((k1, k2), X + Y | XY) == reactions


def test_bidirectional_pure_rate():
    reactions = expand(tup(k1, k2), arrow('⇔', X, Y))
    assert [r.mass_action for r in reactions] == [False, False]


@pytest.mark.parametrize('rate', [k, tup(k1, k2, k), tup(k1)])
def test_bidirectional_needs_rate_pair(rate):
    with pytest.raises(MalformedReaction) as e:
        expand(rate, X | Y)
    assert 'tuple of rates' in str(e.value)


def test_unknown_arrow():
    with pytest.raises(MalformedReaction) as e:
        expand(k, arrow('=', X, Y))
    assert 'unrecognized arrow' in str(e.value)
    with pytest.raises(MalformedReaction):
        expand(k, X + Y)
    with pytest.raises(MalformedReaction):
        expand(k, X)


def test_broadcast_species():
    reactions = expand(2.0, tup(X, Y) >> 0)
    assert reactions == [ReactionStruct([_r('X')], [], 2.0),
                         ReactionStruct([_r('Y')], [], 2.0)]


def test_broadcast_rates():
    reactions = expand(tup(2.0, 1.0), tup(X, Y) >> 0)
    assert reactions == [ReactionStruct([_r('X')], [], 2.0),
                         ReactionStruct([_r('Y')], [], 1.0)]


def test_broadcast_pairs():
    reactions = expand(2.0, tup(X1, Y1) >> tup(X2, Y2))
    assert reactions == [ReactionStruct([_r('X1')], [_r('X2')], 2.0),
                         ReactionStruct([_r('Y1')], [_r('Y2')], 2.0)]


def test_broadcast_bidirectional():
    reactions = expand(tup(k1, k2), tup(X, Y) | 0)
    assert [str(r) for r in reactions] == [
        'k1, X --> ∅', 'k1, Y --> ∅', 'k2, ∅ --> X', 'k2, ∅ --> Y']


def test_single_element_tuples_are_reused():
    assert expand(tup(k), tup(X) >> Y) == expand(k, X >> Y)


def test_broadcast_length_mismatch():
    with pytest.raises(MalformedReaction) as e:
        expand(tup(k1, k2, k), tup(X, Y) >> 0)
    assert 'cannot match' in str(e.value)
    with pytest.raises(MalformedReaction):
        expand(k, tup(X, Y) >> tup(X1, X2, Y2))


def test_empty_reaction():
    with pytest.raises(MalformedReaction):
        expand(k, Atom(0) >> 0)
    with pytest.raises(MalformedReaction):
        expand(k, arrow('→', '∅', '∅'))


def test_creation_and_decay():
    assert expand(k, 0 >> X) == [ReactionStruct([], [_r('X')], k)]
    assert expand(k, arrow('→', X, '∅')) == [ReactionStruct([_r('X')], [], k)]


def test_rate_is_kept_as_written():
    rate = call('hill', X, k1, k2, 2)
    assert expand(rate, X >> Y)[0].rate == rate


def test_malformed_side():
    with pytest.raises(MalformedReaction):
        expand(k, k * X >> Y)


@pytest.mark.parametrize('glyph', sorted(FORWARD_ARROWS | BACKWARD_ARROWS |
                                         DOUBLE_ARROWS))
def test_arrow_kinetics(glyph):
    rate = tup(k1, k2) if glyph in DOUBLE_ARROWS else k
    reactions = expand(rate, arrow(glyph, X, Y))
    mass_action = glyph not in PURE_RATE_ARROWS
    assert [r.mass_action for r in reactions] == \
        [mass_action] * len(reactions)


@pytest.mark.parametrize('rate, node', [
    (k, tup() >> X),
    (k, X >> tup()),
    (tup(), X >> Y),
    (tup(), tup() >> tup()),
    (tup(k1, k2), tup() | X),
])
def test_empty_tuples(rate, node):
    with pytest.raises(MalformedReaction) as e:
        expand(rate, node)
    assert 'empty tuple' in str(e.value)
