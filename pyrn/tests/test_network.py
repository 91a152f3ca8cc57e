import pytest
from pyrn.core import Network, ReactionStruct, ReactantStruct, \
    MalformedReaction, ReservedIdentifier, ReactionNetworkError
from pyrn.expr import Atom, symbols, block, tup, arrow, statement
from pyrn.network import extract, get_species, reaction_network
from pyrn.export.ir import ReactionSystem

A, B, C, X, Y, XY, k1, k2, kB, kD, t = symbols(
    'A B C X Y XY k1 k2 kB kD t')


def test_species_order():
    network = extract(block(
        (k1, A + B >> C),
        (k2, C >> A),
    ), ['k1', 'k2'])
    assert network.species == ('A', 'B', 'C')
    assert network.parameters == ('k1', 'k2')
    assert len(network.reactions) == 2


def test_species_first_occurrence():
    network = extract(block(
        (k1, arrow('-->', A, B)),
        (k2, arrow('-->', C, A)),
    ))
    assert network.species == ('A', 'B', 'C')


def test_species_order_backward():
    # Substrates of the expanded reaction come first
    network = extract(block((k1, A << B)))
    assert network.species == ('B', 'A')


def test_reactions_in_statement_order():
    network = extract(block(
        ((kB, kD), X + Y | XY),
        (2.0, tup(X, Y) >> 0),
    ), [kB, kD], name='binding')
    assert network.name == 'binding'
    assert network.parameters == ('kB', 'kD')
    assert network.species == ('X', 'Y', 'XY')
    assert [str(r) for r in network.reactions] == [
        'kB, X + Y --> XY',
        'kD, XY --> X + Y',
        '2.0, X --> ∅',
        '2.0, Y --> ∅',
    ]


def test_non_statements_are_skipped():
    network = extract(block(
        X,
        (k1, X >> Y),
        tup(k1, k2, X >> Y),
        statement(k2, Y >> X),
    ))
    assert len(network.reactions) == 2


def test_python_iterable():
    network = extract([(k1, X >> Y), (k2, Y >> X)], ['k1', 'k2'])
    expected = extract(block((k1, X >> Y), (k2, Y >> X)), ['k1', 'k2'])
    assert network == expected


def test_single_statement():
    network = extract(statement(k1, X >> Y))
    assert network.species == ('X', 'Y')


def test_empty_block():
    network = extract(block(), ['k1'])
    assert network.species == ()
    assert network.reactions == ()
    assert network.parameters == ('k1', )


def test_malformed_statement_is_reported():
    with pytest.raises(MalformedReaction) as e:
        extract(block(
            (k1, X >> Y),
            (k1, arrow('=', X, Y)),
        ))
    assert 'unrecognized arrow' in str(e.value)
    assert 'in statement' in str(e.value)
    assert isinstance(e.value, ReactionNetworkError)


def test_reserved_time_species():
    with pytest.raises(ReservedIdentifier) as e:
        extract(block((k1, X >> t)))
    assert 'species' in str(e.value)
    with pytest.raises(ReservedIdentifier):
        extract(block((k1, t + X >> Y)))


def test_reserved_time_parameter():
    with pytest.raises(ReservedIdentifier) as e:
        extract(block((k1, X >> Y)), ['k1', 't'])
    assert 'parameter' in str(e.value)


def test_time_allowed_in_rate():
    network = extract(block((k1 * t, X >> Y)), ['k1'])
    assert network.reactions[0].rate == k1 * t


def test_invalid_parameter_names():
    with pytest.raises(ValueError):
        extract(block(), [Atom(2)])
    with pytest.raises(TypeError):
        extract(block(), [2])


def test_get_species():
    reactions = [ReactionStruct([ReactantStruct('B', 1)],
                                [ReactantStruct('A', 1)], k1),
                 ReactionStruct([ReactantStruct('A', 1)],
                                [ReactantStruct('C', 2)], k1)]
    assert get_species(reactions) == ['B', 'A', 'C']


def test_get_species_index():
    network = extract(block((k1, A + B >> C)))
    assert network.get_species_index('B') == 1
    assert network.get_species_index(C) == 2
    with pytest.raises(KeyError):
        network.get_species_index('D')


def test_network_is_immutable_data():
    network = extract(block((k1, X >> Y)), ['k1'])
    assert isinstance(network.species, tuple)
    assert isinstance(network.reactions, tuple)
    with pytest.raises(TypeError):
        hash(network)


def test_network_repr():
    network = Network(['X'], [], [], name='test')
    assert repr(network).startswith(
        "<Network 'test' (species: 1, parameters: 0, reactions: 0)")


def test_reaction_network():
    system = reaction_network(block(
        ((kB, kD), X + Y | XY),
    ), ['kB', 'kD'], name='binding')
    assert isinstance(system, ReactionSystem)
    assert system.name == 'binding'
    assert system.species_names == ['X', 'Y', 'XY']


def test_empty_tuple_statement():
    with pytest.raises(MalformedReaction) as e:
        extract(block((k1, X >> Y), (k1, tup() >> X)))
    assert 'empty tuple' in str(e.value)
    assert 'in statement' in str(e.value)
