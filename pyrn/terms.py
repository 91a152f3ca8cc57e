"""
Stoichiometry of one side of a reaction.

A reaction side such as ``2*(X + Y + 3*(Z + W))`` is walked recursively and
reduced to an ordered mapping from species name to multiplicity, here
``{'X': 2, 'Y': 2, 'Z': 6, 'W': 6}``. Repeated species are summed, so
``X + X + X`` gives ``{'X': 3}``.
"""

import numbers
from pyrn.core import ReactantStruct, MalformedReaction, EMPTY_SET
from pyrn.expr import Atom, Compound, ADD, MUL
from pyrn.logging import get_logger, EXTENDED_DEBUG

__all__ = ['accumulate', 'reactant_list']

_logger = get_logger(__name__)


def _is_empty(atom):
    if atom.is_number:
        return atom.value == 0
    return atom.value in EMPTY_SET


def _coefficient(node):
    """Return an integer stoichiometric coefficient, or raise."""
    if isinstance(node, Atom) and node.is_number:
        value = node.value
        if isinstance(value, numbers.Integral):
            value = int(value)
        elif float(value).is_integer():
            value = int(value)
        else:
            value = None
        if value is not None and value > 0:
            return value
    raise MalformedReaction('Stoichiometric coefficient must be a positive '
                            'integer literal, got "%s"' % node)


def accumulate(node, multiplier, acc):
    """
    Add the species of a reaction side to an accumulator.

    Parameters
    ----------
    node : pyrn.expr.Node
        The reaction side (or part of it).
    multiplier : int
        Multiplicity applied to every species found in ``node``.
    acc : dict
        Insertion-ordered mapping of species name to stoichiometry. Updated
        in place.

    Returns
    -------
    dict
        ``acc``, for convenience.

    Raises
    ------
    MalformedReaction
        If the side contains anything other than species, the empty set,
        sums and products with a positive integer coefficient.
    """
    if isinstance(node, Atom):
        if _is_empty(node):
            return acc
        if node.is_number:
            raise MalformedReaction('Numeric literal "%s" is not a species'
                                    % node)
        acc[node.value] = acc.get(node.value, 0) + multiplier
        _logger.log(EXTENDED_DEBUG, 'Species %s: stoichiometry %d',
                    node.value, acc[node.value])
    elif isinstance(node, Compound) and node.head == MUL and \
            len(node.args) == 2:
        coefficient = _coefficient(node.args[0])
        accumulate(node.args[1], multiplier * coefficient, acc)
    elif isinstance(node, Compound) and node.head == ADD and \
            len(node.args) >= 2:
        for term in node.args:
            accumulate(term, multiplier, acc)
    else:
        raise MalformedReaction('Malformed reaction term "%s"' % node)
    return acc


def reactant_list(node):
    """
    Reduce a reaction side to a tuple of :class:`ReactantStruct`.

    >>> from pyrn.expr import symbols
    >>> X, Y = symbols('X Y')
    >>> [str(r) for r in reactant_list(X + 2*Y + X)]
    ['2*X', '2*Y']
    """
    acc = accumulate(node, 1, {})
    return tuple(ReactantStruct(species, stoich)
                 for species, stoich in acc.items())
