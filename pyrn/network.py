"""
Compile a block of reaction statements into a network.

Typical usage::

    from pyrn.expr import symbols, block, tup
    from pyrn.network import reaction_network

    X, Y, XY, kB, kD = symbols('X Y XY kB kD')
    rn = reaction_network(block(
        ((kB, kD), X + Y | XY),
        (2.0, tup(X, Y) >> 0),
    ), ['kB', 'kD'])

:func:`extract` produces the :class:`pyrn.core.Network`;
:func:`reaction_network` also emits the reaction system IR.
"""

from pyrn.core import Network, MalformedReaction, ReservedIdentifier, \
    TIME_SYMBOL
from pyrn.expr import Atom, Compound, BLOCK, is_tuple, as_node
from pyrn.reactions import expand
from pyrn.logging import get_logger

__all__ = ['extract', 'reaction_network', 'get_species']


def _statements(statements):
    if isinstance(statements, Compound) and statements.head == BLOCK:
        return statements.args
    if isinstance(statements, (Atom, Compound)):
        return (statements, )
    return tuple(as_node(s) for s in statements)


def _identifier(name, kind):
    if isinstance(name, Atom):
        if not name.is_identifier:
            raise ValueError('%s name must be an identifier, got %r' %
                             (kind.capitalize(), name.value))
        return name.value
    if not isinstance(name, str):
        raise TypeError('%s name must be a string or Atom, got %r' %
                        (kind.capitalize(), name))
    return name


def get_species(reactions):
    """
    Return the species of a list of reactions in order of first occurrence.

    Each reaction contributes its substrates, then its products.
    """
    species = []
    seen = set()
    for reaction in reactions:
        for name in reaction.species:
            if name not in seen:
                seen.add(name)
                species.append(name)
    return species


def extract(statements, parameters=(), name=None):
    """
    Compile reaction statements into a :class:`pyrn.core.Network`.

    Parameters
    ----------
    statements : pyrn.expr.Node or iterable
        A ``block`` node, or an iterable of statements. Each statement is a
        ``(rate, arrow expression)`` tuple; anything else is skipped.
    parameters : iterable of str or Atom
        Names of the network parameters, in order.
    name : str, optional
        Name of the network.

    Returns
    -------
    pyrn.core.Network

    Raises
    ------
    MalformedReaction
        If any statement is malformed. No partial network is returned.
    ReservedIdentifier
        If the time variable name is used as a species or parameter.
    """
    logger = get_logger(__name__, network=name or '_anonymous_')
    parameters = [_identifier(p, 'parameter') for p in parameters]
    reactions = []
    for line in _statements(statements):
        if not is_tuple(line) or len(line.args) != 2:
            logger.debug('Skipping statement "%s"', line)
            continue
        rate, reaction = line.args
        try:
            reactions.extend(expand(rate, reaction))
        except MalformedReaction as e:
            raise MalformedReaction('%s in statement "%s"' %
                                    (e, line)) from e

    species = get_species(reactions)
    if TIME_SYMBOL in species:
        raise ReservedIdentifier(TIME_SYMBOL, 'species')
    if TIME_SYMBOL in parameters:
        raise ReservedIdentifier(TIME_SYMBOL, 'parameter')

    logger.debug('Extracted %d reactions, %d species', len(reactions),
                 len(species))
    return Network(species, parameters, reactions, name=name)


def reaction_network(statements, parameters=(), name=None):
    """
    Compile reaction statements straight to the reaction system IR.

    Takes the same arguments as :func:`extract`, and returns a
    :class:`pyrn.export.ir.ReactionSystem`.
    """
    # Imported here to avoid circular imports at module loading
    from pyrn.export.ir import emit
    return emit(extract(statements, parameters, name=name))
