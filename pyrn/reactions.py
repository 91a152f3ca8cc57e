"""
Expansion of reaction statements into individual reactions.

A statement pairs a rate with an arrow expression, e.g. ``(k, X + Y → XY)``.
The arrow glyph decides the direction and the kinetics:

* forward arrows (``→``, ``-->``, ``⇒``, ...) consume the left side and
  produce the right side;
* backward arrows (``←``, ``⇐``, ...) consume the right side and produce the
  left side;
* bidirectional arrows (``↔``, ``⇔``, ...) need a pair of rates and give a
  forward and a backward reaction.

The non-filled arrows ``⇒ ⟾ ⇐ ⟽ ⇔ ⟺`` switch off mass-action kinetics: the
rate is then the complete reaction rate.

One statement can also declare several parallel reactions using tuples for
the substrates, products and/or rate::

    2.0, (X, Y) → 0             # X → ∅ and Y → ∅, both at rate 2.0
    (2.0, 1.0), (X, Y) → 0      # X → ∅ at rate 2.0, Y → ∅ at rate 1.0
    2.0, (X1, Y1) → (X2, Y2)    # X1 → X2 and Y1 → Y2 at rate 2.0

Each of the three slots either holds one value, which is reused for every
reaction, or a tuple with one element per reaction.
"""

import itertools
from pyrn.core import ReactionStruct, MalformedReaction
from pyrn.expr import Compound, is_tuple, as_node
from pyrn.terms import reactant_list
from pyrn.logging import get_logger

__all__ = ['expand', 'classify_arrow', 'FORWARD_ARROWS', 'BACKWARD_ARROWS',
           'DOUBLE_ARROWS', 'PURE_RATE_ARROWS', 'FORWARD', 'BACKWARD',
           'BIDIRECTIONAL']

_logger = get_logger(__name__)

FORWARD = 'forward'
BACKWARD = 'backward'
BIDIRECTIONAL = 'bidirectional'

# Canonical replacements for multi-character arrows
ARROW_ALIASES = {'-->': '→'}

FORWARD_ARROWS = frozenset(['>', '→', '↣', '↦', '⇾', '⟶', '⟼', '⥟', '⇀',
                            '⇁', '⇒', '⟾'])
BACKWARD_ARROWS = frozenset(['<', '←', '↢', '↤', '⇽', '⟵', '⟻', '⥚', '⥞',
                             '↼', '↽', '⇐', '⟽'])
DOUBLE_ARROWS = frozenset(['↔', '⟷', '⇄', '⇆', '⇔', '⟺'])
PURE_RATE_ARROWS = frozenset(['⇐', '⟽', '⇒', '⟾', '⇔', '⟺'])


def classify_arrow(glyph):
    """
    Return the direction and kinetics of an arrow glyph.

    Parameters
    ----------
    glyph : str
        The arrow, e.g. ``'→'`` or ``'-->'``.

    Returns
    -------
    tuple of (str, bool)
        One of ``FORWARD``, ``BACKWARD`` or ``BIDIRECTIONAL``, and whether
        mass-action kinetics apply.

    Raises
    ------
    MalformedReaction
        If the glyph is not a known arrow.
    """
    glyph = ARROW_ALIASES.get(glyph, glyph)
    if glyph in DOUBLE_ARROWS:
        direction = BIDIRECTIONAL
    elif glyph in FORWARD_ARROWS:
        direction = FORWARD
    elif glyph in BACKWARD_ARROWS:
        direction = BACKWARD
    else:
        raise MalformedReaction('Malformed reaction: unrecognized arrow '
                                '"%s"' % glyph)
    return direction, glyph not in PURE_RATE_ARROWS


def _tuple_length(node):
    return len(node.args) if is_tuple(node) else 1


def _tuple_item(node, index):
    if not is_tuple(node):
        return node
    if len(node.args) == 1:
        return node.args[0]
    return node.args[index]


def _expand_sides(substrates, products, rate, mass_action):
    lengths = [_tuple_length(substrates), _tuple_length(products),
               _tuple_length(rate)]
    if 0 in lengths:
        raise MalformedReaction(
            'Malformed reaction: empty tuple among %d substrate, %d product '
            'and %d rate entries' % tuple(lengths))
    n = max(lengths)
    if lengths.count(1) + lengths.count(n) < 3:
        raise MalformedReaction(
            'Malformed reaction: cannot match %d substrate, %d product and '
            '%d rate entries' % tuple(lengths))
    reactions = []
    for i in range(n):
        reactions.append(ReactionStruct(
            reactant_list(_tuple_item(substrates, i)),
            reactant_list(_tuple_item(products, i)),
            _tuple_item(rate, i),
            mass_action))
    return reactions


def expand(rate_spec, arrow_node):
    """
    Expand one reaction statement into reactions.

    Parameters
    ----------
    rate_spec : pyrn.expr.Node
        The rate, or a tuple of rates (a pair for bidirectional arrows).
    arrow_node : pyrn.expr.Node
        The arrow expression ``Compound(glyph, left, right)``.

    Returns
    -------
    list of ReactionStruct

    Raises
    ------
    MalformedReaction
        For unknown arrows, a bidirectional arrow without a pair of rates,
        tuples of incompatible lengths, invalid reaction sides, or a
        reaction with neither substrates nor products.
    """
    rate_spec = as_node(rate_spec)
    arrow_node = as_node(arrow_node)
    if not isinstance(arrow_node, Compound) or len(arrow_node.args) != 2:
        raise MalformedReaction('Malformed reaction: unrecognized arrow in '
                                '"%s"' % arrow_node)
    direction, mass_action = classify_arrow(arrow_node.head)
    left, right = arrow_node.args

    if direction == BIDIRECTIONAL:
        if not is_tuple(rate_spec) or len(rate_spec.args) != 2:
            raise MalformedReaction(
                'Malformed reaction: must provide a tuple of rates for a '
                'bidirectional reaction, got "%s"' % rate_spec)
        forward_rate, backward_rate = rate_spec.args
        reactions = list(itertools.chain(
            _expand_sides(left, right, forward_rate, mass_action),
            _expand_sides(right, left, backward_rate, mass_action)))
    elif direction == FORWARD:
        reactions = _expand_sides(left, right, rate_spec, mass_action)
    else:
        reactions = _expand_sides(right, left, rate_spec, mass_action)

    _logger.debug('Expanded "%s" into %d reaction(s)', arrow_node,
                  len(reactions))
    return reactions
