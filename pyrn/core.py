"""
Data model of a compiled reaction network.

The compiler turns a block of reaction statements into a :class:`Network`,
which holds the ordered species list, the declared parameters and one
:class:`ReactionStruct` per (expanded) reaction. Every reaction side is a
tuple of :class:`ReactantStruct` entries, one per distinct species.

The exceptions raised by the compiler are defined at the bottom of this
module.
"""

import collections
from pyrn.expr import Atom, as_node

__all__ = ['ReactantStruct', 'ReactionStruct', 'Network', 'TIME_SYMBOL',
           'EMPTY_SET', 'ReactionNetworkError', 'MalformedReaction',
           'ReservedIdentifier']

# Reserved for the independent (time) variable of generated models.
TIME_SYMBOL = 't'

# Species markers denoting "no species" (creation from / decay to nothing).
# Numeric zero is also accepted.
EMPTY_SET = frozenset(['∅'])


class ReactantStruct(collections.namedtuple('ReactantStruct',
                                            ['species', 'stoichiometry'])):
    """
    One species taking part in one side of a reaction.

    Attributes
    ----------
    species : str
        The species name.
    stoichiometry : int
        Number of copies consumed (substrate) or produced (product) by one
        reaction event. Always positive.
    """
    __slots__ = ()

    def __str__(self):
        if self.stoichiometry == 1:
            return self.species
        return '%d*%s' % (self.stoichiometry, self.species)


class ReactionStruct(object):
    """
    A single reaction.

    Parameters
    ----------
    substrates : sequence of ReactantStruct
        Species consumed by the reaction.
    products : sequence of ReactantStruct
        Species produced by the reaction.
    rate : pyrn.expr.Node
        The rate expression, as written (kinetic-law shorthand is expanded
        when the network is exported).
    mass_action : bool
        If True, consumers multiply the rate by the mass-action term of the
        substrates. If False, the rate is used as the complete reaction rate.
    """

    def __init__(self, substrates, products, rate, mass_action=True):
        self.substrates = tuple(substrates)
        self.products = tuple(products)
        if not self.substrates and not self.products:
            raise MalformedReaction('Reaction has neither substrates nor '
                                    'products')
        self.rate = as_node(rate)
        self.mass_action = bool(mass_action)

    @property
    def only_use_rate(self):
        return not self.mass_action

    @property
    def species(self):
        """Species names of this reaction, substrates before products."""
        return [r.species for r in self.substrates + self.products]

    def __eq__(self, other):
        return isinstance(other, ReactionStruct) and \
            self.substrates == other.substrates and \
            self.products == other.products and \
            self.rate == other.rate and \
            self.mass_action == other.mass_action

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.substrates, self.products, self.rate,
                     self.mass_action))

    def __repr__(self):
        return '%s(%r, %r, %r, mass_action=%r)' % (
            self.__class__.__name__, self.substrates, self.products,
            self.rate, self.mass_action)

    def __str__(self):
        return '%s, %s %s %s' % (
            self.rate,
            ' + '.join(str(s) for s in self.substrates) or '∅',
            '-->' if self.mass_action else '⇒',
            ' + '.join(str(p) for p in self.products) or '∅')


class Network(object):
    """
    A compiled reaction network.

    Instances are created by :func:`pyrn.network.extract` and are not meant
    to be modified afterwards; all sequences are stored as tuples.

    Parameters
    ----------
    species : sequence of str
        Species names, in order of first occurrence.
    parameters : sequence of str
        Parameter names, in declared order.
    reactions : sequence of ReactionStruct
        The reactions, in statement order.
    name : str, optional
        A name for the network, used in log messages and exports.
    """

    def __init__(self, species, parameters, reactions, name=None):
        self.species = tuple(species)
        self.parameters = tuple(parameters)
        self.reactions = tuple(reactions)
        self.name = name

    def get_species_index(self, species):
        """Return the index of a species (name or Atom) in the network."""
        if isinstance(species, Atom):
            species = species.value
        try:
            return self.species.index(species)
        except ValueError:
            raise KeyError('Network has no species %r' % (species,))

    def __eq__(self, other):
        return isinstance(other, Network) and \
            self.species == other.species and \
            self.parameters == other.parameters and \
            self.reactions == other.reactions

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return ("<%s '%s' (species: %d, parameters: %d, reactions: %d) "
                "at 0x%x>" %
                (self.__class__.__name__, self.name, len(self.species),
                 len(self.parameters), len(self.reactions), id(self)))


class ReactionNetworkError(ValueError):
    """Base class for reaction network compilation errors."""
    pass


class MalformedReaction(ReactionNetworkError):
    """A reaction statement is structurally invalid."""
    pass


class ReservedIdentifier(ReactionNetworkError):
    """The reserved time identifier was used as a species or parameter."""
    def __init__(self, name, kind):
        ReactionNetworkError.__init__(
            self, "'%s' is reserved for the time variable and may not be "
                  "used as a %s" % (name, kind))
