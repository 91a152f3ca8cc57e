"""
Module containing the emitter of the reaction system intermediate
representation (IR).

For information on how to use the exporters, see the documentation
for :py:mod:`pyrn.export`.

Structure of the IR
===================

:py:class:`IrExporter` turns a :py:class:`pyrn.core.Network` into a
:py:class:`ReactionSystem` holding

* one :py:class:`ParameterDeclaration` per parameter;
* one time-dependent :py:class:`SpeciesDeclaration` (``X(t)``) per species;
* one :py:class:`ReactionNode` per reaction, with kinetic-law shorthand in
  the rate already expanded (see :py:mod:`pyrn.rewrite`).

Species and their stoichiometries are stored as parallel tuples. An empty
reaction side is an empty tuple.

Mass-action contract
====================

A reaction node with ``only_use_rate == False`` follows mass-action
kinetics: its rate still has to be multiplied by
``prod(S_i**n_i / n_i!)`` over its substrates ``S_i`` with stoichiometry
``n_i``. :py:meth:`ReactionNode.mass_action_rate` does this, and
:py:attr:`ReactionSystem.odes` builds the ODE right-hand sides from it.
"""

import collections
import sympy
import scipy.sparse
import networkx as nx
from pyrn.core import TIME_SYMBOL
from pyrn.export import Exporter
from pyrn.expr import to_sympy
from pyrn.rewrite import rewrite
from pyrn.logging import get_logger


class ParameterDeclaration(collections.namedtuple('ParameterDeclaration',
                                                  ['name'])):
    """A network parameter."""
    __slots__ = ()

    @property
    def symbol(self):
        return sympy.Symbol(self.name)

    def __str__(self):
        return self.name


class SpeciesDeclaration(collections.namedtuple('SpeciesDeclaration',
                                                ['name',
                                                 'independent_variable'])):
    """A species, declared as a function of the time variable."""
    __slots__ = ()

    @property
    def symbol(self):
        return sympy.Symbol(self.name)

    def __str__(self):
        return '%s(%s)' % (self.name, self.independent_variable)


class ReactionNode(object):
    """
    One reaction of the IR.

    Parameters
    ----------
    rate : pyrn.expr.Node
        Rate expression, kinetic-law shorthand expanded.
    substrates, products : sequence of str
        Species names.
    substoich, prodstoich : sequence of int
        Stoichiometries, parallel to ``substrates`` and ``products``.
    only_use_rate : bool
        If True the rate is the full reaction rate; if False mass-action
        kinetics apply.
    """

    def __init__(self, rate, substrates, products, substoich, prodstoich,
                 only_use_rate=False):
        self.rate = rate
        self.substrates = tuple(substrates)
        self.products = tuple(products)
        self.substoich = tuple(substoich)
        self.prodstoich = tuple(prodstoich)
        if len(self.substrates) != len(self.substoich) or \
                len(self.products) != len(self.prodstoich):
            raise ValueError('Species and stoichiometry lists must have the '
                             'same length')
        self.only_use_rate = only_use_rate

    @property
    def mass_action(self):
        return not self.only_use_rate

    def net_stoichiometry(self):
        """Return a dict of species name to net change per reaction event."""
        net = collections.OrderedDict()
        for s, n in zip(self.substrates, self.substoich):
            net[s] = net.get(s, 0) - n
        for p, n in zip(self.products, self.prodstoich):
            net[p] = net.get(p, 0) + n
        return net

    def rate_expr(self, local_dict=None):
        """Return the rate as a sympy expression."""
        return to_sympy(self.rate, local_dict)

    def mass_action_rate(self, local_dict=None):
        """
        Return the complete reaction rate as a sympy expression.

        For mass-action reactions this is the rate multiplied by
        ``S**n / n!`` for every substrate ``S`` with stoichiometry ``n``.
        """
        rate = self.rate_expr(local_dict)
        if self.only_use_rate:
            return rate
        if local_dict is None:
            local_dict = {}
        terms = [local_dict.get(s, sympy.Symbol(s)) ** n / sympy.factorial(n)
                 for s, n in zip(self.substrates, self.substoich)]
        return sympy.Mul(rate, *terms)

    def __repr__(self):
        return '%s(%s, %r, %r, %r, %r, only_use_rate=%r)' % (
            self.__class__.__name__, repr(self.rate), self.substrates,
            self.products, self.substoich, self.prodstoich,
            self.only_use_rate)

    def __str__(self):
        def side(names, stoich):
            return ' + '.join(n if s == 1 else '%d*%s' % (s, n)
                              for n, s in zip(names, stoich)) or '∅'
        return '%s, %s %s %s' % (self.rate,
                                 side(self.substrates, self.substoich),
                                 '⇒' if self.only_use_rate else '-->',
                                 side(self.products, self.prodstoich))


class ReactionSystem(object):
    """
    The reaction system IR of a compiled network.

    Attributes
    ----------
    reactions : tuple of ReactionNode
    independent_variable : str
        Name of the time variable.
    species : tuple of SpeciesDeclaration
    parameters : tuple of ParameterDeclaration
    name : str or None
    """

    def __init__(self, reactions, independent_variable, species, parameters,
                 name=None):
        self.reactions = tuple(reactions)
        self.independent_variable = independent_variable
        self.species = tuple(species)
        self.parameters = tuple(parameters)
        self.name = name
        self._stoichiometry_matrix = None

    @property
    def species_names(self):
        return [s.name for s in self.species]

    @property
    def parameter_names(self):
        return [p.name for p in self.parameters]

    def symbols(self):
        """Return a dict of name to sympy Symbol for species and parameters."""
        syms = {self.independent_variable:
                sympy.Symbol(self.independent_variable)}
        for decl in self.parameters + self.species:
            syms[decl.name] = decl.symbol
        return syms

    @property
    def stoichiometry_matrix(self):
        """Return the net stoichiometry matrix (species x reactions)."""
        if self._stoichiometry_matrix is None:
            index = {name: i for i, name in enumerate(self.species_names)}
            shape = (len(self.species), len(self.reactions))
            sm = scipy.sparse.lil_matrix(shape, dtype='int')
            for i, reaction in enumerate(self.reactions):
                for s, n in reaction.net_stoichiometry().items():
                    sm[index[s], i] += n
            self._stoichiometry_matrix = sm.tocsr()
        return self._stoichiometry_matrix

    @property
    def odes(self):
        """Return the ODE right-hand side of each species, as sympy."""
        local_dict = self.symbols()
        rates = [r.mass_action_rate(local_dict) for r in self.reactions]
        sm = self.stoichiometry_matrix
        odes = []
        for i in range(len(self.species)):
            row = sm.getrow(i)
            odes.append(sympy.Add(*[rates[j] * int(v) for j, v in
                                    zip(row.indices, row.data)]))
        return odes

    def reaction_graph(self):
        """
        Return a bipartite directed graph of species and reactions.

        Species nodes are named after the species and have ``bipartite=0``;
        reaction nodes are named ``r0``, ``r1``, ... and have
        ``bipartite=1``. Edges run from substrates to the reaction and from
        the reaction to its products, weighted by stoichiometry.
        """
        graph = nx.DiGraph(name=self.name)
        graph.add_nodes_from(self.species_names, bipartite=0)
        for i, reaction in enumerate(self.reactions):
            rnode = 'r%d' % i
            graph.add_node(rnode, bipartite=1, rate=str(reaction.rate),
                           only_use_rate=reaction.only_use_rate)
            for s, n in zip(reaction.substrates, reaction.substoich):
                graph.add_edge(s, rnode, weight=n)
            for p, n in zip(reaction.products, reaction.prodstoich):
                graph.add_edge(rnode, p, weight=n)
        return graph

    def __repr__(self):
        return ("<%s '%s' (species: %d, parameters: %d, reactions: %d) "
                "at 0x%x>" %
                (self.__class__.__name__, self.name, len(self.species),
                 len(self.parameters), len(self.reactions), id(self)))

    def __str__(self):
        lines = ['parameters: %s' % ' '.join(
                     [self.independent_variable] + self.parameter_names),
                 'species: %s' % ' '.join(str(s) for s in self.species),
                 'reactions:']
        lines.extend('    %s' % r for r in self.reactions)
        return '\n'.join(lines)


class IrExporter(Exporter):
    """A class for emitting the reaction system IR of a network.

    Inherits from :py:class:`pyrn.export.Exporter`, which implements
    basic functionality for all exporters. Unlike the other exporters,
    :py:meth:`export` returns a :py:class:`ReactionSystem` rather than a
    string; ``str()`` of the result gives a readable listing.
    """

    def export(self):
        """Emit the IR for the network associated with the exporter.

        Returns
        -------
        ReactionSystem
        """
        network = self.network
        logger = get_logger(__name__, network=network)
        parameters = [ParameterDeclaration(p) for p in network.parameters]
        species = [SpeciesDeclaration(s, TIME_SYMBOL)
                   for s in network.species]
        reactions = []
        for reaction in network.reactions:
            reactions.append(ReactionNode(
                rewrite(reaction.rate),
                [r.species for r in reaction.substrates],
                [r.species for r in reaction.products],
                [r.stoichiometry for r in reaction.substrates],
                [r.stoichiometry for r in reaction.products],
                only_use_rate=reaction.only_use_rate))
        logger.debug('Emitted %d reaction nodes', len(reactions))
        return ReactionSystem(reactions, TIME_SYMBOL, species, parameters,
                              name=network.name)


def emit(network):
    """Return the :py:class:`ReactionSystem` IR of a network."""
    return IrExporter(network).export()
