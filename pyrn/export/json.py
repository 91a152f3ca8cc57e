"""
Module containing a class for exporting a compiled network to JSON

For information on how to use the exporters, see the documentation
for :py:mod:`pyrn.export`.
"""

from pyrn.export import Exporter
from pyrn.export.ir import IrExporter, ReactionSystem
import json


class JsonExporter(Exporter):
    """A class for returning the JSON for a given network.

    Inherits from :py:class:`pyrn.export.Exporter`, which implements
    basic functionality for all exporters.
    """

    def export(self, indent=None):
        """Generate the JSON of the reaction system IR of the network.

        Parameters
        ----------
        indent : int, optional
            Passed to :py:func:`json.dumps`.

        Returns
        -------
        string
            The JSON output for the network.
        """
        system = IrExporter(self.network).export()
        return json.dumps(system, cls=ReactionSystemJSONEncoder,
                          indent=indent, ensure_ascii=False)


class ReactionSystemJSONEncoder(json.JSONEncoder):
    """
    Encode a reaction system IR in JSON

    Species, parameters and stoichiometries are stored verbatim. Rates are
    encoded as strings using sympy's default printer, with kinetic-law
    shorthand already expanded.

    The protocol number (currently: 1) specifies semantic compatibility, and
    should be incremented if new fields are added which affect how the
    network is simulated.
    """
    PROTOCOL = 1

    @classmethod
    def encode_reaction(cls, rxn):
        return {
            'rate': str(rxn.rate_expr()),
            'substrates': list(rxn.substrates),
            'products': list(rxn.products),
            'substoich': list(rxn.substoich),
            'prodstoich': list(rxn.prodstoich),
            'only_use_rate': rxn.only_use_rate
        }

    @classmethod
    def encode_reaction_system(cls, system):
        return {
            'protocol': cls.PROTOCOL,
            'name': system.name,
            'independent_variable': system.independent_variable,
            'parameters': system.parameter_names,
            'species': system.species_names,
            'reactions': [cls.encode_reaction(r) for r in system.reactions]
        }

    def default(self, o):
        if isinstance(o, ReactionSystem):
            return self.encode_reaction_system(o)

        return super(ReactionSystemJSONEncoder, self).default(o)
