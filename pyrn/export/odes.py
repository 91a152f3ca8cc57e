"""
Module containing a class for exporting the ODEs of a compiled network as
plain text, one line per species::

    d[X]/dt = -kB*X*Y + kD*XY

Kinetic-law shorthand is expanded and mass-action reactions are multiplied
by their substrate terms (see :py:mod:`pyrn.export.ir`).

For information on how to use the exporters, see the documentation
for :py:mod:`pyrn.export`.
"""

from pyrn.export import Exporter
from pyrn.export.ir import IrExporter
from io import StringIO


class OdeExporter(Exporter):
    """A class for listing the ODEs of a network.

    Inherits from :py:class:`pyrn.export.Exporter`, which implements
    basic functionality for all exporters.
    """
    def export(self):
        """Generate the ODE listing for the network.

        Returns
        -------
        string
            One ``d[species]/dt = expression`` line per species.
        """
        system = IrExporter(self.network).export()
        output = StringIO()
        if self.docstring:
            for line in self.docstring.strip().splitlines():
                output.write('# %s\n' % line)
            output.write('\n')
        for species, ode in zip(system.species_names, system.odes):
            output.write('d[%s]/d%s = %s\n' % (
                species, system.independent_variable, ode))
        return output.getvalue()
