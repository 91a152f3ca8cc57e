"""
A module containing a class that exports a compiled network to a single
Python source file that, when imported, will recreate the same network. This
is intended for saving a generated network so that it can be reused without
recompiling the original statements. Note that tuple-broadcast and
bidirectional statements are "flattened" in the process: every reaction is
written out individually.

For information on how to use the exporters, see the documentation
for :py:mod:`pyrn.export`.

Structure of the Python code
============================

The Python code constructs a :py:class:`pyrn.core.Network` from its species,
parameters and reactions, in that order. This can be considered a sort of
"repr()" for a full network.

If the output is saved as ``foo.py`` then one may load the network with the
following line::

    from foo import network

"""

from pyrn.export import Exporter
from io import StringIO


class PyrnFlatExporter(Exporter):
    """A class for generating pyrn "flat" source code from a network.

    Inherits from :py:class:`pyrn.export.Exporter`, which implements
    basic functionality for all exporters.
    """
    def export(self):
        """Export pyrn source code from a network.

        Returns
        -------
        string
            String containing the Python code.
        """
        output = StringIO()
        network = self.network

        if self.docstring:
            output.write('"""')
            output.write(self.docstring)
            output.write('"""\n\n')
        output.write("# exported from pyrn network '%s'\n" % network.name)
        output.write("\n")
        output.write("from pyrn.core import Network, ReactionStruct, "
                     "ReactantStruct\n")
        output.write("from pyrn.expr import Atom, Compound\n")
        output.write("\n")
        output.write("network = Network(\n")
        output.write("    %r,\n" % (list(network.species), ))
        output.write("    %r,\n" % (list(network.parameters), ))
        output.write("    [\n")
        for reaction in network.reactions:
            output.write("        %r,\n" % reaction)
        output.write("    ],\n")
        output.write("    name=%r)\n" % network.name)

        return output.getvalue()
