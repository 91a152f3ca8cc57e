"""
Tools for exporting compiled reaction networks to other formats.

Exporting can be performed at the command-line or
programmatically/interactively from within Python.

Command-line usage
==================

At the command-line, run as follows::

    python -m pyrn.export network.py <format>

where ``network.py`` is a file containing a pyrn network definition (i.e.,
contains an instance of ``pyrn.core.Network`` assigned to the global
variable ``network``). ``[format]`` should be the name of one of the
supported formats:

- ``ir``
- ``json``
- ``odes``
- ``pyrn_flat``

In all cases, the exported network will be printed to standard out,
allowing it to be inspected or redirected to another file.

Interactive usage
=================

Export functionality is implemented by this module's top-level function
``export``. For example, to export a network as JSON, first compile it::

    from pyrn.expr import symbols
    from pyrn.network import extract

    X, Y, XY, kB, kD = symbols('X Y XY kB kD')
    network = extract([((kB, kD), X + Y | XY)], ['kB', 'kD'])

Then import the ``export`` function from this module::

    from pyrn.export import export

Call the ``export`` function, passing the network and a string indicating
the desired format, which should be one of the ones indicated in the list in
the "Command-line usage" section above::

    json_output = export(network, 'json')

The output (a string, except for ``ir`` which returns the
:py:class:`pyrn.export.ir.ReactionSystem` itself) can be inspected or
written to a file.
"""

import re
import textwrap


class Exporter(object):
    """Base class for all network exporters.

    Export functionality is implemented by subclasses of this class. The
    pattern for export is the same for all exporter subclasses: a network is
    passed to the exporter constructor and the ``export`` method on the
    instance is called.

    Parameters
    ----------
    network : pyrn.core.Network
        The network to export.
    docstring : string (optional)
        The header comment to include at the top of the exported file.
    """

    def __init__(self, network, docstring=None):
        self.network = network
        """The network to export."""
        self.docstring = docstring
        """Header comment to include at the top of the exported file."""

    def export(self):
        """The export method, which must be implemented by any subclass."""
        raise NotImplementedError()


# Define a dict listing supported formats and the names of the classes
# implementing their export procedures
formats = {
        'ir': 'IrExporter',
        'json': 'JsonExporter',
        'odes': 'OdeExporter',
        'pyrn_flat': 'PyrnFlatExporter',
        }


def export(network, format, docstring=None):
    """Top-level function for exporting a network to a given format.

    Parameters
    ----------
    network : pyrn.core.Network
        The network to export.
    format : string
        A string indicating the desired export format.
    docstring : string (optional)
        The header comment to include at the top of the exported file.
    """
    if format not in formats:
        raise ValueError("The format must be one of the following: " +
                         ", ".join(formats.keys()) + ".")

    # Import the exporter module. This is done at export runtime to avoid
    # circular imports at module loading
    export_module = __import__('pyrn.export.' + format,
                               fromlist=[formats[format]])
    export_class = getattr(export_module, formats[format])
    e = export_class(network, docstring)
    return e.export()


def pad(text, depth=0):
    "Dedent multi-line string and pad with spaces."
    text = textwrap.dedent(text)
    text = re.sub(r'(?m)^', ' ' * depth, text)
    text += '\n'
    return text
