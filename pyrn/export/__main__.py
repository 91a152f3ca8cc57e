import os
import sys
import re
import pyrn.export
from pyrn.core import Network


def validate_argv(argv):
    return len(argv) == 3


def main(argv):
    if not validate_argv(argv):
        print(pyrn.export.__doc__, end=' ')
        return 1

    network_filename = argv[1]
    format = argv[2]

    # Make sure that the user has supplied an allowable format
    if format not in pyrn.export.formats.keys():
        raise Exception("The format must be one of the following: " +
                        ", ".join(pyrn.export.formats.keys()) + ".")

    # Sanity checks on filename
    if not os.path.exists(network_filename):
        raise Exception("File '%s' doesn't exist" % network_filename)
    if not re.search(r'\.py$', network_filename):
        raise Exception("File '%s' is not a .py file" % network_filename)
    sys.path.insert(0, os.path.dirname(os.path.abspath(network_filename)))
    module_name = re.sub(r'\.py$', '', os.path.basename(network_filename))
    # import it
    try:
        network_module = __import__(module_name)
    except Exception:
        print("Error in network script:\n")
        raise
    # grab the 'network' variable from the module
    try:
        network = network_module.__dict__['network']
    except KeyError:
        raise Exception("File '%s' isn't a network file" % network_filename)
    if network.name is None:
        network = Network(network.species, network.parameters,
                          network.reactions, name=module_name)

    # Export the network
    print(pyrn.export.export(network, format, network_module.__doc__))

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
