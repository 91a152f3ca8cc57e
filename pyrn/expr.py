"""
Expression trees for reaction network statements.

A reaction network is handed to the compiler as a tree of nodes. There are
exactly two kinds of node:

* :class:`Atom` -- an identifier (a ``str``, e.g. a species or parameter
  name) or a numeric literal (``int`` or ``float``).
* :class:`Compound` -- a ``head`` and an ordered tuple of child nodes
  (``args``). The head is an operator (``+``, ``-``, ``*``, ``/``, ``^``), a
  structural tag (``tuple``, ``block``), an arrow glyph (``→``, ``↔``, ...)
  or the name of a called function (``hill``, ``log``, ...).

Nodes are immutable and compare structurally, so they can be used as
dictionary keys and compared in tests.

Trees can be written with ordinary Python operators, in the same way rule
expressions are written with ``+`` and ``>>``:

>>> from pyrn.expr import symbols, tup
>>> X, Y, XY, k1, k2 = symbols('X Y XY k1 k2')
>>> X + Y >> XY
Compound('→', Compound('+', Atom('X'), Atom('Y')), Atom('XY'))
>>> tup(k1, k2), X + Y | XY                       # doctest: +SKIP

``>>`` builds a forward arrow, ``<<`` a backward arrow and ``|`` a
bidirectional arrow. Any other arrow glyph can be used with :func:`arrow`.
"""

import numbers
import sympy

__all__ = ['Atom', 'Compound', 'as_node', 'symbols', 'call', 'tup', 'arrow',
           'statement', 'block', 'is_tuple', 'substitute', 'to_sympy',
           'ADD', 'SUB', 'MUL', 'DIV', 'POW', 'TUPLE', 'BLOCK']

ADD = '+'
SUB = '-'
MUL = '*'
DIV = '/'
POW = '^'
TUPLE = 'tuple'
BLOCK = 'block'

OPERATORS = frozenset([ADD, SUB, MUL, DIV, POW])
STRUCTURAL = frozenset([TUPLE, BLOCK])


class Node(object):
    """Base class for expression tree nodes."""

    __slots__ = ()

    @property
    def is_atom(self):
        return isinstance(self, Atom)

    def __add__(self, other):
        return Compound(ADD, self, other)

    def __radd__(self, other):
        return Compound(ADD, other, self)

    def __sub__(self, other):
        return Compound(SUB, self, other)

    def __rsub__(self, other):
        return Compound(SUB, other, self)

    def __mul__(self, other):
        return Compound(MUL, self, other)

    def __rmul__(self, other):
        return Compound(MUL, other, self)

    def __truediv__(self, other):
        return Compound(DIV, self, other)

    def __rtruediv__(self, other):
        return Compound(DIV, other, self)

    def __pow__(self, other):
        return Compound(POW, self, other)

    def __rpow__(self, other):
        return Compound(POW, other, self)

    def __neg__(self):
        return Compound(SUB, self)

    def __rshift__(self, other):
        return arrow('→', self, other)

    def __rrshift__(self, other):
        return arrow('→', other, self)

    def __lshift__(self, other):
        return arrow('←', self, other)

    def __rlshift__(self, other):
        return arrow('←', other, self)

    def __or__(self, other):
        return arrow('↔', self, other)

    def __ror__(self, other):
        return arrow('↔', other, self)


class Atom(Node):
    """
    An identifier or numeric literal.

    Parameters
    ----------
    value : str or number
        Identifier name, or an ``int``/``float`` literal.
    """

    __slots__ = ('value',)

    def __init__(self, value):
        if isinstance(value, Atom):
            value = value.value
        if isinstance(value, bool) or \
                not isinstance(value, (str, numbers.Real)):
            raise TypeError('Atom value must be a string or a number, got '
                            '%r' % (value,))
        object.__setattr__(self, 'value', value)

    def __setattr__(self, name, value):
        raise AttributeError('Atom objects are immutable')

    @property
    def is_identifier(self):
        return isinstance(self.value, str)

    @property
    def is_number(self):
        return not isinstance(self.value, str)

    def __call__(self, *args):
        """Calling an identifier builds a function call node."""
        if not self.is_identifier:
            raise TypeError('Numeric literal %r is not callable' % self.value)
        return Compound(self.value, *args)

    def __eq__(self, other):
        return isinstance(other, Atom) and \
            type(self.value) is type(other.value) and \
            self.value == other.value

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((Atom, type(self.value), self.value))

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.value)

    def __str__(self):
        return str(self.value)


class Compound(Node):
    """
    A node with a head and an ordered sequence of children.

    Parameters
    ----------
    head : str
        Operator, structural tag, arrow glyph or function name.
    *args : nodes (or values accepted by :func:`as_node`)
        The children, in order.
    """

    __slots__ = ('head', 'args')

    def __init__(self, head, *args):
        if not isinstance(head, str):
            raise TypeError('Compound head must be a string, got %r' %
                            (head,))
        object.__setattr__(self, 'head', head)
        object.__setattr__(self, 'args', tuple(as_node(a) for a in args))

    def __setattr__(self, name, value):
        raise AttributeError('Compound objects are immutable')

    @property
    def is_call(self):
        """True if this node is a function call (not an operator or tag)."""
        return self.head not in OPERATORS and self.head not in STRUCTURAL

    def __eq__(self, other):
        return isinstance(other, Compound) and self.head == other.head and \
            self.args == other.args

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((Compound, self.head, self.args))

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__,
                           ', '.join([repr(self.head)] +
                                     [repr(a) for a in self.args]))

    def __str__(self):
        if self.head in OPERATORS:
            if len(self.args) == 1:
                return '%s%s' % (self.head, _paren(self.args[0]))
            return (' %s ' % self.head).join(_paren(a) for a in self.args)
        if self.head == TUPLE:
            return '(%s)' % ', '.join(str(a) for a in self.args)
        if self.head == BLOCK:
            return '\n'.join(str(a) for a in self.args)
        if len(self.args) == 2 and not self.head.isidentifier():
            return '%s %s %s' % (self.args[0], self.head, self.args[1])
        return '%s(%s)' % (self.head, ', '.join(str(a) for a in self.args))


def _paren(node):
    if isinstance(node, Compound) and node.head in OPERATORS:
        return '(%s)' % node
    return str(node)


def as_node(value):
    """
    Convert a Python value to an expression node.

    Nodes are returned unchanged, strings and numbers become :class:`Atom`
    objects and Python tuples become ``tuple`` nodes.
    """
    if isinstance(value, Node):
        return value
    if isinstance(value, tuple):
        return Compound(TUPLE, *value)
    return Atom(value)


def symbols(names):
    """
    Create identifier atoms from a space or comma separated string.

    >>> X, Y = symbols('X Y')
    >>> X
    Atom('X')
    """
    if isinstance(names, str):
        names = names.replace(',', ' ').split()
    atoms = tuple(Atom(n) for n in names)
    return atoms


def call(name, *args):
    """Build a function call node ``name(args...)``."""
    return Compound(name, *args)


def tup(*items):
    """Build a ``tuple`` node (parallel reactions, or a pair of rates)."""
    return Compound(TUPLE, *items)


def arrow(glyph, lhs, rhs):
    """Build a reaction arrow node ``lhs glyph rhs``."""
    return Compound(glyph, lhs, rhs)


def statement(rate, reaction):
    """Build a ``(rate, reaction)`` statement node."""
    return Compound(TUPLE, rate, reaction)


def block(*statements):
    """Build a block of statements."""
    return Compound(BLOCK, *statements)


def is_tuple(node):
    return isinstance(node, Compound) and node.head == TUPLE


def substitute(node, mapping):
    """
    Replace identifier atoms in a tree, simultaneously.

    Parameters
    ----------
    node : Node
        Tree to substitute into.
    mapping : dict
        Maps identifier names (``str``) to replacement nodes.

    Returns
    -------
    A new tree. Replacement nodes are not themselves substituted into.
    """
    if isinstance(node, Atom):
        if node.is_identifier and node.value in mapping:
            return as_node(mapping[node.value])
        return node
    return Compound(node.head, *(substitute(a, mapping) for a in node.args))


_SYMPY_FUNCTIONS = {
    'exp': sympy.exp,
    'log': sympy.log,
    'sqrt': sympy.sqrt,
    'abs': sympy.Abs,
    'sin': sympy.sin,
    'cos': sympy.cos,
    'tan': sympy.tan,
    'sinh': sympy.sinh,
    'cosh': sympy.cosh,
    'tanh': sympy.tanh,
    'min': sympy.Min,
    'max': sympy.Max,
    'factorial': sympy.factorial,
}


def to_sympy(node, local_dict=None):
    """
    Convert an expression tree to a sympy expression.

    Parameters
    ----------
    node : Node
        Tree to convert. Must not contain arrows, tuples or blocks.
    local_dict : dict, optional
        Maps identifier names to sympy objects. Identifiers not found here
        become ``sympy.Symbol`` objects with the same name.

    Returns
    -------
    sympy.Expr
    """
    if local_dict is None:
        local_dict = {}
    node = as_node(node)
    if isinstance(node, Atom):
        if node.is_identifier:
            if node.value in local_dict:
                return local_dict[node.value]
            return sympy.Symbol(node.value)
        return sympy.S(node.value)
    args = [to_sympy(a, local_dict) for a in node.args]
    head = node.head
    if head == ADD:
        return sympy.Add(*args)
    if head == MUL:
        return sympy.Mul(*args)
    if head == SUB:
        if len(args) == 1:
            return -args[0]
        return args[0] - sympy.Add(*args[1:])
    if head == DIV:
        return args[0] / sympy.Mul(*args[1:])
    if head == POW:
        return sympy.Pow(*args)
    if head in STRUCTURAL or not node.is_call:
        raise ValueError('Cannot convert a %r node to a sympy expression' %
                         head)
    func = _SYMPY_FUNCTIONS.get(head) or sympy.Function(head)
    return func(*args)
