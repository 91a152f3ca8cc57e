"""
Expansion of kinetic-law shorthand in rate expressions.

Rate expressions may call named kinetic laws, e.g. ``hill(X, v, K, n)``.
Before a network is exported these calls are replaced by the explicit
mathematical expression they stand for. The names that are understood are
held in a single, process-wide rewrite table, which is pre-populated with
the following families (arguments in parentheses):

=================================  ============  ==========================
Aliases                            Arguments     Expansion
=================================  ============  ==========================
hill, Hill, h, H, HILL             x, v, K, n    ``v*x^n/(K^n + x^n)``
hill_repressor, hillr, hillR,      x, v, K, n    ``v*K^n/(K^n + x^n)``
HillR, hR, Hr, HR, HILLR
MM, mm, Mm, mM, M, m               x, v, K       ``v*x/(K + x)``
mm_repressor, MMR, mmr, mmR, MmR,  x, v, K       ``v*K/(K + x)``
mMr, MR, mr, Mr, mR
=================================  ============  ==========================

New laws can be added with :func:`register_rewrite`:

>>> from pyrn.expr import symbols
>>> x, v, k, n = symbols('x v k n')
>>> rule = register_rewrite('my_hill_repression', ['x', 'v', 'k', 'n'],
...                  v*k**n/(k**n + x**n))

Calls to any other function (``log``, ``exp``, ...) are left untouched.

The table has no locking. Register rules before compiling networks that use
them, and synchronize externally if registering from several threads.
"""

from pyrn.core import MalformedReaction
from pyrn.expr import Atom, Compound, as_node, substitute, symbols
from pyrn.logging import get_logger, EXTENDED_DEBUG

__all__ = ['RewriteRule', 'SubstitutionRule', 'FunctionRule', 'rewrite',
           'register_rewrite', 'add_rewrite_rule', 'get_rewrite_rule',
           'rewrite_names', 'HILL_NAMES', 'HILL_REPRESSOR_NAMES', 'MM_NAMES',
           'MM_REPRESSOR_NAMES']

_logger = get_logger(__name__)


class RewriteRule(object):
    """
    Base class for kinetic-law rewrite rules.

    A rule is called with the (already rewritten) argument nodes of a call
    and returns the node that replaces the call.
    """

    def __call__(self, args):
        raise NotImplementedError()


class SubstitutionRule(RewriteRule):
    """
    A rewrite rule defined by formal parameters and a body expression.

    Calling the rule substitutes the actual arguments for the formal
    parameter names, positionally, in the body.

    Parameters
    ----------
    name : str
        Name the rule is registered under (used in error messages).
    formal_params : sequence of str or Atom
        Formal parameter names.
    body : pyrn.expr.Node
        The expression the call expands to.
    """

    def __init__(self, name, formal_params, body):
        self.name = name
        self.formal_params = tuple(
            p.value if isinstance(p, Atom) else p for p in formal_params)
        if len(set(self.formal_params)) != len(self.formal_params):
            raise ValueError('Duplicate formal parameters for rewrite rule '
                             '%s: %s' % (name, ', '.join(self.formal_params)))
        self.body = as_node(body)

    def __call__(self, args):
        args = tuple(args)
        if len(args) != len(self.formal_params):
            raise MalformedReaction(
                '%s() takes %d arguments (%s), %d given' % (
                    self.name, len(self.formal_params),
                    ', '.join(self.formal_params), len(args)))
        return substitute(self.body, dict(zip(self.formal_params, args)))

    def __repr__(self):
        return '%s(%r, %r, %r)' % (self.__class__.__name__, self.name,
                                   self.formal_params, self.body)


class FunctionRule(RewriteRule):
    """Wraps a plain Python callable taking the argument nodes."""

    def __init__(self, name, function):
        self.name = name
        self.function = function

    def __call__(self, args):
        return as_node(self.function(tuple(args)))

    def __repr__(self):
        return '%s(%r, %r)' % (self.__class__.__name__, self.name,
                               self.function)


HILL_NAMES = frozenset(['hill', 'Hill', 'h', 'H', 'HILL'])
HILL_REPRESSOR_NAMES = frozenset(['hill_repressor', 'hillr', 'hillR', 'HillR',
                                  'hR', 'Hr', 'HR', 'HILLR'])
MM_NAMES = frozenset(['MM', 'mm', 'Mm', 'mM', 'M', 'm'])
MM_REPRESSOR_NAMES = frozenset(['mm_repressor', 'MMR', 'mmr', 'mmR', 'MmR',
                                'mMr', 'MR', 'mr', 'Mr', 'mR'])


def _builtin_rules():
    x, v, K, n = symbols('x v K n')
    return [
        (HILL_NAMES, ('x', 'v', 'K', 'n'), v * x**n / (K**n + x**n)),
        (HILL_REPRESSOR_NAMES, ('x', 'v', 'K', 'n'),
         v * K**n / (K**n + x**n)),
        (MM_NAMES, ('x', 'v', 'K'), v * x / (K + x)),
        (MM_REPRESSOR_NAMES, ('x', 'v', 'K'), v * K / (K + x)),
    ]


_rewrite_table = {}
for _names, _params, _body in _builtin_rules():
    for _name in sorted(_names):
        _rewrite_table[_name] = SubstitutionRule(_name, _params, _body)


def add_rewrite_rule(name, rule):
    """
    Add a rule to the rewrite table.

    Parameters
    ----------
    name : str
        Function name that triggers the rule, matched exactly.
    rule : RewriteRule or callable
        Called with a tuple of argument nodes, returns the replacement node.
        Plain callables are wrapped in a :class:`FunctionRule`.
    """
    if not isinstance(name, str):
        raise TypeError('Rewrite rule name must be a string')
    if not isinstance(rule, RewriteRule):
        if not callable(rule):
            raise TypeError('rule must be a RewriteRule or a callable')
        rule = FunctionRule(name, rule)
    if name in _rewrite_table:
        _logger.debug('Rewrite rule %s replaces an existing definition', name)
    _rewrite_table[name] = rule
    _logger.debug('Registered rewrite rule %s', name)
    return rule


def register_rewrite(name, formal_params, body):
    """
    Define a new kinetic law usable in rate expressions.

    Parameters
    ----------
    name : str
        Name of the new function.
    formal_params : sequence of str or Atom
        Names of its parameters.
    body : pyrn.expr.Node
        The expression a call expands to, written in terms of the formal
        parameters.

    Returns
    -------
    SubstitutionRule
        The registered rule.
    """
    return add_rewrite_rule(name, SubstitutionRule(name, formal_params, body))


def get_rewrite_rule(name):
    """Return the rule registered under ``name``, or None."""
    return _rewrite_table.get(name)


def rewrite_names():
    """Return the sorted list of names with a registered rewrite rule."""
    return sorted(_rewrite_table)


def rewrite(node):
    """
    Expand kinetic-law calls in an expression, bottom-up.

    Arguments of a call are rewritten before the call itself. The result of
    a rule is not rewritten again.

    Parameters
    ----------
    node : pyrn.expr.Node
        The rate expression.

    Returns
    -------
    pyrn.expr.Node
        A new expression; ``node`` is not modified.
    """
    node = as_node(node)
    if isinstance(node, Atom):
        return node
    args = [rewrite(a) for a in node.args]
    if node.is_call:
        rule = _rewrite_table.get(node.head)
        if rule is not None:
            result = as_node(rule(args))
            _logger.log(EXTENDED_DEBUG, 'Rewrote %s to %s',
                        Compound(node.head, *args), result)
            return result
    return Compound(node.head, *args)
