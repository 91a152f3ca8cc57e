__version__ = '1.0.0'

from pyrn.expr import *
from pyrn.core import *
from pyrn.rewrite import register_rewrite, rewrite
from pyrn.network import extract, reaction_network

__all__ = ['Atom', 'Compound', 'symbols', 'call', 'tup', 'arrow', 'statement',
           'block', 'Network', 'ReactionStruct', 'ReactantStruct',
           'MalformedReaction', 'ReservedIdentifier', 'ReactionNetworkError',
           'TIME_SYMBOL', 'register_rewrite', 'rewrite', 'extract',
           'reaction_network']
