"""
Prefix-sharing autocomplete engine.

Words are stored in a compressed trie where every node holds a run of
characters, so words with a common stem share the nodes of that stem.
Splitting a node on insert keeps the sharing maximal; completion walks to
the prefix and rebuilds each word from the shared runs, in lexicographic
order.

Example Usage:
    from completion import PrefixTree

    tree = PrefixTree()
    tree.insert("bat batman batmobile batcave")
    tree.complete("bat")      # ['bat', 'batcave', 'batman', 'batmobile']

    strict = PrefixTree(case_fold=True, punctuation="strip")
    strict.insert("Hello, World!")
    strict.complete("wor")    # ['world']
"""

from .engine import Engine
from .guard import GuardedTree
from .loader import load_tree
from .models import Completion, LoadReport, Node, TreeStats, WordPolicy
from .tree import PrefixTree

__version__ = "1.0.0"
__all__ = [
    "Completion",
    "Engine",
    "GuardedTree",
    "LoadReport",
    "Node",
    "PrefixTree",
    "TreeStats",
    "WordPolicy",
    "load_tree",
]
