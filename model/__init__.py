"""
model/
------
Core data layer.  Public API:

    from model import Graph, Node, Edge, GraphFormatError
    from model import Element, ArrayModel
    from model import ArraySnapshot, GraphSnapshot
"""

from model.snapshot import Bar, ArraySnapshot, NodeView, EdgeView, GraphSnapshot
from model.element  import Element, ArrayModel
from model.node     import Node
from model.edge     import Edge
from model.graph    import Graph, GraphFormatError

__all__ = [
    "Bar",       "ArraySnapshot",
    "NodeView",  "EdgeView",  "GraphSnapshot",
    "Element",   "ArrayModel",
    "Node",      "Edge",
    "Graph",     "GraphFormatError",
]
