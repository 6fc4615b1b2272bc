''' Derivation tree produced by the tree generator. Every node holds one grammar symbol; an expanded non-terminal owns one child per symbol of the alternative chosen for it. Reading the leaves left to right gives the derived sentence. '''
from __future__ import annotations

from typing import Iterator, List, Optional

from cfgevo.grammar import NonTerminal, Symbol, Terminal


class DerivationNode:
    def __init__(self, symbol: Symbol, parent: Optional["DerivationNode"] = None):
        self.symbol = symbol
        self.children: List[DerivationNode] = []
        self.parent = parent

    def attach(self, symbol: Symbol) -> "DerivationNode":
        child = DerivationNode(symbol, parent=self)
        self.children.append(child)
        return child

    def is_leaf(self) -> bool:
        return not self.children

    def is_root(self) -> bool:
        return self.parent is None

    def leaves(self) -> Iterator["DerivationNode"]:
        """Yield the leaves left to right (depth-first, pre-order)."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.children:
                stack.extend(reversed(node.children))
            else:
                yield node

    def sentence(self) -> List[Symbol]:
        return [leaf.symbol for leaf in self.leaves()]

    def size(self) -> int:
        count = 0
        stack = [self]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children)
        return count

    def depth(self) -> int:
        """Number of edges on the longest path from this node down to a leaf."""
        deepest = 0
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def path(self) -> List["DerivationNode"]:
        """Nodes from the root down to this node (inclusive)."""
        nodes = [self]
        while nodes[-1].parent is not None:
            nodes.append(nodes[-1].parent)
        nodes.reverse()
        return nodes

    def structure_string(self) -> str:
        lines = []
        stack = [(self, 0)]
        while stack:
            node, indent = stack.pop()
            lines.append("  " * indent + "- " + str(node.symbol))
            stack.extend((child, indent + 1) for child in reversed(node.children))
        return "\n".join(lines) + "\n"

    def serialize(self):
        kind = "nonterminal" if isinstance(self.symbol, NonTerminal) else "terminal"
        value = self.symbol.name if isinstance(self.symbol, NonTerminal) else self.symbol.value
        return {
            "type": kind,
            "value": value,
            "children": [child.serialize() for child in self.children],
        }

    @staticmethod
    def deserialize(data, parent: Optional["DerivationNode"] = None) -> "DerivationNode":
        if data["type"] == "nonterminal":
            symbol = NonTerminal(data["value"])
        elif data["type"] == "terminal":
            symbol = Terminal(data["value"])
        else:
            raise ValueError(f"Unknown symbol type: {data['type']!r}")
        node = DerivationNode(symbol, parent=parent)
        node.children = [DerivationNode.deserialize(child, node) for child in data.get("children", [])]
        return node

    def __repr__(self):
        return f"DerivationNode({self.symbol}, children={len(self.children)})"
