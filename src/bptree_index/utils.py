# src/bptree_index/utils.py
"""
Chequeos estructurales del B+Tree (útiles en tests y en el CLI):
- profundidad de cada hoja (balance de altura)
- orden de la cadena de hojas y coherencia de los enlaces previous
- separadores == primera clave de la hoja más a la izquierda del hijo derecho
"""
from typing import Any, Dict, List

from bptree_index.db.bptree import BPTree
from bptree_index.db.nodes import InternalNode, LeafNode, Node


def leaf_depths(tree: BPTree) -> List[int]:
    """Profundidad (raíz = 1) de cada hoja, de izquierda a derecha."""
    depths = []
    stack = [(tree.root, 1)]
    while stack:
        node, d = stack.pop()
        if isinstance(node, InternalNode):
            # apilar al revés para visitar de izquierda a derecha
            for child in reversed(node.children):
                stack.append((child, d + 1))
        else:
            depths.append(d)
    return depths


def is_height_balanced(tree: BPTree) -> bool:
    return len(set(leaf_depths(tree))) == 1


def leaf_chain_ordered(tree: BPTree) -> bool:
    """
    True si la cadena de hojas da claves no decrecientes y cada
    leaf.next.previous apunta de vuelta a leaf.
    """
    prev_key = None
    first = True
    for leaf in tree.leaves():
        if leaf.next is not None and leaf.next.previous is not leaf:
            return False
        for k in leaf.keys:
            if not first and k < prev_key:
                return False
            prev_key = k
            first = False
    return True


def separators_consistent(tree: BPTree) -> bool:
    def check(node: Node) -> bool:
        if isinstance(node, LeafNode):
            return True
        if len(node.children) != len(node.keys) + 1:
            return False
        for i, sep in enumerate(node.keys):
            if node.children[i + 1].first_leaf_key() != sep:
                return False
        return all(check(c) for c in node.children)

    return check(tree.root)


def no_overflow(tree: BPTree) -> bool:
    stack = [tree.root]
    while stack:
        node = stack.pop()
        if node.is_overflow():
            return False
        if isinstance(node, InternalNode):
            stack.extend(node.children)
    return True


def check_invariants(tree: BPTree) -> List[str]:
    """Lista de invariantes violados (vacía si el árbol está bien)."""
    problems = []
    if not is_height_balanced(tree):
        problems.append("leaves at different depths")
    if not leaf_chain_ordered(tree):
        problems.append("leaf chain out of order")
    if not separators_consistent(tree):
        problems.append("separator mismatch")
    if not no_overflow(tree):
        problems.append("overflowing node left in tree")
    entries = sum(len(leaf.keys) for leaf in tree.leaves())
    if entries != tree.size():
        problems.append(f"size {tree.size()} != {entries} leaf entries")
    return problems


def tree_stats(tree: BPTree) -> Dict[str, Any]:
    leaves = list(tree.leaves())
    internal = 0
    stack = [tree.root]
    while stack:
        node = stack.pop()
        if isinstance(node, InternalNode):
            internal += 1
            stack.extend(node.children)
    fill = [len(l.keys) for l in leaves]
    return {
        "branching_factor": tree.branching_factor,
        "size": tree.size(),
        "height": tree.height(),
        "leaves": len(leaves),
        "internal_nodes": internal,
        "avg_leaf_fill": (sum(fill) / len(fill)) if fill else 0.0,
    }
