# src/bptree_index/db/bptree.py
import operator
from bisect import bisect_left
from typing import Any, Iterator, List, Optional, Tuple

from .nodes import InternalNode, LeafNode, Node

# comparadores aceptados por range_search; cualquier otro -> resultado vacío
COMPARATORS = {
    "<=": operator.le,
    "==": operator.eq,
    ">=": operator.ge,
}


class BPTree:
    """
    B+Tree en memoria. API: insert(key, value), get(key),
    range_search(key, comparator), size(), debug_string().

    Admite claves duplicadas: cada ocurrencia conserva su propio valor y
    las ocurrencias iguales quedan en orden de inserción en la cadena de hojas.
    """

    def __init__(self, branching_factor: int):
        if isinstance(branching_factor, bool) or not isinstance(branching_factor, int):
            raise ValueError(f"Illegal branching factor: {branching_factor!r}")
        if branching_factor <= 2:
            raise ValueError(f"Illegal branching factor: {branching_factor}")
        self._branching_factor = branching_factor
        self._root: Node = LeafNode(branching_factor)
        self._size = 0

    @property
    def branching_factor(self) -> int:
        return self._branching_factor

    @property
    def root(self) -> Node:
        return self._root

    def insert(self, key: Any, value: Any) -> None:
        if key is None or value is None:
            raise ValueError("key and value must not be None")

        sib = self._root.insert(key, value)
        self._size += 1
        if sib is not None:
            # promoción de raíz
            self._root = InternalNode(
                self._branching_factor,
                keys=[sib.first_leaf_key()],
                children=[self._root, sib],
            )

    def get(self, key: Any) -> Optional[Any]:
        """
        Valor de la primera ocurrencia de key en la cadena de hojas, o None.
        Desciende hasta la hoja más a la izquierda que puede contener key y
        desde ahí recorre la cadena hacia la derecha.
        """
        if key is None:
            return None
        leaf = self._find_leaf(key)
        while leaf is not None:
            for k, v in leaf.entries():
                if k == key:
                    return v
                if key < k:
                    return None
            leaf = leaf.next
        return None

    def _find_leaf(self, key: Any) -> LeafNode:
        node = self._root
        while isinstance(node, InternalNode):
            node = node.children[bisect_left(node.keys, key)]
        return node

    def range_search(self, key: Any, comparator: str) -> List[Any]:
        """
        Valores cuya clave cumple `clave <comparator> key`, con comparator en
        "<=", "==", ">=". Un comparador desconocido devuelve [].
        El resultado va ordenado por valor (orden natural), no por clave.
        """
        cmp = COMPARATORS.get(comparator)
        if cmp is None:
            return []
        res = [v for k, v in self.items() if cmp(k, key)]
        res.sort()
        return res

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def height(self) -> int:
        h = 1
        node = self._root
        while isinstance(node, InternalNode):
            node = node.children[0]
            h += 1
        return h

    def leaves(self) -> Iterator[LeafNode]:
        leaf: Optional[LeafNode] = self._root.first_child()
        while leaf is not None:
            yield leaf
            leaf = leaf.next

    def items(self) -> List[Tuple[Any, Any]]:
        """(key, value) en el orden de la cadena de hojas."""
        res = []
        for leaf in self.leaves():
            res.extend(leaf.entries())
        return res

    def debug_string(self) -> str:
        """
        Render por niveles (BFS). Una línea por nivel; los hijos de cada
        padre van agrupados entre llaves, p.ej.:
            {[0.5]}
            {[0.0, 0.2], [0.5, 0.8]}
        """
        lines = []
        level: List[List[Node]] = [[self._root]]
        while level:
            groups = []
            next_level: List[List[Node]] = []
            for nodes in level:
                groups.append("{" + ", ".join(str(n) for n in nodes) + "}")
                for n in nodes:
                    if isinstance(n, InternalNode):
                        next_level.append(n.children)
            lines.append(", ".join(groups) + "\n")
            level = next_level
        return "".join(lines)

    def __str__(self) -> str:
        return self.debug_string()

    def __repr__(self) -> str:
        return f"BPTree(branching_factor={self._branching_factor}, size={self._size})"
