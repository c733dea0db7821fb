# src/bptree_index/db/nodes.py
"""
Nodos del B+Tree:
- Node: contrato común (insert, split, first_leaf_key, is_overflow, first_child)
- LeafNode: claves + valores, encadenado con sus hermanos (next / previous)
- InternalNode: separadores + hijos (len(children) == len(keys) + 1)

El factor de ramificación lo recibe cada nodo al crearse; no hay estado global.
"""
from abc import ABC, abstractmethod
from bisect import bisect_right
from typing import Any, List, Optional


class Node(ABC):
    """Contrato compartido por las dos variantes de nodo."""

    def __init__(self, branching_factor: int):
        self.branching_factor = branching_factor
        self.keys: List[Any] = []

    @abstractmethod
    def insert(self, key: Any, value: Any) -> Optional["Node"]:
        """
        Inserta (key, value) en el subárbol.
        Retorna el nuevo hermano derecho si este nodo se partió, o None.
        """

    @abstractmethod
    def first_leaf_key(self) -> Any:
        """Menor clave alcanzable desde este subárbol."""

    @abstractmethod
    def split(self) -> "Node":
        """Deja la mitad izquierda en self y retorna la mitad derecha."""

    @abstractmethod
    def is_overflow(self) -> bool:
        ...

    @abstractmethod
    def first_child(self) -> "LeafNode":
        """Hoja más a la izquierda del subárbol."""

    def __str__(self) -> str:
        return str(self.keys)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.keys!r})"


class LeafNode(Node):
    def __init__(self, branching_factor: int):
        super().__init__(branching_factor)
        self.values: List[Any] = []
        # enlaces de recorrido, no de propiedad
        self.next: Optional["LeafNode"] = None
        self.previous: Optional["LeafNode"] = None

    def first_leaf_key(self) -> Any:
        return self.keys[0]

    def first_child(self) -> "LeafNode":
        return self

    def is_overflow(self) -> bool:
        return len(self.keys) >= self.branching_factor

    def insert(self, key: Any, value: Any) -> Optional["LeafNode"]:
        # antes de la primera clave estrictamente mayor: los duplicados
        # quedan después de sus iguales, en orden de llegada
        idx = bisect_right(self.keys, key)
        self.keys.insert(idx, key)
        self.values.insert(idx, value)
        if self.is_overflow():
            return self.split()
        return None

    def split(self) -> "LeafNode":
        median = (len(self.keys) + 1) // 2
        sib = LeafNode(self.branching_factor)
        sib.keys = self.keys[median:]
        sib.values = self.values[median:]
        del self.keys[median:]
        del self.values[median:]

        # empalmar sib justo después de self en la cadena de hojas
        sib.next = self.next
        if self.next is not None:
            self.next.previous = sib
        self.next = sib
        sib.previous = self
        return sib

    def entries(self):
        return zip(self.keys, self.values)


class InternalNode(Node):
    def __init__(self, branching_factor: int, keys: Optional[List[Any]] = None,
                 children: Optional[List[Node]] = None):
        super().__init__(branching_factor)
        self.keys = list(keys) if keys else []
        self.children: List[Node] = list(children) if children else []

    def first_leaf_key(self) -> Any:
        return self.children[0].first_leaf_key()

    def first_child(self) -> LeafNode:
        return self.children[0].first_child()

    def is_overflow(self) -> bool:
        return len(self.children) > self.branching_factor

    def child_index(self, key: Any) -> int:
        """
        Índice del hijo que cubre key.
        Coincidencia exacta con un separador -> hijo a su derecha;
        si no, el punto de inserción.
        """
        return bisect_right(self.keys, key)

    def insert(self, key: Any, value: Any) -> Optional["InternalNode"]:
        ind = self.child_index(key)
        sib = self.children[ind].insert(key, value)

        if sib is not None:
            # el hermano siempre va justo después del hijo original
            self.keys.insert(ind, sib.first_leaf_key())
            self.children.insert(ind + 1, sib)

        if self.is_overflow():
            return self.split()
        return None

    def split(self) -> "InternalNode":
        # el separador de la mediana sube al padre (no queda en ninguna mitad)
        median = len(self.keys) // 2
        sib = InternalNode(
            self.branching_factor,
            keys=self.keys[median + 1:],
            children=self.children[median + 1:],
        )
        del self.keys[median:]
        del self.children[median + 1:]
        return sib
