# src/bptree_index/io.py
from pathlib import Path
from typing import Union

import pandas as pd

from bptree_index.db.bptree import BPTree

LEAF_COLUMNS = ["leaf", "position", "key", "value"]


def _ensure_parent(path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)


def leaves_to_dataframe(tree: BPTree) -> pd.DataFrame:
    """
    Tabla de la cadena de hojas, en orden:
      - leaf: índice de la hoja (0 = más a la izquierda)
      - position: posición dentro de la hoja
      - key, value
    """
    rows = []
    for i, leaf in enumerate(tree.leaves()):
        for pos, (k, v) in enumerate(leaf.entries()):
            rows.append({"leaf": i, "position": pos, "key": k, "value": v})
    return pd.DataFrame(rows, columns=LEAF_COLUMNS)


def export_leaves_csv(tree: BPTree, path: Union[str, Path], compress: bool = False) -> Path:
    """
    Escribe la cadena de hojas como CSV (gzip si compress o si path termina en .gz).
    Solo exporta: no hay lectura de vuelta a un árbol.
    Devuelve la ruta escrita.
    """
    p = Path(path)
    if compress and p.suffix != ".gz":
        p = p.with_name(p.name + ".gz")
    _ensure_parent(p)
    df = leaves_to_dataframe(tree)
    if p.suffix == ".gz":
        df.to_csv(p, index=False, compression="gzip")
    else:
        df.to_csv(p, index=False)
    return p
