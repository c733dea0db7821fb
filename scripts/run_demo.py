# scripts/run_demo.py
"""
Demo del B+Tree: inserta claves elegidas al azar de un conjunto pequeño
(cada clave con ella misma como valor), imprime el árbol y hace un range search.
Uso (ejemplo, desde la raíz del proyecto):
  python scripts/run_demo.py
  python scripts/run_demo.py --branching-factor 3 --inserts 50 --seed 0 --show-steps
  python scripts/run_demo.py --keys 1 2 3 4 5 --query 3 --comparator "<=" --export results/leaves.csv
"""
from pathlib import Path
import argparse
import random
import numpy as np

try:
    from bptree_index.db.bptree import BPTree
except Exception as e:
    print("ERROR: no se pudo importar bptree_index. Ejecuta desde la raíz del proyecto o instala el paquete (pip install -e .).")
    raise

from bptree_index.utils import check_invariants, tree_stats


def main():
    p = argparse.ArgumentParser(description="Demo de inserciones aleatorias en el B+Tree")
    p.add_argument("--branching-factor", type=int, default=4)
    p.add_argument("--keys", type=float, nargs="+", default=[0.0, 0.5, 0.2, 0.8])
    p.add_argument("--inserts", type=int, default=500)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--show-steps", action="store_true")
    p.add_argument("--query", type=float, default=0.2)
    p.add_argument("--comparator", default=">=")
    p.add_argument("--export", help="CSV donde guardar la cadena de hojas (opcional)")
    args = p.parse_args()

    if args.seed is not None:
        random.seed(int(args.seed))
        np.random.seed(int(args.seed))

    keys = np.asarray(args.keys, dtype=float)
    picks = np.random.choice(keys, size=args.inserts)

    tree = BPTree(args.branching_factor)
    inserted = []
    for j in picks:
        j = float(j)
        inserted.append(j)
        tree.insert(j, j)
        if args.show_steps:
            print(j)
            print("\n\nTree structure:\n" + tree.debug_string())

    if not args.show_steps:
        print("Tree structure:\n" + tree.debug_string())

    filtered = tree.range_search(args.query, args.comparator)
    print("Filtered values:", filtered)

    # comparar contra la lista plana de lo insertado
    expected = sorted(v for v in inserted if {
        "<=": v <= args.query, "==": v == args.query, ">=": v >= args.query
    }.get(args.comparator, False))
    if filtered != expected:
        print("Warning: range search no coincide con la lista insertada")

    stats = tree_stats(tree)
    print("Stats:", stats)
    problems = check_invariants(tree)
    if problems:
        print("Warning: invariantes violados:", problems)

    if args.export:
        try:
            from bptree_index.io import export_leaves_csv
        except Exception:
            print("AVISO: pandas no instalado. No se exportará CSV.")
            return 0
        out = export_leaves_csv(tree, Path(args.export))
        print("Hojas exportadas a", out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
