# src/bptree_index/cli.py
import argparse
import os
import random

from bptree_index.db.bptree import BPTree, COMPARATORS
from bptree_index.io import export_leaves_csv
from bptree_index.utils import check_invariants, tree_stats

# visualización opcional
try:
    from bptree_index.viz.visualizer import visualize_tree
    HAS_VIS = True
except Exception:
    HAS_VIS = False

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
DEFAULT_EXPORT_PATH = os.path.join(PROJECT_ROOT, "data", "processed", "bptree_leaves.csv")
DEFAULT_BRANCHING_FACTOR = 4
DEFAULT_KEYS = [0.0, 0.5, 0.2, 0.8]
DEFAULT_INSERTS = 500


def build_random_tree(branching_factor: int, inserts: int, keys, seed=None, show_steps: bool = False) -> BPTree:
    """
    Inserta `inserts` claves elegidas al azar de `keys` (valor = clave).
    Con show_steps imprime el árbol después de cada inserción.
    """
    rnd = random.Random(seed)
    tree = BPTree(branching_factor)
    for _ in range(inserts):
        k = rnd.choice(keys)
        tree.insert(k, k)
        if show_steps:
            print(k)
            print("\nTree structure:\n" + tree.debug_string())
    return tree


def print_summary(tree: BPTree):
    stats = tree_stats(tree)
    print("Branching factor:", stats["branching_factor"])
    print("Size:", stats["size"], "| Height:", stats["height"],
          "| Leaves:", stats["leaves"], "| Internal:", stats["internal_nodes"])
    problems = check_invariants(tree)
    if problems:
        print("Warning: invariantes violados:", problems)


def cmd_demo(args):
    tree = build_random_tree(args.branching_factor, args.inserts, args.keys,
                             seed=args.seed, show_steps=args.show_steps)

    print("=== RESULTADO ===")
    print_summary(tree)
    if not args.show_steps:
        print("Tree structure:\n" + tree.debug_string())
    filtered = tree.range_search(args.query, args.comparator)
    print(f"Filtered values ({args.comparator} {args.query}):", filtered)

    if args.plot:
        if not HAS_VIS:
            print("Visualización no disponible. Instala networkx y matplotlib.")
        else:
            visualize_tree(tree, title=f"B+Tree (b={args.branching_factor}, n={tree.size()})")
    return 0


def cmd_query(args):
    tree = BPTree(args.branching_factor)
    for k in args.keys:
        tree.insert(k, k)

    print("=== RESULTADO ===")
    if args.get is not None:
        print("get", args.get, "->", tree.get(args.get))
    if args.range is not None:
        if args.comparator not in COMPARATORS:
            print("AVISO: comparador desconocido, el resultado será vacío:", args.comparator)
        print(f"range_search {args.comparator} {args.range} ->", tree.range_search(args.range, args.comparator))
    return 0


def cmd_export(args):
    tree = build_random_tree(args.branching_factor, args.inserts, args.keys, seed=args.seed)
    out = export_leaves_csv(tree, args.out, compress=args.compress)
    print("Hojas exportadas a", out, "| entradas:", tree.size())
    return 0


def main(argv=None):
    p = argparse.ArgumentParser(prog="bptree_index")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_tree_args(sp):
        sp.add_argument("--branching-factor", "-b", type=int, default=DEFAULT_BRANCHING_FACTOR,
                        help="Factor de ramificación (> 2)")
        sp.add_argument("--keys", type=float, nargs="+", default=DEFAULT_KEYS,
                        help="Claves a insertar (el valor es la propia clave)")

    pdemo = sub.add_parser("demo", help="Inserciones aleatorias e impresión del árbol")
    add_tree_args(pdemo)
    pdemo.add_argument("--inserts", "-n", type=int, default=DEFAULT_INSERTS)
    pdemo.add_argument("--seed", type=int, default=None)
    pdemo.add_argument("--show-steps", action="store_true", help="Imprimir el árbol tras cada inserción")
    pdemo.add_argument("--comparator", default=">=", help="<=, == o >=")
    pdemo.add_argument("--query", type=float, default=0.2, help="Clave para el range search final")
    pdemo.add_argument("--plot", action="store_true", help="Dibujar el árbol (si hay dependencias)")

    pq = sub.add_parser("query", help="Construir el árbol con --keys y hacer una consulta")
    add_tree_args(pq)
    pq.add_argument("--get", type=float, help="Clave exacta a buscar")
    pq.add_argument("--range", type=float, help="Clave para range search")
    pq.add_argument("--comparator", default="==", help="<=, == o >=")

    pe = sub.add_parser("export", help="Exportar la cadena de hojas a CSV")
    add_tree_args(pe)
    pe.add_argument("--inserts", "-n", type=int, default=DEFAULT_INSERTS)
    pe.add_argument("--seed", type=int, default=None)
    pe.add_argument("--out", default=DEFAULT_EXPORT_PATH, help="Ruta del CSV de salida")
    pe.add_argument("--compress", action="store_true", help="Guardar como .csv.gz")

    args = p.parse_args(argv)
    try:
        if args.cmd == "demo":
            return cmd_demo(args)
        if args.cmd == "query":
            return cmd_query(args)
        if args.cmd == "export":
            return cmd_export(args)
    except ValueError as e:
        print("ERROR:", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
