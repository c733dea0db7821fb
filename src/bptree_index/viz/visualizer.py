# src/bptree_index/viz/visualizer.py
"""
Visualizador sencillo que usa networkx + matplotlib para dibujar la jerarquía de nodos
del B+Tree y la cadena de hojas.
Si no están instalados, lanza ImportError al importarlo (el CLI lo manejará).
"""
from collections import deque

import networkx as nx
import matplotlib.pyplot as plt

from bptree_index.db.nodes import InternalNode


def tree_to_networkx(tree):
    """
    DiGraph con un nodo por nodo del árbol (id = orden BFS).
    Atributos de nodo: label (claves), level (raíz = 0), leaf (bool).
    Aristas: padre -> hijo con kind="child", hoja -> siguiente con kind="next".
    """
    G = nx.DiGraph()
    ids = {}
    queue = deque([(tree.root, None, 0)])
    while queue:
        node, parent_id, level = queue.popleft()
        nid = len(ids)
        ids[id(node)] = nid
        G.add_node(nid, label=str(node), level=level, leaf=not isinstance(node, InternalNode))
        if parent_id is not None:
            G.add_edge(parent_id, nid, kind="child")
        if isinstance(node, InternalNode):
            for child in node.children:
                queue.append((child, nid, level + 1))

    for leaf in tree.leaves():
        if leaf.next is not None:
            G.add_edge(ids[id(leaf)], ids[id(leaf.next)], kind="next")
    return G


def _layered_positions(G):
    levels = {}
    for n, data in G.nodes(data=True):
        levels.setdefault(data["level"], []).append(n)
    pos = {}
    for level, nodes in levels.items():
        nodes.sort()
        width = len(nodes)
        for i, n in enumerate(nodes):
            pos[n] = ((i + 1) / (width + 1), -level)
    return pos


def visualize_tree(tree, title="B+Tree", show_chain=True):
    G = tree_to_networkx(tree)
    pos = _layered_positions(G)

    plt.figure(figsize=(10, 6))
    child_edges = [(u, v) for u, v, d in G.edges(data=True) if d["kind"] == "child"]
    chain_edges = [(u, v) for u, v, d in G.edges(data=True) if d["kind"] == "next"]

    leaf_nodes = [n for n, d in G.nodes(data=True) if d["leaf"]]
    internal_nodes = [n for n, d in G.nodes(data=True) if not d["leaf"]]
    nx.draw_networkx_nodes(G, pos, nodelist=internal_nodes, node_shape="s", node_size=600, node_color="lightsteelblue")
    nx.draw_networkx_nodes(G, pos, nodelist=leaf_nodes, node_shape="s", node_size=600, node_color="lightgreen")
    nx.draw_networkx_edges(G, pos, edgelist=child_edges, width=1.0, arrows=False)
    if show_chain:
        nx.draw_networkx_edges(G, pos, edgelist=chain_edges, width=1.0, style="dashed",
                               edge_color="gray", connectionstyle="arc3,rad=0.2")
    # etiquetas pequeñas si el árbol es grande
    font = 8 if G.number_of_nodes() < 50 else 5
    nx.draw_networkx_labels(G, pos, labels=nx.get_node_attributes(G, "label"), font_size=font)

    plt.title(title)
    plt.axis('off')
    plt.show()
