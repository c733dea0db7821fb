# tests/test_io.py
import pandas as pd

from bptree_index.db.bptree import BPTree
from bptree_index.io import LEAF_COLUMNS, export_leaves_csv, leaves_to_dataframe


def sample_tree():
    t = BPTree(4)
    for k in [0.0, 0.5, 0.2, 0.8]:
        t.insert(k, k)
    return t


def test_leaves_to_dataframe():
    df = leaves_to_dataframe(sample_tree())
    assert list(df.columns) == LEAF_COLUMNS
    assert df["leaf"].tolist() == [0, 0, 1, 1]
    assert df["position"].tolist() == [0, 1, 0, 1]
    assert df["key"].tolist() == [0.0, 0.2, 0.5, 0.8]


def test_empty_tree_dataframe():
    df = leaves_to_dataframe(BPTree(3))
    assert list(df.columns) == LEAF_COLUMNS
    assert len(df) == 0


def test_export_csv_creates_parent(tmp_path):
    out = export_leaves_csv(sample_tree(), tmp_path / "nested" / "leaves.csv")
    assert out == tmp_path / "nested" / "leaves.csv"
    df = pd.read_csv(out)
    assert df["value"].tolist() == [0.0, 0.2, 0.5, 0.8]


def test_export_csv_compressed(tmp_path):
    out = export_leaves_csv(sample_tree(), tmp_path / "leaves.csv", compress=True)
    assert out.name == "leaves.csv.gz"
    df = pd.read_csv(out, compression="gzip")
    assert len(df) == 4
