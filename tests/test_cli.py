# tests/test_cli.py
"""End-to-end tests for the snow-gsp-reduce entry point."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd

from snow_gsp.cli import main
from snow_gsp.io import load_npz, save_npz


def test_cli_reduces_and_writes_node_table(tmp_path: Path, soho_graph_with_fragment, capsys) -> None:
    G = soho_graph_with_fragment
    src = tmp_path / "snow.npz"
    x = np.zeros(G.N); x[5] = 1.0
    save_npz(str(src), G, x, np.arange(G.N, dtype=float))

    out = tmp_path / "out" / "reduced.npz"
    csv = tmp_path / "out" / "nodes.csv"
    rc = main([str(src), "--out", str(out), "--nodes-csv", str(csv), "--log-level", "WARNING"])

    assert rc == 0
    assert "Saved:" in capsys.readouterr().out
    G_red, x_red, b_red = load_npz(str(out))
    assert G_red.N == 3
    np.testing.assert_array_equal(x_red, [0, 0, 1])

    df = pd.read_csv(csv)
    assert df["original_node"].tolist() == [3, 4, 5]
    assert df["role"].tolist() == ["cholera", "cholera", "pump"]


def test_cli_reports_failure(tmp_path: Path, graph_factory) -> None:
    G = graph_factory(3, [(0, 1, 1.0)], idx_cholera=[], idx_pump=[])
    src = tmp_path / "empty.npz"
    save_npz(str(src), G, np.zeros(3), np.zeros(3))
    rc = main([str(src), "--out", str(tmp_path / "never.npz")])
    assert rc == 1
    assert not (tmp_path / "never.npz").exists()


def test_cli_missing_input(tmp_path: Path) -> None:
    assert main([str(tmp_path / "nope.npz"), "--out", str(tmp_path / "o.npz")]) == 1


def test_cli_corrupt_inputs_fail_cleanly(tmp_path: Path) -> None:
    bad_npz = tmp_path / "bad.npz"
    bad_npz.write_bytes(b"not a numpy archive at all")
    bad_zip = tmp_path / "badzip.npz"
    bad_zip.write_bytes(b"PK\x03\x04" + b"\x00" * 40)
    bad_mat = tmp_path / "bad.mat"
    bad_mat.write_bytes(b"garbage!" * 20)
    for src in (bad_npz, bad_zip, bad_mat):
        assert main([str(src), "--out", str(tmp_path / "o.npz")]) == 1
