"""Tests for the layer-order CLI and the package-level API."""

import json

import networkx as nx
import pytest
from click.testing import CliRunner

from layer_order import OrderConfig, order_graph, order_layers
from layer_order.__main__ import main
from layer_order.ir.graph import RankedGraph

CROSSING_DOC = {
    "edges": [["p", "y"], ["p", "a"], ["a", "x"], ["q", "b"], ["b", "y"]],
    "ranks": {"p": 0, "q": 0, "a": 1, "b": 1, "x": 2, "y": 2},
}


def _run(doc, *args: str):
    runner = CliRunner()
    return runner.invoke(main, list(args), input=json.dumps(doc))


class TestCli:
    def test_chain(self):
        result = _run({"edges": [["a", "b"], ["b", "c"]]})
        assert result.exit_code == 0
        assert result.output == "a\nb\nc\ncrossings: 0\n"

    def test_zero_iterations_keeps_initial_order(self):
        result = _run(CROSSING_DOC, "--iterations", "0")
        assert result.exit_code == 0
        assert result.output == "p q\nb a\ny x\ncrossings: 1\n"

    def test_json_output(self):
        result = _run(CROSSING_DOC, "--json")
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload == {"layers": [["p", "q"], ["a", "b"], ["x", "y"]], "crossings": 0}

    def test_seed_unreached(self):
        doc = {"edges": [["a", "b"], ["x", "y"]], "ranks": {"a": 0, "b": 1, "x": 1, "y": 2}}
        result = _run(doc, "--seed-unreached", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output)["layers"] == [["a"], ["b", "x"], ["y"]]

    def test_reads_file_and_writes_output(self, tmp_path):
        src = tmp_path / "graph.json"
        src.write_text(json.dumps(CROSSING_DOC))
        out = tmp_path / "layers.txt"
        runner = CliRunner()
        result = runner.invoke(main, [str(src), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_text() == "p q\na b\nx y\ncrossings: 0\n"

    def test_negative_iterations(self):
        result = _run(CROSSING_DOC, "-n", "-1")
        assert result.exit_code == 1
        assert "non-negative" in result.output

    def test_missing_rank(self):
        result = _run({"edges": [["a", "b"]], "ranks": {"a": 0}})
        assert result.exit_code == 1
        assert "no rank" in result.output

    def test_empty_graph_prints_nothing(self):
        result = _run({"edges": []})
        assert result.exit_code == 0
        assert result.output == ""

    def test_empty_graph_writes_empty_file(self, tmp_path):
        out = tmp_path / "layers.txt"
        result = _run({"edges": []}, "-o", str(out))
        assert result.exit_code == 0
        assert out.read_text() == ""

    def test_malformed_document(self):
        runner = CliRunner()
        result = runner.invoke(main, [], input="not json")
        assert result.exit_code == 1
        assert "invalid JSON" in result.output


class TestApi:
    def test_order_layers(self):
        rg = RankedGraph.from_edges([(u, v) for u, v in CROSSING_DOC["edges"]], ranks=CROSSING_DOC["ranks"])
        assert order_layers(rg, rg.ranks, 0) == [["p", "q"], ["b", "a"], ["y", "x"]]

    def test_order_graph_derives_ranks(self):
        g: nx.DiGraph = nx.DiGraph([("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")])
        result = order_graph(g)
        assert result.layering == [["a"], ["b", "c"], ["d"]]
        assert result.crossings == 0

    def test_order_graph_with_config(self):
        g: nx.DiGraph = nx.DiGraph([(u, v) for u, v in CROSSING_DOC["edges"]])
        result = order_graph(g, CROSSING_DOC["ranks"], OrderConfig(iterations=0))
        assert result.crossings == 1
        assert result.layering[2] == ["y", "x"]

    def test_order_graph_rejects_negative_rank(self):
        g: nx.DiGraph = nx.DiGraph([("a", "b")])
        with pytest.raises(ValueError):
            order_graph(g, {"a": 0, "b": -1})
