import json

import numpy as np
from typer.testing import CliRunner

from wfoverlap.cli import app


def make_waveforms(tmp_path):
    p1 = tmp_path / "wf1.npy"
    p2 = tmp_path / "wf2.npy"
    np.save(p1, np.array([[5.0, 5.0, 5.0], [0.0, 0.0, 0.0]]))
    np.save(p2, np.array([[5.0, 5.0, 5.0], [100.0, 100.0, 100.0]]))
    return p1, p2


def test_compare_prints_one_value_per_row(tmp_path):
    p1, p2 = make_waveforms(tmp_path)
    runner = CliRunner()
    result = runner.invoke(app, ["compare", str(p1), str(p2)])
    assert result.exit_code == 0, result.output
    assert result.output.split() == ["1", "0"]


def test_compare_writes_output(tmp_path):
    p1, p2 = make_waveforms(tmp_path)
    out = tmp_path / "overlap.npy"
    runner = CliRunner()
    result = runner.invoke(app, ["compare", str(p1), str(p2), "--alpha", "0.1", "-o", str(out)])
    assert result.exit_code == 0, result.output
    np.testing.assert_array_equal(np.load(out), [1.0, 0.0])


def test_compare_csv_inputs(tmp_path):
    p1 = tmp_path / "a.csv"
    p2 = tmp_path / "b.csv"
    p1.write_text("5,5,5\n")
    p2.write_text("5,5,5\n")
    result = CliRunner().invoke(app, ["compare", str(p1), str(p2)])
    assert result.exit_code == 0, result.output
    assert result.output.split() == ["1"]


def test_compare_shape_mismatch(tmp_path):
    p1 = tmp_path / "a.npy"
    p2 = tmp_path / "b.npy"
    np.save(p1, np.ones((1, 3)))
    np.save(p2, np.ones((1, 4)))
    result = CliRunner().invoke(app, ["compare", str(p1), str(p2)])
    assert result.exit_code == 2


def test_compare_invalid_alpha(tmp_path):
    p1, p2 = make_waveforms(tmp_path)
    result = CliRunner().invoke(app, ["compare", str(p1), str(p2), "--alpha", "1.5"])
    assert result.exit_code == 2


def test_compare_degenerate_policy(tmp_path):
    p = tmp_path / "zeros.npy"
    np.save(p, np.zeros((1, 4)))
    runner = CliRunner()
    result = runner.invoke(app, ["compare", str(p), str(p)])
    assert result.exit_code == 0, result.output
    assert result.output.split() == ["nan"]

    result = runner.invoke(app, ["compare", str(p), str(p), "--degenerate", "raise"])
    assert result.exit_code == 1

    result = runner.invoke(app, ["--set", "overlap.degenerate=raise", "compare", str(p), str(p)])
    assert result.exit_code == 1


def test_config_file_and_overrides(tmp_path):
    p1, p2 = make_waveforms(tmp_path)
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"overlap": {"alpha": 0.2}}))
    runner = CliRunner()
    result = runner.invoke(app, ["--config", str(cfg), "compare", str(p1), str(p2)])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["--set", "overlap.bogus=1", "compare", str(p1), str(p2)])
    assert result.exit_code == 2

    result = runner.invoke(app, ["--set", "overlap.alpha=3", "compare", str(p1), str(p2)])
    assert result.exit_code == 2


def test_limits_command(tmp_path):
    p1, _ = make_waveforms(tmp_path)
    out = tmp_path / "limits.npz"
    result = CliRunner().invoke(app, ["limits", str(p1), "--output", str(out)])
    assert result.exit_code == 0, result.output
    with np.load(out) as data:
        np.testing.assert_array_equal(data["lower"][0], [1.0, 1.0, 1.0])
        np.testing.assert_array_equal(data["upper"][0], [10.0, 10.0, 10.0])
        np.testing.assert_array_equal(data["upper"][1], [0.0, 0.0, 0.0])


def test_compare_rejects_three_dimensional_input(tmp_path):
    p = tmp_path / "cube.npy"
    np.save(p, np.ones((2, 2, 2)))
    result = CliRunner().invoke(app, ["compare", str(p), str(p)])
    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)
