import logging

import numpy as np
import pytest

from wfoverlap.io import load_waveform, save_limits, save_overlap
from wfoverlap.types import OverlapAreas, WaveformLimits
from wfoverlap.utils.logging import get_logger


def test_types():
    limits = WaveformLimits(lower=np.array([1.0, 0.0]), upper=np.array([3.0, 0.0]))
    lower, upper = limits
    np.testing.assert_array_equal(limits.width, [2.0, 0.0])
    areas = OverlapAreas(
        intersection=np.array([1.0, 0.0]),
        area1=np.array([2.0, 0.0]),
        area2=np.array([3.0, 0.0]),
    )
    np.testing.assert_array_equal(areas.union, [4.0, 0.0])
    assert areas.degenerate.tolist() == [False, True]


def test_load_waveform_csv_single_row(tmp_path):
    p = tmp_path / "wf.csv"
    p.write_text("1,2,3\n")
    data = load_waveform(p)
    assert data.shape == (1, 3)


def test_load_waveform_npy(tmp_path):
    p = tmp_path / "wf.npy"
    np.save(p, np.arange(6.0).reshape(2, 3))
    np.testing.assert_array_equal(load_waveform(p), np.arange(6.0).reshape(2, 3))


def test_load_waveform_unknown_suffix(tmp_path):
    p = tmp_path / "wf.txt"
    p.write_text("1 2 3")
    with pytest.raises(ValueError):
        load_waveform(p)


def test_save_outputs(tmp_path):
    out = save_overlap(tmp_path / "o.csv", np.array([0.5, np.nan]))
    values = np.loadtxt(out, delimiter=",")
    assert values[0] == 0.5
    assert np.isnan(values[1])

    out = save_overlap(tmp_path / "o.npy", np.array([1.0]))
    np.testing.assert_array_equal(np.load(out), [1.0])

    archive = save_limits(tmp_path / "l.npz", WaveformLimits(np.zeros((1, 2)), np.ones((1, 2))))
    with np.load(archive) as data:
        np.testing.assert_array_equal(data["upper"], np.ones((1, 2)))


def test_logging():
    logger = get_logger("test")
    logger2 = get_logger("test", level="debug")
    assert logger is logger2
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    logger.debug("debug message")
