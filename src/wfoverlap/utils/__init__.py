"""Support helpers for wfoverlap."""
