from __future__ import annotations

"""Command line interface for wfoverlap using Typer."""

from pathlib import Path
from typing import Dict, List, Optional

import json
import logging

import numpy as np
import typer
from pydantic import ValidationError

from ._typer import bad_parameter
from .config import Settings, load_settings
from .core import (
    InvalidParameterError,
    ShapeMismatchError,
    UndefinedRatioError,
    compute_limits,
    waveform_overlap,
)
from .io import load_waveform, save_limits, save_overlap
from .utils.logging import get_logger

app = typer.Typer(help="Poisson credible-interval overlap of sampled waveforms")
logger = logging.getLogger(__name__)


def _parse_override_value(raw: str) -> object:
    lower = raw.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    if lower in {"null", "none"}:
        return None
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        pass
    if raw.startswith("[") or raw.startswith("{"):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            raise typer.BadParameter(f"invalid JSON override value: {raw}") from None
    return raw


def _ensure_path(settings: Settings, keys: List[str]) -> None:
    current: object = settings
    for key in keys[:-1]:
        if not hasattr(current, key):
            raise typer.BadParameter(f"unknown configuration key: {'.'.join(keys)}")
        current = getattr(current, key)
    if not hasattr(current, keys[-1]):
        raise typer.BadParameter(f"unknown configuration key: {'.'.join(keys)}")


def _apply_override(data: Dict[str, object], keys: List[str], value: object) -> None:
    target = data
    for key in keys[:-1]:
        existing = target.get(key)
        if not isinstance(existing, dict):
            existing = {}
            target[key] = existing
        target = existing
    target[keys[-1]] = value


def _load(path: Path, param_hint: str) -> np.ndarray:
    try:
        return load_waveform(path)
    except (OSError, ValueError) as exc:
        bad_parameter(f"cannot read waveform {path}: {exc}", param_hint=param_hint, cause=exc)


@app.callback()
def init(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        dir_okay=False,
        file_okay=True,
        exists=False,
        help="Path to a YAML or JSON configuration file.",
    ),
    set_overrides: List[str] = typer.Option(
        [],
        "--set",
        help="Override configuration values using dotted paths, e.g. overlap.alpha=0.1",
    ),
) -> None:
    """Initialise the Typer context with validated settings."""

    if config is not None and not config.exists():
        raise typer.BadParameter(f"configuration file not found: {config}")

    try:
        settings = load_settings(config) if config else Settings()
    except (RuntimeError, TypeError, ValidationError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"failed to load configuration: {exc}") from exc

    if set_overrides:
        data = settings.model_dump()
        for override in set_overrides:
            if "=" not in override:
                raise typer.BadParameter(
                    "overrides must be of the form --set section.key=value"
                )
            key, raw_value = override.split("=", 1)
            if not key:
                raise typer.BadParameter("override key cannot be empty")
            keys = key.split(".")
            _ensure_path(settings, keys)
            _apply_override(data, keys, _parse_override_value(raw_value))
        try:
            settings = Settings.model_validate(data)
        except ValidationError as exc:
            raise typer.BadParameter(f"invalid configuration override: {exc}") from exc

    get_logger("wfoverlap", level=settings.logging.level)
    ctx.obj = settings


@app.command()
def compare(
    ctx: typer.Context,
    wf1: Path = typer.Argument(..., exists=True, dir_okay=False, help="First waveform (.npy or .csv)"),
    wf2: Path = typer.Argument(..., exists=True, dir_okay=False, help="Second waveform (.npy or .csv)"),
    alpha: Optional[float] = typer.Option(None, "--alpha", "-a", help="Significance level in (0, 1)"),
    degenerate: Optional[str] = typer.Option(
        None,
        "--degenerate",
        help="Handling of rows with zero union area: 'nan' or 'raise'",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Print (or save) the overlap of WF1 and WF2, one value per row."""

    cfg: Settings = ctx.obj
    if degenerate is not None and degenerate not in {"nan", "raise"}:
        bad_parameter("must be 'nan' or 'raise'", param_hint="--degenerate")

    a = _load(wf1, "WF1")
    b = _load(wf2, "WF2")
    try:
        overlap = waveform_overlap(a, b, alpha, settings=cfg, degenerate=degenerate)
    except ShapeMismatchError as exc:
        bad_parameter(str(exc), param_hint="WF2", cause=exc)
    except InvalidParameterError as exc:
        bad_parameter(str(exc), cause=exc)
    except UndefinedRatioError as exc:
        typer.secho(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        bad_parameter(str(exc), cause=exc)

    logger.debug("compared %s and %s: %d row(s)", wf1.name, wf2.name, overlap.size)
    if output:
        save_overlap(output, overlap)
        typer.echo(f"saved {overlap.size} overlap value(s) to {output}")
    else:
        for value in overlap:
            typer.echo(f"{value:.6g}")


@app.command()
def limits(
    ctx: typer.Context,
    wf: Path = typer.Argument(..., exists=True, dir_okay=False, help="Waveform (.npy or .csv)"),
    output: Path = typer.Option(..., "--output", "-o", help="Destination .npz archive"),
    alpha: Optional[float] = typer.Option(None, "--alpha", "-a", help="Significance level in (0, 1)"),
) -> None:
    """Write the per-bin credible interval bounds of WF to an archive."""

    cfg: Settings = ctx.obj
    data = _load(wf, "WF")
    try:
        bounds = compute_limits(data, alpha, settings=cfg)
    except InvalidParameterError as exc:
        bad_parameter(str(exc), cause=exc)

    save_limits(output, bounds)
    typer.echo(f"saved limits of shape {bounds.lower.shape} to {output}")


def main() -> None:
    """Execute the Typer application."""

    app()


if __name__ == "__main__":
    main()
