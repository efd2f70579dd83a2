"""Helpers for raising Typer usage errors."""

from __future__ import annotations

from typing import Any, NoReturn, Optional

import typer


def bad_parameter(
    message: str,
    *,
    ctx: Optional[typer.Context] = None,
    param_hint: Optional[str] = None,
    cause: Optional[BaseException] = None,
) -> NoReturn:
    """Raise :class:`typer.BadParameter` chained to ``cause``.

    Library exceptions (shape mismatches, invalid ``alpha``) are turned into
    usage errors so the CLI exits with status 2 and a readable message
    instead of a traceback.
    """

    kwargs: dict[str, Any] = {}
    if ctx is not None:
        kwargs["ctx"] = ctx
    if param_hint is not None:
        kwargs["param_hint"] = param_hint
    raise typer.BadParameter(message, **kwargs) from cause
