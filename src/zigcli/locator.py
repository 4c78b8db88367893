"""Locate the zig executable."""

from __future__ import annotations

import os
from collections.abc import Mapping

ZIG_ENV_VAR = "ZIG"
DEFAULT_ZIG = "zig"


def resolve(environ: Mapping[str, str] | None = None) -> str:
    """Return the zig executable to launch.

    ``$ZIG`` wins when set and non-empty and is used verbatim. Otherwise the
    bare name ``zig`` is returned and left to the ``PATH`` search performed at
    launch time. Nothing is checked here; a bad value surfaces as a
    :class:`~zigcli.errors.LaunchError` from the executor.
    """
    env = os.environ if environ is None else environ
    override = env.get(ZIG_ENV_VAR)
    if override:
        return override
    return DEFAULT_ZIG
