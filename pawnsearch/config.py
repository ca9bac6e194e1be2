from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from pawnsearch.engine.movegen import Variant


DEFAULT_DEPTH = 3
MAX_DEPTH = 8
ENV_PREFIX = "PAWNSEARCH_"


@dataclass(frozen=True)
class EngineConfig:
    default_depth: int = DEFAULT_DEPTH
    variant: Variant = Variant.IMPROVED
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000


def load_config(env: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """Build an EngineConfig from ``PAWNSEARCH_*`` environment variables.

    Recognised keys: ``PAWNSEARCH_DEPTH``, ``PAWNSEARCH_VARIANT``,
    ``PAWNSEARCH_LOG_LEVEL``, ``PAWNSEARCH_HOST``, ``PAWNSEARCH_PORT``.
    Missing keys keep the dataclass defaults.

    Raises:
        ValueError: If a value cannot be parsed (non-integer depth/port,
            non-positive depth, unknown variant).
    """
    if env is None:
        env = os.environ
    cfg = EngineConfig()

    depth = env.get(ENV_PREFIX + "DEPTH")
    if depth is not None:
        try:
            d = int(depth)
        except ValueError as e:
            raise ValueError(f"invalid {ENV_PREFIX}DEPTH: {depth!r}") from e
        if not 1 <= d <= MAX_DEPTH:
            raise ValueError(f"{ENV_PREFIX}DEPTH must be between 1 and {MAX_DEPTH}")
        cfg = replace(cfg, default_depth=d)

    variant = env.get(ENV_PREFIX + "VARIANT")
    if variant is not None:
        try:
            cfg = replace(cfg, variant=Variant(variant.strip().lower()))
        except ValueError as e:
            raise ValueError(f"invalid {ENV_PREFIX}VARIANT: {variant!r}") from e

    level = env.get(ENV_PREFIX + "LOG_LEVEL")
    if level:
        cfg = replace(cfg, log_level=level.strip().upper())

    host = env.get(ENV_PREFIX + "HOST")
    if host:
        cfg = replace(cfg, host=host)

    port = env.get(ENV_PREFIX + "PORT")
    if port is not None:
        try:
            cfg = replace(cfg, port=int(port))
        except ValueError as e:
            raise ValueError(f"invalid {ENV_PREFIX}PORT: {port!r}") from e
    return cfg
