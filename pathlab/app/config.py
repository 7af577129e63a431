# pathlab/app/config.py
#!/usr/bin/env python3
"""
Viewer settings.

Environment:  PATHLAB_ALGO, PATHLAB_SCENARIO, PATHLAB_SPEED, PATHLAB_LOG_LEVEL
CLI:          --algo=, --scenario=, --speed=, --log-level=   (override env)

Unknown values fall back to the defaults.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from pathlab.app.player import MAX_SPEED, MIN_SPEED
from pathlab.app.scenarios import SCENARIOS
from pathlab.core.finder import ALGORITHMS

logger = logging.getLogger(__name__)

DEFAULT_ALGO = "astar"
DEFAULT_SCENARIO = "default"
DEFAULT_SPEED = 8
DEFAULT_LOG_LEVEL = "INFO"

_ENV_KEYS = {
    "algo": "PATHLAB_ALGO",
    "scenario": "PATHLAB_SCENARIO",
    "speed": "PATHLAB_SPEED",
    "log-level": "PATHLAB_LOG_LEVEL",
}


@dataclass
class ViewerConfig:
    algorithm: str = DEFAULT_ALGO
    scenario: str = DEFAULT_SCENARIO
    steps_per_sec: int = DEFAULT_SPEED
    log_level: str = DEFAULT_LOG_LEVEL


def _raw_settings(argv: Sequence[str], environ: Mapping[str, str]) -> dict:
    raw = {key: environ[env] for key, env in _ENV_KEYS.items() if env in environ}
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, value = arg[2:].split("=", 1)
        if key in _ENV_KEYS:
            raw[key] = value
    return raw


def resolve_config(argv: Optional[Sequence[str]] = None,
                   environ: Optional[Mapping[str, str]] = None) -> ViewerConfig:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ
    raw = _raw_settings(argv, environ)
    cfg = ViewerConfig()

    algo = raw.get("algo", cfg.algorithm).lower()
    if algo in ALGORITHMS:
        cfg.algorithm = algo
    else:
        logger.warning("Unknown algorithm %r, using %r", algo, cfg.algorithm)

    scenario = raw.get("scenario", cfg.scenario)
    if scenario in SCENARIOS:
        cfg.scenario = scenario
    else:
        logger.warning("Unknown scenario %r, using %r", scenario, cfg.scenario)

    if "speed" in raw:
        try:
            cfg.steps_per_sec = max(MIN_SPEED, min(MAX_SPEED, int(raw["speed"])))
        except ValueError:
            logger.warning("Bad speed %r, using %d", raw["speed"], cfg.steps_per_sec)

    level = raw.get("log-level", cfg.log_level).upper()
    if isinstance(logging.getLevelName(level), int):
        cfg.log_level = level
    else:
        logger.warning("Bad log level %r, using %s", level, cfg.log_level)

    return cfg
