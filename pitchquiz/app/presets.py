from __future__ import annotations

"""The two shipped quiz configurations.

A preset is a complete set of QuizPolicy parameters; the YAML ``quiz``
section and CLI flags are layered on top of it.
"""

from copy import deepcopy
from typing import Any, Dict

QUIZ_PRESETS: Dict[str, Dict[str, Any]] = {
    "fixed_duration_counted": {
        "session_policy": "fixed_duration_counted",
        "auto_replay_on_miss": False,
        "auto_play_next": True,
        "advance_delays": {"correct": 1.0, "incorrect": 1.0},
        "session_duration": 30.0,
    },
    "repeat_until_correct": {
        "session_policy": "repeat_until_correct",
        "auto_replay_on_miss": True,
        "auto_play_next": True,
        "advance_delays": {"correct": 1.0, "incorrect": 1.5},
        "session_duration": None,
    },
}

DEFAULT_PRESET = "fixed_duration_counted"


def get_preset(name: str) -> Dict[str, Any]:
    if name not in QUIZ_PRESETS:
        raise KeyError(f"Unknown quiz preset: {name}")
    return deepcopy(QUIZ_PRESETS[name])


def merge_params(base: Dict[str, Any], *layers: Dict[str, Any] | None) -> Dict[str, Any]:
    """Layer parameter dicts left to right; None values do not override.

    ``advance_delays`` is merged key by key so a layer can change one delay.
    """
    params = deepcopy(base)
    for layer in layers:
        for k, v in (layer or {}).items():
            if v is None:
                continue
            if k == "advance_delays" and isinstance(v, dict):
                delays = dict(params.get("advance_delays") or {})
                delays.update({dk: dv for dk, dv in v.items() if dv is not None})
                params[k] = delays
            else:
                params[k] = v
    return params
