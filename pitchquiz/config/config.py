from __future__ import annotations

"""Configuration loading and validation for PitchQuiz.

This module loads YAML configuration, applies defaults, validates enums and
turns the ``quiz`` section into a :class:`QuizPolicy`.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..app.presets import DEFAULT_PRESET, QUIZ_PRESETS, get_preset, merge_params
from ..session.policy import QuizPolicy
from ..theory.notes import NOTE_COUNT, note_str_to_midi

ALLOWED_BACKENDS = {"fluidsynth"}
DEFAULT_ROOT_NOTE = "C4"
DEFAULT_NOTE_KEYS: List[str] = ["a", "w", "s", "e", "d", "f", "t", "g", "y", "h", "u", "j"]
DEFAULT_PLAY_KEY = "space"
CONFIG_SECTIONS = ("audio", "quiz", "keys", "window")


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Could not parse config file {path}: {e}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"ERROR: Config file {path} must be a mapping of sections, got {type(data).__name__}", file=sys.stderr)
        sys.exit(1)
    return data


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        return _load_yaml(Path(path))
    return _load_yaml(Path(__file__).with_name("defaults.yml"))


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unsupported enum values fall back with a warning; the audio root note
    is resolved to ``audio.root_midi``.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    for section in CONFIG_SECTIONS:
        value = cfg.get(section)
        # a section with every key commented out loads as None
        if value is None:
            value = {}
        elif not isinstance(value, dict):
            print(f"WARNING: Config section '{section}' must be a mapping, using defaults.")
            value = {}
        cfg[section] = value

    audio = cfg["audio"]
    quiz = cfg["quiz"]
    keys = cfg["keys"]
    window = cfg["window"]

    audio.setdefault("enabled", True)
    audio.setdefault("backend", "fluidsynth")
    audio.setdefault("soundfont_path", "./soundfonts/GrandPiano.sf2")
    audio.setdefault("sample_rate", 44100)
    audio.setdefault("gain", 0.5)
    audio.setdefault("root_note", DEFAULT_ROOT_NOTE)
    audio.setdefault("velocity", 100)

    quiz.setdefault("preset", DEFAULT_PRESET)

    keys.setdefault("notes", list(DEFAULT_NOTE_KEYS))
    keys.setdefault("play", DEFAULT_PLAY_KEY)

    window.setdefault("frame_ms", 16)

    # Enum validations
    backend = audio.get("backend")
    if backend not in ALLOWED_BACKENDS:
        print(f"WARNING: Unsupported audio backend '{backend}', falling back to 'fluidsynth'.")
        audio["backend"] = "fluidsynth"

    preset = quiz.get("preset")
    if preset not in QUIZ_PRESETS:
        print(f"WARNING: Unknown quiz preset '{preset}', using '{DEFAULT_PRESET}'.")
        quiz["preset"] = DEFAULT_PRESET

    unknown = sorted(str(k) for k in quiz if k != "preset" and k not in QuizPolicy.model_fields)
    if unknown:
        print(f"WARNING: Ignoring unknown quiz setting(s): {', '.join(unknown)}.")
        for key in unknown:
            quiz.pop(key)

    try:
        audio["root_midi"] = note_str_to_midi(str(audio["root_note"]))
    except ValueError as e:
        print(f"WARNING: {e}; using root note {DEFAULT_ROOT_NOTE}.")
        audio["root_note"] = DEFAULT_ROOT_NOTE
        audio["root_midi"] = note_str_to_midi(DEFAULT_ROOT_NOTE)
    if audio["root_midi"] + NOTE_COUNT - 1 > 127:
        print(f"WARNING: Root note {audio['root_note']} leaves the MIDI range; using {DEFAULT_ROOT_NOTE}.")
        audio["root_note"] = DEFAULT_ROOT_NOTE
        audio["root_midi"] = note_str_to_midi(DEFAULT_ROOT_NOTE)

    note_keys = keys.get("notes")
    if not isinstance(note_keys, list) or len(note_keys) != NOTE_COUNT:
        print(f"WARNING: keys.notes needs exactly {NOTE_COUNT} entries, using defaults.")
        keys["notes"] = list(DEFAULT_NOTE_KEYS)
    keys["notes"] = [str(k) for k in keys["notes"]]

    return cfg


def resolve_quiz_params(
    cfg: Dict[str, Any],
    preset: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Preset → YAML ``quiz`` section → CLI overrides."""
    quiz = dict(cfg.get("quiz", {}))
    name = preset or quiz.pop("preset", DEFAULT_PRESET)
    quiz.pop("preset", None)
    return merge_params(get_preset(name), quiz, overrides)


def quiz_policy_from_config(
    cfg: Dict[str, Any],
    preset: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> QuizPolicy:
    return QuizPolicy.from_params(resolve_quiz_params(cfg, preset, overrides))
