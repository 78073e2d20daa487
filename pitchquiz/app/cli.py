from __future__ import annotations

"""CLI for PitchQuiz: inspect presets and launch the quiz window."""

import argparse
import sys
from typing import Any, Dict

from pydantic import ValidationError

from .. import __version__
from ..config.config import load_config, quiz_policy_from_config, resolve_quiz_params, validate_config
from ..session.policy import QuizPolicy
from ..util.randomness import make_rng, seed_if_needed
from .presets import QUIZ_PRESETS


def _policy_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {
        "session_duration": args.duration,
        "advance_delays": {"correct": args.correct_delay, "incorrect": args.incorrect_delay},
    }
    if args.auto_replay is not None:
        overrides["auto_replay_on_miss"] = bool(args.auto_replay)
    if args.auto_play is not None:
        overrides["auto_play_next"] = bool(args.auto_play)
    return overrides


def _launch(cfg: Dict[str, Any], policy: QuizPolicy, **kwargs: Any) -> None:
    # tkinter is only imported once a window is actually needed
    from .gui import run_gui

    run_gui(cfg, policy, **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pitchquiz", description="Absolute pitch ear-training quiz")
    p.add_argument("--version", action="version", version=f"pitchquiz {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list-presets")

    sp = sub.add_parser("show-params")
    sp.add_argument("--config", default=None)
    sp.add_argument("--preset", default=None)

    rp = sub.add_parser("run")
    rp.add_argument("--config", default=None, help="Path to YAML config")
    rp.add_argument("--preset", default=None, choices=sorted(QUIZ_PRESETS))
    rp.add_argument("--duration", type=float, default=None, help="Session length in seconds")
    rp.add_argument("--correct-delay", dest="correct_delay", type=float, default=None)
    rp.add_argument("--incorrect-delay", dest="incorrect_delay", type=float, default=None)
    rp.add_argument("--auto-replay", dest="auto_replay", action="store_true", help="Replay the note after a miss")
    rp.add_argument("--no-auto-replay", dest="auto_replay", action="store_false")
    rp.add_argument("--auto-play", dest="auto_play", action="store_true", help="Play each new note immediately")
    rp.add_argument("--no-auto-play", dest="auto_play", action="store_false")
    rp.set_defaults(auto_replay=None, auto_play=None)
    rp.add_argument("--no-audio", dest="audio", action="store_false", help="Run without a synthesizer")
    rp.add_argument("--explain", action="store_true")
    return p


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.cmd == "list-presets":
        for name, params in QUIZ_PRESETS.items():
            print(f"{name}: {params}")
        return 0

    if args.cmd == "show-params":
        cfg = validate_config(load_config(args.config))
        if args.preset is not None and args.preset not in QUIZ_PRESETS:
            print(f"ERROR: Unknown preset '{args.preset}'", file=sys.stderr)
            return 2
        params = resolve_quiz_params(cfg, args.preset)
        print(params)
        return 0

    if args.cmd == "run":
        seed = seed_if_needed()
        if args.explain:
            from .explain import enable as explain_enable
            explain_enable(True)
        cfg = validate_config(load_config(args.config))
        if not args.audio:
            cfg["audio"]["enabled"] = False

        try:
            policy = quiz_policy_from_config(cfg, args.preset, _policy_overrides(args))
        except ValidationError as e:
            print(f"ERROR: Invalid quiz settings:\n{e}", file=sys.stderr)
            return 2

        from ..audio.playback import make_note_player_from_config

        player = make_note_player_from_config(cfg)
        print(f"Starting PitchQuiz ({policy.session_policy}).")
        _launch(cfg, policy, player=player, rng=make_rng(seed))
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
