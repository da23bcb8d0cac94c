"""
Console Play Mode
=================

Play Yorinde in a terminal: roll or enter dice, check categories, undo.
The session is loaded from and saved to a JSON state file.

Commands:
    r            Roll the free dice (rolling mode)
    d 3 3 5      Enter dice values manually
    s N          Score the roll in category N (1-13)
    u            Undo the last scoring
    n            New game
    m            Switch between rolling and manual mode
    l            Switch language
    h            Show high scores
    q            Save and quit

Usage:
    python -m tools.play_cli [--seed SEED] [--state PATH] [--name NAME] [--manual]
"""

from __future__ import annotations

import argparse
import sys
from typing import List

from yorinde_core.config_loader import load_config
from yorinde_core.dice import DiceRoller
from yorinde_core.engine import ScoreEngine
from yorinde_core.labels import category_name
from yorinde_core.persistence import load_state, save_state


def render_board(engine: ScoreEngine) -> List[str]:
    """Text lines showing the roll, the categories and the running total."""
    lines = []
    dice = " ".join(str(v) if v is not None else "." for v in engine.rolled_dice)
    mode = "rolling" if engine.rolling_mode else "manual"
    lines.append(f"{engine.player_name} [{mode}, {engine.current_locale}]  Dice: {dice}")

    for i, points in enumerate(engine.points):
        name = category_name(engine.current_locale, i, engine.config)
        if points is None:
            preview = engine.preview_points(i) if engine.rolled_dice_count else None
            value = f"({preview})" if preview is not None else ""
        else:
            value = str(points)
        lines.append(f"  {i + 1:2d}. {name:<18} {value}")
        if i == engine.config.num_face_categories - 1:
            if engine.extra_points_left_mode:
                lines.append(f"      Bonus in {engine.points_to_bonus()}")
            lines.append("      " + "-" * 22)

    lines.append(f"  {engine.summarize_points()}")
    if engine.current_error:
        prefix = "!" if engine.current_error_is_only_warning else ">"
        lines.append(f"{prefix} {engine.current_error}")
    return lines


def render_highscores(engine: ScoreEngine) -> List[str]:
    if len(engine.highscores) == 0:
        return ["No high scores yet."]
    return [
        f"  {rank + 1:2d}. {entry.total:4d}  {entry.timestamp:%Y-%m-%d %H:%M}"
        for rank, entry in enumerate(engine.highscores)
    ]


def handle_command(engine: ScoreEngine, roller: DiceRoller, line: str) -> bool:
    """
    Apply one console command to the engine.

    Args:
        engine: The session.
        roller: Randomizer used by the roll command.
        line: Raw input line.

    Returns:
        False when the player quits.
    """
    parts = line.split()
    if not parts:
        return True

    cmd, args = parts[0].lower(), parts[1:]

    if cmd == "q":
        return False

    engine.unset_error()

    if cmd == "r":
        if not engine.rolling_mode:
            engine.set_error("Rolling is off (press m to switch)", True)
        else:
            engine.roll(roller)
    elif cmd == "d":
        for arg in args:
            if not arg.isdigit() or not 1 <= int(arg) <= engine.config.dice.faces:
                engine.set_error(f"Not a die value: {arg}", True)
                break
            if not engine.add_rolled_dice(int(arg)):
                break
    elif cmd == "s":
        if len(args) != 1 or not args[0].isdigit() or not 1 <= int(args[0]) <= len(engine.points):
            engine.set_error(f"Choose a category between 1 and {len(engine.points)}", True)
        else:
            engine.set_points(int(args[0]) - 1)
    elif cmd == "u":
        engine.undo()
    elif cmd == "n":
        engine.new_game()
    elif cmd == "m":
        engine.rolling_mode = not engine.rolling_mode
    elif cmd == "l":
        engine.toggle_locale()
    elif cmd == "h":
        for text in render_highscores(engine):
            print(text)
    else:
        engine.set_error(f"Unknown command: {cmd}", True)

    return True


def main():
    parser = argparse.ArgumentParser(description="Play Yorinde in the terminal")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for rolling")
    parser.add_argument("--state", type=str, default="yorinde_state.json",
                        help="State file (default: yorinde_state.json)")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--name", type=str, default=None, help="Player name")
    parser.add_argument("--manual", action="store_true", help="Enter dice by hand")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        engine = load_state(args.state, config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if args.name:
        engine.player_name = args.name
    if args.manual:
        engine.rolling_mode = False

    roller = DiceRoller(config, seed=args.seed)

    print("=== Yorinde ===")
    print(__doc__.split("Usage:")[0].split("Commands:")[1].rstrip())
    print()

    running = True
    while running:
        for text in render_board(engine):
            print(text)
        try:
            line = input("> ")
        except EOFError:
            break
        running = handle_command(engine, roller, line)

    save_state(engine, args.state)
    print(f"\nFinal: {engine.summarize_points()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
