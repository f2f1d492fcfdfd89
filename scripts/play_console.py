#!/usr/bin/env python3
"""Play Hnefatafl at the console (two humans), with optional JSON game log & replay."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from hnefatafl import EngineConfig, HnefataflEngine, configure_logging, load_config
from hnefatafl.core import STANDARD_BOARD, GameStatus, Move, Player, position_to_layout
from hnefatafl.notation import coord_from_string, format_move

logger = logging.getLogger("scripts.play_console")


def format_board(engine: HnefataflEngine) -> str:
    state = engine.get_state()
    size = len(state.position)
    rows = position_to_layout(state.position)
    lines = []
    for y, row in enumerate(rows):
        lines.append(f"{size - y:>2} " + " ".join(row.replace(" ", ".")))
    files = " ".join(chr(ord("A") + x) for x in range(size))
    lines.append(f"   {files}")
    return "\n".join(lines)


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, ensure_ascii=False, indent=2))
    print(f"Game log written to {path}")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    metadata = data.get("metadata", {})
    engine = HnefataflEngine(
        metadata.get("layout") or STANDARD_BOARD,
        first_player=Player(metadata.get("first_player", Player.ATTACKER.value)),
    )
    logger.info("Replaying %d moves from %s", len(data.get("moves", [])), log_path)
    moves: List[str] = data.get("moves", [])
    if verbose:
        print("Replaying game.")
        print(format_board(engine))
    for move_text in moves:
        result = engine.apply_move(move_text)
        if not result.success:
            raise ValueError(f"Logged move {move_text!r} is not legal: {result.error}")
        if verbose:
            print(move_text)
            print(format_board(engine))
    state = engine.get_state()
    summary = {
        "status": state.status.value,
        "moves": len(moves),
        "layout": position_to_layout(state.position),
        "captured": {"attacker": state.captured.attacker, "defender": state.captured.defender},
    }
    if verbose:
        print(f"Result: {summary['status']}")
    return summary


def play_interactive(config: EngineConfig, log_path: Optional[Path]) -> None:
    engine = HnefataflEngine(config.layout, first_player=config.first_player)
    size = engine.size
    while engine.get_state().status == GameStatus.IN_PROGRESS:
        state = engine.get_state()
        print(format_board(engine))
        raw = input(f"{state.current_player.value} to move (e.g. D11-D9, '?A4' for options, q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            break
        if raw.startswith("?"):
            origin = coord_from_string(raw[1:], size)
            if origin is None:
                print("Unknown square.")
                continue
            for option in engine.legal_moves(origin):
                print("  " + format_move(Move(origin, option.to, option.captures), size))
            continue
        result = engine.apply_move(raw)
        if not result.success:
            print(f"Rejected: {result.error}")

    state = engine.get_state()
    print(format_board(engine))
    print(f"Status: {state.status.value}")
    if log_path is not None:
        save_log(
            {
                "metadata": {"layout": list(config.layout), "first_player": config.first_player.value},
                "moves": state.move_history,
                "status": state.status.value,
            },
            log_path,
        )


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/standard.yaml")
    parser.add_argument("--log", type=str, help="Write the finished game to this JSON file.")
    parser.add_argument("--replay", type=str, help="Replay a JSON game log instead of playing.")
    parser.add_argument("--log-level", type=str)
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(args.log_level or config.log_level)

    if args.replay:
        replay_logged_game(Path(args.replay))
        return
    try:
        play_interactive(config, Path(args.log) if args.log else None)
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(0)


if __name__ == "__main__":
    main()
