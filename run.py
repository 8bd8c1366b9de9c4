"""delve CLI entry point.

Provides subcommands for generating a dungeon and for running a short
headless simulation against it. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import random
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from delve import __version__
from delve.config import SimulationConfig
from delve.dungeon import BOSS, START, DungeonConfig, DungeonGenerator, find_path, manhattan
from delve.dungeon.tiles import GLYPHS
from delve.exceptions import ConfigError, DelveError
from delve.logging_utils import log
from delve.services.combat_utils import attack
from delve.services.spawn_service import place_player, spawn_adversaries
from delve.services.turn_service import TurnController

# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()
if _COLOR_ENABLED:  # pragma: no cover - environment dependent
    _color_init()

ACTOR_GLYPHS = {"goblin": "g", "archer": "a", "brute": "B"}


def _paint(text: str, color: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    delve dungeon simulation core

    Generate connected room-and-corridor dungeons or run a headless turn
    simulation. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          DELVE_SEED                  Default seed for generate/simulate
          DELVE_LOG_LEVEL             debug | info | warn | error (default: warn)
          DELVE_LOG_JSON              1 to emit JSON log lines
          DELVE_SKIRMISH_MIN_RANGE    Skirmisher retreat threshold (default: 3)
          DELVE_SKIRMISH_MAX_RANGE    Skirmisher approach threshold (default: 5)
          DELVE_USE_STATUS_MODIFIERS  1 to apply buffs/debuffs in attacks
          DELVE_STUN_SKIPS_ACTION     1 to make stunned adversaries lose their action

        Examples:
          # Print a dungeon map for a fixed seed
          python run.py generate --seed 42

          # Dump the grid and room list as JSON
          python run.py generate --seed 42 --json

          # Simulate 30 turns
          python run.py simulate --seed 7 --turns 30

          # Load variables from .env then simulate
          python run.py --env-file .env simulate
        """
    )

    parser = argparse.ArgumentParser(
        prog="delve",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"delve {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="RNG seed (default: env DELVE_SEED or random)")
    gen_parser.add_argument("--width", type=int, default=None, help="Map width in tiles (default: 80)")
    gen_parser.add_argument("--height", type=int, default=None, help="Map height in tiles (default: 25)")
    gen_parser.add_argument("--json", action="store_true", help="Emit grid + rooms as JSON instead of ASCII")
    gen_parser.set_defaults(command="generate")

    sim_parser = subparsers.add_parser(
        "simulate",
        help="Run a headless simulation with an auto-piloted player",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    sim_parser.add_argument("--seed", type=int, default=None, help="RNG seed (default: env DELVE_SEED or random)")
    sim_parser.add_argument("--turns", type=int, default=20, help="Maximum number of turns (default: 20)")
    sim_parser.set_defaults(command="simulate")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def _resolve_seed(args) -> int:
    if getattr(args, "seed", None) is not None:
        return args.seed
    env_seed = os.getenv("DELVE_SEED")
    if env_seed:
        try:
            return int(env_seed)
        except ValueError as exc:
            raise ConfigError(f"DELVE_SEED must be an integer, got {env_seed!r}") from exc
    return random.randint(0, 2**31 - 1)


def render_map(layout, actors=()) -> str:
    """ASCII map with start/boss room centres and actors overlaid."""
    rows = [[GLYPHS[t] for t in row] for row in layout.grid]
    for room in layout.rooms:
        cx, cy = room.center
        if room.role == START:
            rows[cy][cx] = _paint("<", Fore.GREEN)
        elif room.role == BOSS:
            rows[cy][cx] = _paint(">", Fore.RED)
    for actor in actors:
        if not actor.is_alive():
            continue
        glyph = ACTOR_GLYPHS.get(getattr(actor, "kind", None), "@")
        rows[actor.y][actor.x] = _paint(glyph, Fore.YELLOW if glyph != "@" else Fore.CYAN)
    return "\n".join("".join(r) for r in rows)


def cmd_generate(args) -> int:
    seed = _resolve_seed(args)
    config = DungeonConfig(seed=seed)
    layout = DungeonGenerator(config).generate(args.width, args.height)
    if args.json:
        print(json.dumps(layout.to_json()))
        return 0
    print(render_map(layout))
    print()
    print(_paint(f"seed={seed} rooms={len(layout.rooms)}", Fore.CYAN))
    for index, room in enumerate(layout.rooms):
        print(
            f"  [{index:2}] {room.role:<9} {room.theme:<8} diff={room.difficulty} "
            f"at=({room.x},{room.y}) size={room.width}x{room.height} links={room.connections}"
        )
    return 0


def _autopilot(player, adversaries, grid, rng) -> str:
    """Attack an adjacent adversary, else step toward the nearest reachable one."""
    live = [a for a in adversaries if a.is_alive()]
    for adversary in live:
        if manhattan(player.position, adversary.position) == 1:
            dealt = attack(player, adversary, rng=rng)
            return f"{player.name} hits {adversary.name} for {dealt}"
    best = None
    for adversary in live:
        path = find_path(grid, player.position, adversary.position)
        if path and (best is None or len(path) < len(best)):
            best = path
    if best and len(best) > 2:
        nx, ny = best[1]
        player.move(nx - player.x, ny - player.y, grid)
        return f"{player.name} moves to {best[1]}"
    return f"{player.name} waits"


def cmd_simulate(args) -> int:
    seed = _resolve_seed(args)
    rng = random.Random(seed)
    layout = DungeonGenerator(DungeonConfig(seed=seed)).generate()
    player = place_player(layout)
    adversaries = spawn_adversaries(layout, rng=rng)
    controller = TurnController(adversaries, config=SimulationConfig.from_env(), rng=rng)
    print(render_map(layout, [player, *adversaries]))
    print()
    for _ in range(max(0, args.turns)):
        note = _autopilot(player, controller.adversaries, layout.grid, rng)
        report = controller.end_controlled_turn(player, layout.grid)
        print(_paint(f"turn {report.turn:3}", Fore.MAGENTA), note)
        for action in report.actions:
            if action["type"] == "attack":
                print(f"          {action['actor']} attacks for {action['damage']}")
            elif action["type"] == "move":
                print(f"          {action['actor']} moves to {action['to']}")
        for name in report.removed:
            print(_paint(f"          {name} is slain", Fore.GREEN))
        if not player.is_alive():
            print(_paint(f"{player.name} has fallen on turn {report.turn}", Fore.RED))
            break
        if not controller.adversaries:
            print(_paint(f"All adversaries defeated by turn {report.turn}", Fore.GREEN))
            break
    print(f"HP {player.stats.current_hp}/{player.stats.max_hp}, adversaries left: {len(controller.adversaries)}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, else the default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    log.info(event="startup", mode=mode, version=__version__)
    try:
        if mode == "simulate":
            return cmd_simulate(args)
        return cmd_generate(args)
    except DelveError as exc:
        print(_paint(f"[ERROR] {exc}", Fore.RED), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
