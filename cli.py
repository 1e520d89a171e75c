#!/usr/bin/env python3
"""
Skyward Ascent - Command Line Interface

CLI for playing out encounters, browsing the roster and hosting the
combat server.

Usage:
    python cli.py fight --seed 42 --room club --tier 1
    python cli.py fight --seed ABC123 --classes bladedancer manipulator guardian --json
    python cli.py monsters --category jack
    python cli.py classes
    python cli.py serve --port 8765
"""

import argparse
import json
import logging
import sys
from typing import List

from skyward.combat_engine import create_combat
from skyward.config import ServerConfig
from skyward.content.heroes import HERO_CLASSES
from skyward.content.monsters import MONSTERS_BY_CATEGORY, MonsterCategory, MonsterDefinition
from skyward.generation.encounters import RoomKind
from skyward.state.combat import CombatLogEntry


logger = logging.getLogger("skyward.cli")


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_event(entry: CombatLogEntry) -> str:
    """Format one log entry for the terminal."""
    if entry.event_type == "turn":
        return f"\n== {entry.text} =="
    if entry.event_type in ("victory", "defeat", "critical"):
        return f"*** {entry.text} ***"
    return f"  {entry.text}"


def format_monster(monster: MonsterDefinition) -> str:
    """Format a monster's stat block."""
    gold = f"{monster.min_gold}"
    if monster.gold_multiplier:
        gold += f" (d20 x {monster.gold_multiplier})"
    low, high = monster.table_domain
    lines = [
        f"{monster.name} [{monster.category.value}]  health {monster.health}  gold {gold}",
        f"  Special - {monster.special.name}: {monster.special.text}",
    ]
    for value in range(low, high + 1):
        action = monster.roll_table.get(value)
        if action is None:
            lines.append(f"  {value:>2}: (nothing)")
        else:
            lines.append(f"  {value:>2}: {action.name} - {action.text}")
    return "\n".join(lines)


def format_classes() -> List[str]:
    lines = []
    for data in HERO_CLASSES.values():
        lines.append(
            f"{data.name} (rank {data.class_rank.value}, health {data.health}) "
            f"- {data.red_spec} / {data.black_spec}"
        )
        lines.append(f"  Ability - {data.ability_name}: {data.ability_text}")
        for value in range(1, 7):
            entry = data.roll_table.get(value)
            text = f"{entry.name} - {entry.text}" if entry else "(nothing)"
            lines.append(f"  {value}: {text}")
        lines.append("")
    return lines


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_fight(args) -> int:
    """Auto-play one seeded encounter."""
    seed = int(args.seed) if args.seed.isdigit() else args.seed.upper()
    try:
        engine = create_combat(
            classes=args.classes,
            room=args.room,
            tier=args.tier,
            seed=seed,
            monster_id=args.monster,
            items=args.items,
        )
        engine.choose_turn_order(args.order)
        result = engine.run_to_completion(max_steps=args.max_steps)
    except (ValueError, RuntimeError) as e:
        logger.error("%s", e)
        return 1

    if args.json:
        output = result.to_dict()
        output["events"] = [e.to_dict() for e in engine.state.log.entries]
        print(json.dumps(output, indent=2))
        return 0

    print(f"Seed: {args.seed}  Room: {args.room}  Tier: {args.tier}")
    for entry in engine.drain_events():
        print(format_event(entry))

    print()
    print("Result:", "VICTORY" if result.victory else "DEFEAT")
    for hero in result.updated_heroes:
        print(f"  {hero.name} ({hero.specialization}): {hero.health}/{hero.max_health}")
    if result.rewards:
        print(f"  Gold: {result.rewards.gold}")
        if result.rewards.items:
            print(f"  Items: {', '.join(result.rewards.items)}")
    print(f"  Stats: {result.stats}")
    return 0


def cmd_monsters(args) -> int:
    """List the monster roster."""
    categories = [MonsterCategory(args.category)] if args.category else list(MonsterCategory)
    for category in categories:
        for monster in MONSTERS_BY_CATEGORY[category]:
            print(format_monster(monster))
            print()
    return 0


def cmd_classes(args) -> int:
    """List the hero classes and their roll tables."""
    for line in format_classes():
        print(line)
    return 0


def cmd_serve(args) -> int:
    """Run the HTTP combat server."""
    from skyward.server import serve

    config = ServerConfig.from_env()
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    serve(config)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Skyward Ascent - combat engine CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s fight --seed 42
  %(prog)s fight --seed 7 --room spade --tier 2 --order left
  %(prog)s fight --monster treant --items minor_potion --json
  %(prog)s monsters --category boss
  %(prog)s classes
  %(prog)s serve --port 8765
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Fight command
    fight_parser = subparsers.add_parser("fight", help="Auto-play a seeded encounter")
    fight_parser.add_argument("--seed", "-s", default="0", help="Seed (number or seed string)")
    fight_parser.add_argument("--classes", "-c", nargs=3, default=["bladedancer", "tracker", "guardian"],
                              help="Three hero classes")
    fight_parser.add_argument("--room", "-r", default="club", choices=[r.value for r in RoomKind],
                              help="Room kind")
    fight_parser.add_argument("--tier", "-t", type=int, default=1, help="Floor tier")
    fight_parser.add_argument("--monster", "-m", help="Fight a specific monster id")
    fight_parser.add_argument("--items", nargs="*", default=[], help="Starting inventory item ids")
    fight_parser.add_argument("--order", default="right", choices=["left", "right"], help="Turn order")
    fight_parser.add_argument("--max-steps", type=int, default=10000, help="Autoplay step limit")
    fight_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Monsters command
    monsters_parser = subparsers.add_parser("monsters", help="Show the monster roster")
    monsters_parser.add_argument("--category", choices=[c.value for c in MonsterCategory],
                                 help="Only this category")

    # Classes command
    subparsers.add_parser("classes", help="Show hero classes and roll tables")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP combat server")
    serve_parser.add_argument("--host", help="Bind address (default from SKYWARD_HOST)")
    serve_parser.add_argument("--port", "-p", type=int, help="Port (default from SKYWARD_PORT)")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    # Dispatch to command handler
    commands = {
        "fight": cmd_fight,
        "monsters": cmd_monsters,
        "classes": cmd_classes,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
