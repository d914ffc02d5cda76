# rewards_cli.py — Unwrap rewards config CLI
# ------------------------------------------------------------
# Examples (from project root, inside venv):
#   python rewards_cli.py init
#   python rewards_cli.py validate --file content/unwrap_rewards.json
#   python rewards_cli.py show --trigger easter.goldegg
#   python rewards_cli.py simulate --trigger easter.goldegg --tries 1 3 --runs 1000 --seed 42

import sys, json, argparse, logging
from collections import Counter
from pathlib import Path
from typing import List, Optional

from rewards.resolver import resolve, selection_odds
from rewards.rng import KeyedRandom, ThreadLocalRandom
from server.config import DEFAULT_CONFIG_PATH
from server.config_store import (
    ConfigError,
    Ruleset,
    load_config,
    parse_document,
    read_document,
    validate_document,
    write_document,
)
from server.defaults import default_document


def print_rows(rows: List[tuple], headers: List[str]) -> None:
    if not rows:
        print("(no rows)")
        return
    widths = [len(h) for h in headers]
    for r in rows:
        for i, v in enumerate(r):
            widths[i] = max(widths[i], len("" if v is None else str(v)))
    line = " | ".join(h.ljust(widths[i]) for i,h in enumerate(headers))
    print(line)
    print("-+-".join("-"*w for w in widths))
    for r in rows:
        print(" | ".join(("" if v is None else str(v)).ljust(widths[i]) for i,v in enumerate(r)))


def _ruleset(args) -> Ruleset:
    return Ruleset.from_config(load_config(args.file, write_back=False))

# ------------------- commands -------------------

def cmd_init(args):
    path = Path(args.file)
    if path.exists() and not args.force:
        print(f"Config already exists: {path} (use --force to overwrite)")
        return 1
    write_document(path, parse_document(default_document()))
    print(f"Wrote {path}")
    return 0

def cmd_validate(args):
    path = Path(args.file)
    data = read_document(path)
    validate_document(data)
    config = parse_document(data)
    triggers = len(config.unwrap_rewards)
    entries = sum(len(v) for v in config.unwrap_rewards.values())
    print(f"OK: {path} (version {config.version}, {triggers} triggers, {entries} rewards)")
    return 0

def cmd_show(args):
    ruleset = _ruleset(args)
    if not args.trigger:
        rows = [(k, len(v)) for k, v in ruleset.table.items()]
        print_rows(rows, ["trigger", "rewards"])
        return 0
    rewards = ruleset.lookup(args.trigger)
    if rewards is None:
        print(f"Trigger not configured: {args.trigger}")
        return 1
    if args.json:
        print(json.dumps([r.export() for r in rewards], indent=2, ensure_ascii=False))
        return 0
    rows = [
        (r.item_key, r.display_name, r.variant_id, f"{r.min_amount}-{r.max_amount}",
         r.rarity.value, f"{p * 100:.2f}%")
        for r, p in selection_odds(rewards, ruleset.weights)
    ]
    print_rows(rows, ["item", "display_name", "variant", "qty", "rarity", "chance"])
    return 0

def cmd_simulate(args):
    ruleset = _ruleset(args)
    rewards = ruleset.lookup(args.trigger)
    if rewards is None:
        print(f"Trigger not configured: {args.trigger}")
        return 1
    if args.seed is not None:
        rng = KeyedRandom(args.seed, f"simulate.{args.trigger}")
    else:
        rng = ThreadLocalRandom()
    picks = Counter()
    totals = Counter()
    for _ in range(args.runs):
        for g in resolve(rewards, ruleset.weights, tuple(args.tries), rng):
            picks[g.item_key] += 1
            totals[g.item_key] += g.quantity
    grants = sum(picks.values())
    rows = [
        (item, picks[item], f"{picks[item] / grants * 100:.2f}%", totals[item],
         f"{totals[item] / args.runs:.2f}")
        for item, _ in picks.most_common()
    ]
    print(f"{args.runs} unwraps of {args.trigger}, {grants} grants")
    print_rows(rows, ["item", "grants", "share", "total_qty", "qty_per_unwrap"])
    return 0

# ------------------- entry -------------------

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Unwrap rewards config tool")
    ap.add_argument("-v", "--verbose", action="store_true")
    sub = ap.add_subparsers(dest="cmd", required=True)

    def with_file(p):
        p.add_argument("--file", default=str(DEFAULT_CONFIG_PATH))
        return p

    p = with_file(sub.add_parser("init", help="write the default config"))
    p.add_argument("--force", action="store_true")
    p.set_defaults(fn=cmd_init)

    p = with_file(sub.add_parser("validate", help="check a config file"))
    p.set_defaults(fn=cmd_validate)

    p = with_file(sub.add_parser("show", help="list triggers or one trigger's odds"))
    p.add_argument("--trigger")
    p.add_argument("--json", action="store_true")
    p.set_defaults(fn=cmd_show)

    p = with_file(sub.add_parser("simulate", help="roll many unwraps and tally"))
    p.add_argument("--trigger", required=True)
    p.add_argument("--tries", nargs=2, type=int, default=[1, 1], metavar=("MIN", "MAX"))
    p.add_argument("--runs", type=int, default=1000)
    p.add_argument("--seed", type=int)
    p.set_defaults(fn=cmd_simulate)
    return ap

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.fn(args)
    except ConfigError as e:
        print(f"Invalid: {args.file}\n -> [{e.code}] {e.message}")
        return 2

if __name__ == "__main__":
    sys.exit(main())
