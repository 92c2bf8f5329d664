"""
SIRE Command Line Interface (CLI)
=================================

This file provides the interactive terminal program you run like:

    python -m sire.cli --data "path/to/StormData.csv.bz2"

It demonstrates:
- Argument parsing (argparse)
- A REPL loop (Read-Eval-Print Loop) for commands
- Mapping user commands to engine methods (views, top-N, classify, report)

The CLI DOES NOT modify your dataset file. It loads it once, builds the
category summaries, and answers questions about them.
"""

from __future__ import annotations
import argparse, logging, shlex
from typing import List, Optional

from .engine import StormImpactEngine
from .loader import CachedLoader
from .normalizer import CATEGORIES
from .rank import DEFAULT_TOP_N

HELP = """
Commands:
  help
  stats
  categories

  health [n]                    top n categories by fatalities
  financial [n]                 top n categories by property damage
  severity [n]                  composite severity score
  classify "<raw label>"        show how one label is categorized

  export csv "<out.csv>"
  export json "<out.json>"
  report "<out.docx>"
  quit
"""


def _make_citation(engine):
    from .report import DatasetCitation
    import os
    p = getattr(engine, "dataset_path", None)
    fn = os.path.basename(p) if p else None
    return DatasetCitation(file_name=fn)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sire", description="Storm Impact Ranking Engine")
    ap.add_argument("--data", required=True, help="Path to storm events CSV (.csv, .csv.bz2) or .xlsx")
    ap.add_argument("--top", type=int, default=DEFAULT_TOP_N, help="Default N for top-N views")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log pipeline progress")
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the SIRE CLI.

    1) Load dataset
    2) Build category summaries
    3) Start an interactive REPL
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("Loading dataset...")
    engine = StormImpactEngine.from_path(args.data, loader=CachedLoader())

    print(f"Loaded {len(engine.events)} events into {len(engine.summaries)} categories. Type 'help' for commands.")
    while True:
        try:
            line = input("sire> ")
        except EOFError:
            break
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.lower() in ("quit", "exit"):
            break
        # Keep a lightweight log of commands for the report (reproducibility).
        if stripped.split()[0].lower() not in ("help", "stats", "categories"):
            engine.command_log.append(stripped)
        try:
            handle(engine, stripped, default_n=args.top)
        except Exception as e:
            print(f"Error: {e}")


def handle(engine: StormImpactEngine, line: str, default_n: int = DEFAULT_TOP_N) -> None:
    """Handle one CLI command line.

    This parses the command and calls the appropriate engine method.
    """
    parts = shlex.split(line)
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP)
        return

    if cmd == "stats":
        t = engine.totals()
        print(f"Events: {len(engine.events)} | Classified: {int(t['events'])} | Unclassifiable: {engine.unclassified}")
        print(f"Categories: {len(engine.summaries)} | Fatalities: {int(t['fatalities'])} | Injuries: {int(t['injuries'])}")
        print(f"Property damage: ${t['prop_damage_usd']:,.0f} | Crop damage: ${t['crop_damage_usd']:,.0f}")
        return

    if cmd == "categories":
        for c in sorted(CATEGORIES):
            print(c)
        return

    if cmd in ("health", "financial"):
        n = int(parts[1]) if len(parts) >= 2 else default_n
        view = engine.view(cmd)
        rows = view.top(n)
        print(f"Top {len(rows)} of {len(view)} categories by {view.metric}:")
        _print_rows(rows)
        return

    if cmd == "severity":
        n = int(parts[1]) if len(parts) >= 2 else default_n
        for cat, score in engine.severity()[:n]:
            print(f"{cat:<20} {score:6.2f}")
        return

    if cmd == "classify":
        if len(parts) < 2:
            raise ValueError('usage: classify "<raw label>"')
        label = " ".join(parts[1:])
        print(f"{label!r} -> {engine.classify(label)}")
        return

    if cmd == "report":
        from .report import generate_docx_report, ReportConfig
        if len(parts) < 2:
            raise ValueError('usage: report "<out.docx>"')
        path = parts[1]
        cfg = ReportConfig(
            top_n=default_n,
            citation=_make_citation(engine),
            command_log=engine.command_log,
        )
        generate_docx_report(engine, path, config=cfg)
        print(f"Report written to {path}")
        return

    if cmd == "export":
        # export <csv|json> "<path>"
        if len(parts) < 3:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return
        fmt = parts[1].lower()
        out_path = parts[2]
        if fmt == "csv":
            engine.export_csv(out_path)
            print(f"Exported CSV to {out_path}")
            return
        if fmt == "json":
            engine.export_json(out_path)
            print(f"Exported JSON to {out_path}")
            return
        print("Unknown export format. Use: csv or json")
        return

    print("Unknown command. Type 'help'.")


def _print_rows(rows):
    for s in rows:
        print(f"{s.category:<20} events={s.events} fatalities={s.fatalities} injuries={s.injuries} "
              f"property=${s.prop_damage_usd:,.0f} crops=${s.crop_damage_usd:,.0f}")

if __name__ == "__main__":
    main()
