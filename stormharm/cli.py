"""
STORMHARM Command Line Interface (CLI)
======================================

Run it like:

    python -m stormharm.cli --csv StormData.csv.bz2 --download
    python -m stormharm.cli --csv StormData.csv.bz2 --batch --top 10

With `--batch` both analyses are printed and the program exits. Otherwise an
interactive REPL starts; see HELP below for its commands.

The CLI DOES NOT modify the dataset file. It loads it once and every command
works on that in-memory table.
"""

from __future__ import annotations
import argparse, logging, os, shlex
from typing import Sequence
from .download import fetch_dataset
from .loader import load_storm_csv
from .engine import AnalysisConfig, StormHarm, export_csv, export_json
from .models import AggregateRow

HELP = """
Commands:
  help
  stats
  health [n]                      top n event types by fatalities and injuries
  economic [n]                    top n event types by property + crop damage
  exponents                       damage exponent code table
  values [prefix]                 distinct event types (first 50)

  charts "<dir>"                  write the three bar charts (PNG)
  report "<path.docx>"            write a DOCX report
  export <csv|json> <fatalities|injuries|damage> "<path>"
  quit
"""


def __make_citation(engine):
    from .report import DatasetCitation
    p = engine.dataset_path
    return DatasetCitation(file_name=os.path.basename(p) if p else None)


def main(argv: Sequence[str] = None):
    """Entry point for the STORMHARM CLI.

    1) Load (and optionally download) the dataset
    2) Either print both analyses (--batch) or start the REPL
    """
    ap = argparse.ArgumentParser(prog="stormharm")
    ap.add_argument("--csv", default="StormData.csv.bz2", help="Path to the storm database CSV (.csv or .csv.bz2)")
    ap.add_argument("--download", action="store_true", help="Download the dataset first if it is missing")
    ap.add_argument("--top", type=int, default=10, help="Rows per ranked table")
    ap.add_argument("--batch", action="store_true", help="Print both analyses and exit")
    ap.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.download:
        fetch_dataset(args.csv)

    print("Loading dataset...")
    events = load_storm_csv(args.csv)
    engine = StormHarm(events=events, config=AnalysisConfig(top_n=args.top), dataset_path=args.csv)
    print(f"Loaded {len(engine.events)} events.")

    if args.batch:
        handle(engine, "health")
        handle(engine, "economic")
        return

    print("Type 'help' for commands.")
    while True:
        try:
            line = input("stormharm> ")
            # Keep a lightweight log of commands for the report (reproducibility).
            stripped = line.strip()
            if stripped:
                cmd0 = stripped.split()[0].lower()
                if cmd0 not in ("help", "values", "stats", "exponents", "quit", "exit"):
                    engine.command_log.append(stripped)
        except EOFError:
            break
        if not stripped:
            continue
        if stripped.lower() in ("quit", "exit"):
            break
        try:
            handle(engine, stripped)
        except Exception as e:
            print(f"Error: {e}")

def handle(engine: StormHarm, line: str) -> None:
    """Handle one CLI command line.

    This parses the command and calls the appropriate engine method.
    """
    parts = shlex.split(line)
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP)
        return

    if cmd == "stats":
        s = engine.stats()
        print(f"Events: {s['events']} | Event types: {s['event_types']}")
        print(f"Fatalities: {s['fatalities']:,.0f} | Injuries: {s['injuries']:,.0f} | Damage: ${s['total_damage']:,.0f}")
        return

    if cmd == "health":
        n = int(parts[1]) if len(parts) >= 2 else None
        res = engine.health(n)
        print(f"Top {len(res.fatalities)} event types by fatalities:")
        _print_rows(res.fatalities)
        print(f"Top {len(res.injuries)} event types by injuries:")
        _print_rows(res.injuries)
        return

    if cmd == "economic":
        n = int(parts[1]) if len(parts) >= 2 else None
        res = engine.economic(n)
        print(f"Top {len(res.damage)} event types by property + crop damage (US$):")
        _print_rows(res.damage)
        return

    if cmd == "exponents":
        from .damage import EXPONENT_MULTIPLIERS, DEFAULT_MULTIPLIER
        for code, mult in EXPONENT_MULTIPLIERS.items():
            print(f"{code!r:>5} -> {mult:,}")
        print(f"other -> {DEFAULT_MULTIPLIER}")
        return

    if cmd == "values":
        prefix = parts[1] if len(parts) >= 2 else ""
        vals = engine.event_types(prefix)
        for v in vals[:50]:
            print(v)
        if len(vals) > 50:
            print(f"... ({len(vals)} total, showing 50)")
        return

    if cmd == "charts":
        from .charts import plot_impact
        out_dir = parts[1] if len(parts) >= 2 else "figures"
        paths = plot_impact(engine.analyze().tables(), out_dir)
        for name, path in paths.items():
            print(f"{name}: {path}")
        return

    if cmd == "report":
        # report "<path.docx>"
        from .report import generate_docx_report, ReportConfig
        if len(parts) < 2:
            print('Usage: report "out.docx"')
            return
        path = parts[1]
        cfg = ReportConfig(
            citation=__make_citation(engine),
            command_log=engine.command_log,
        )
        generate_docx_report(engine.analyze(), path, config=cfg)
        print(f"Report written to {path}")
        return

    if cmd == "export":
        # export <csv|json> <table> "<path>"
        if len(parts) < 4:
            print('Usage: export csv damage "out.csv"  OR  export json fatalities "out.json"')
            return

        fmt = parts[1].lower()
        table = parts[2].lower()
        out_path = parts[3]
        rows = engine.table(table)

        if fmt == "csv":
            export_csv(rows, out_path, metric=table)
            print(f"Exported CSV to {out_path}")
            return

        if fmt == "json":
            export_json(rows, out_path, metric=table)
            print(f"Exported JSON to {out_path}")
            return

        print("Unknown export format. Use: csv or json")
        return

    print("Unknown command. Type 'help'.")
    return

def _print_rows(rows: Sequence[AggregateRow]) -> None:
    if not rows:
        print("  (no rows)")
    for i, r in enumerate(rows, start=1):
        print(f"{i:>3}. {r.event_type:<30} {r.total:>20,.0f}")

if __name__ == "__main__":
    main()
