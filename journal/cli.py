"""CLI tool for journal admin operations.

Usage:
    python -m journal.cli seed-demo
    python -m journal.cli stats
    python -m journal.cli export-csv [path]
    python -m journal.cli export-json [path]
    python -m journal.cli clear-trades
    python -m journal.cli serve
"""

import sys
from pathlib import Path

from journal.config import settings
from journal.database import engine, create_db_and_tables
from journal.errors import JournalError
from journal.models.workspace import JournalSettings
from journal.services.drafts import DraftStore, TemplateStore
from journal.services.export import to_csv, to_json
from journal.services.profile import ProfileService
from journal.services.repository import TradeRepository
from journal.services.samples import demo_trades
from journal.services.statistics import compute_stats
from journal.services.storage import SQLStore
from journal.utils.logging import setup_logging

COMMANDS = ["seed-demo", "stats", "export-csv", "export-json", "clear-trades", "serve"]


def _store() -> SQLStore:
    create_db_and_tables()
    return SQLStore(engine)


def seed_demo():
    repo = TradeRepository(_store())
    created = repo.load_samples(demo_trades())
    print(f"Loaded {len(created)} demo trades.")


def show_stats():
    stats = compute_stats(TradeRepository(_store()).get_all())
    print(f"Trades:        {stats.total_trades} ({stats.closed_trades} closed, {stats.open_trades} open)")
    print(f"Win rate:      {stats.win_rate}%  ({stats.total_wins}W / {stats.total_losses}L)")
    print(f"Total P/L:     ${stats.total_profit:,.2f}  (this month ${stats.monthly_profit:,.2f})")
    print(f"Avg trade:     ${stats.avg_trade:,.2f}  best ${stats.best_trade:,.2f}  worst ${stats.worst_trade:,.2f}")
    print(f"Avg R:R:       {stats.avg_rr}:1")
    print(f"Max streaks:   {stats.max_consecutive_wins}W / {stats.max_consecutive_losses}L")
    for symbol, s in sorted(stats.symbol_stats.items()):
        print(f"  {symbol:<10} {s.trade_count:>3} trades  {s.wins}W {s.losses}L {s.open_count} open  ${s.profit_sum:,.2f}")


def export_csv(path: str | None):
    content = to_csv(TradeRepository(_store()).get_all())
    _write(content, path)


def export_json(path: str | None):
    store = _store()
    profile = ProfileService(store, defaults=JournalSettings(page_size=settings.default_page_size))
    content = to_json(
        trades=TradeRepository(store).get_all(),
        user=profile.get_user(),
        settings=profile.get_settings(),
        drafts=DraftStore(store, limit=settings.draft_limit).get_all(),
        templates=TemplateStore(store).get_all(),
    )
    _write(content, path)


def clear_trades():
    answer = input("Delete ALL trades? This cannot be undone. Type 'yes' to confirm: ")
    if answer.strip().lower() != "yes":
        print("Aborted.")
        return
    count = TradeRepository(_store()).delete_all()
    print(f"Deleted {count} trades.")


def serve():
    import uvicorn

    uvicorn.run("journal.main:app", host="127.0.0.1", port=8000)


def _write(content: str, path: str | None):
    if path is None:
        sys.stdout.write(content)
        return
    Path(path).write_text(content, encoding="utf-8")
    print(f"Wrote {path}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m journal.cli <command>")
        print(f"Commands: {', '.join(COMMANDS)}")
        sys.exit(1)

    setup_logging()
    command = sys.argv[1]
    arg = sys.argv[2] if len(sys.argv) > 2 else None
    try:
        if command == "seed-demo":
            seed_demo()
        elif command == "stats":
            show_stats()
        elif command == "export-csv":
            export_csv(arg)
        elif command == "export-json":
            export_json(arg)
        elif command == "clear-trades":
            clear_trades()
        elif command == "serve":
            serve()
        else:
            print(f"Unknown command: {command}")
            sys.exit(1)
    except JournalError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
