# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
cli.py — Command-line interface for climate-outlook.

We use argparse (stdlib) rather than click because:
- No extra dependency to install
- Sufficient for 2 simple subcommands

Commands:
  climate-outlook predict   — fetch same-day history, predict, print report
  climate-outlook search    — list geocoding candidates for a place name
"""

import argparse
from datetime import date, datetime
from pathlib import Path

from climate_outlook.chart import render_card_chart, render_outlook_table, render_trend_line
from climate_outlook.config import DEFAULT_CONFIG_PATH, default_config, load_config
from climate_outlook.geocode import LocationNotFoundError, geocode, search_places
from climate_outlook.query import InvalidQueryError, run_outlook
from climate_outlook.rules import evaluate_rules
from climate_outlook.trend import series_summary
from climate_outlook.units import display_series
from climate_outlook.utils import fmt_day


def _load_config_or_defaults(path: Path) -> dict:
    try:
        return load_config(path)
    except FileNotFoundError:
        print(f"[config] {path} not found, using default preferences.")
        return default_config()


def _parse_date(raw: str | None) -> date:
    if raw is None:
        return date.today()
    try:
        return datetime.strptime(raw.strip(), "%Y-%m-%d").date()
    except ValueError:
        print(f"[error] Unrecognised --date format: '{raw}'. Use 'YYYY-MM-DD'.")
        raise SystemExit(1)


def cmd_predict(args) -> None:
    """Resolve location, run the outlook, print table, charts and alerts."""
    try:
        config = _load_config_or_defaults(Path(args.config))
    except ValueError as e:
        print(f"[error] {e}")
        raise SystemExit(1)

    # ── Resolve location ──────────────────────────────────────
    if args.location:
        try:
            loc = geocode(args.location)
        except (LocationNotFoundError, RuntimeError) as e:
            print(f"[error] {e}")
            raise SystemExit(1)
        latitude, longitude, display_name = loc["latitude"], loc["longitude"], loc["display_name"]
    elif args.lat is not None and args.lon is not None:
        latitude, longitude = args.lat, args.lon
        display_name = f"{latitude:.4f}, {longitude:.4f}"
    else:
        print("[error] Give either --location or both --lat and --lon.")
        raise SystemExit(1)

    reference_date = _parse_date(args.date)
    provider = config["provider"]

    print(f"Fetching same-day history for {display_name} ({fmt_day(reference_date)})...")
    try:
        outlook = run_outlook(
            latitude,
            longitude,
            reference_date,
            max_workers=provider["max_workers"],
            timeout=provider["timeout_seconds"],
            log_path=Path(config["log"]["path"]),
        )
    except InvalidQueryError as e:
        print(f"[error] {e}")
        raise SystemExit(1)

    labels = outlook["labels"]
    cards = display_series(outlook, config)

    print()
    print(render_outlook_table(
        cards,
        f"{display_name} — {fmt_day(reference_date)}, based on {labels[0]}–{labels[-1]}",
    ))
    if outlook["failed_years"]:
        years = ", ".join(str(y) for y in outlook["failed_years"])
        print(f"⚠️  No data for: {years}")

    if args.charts:
        for card in cards:
            print()
            print(render_card_chart(card))
            print(render_trend_line(series_summary(card["labels"], card["values"]), card["unit"]))

    print()
    alerts = evaluate_rules(outlook["predictions"], config)
    if alerts:
        for alert in alerts:
            print(f"⚠️  ALERT: {alert}")
    else:
        print("✅ No alerts triggered.")


def cmd_search(args) -> None:
    """Print ranked geocoding candidates."""
    try:
        candidates = search_places(args.query, count=args.count)
    except RuntimeError as e:
        print(f"[error] {e}")
        raise SystemExit(1)

    if not candidates:
        print(f'No places found for "{args.query}".')
        return
    for rank, c in enumerate(candidates, start=1):
        print(f"{rank:>2}. {c['display_name']}  ({c['latitude']:.4f}, {c['longitude']:.4f})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="climate-outlook",
        description="Predict climate conditions for a day of the year from NASA POWER history.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_predict = sub.add_parser("predict", help="Predict conditions for a place and date")
    p_predict.add_argument("--location", "-l", help="Place name to geocode, e.g. 'Lisbon'")
    p_predict.add_argument("--lat", type=float, help="Latitude in decimal degrees")
    p_predict.add_argument("--lon", type=float, help="Longitude in decimal degrees")
    p_predict.add_argument("--date", "-d", help="Reference date YYYY-MM-DD (default: today)")
    p_predict.add_argument("--config", "-c", default=str(DEFAULT_CONFIG_PATH), help="Preferences TOML file")
    p_predict.add_argument("--no-charts", dest="charts", action="store_false", help="Skip history charts")
    p_predict.set_defaults(func=cmd_predict)

    p_search = sub.add_parser("search", help="List places matching a query")
    p_search.add_argument("query", help="Free-text place name")
    p_search.add_argument("--count", type=int, default=5, help="Maximum candidates")
    p_search.set_defaults(func=cmd_search)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the climate-outlook CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
