"""Entry point for scoutsim package."""

import argparse
import json
import sys
from dataclasses import replace

from rich.console import Console
from rich.table import Table

from scoutsim.api.schemas import SeasonAwardsSchema, StandingRow, TickSummary
from scoutsim.config import SimConfig, configure_logging, get_config, set_config
from scoutsim.core.enums import ActivityType
from scoutsim.core.rng import RNG
from scoutsim.core.errors import ScheduleError
from scoutsim.generators import build_demo_world
from scoutsim.management.standings import build_all_standings
from scoutsim.management.tick import commit_tick, compute_tick
from scoutsim.scouting.calendar import add_activity, get_available_activities, make_activity


def plan_week(state):
    """Fill the scout's week: the first listed match, a report, then rest."""
    schedule = state.schedule
    options = get_available_activities(state.scout, state.current_week, state.fixtures.values())
    matches = [a for a in options if a.activity_type == ActivityType.ATTEND_MATCH]

    plan = []
    if matches:
        plan.append((matches[0], 0))
    plan.append((make_activity(ActivityType.WRITE_REPORT), 2))
    plan.append((make_activity(ActivityType.STUDY), 3))
    plan.append((make_activity(ActivityType.REST), 6))

    for activity, slot in plan:
        try:
            schedule = add_activity(schedule, activity, slot)
        except ScheduleError:
            continue
    return schedule


def week_table(summary: TickSummary, club_names: dict) -> Table:
    table = Table(title=f"Season {summary.season}, Week {summary.week}")
    table.add_column("Home")
    table.add_column("Score", justify="center")
    table.add_column("Away")
    table.add_column("Weather")
    for fixture in summary.fixtures:
        table.add_row(
            club_names.get(fixture.home_club_id, fixture.home_club_id),
            f"{fixture.home_goals} - {fixture.away_goals}",
            club_names.get(fixture.away_club_id, fixture.away_club_id),
            fixture.weather or "",
        )
    table.caption = (
        f"transfers {summary.transfers}  injuries {summary.injuries}  "
        f"cards {summary.cards}  reputation {summary.reputation_change:+d}  "
        f"messages {len(summary.messages)}"
    )
    return table


def standings_table(rows) -> Table:
    table = Table(title="League Table")
    for column in ("Pos", "Club", "P", "W", "D", "L", "GD", "Pts"):
        table.add_column(column, justify="right" if column not in ("Club",) else "left")
    for row in rows:
        table.add_row(
            str(row.position), row.club_name, str(row.played), str(row.won),
            str(row.drawn), str(row.lost), str(row.goal_difference), str(row.points),
        )
    return table


def main() -> None:
    """Main entry point for the scoutsim demo."""
    config = get_config()

    parser = argparse.ArgumentParser(
        description="Scoutsim - football talent scout simulation",
        prog="scoutsim",
    )
    parser.add_argument("--weeks", type=int, default=config.demo_weeks,
                        help=f"Weeks to simulate (default: {config.demo_weeks})")
    parser.add_argument("--seed", type=str, default=config.seed,
                        help="Random seed")
    parser.add_argument("--difficulty", type=str, default=config.difficulty,
                        choices=["easy", "normal", "hard", "ironman"],
                        help="Difficulty level")
    parser.add_argument("--json", action="store_true",
                        help="Print week summaries as JSON instead of tables")
    parser.add_argument("--log-level", type=str, default=config.log_level,
                        help="Logging level")

    args = parser.parse_args()

    config = SimConfig(
        seed=args.seed,
        log_level=args.log_level.upper(),
        demo_weeks=args.weeks,
        difficulty=args.difficulty.lower(),
    )
    errors = config.validate()
    if errors:
        for error in errors:
            print(f"config error: {error}", file=sys.stderr)
        sys.exit(2)
    set_config(config)
    configure_logging(config.log_level)

    console = Console()
    state = build_demo_world(seed=config.seed, difficulty=config.difficulty_level)
    rng = RNG(config.seed)
    club_names = {club.id: club.name for club in state.clubs.values()}

    summaries = []
    for _ in range(config.demo_weeks):
        state = replace(state, schedule=plan_week(state))
        result = compute_tick(state, rng)
        summary = TickSummary.from_result(result)
        summaries.append(summary.model_dump())
        if not args.json:
            console.print(week_table(summary, club_names))
        if result.season_awards is not None and not args.json:
            console.print_json(SeasonAwardsSchema.from_model(result.season_awards).model_dump_json())
        state = commit_tick(state, result)

    tables = build_all_standings(state.leagues, state.fixtures, state.clubs)
    rows = [
        StandingRow.from_entry(i + 1, entry, club_names.get(entry.club_id, ""))
        for entries in tables.values()
        for i, entry in enumerate(entries)
    ]

    if args.json:
        print(json.dumps({
            "weeks": summaries,
            "standings": [row.model_dump() for row in rows],
        }, indent=2))
    else:
        console.print(standings_table(rows))
        console.print(
            f"Scout reputation {state.scout.reputation}, fatigue {state.scout.fatigue}"
        )


if __name__ == "__main__":
    main()
