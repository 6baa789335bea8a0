#!/usr/bin/env python3
"""
Approach Speed Calculator - Main Entry Point
Computes stall, approach and minimum maneuvering speeds for the selected
aircraft profile, with live METAR/TAF gust lookup
"""

import argparse
import sys

from rich.console import Console
from rich.table import Table

from backend.config.constants import DEFAULT_ICAO, MAX_GUST_FACTOR
from backend.core.performance import compute_performance, gust_additive_display
from backend.core.profiles import ProfileState, active_profile, default_weight_for, select_profile
from backend.data.store import KeyValueStore, load_profile_state
from common import logger as debug_logger
from common.paths import ensure_user_directories


def print_performance_table(state: ProfileState, weight: float, gust_factor: int) -> None:
    """Print the speed table for the active profile without starting the UI."""
    profile = active_profile(state)
    result = compute_performance(weight, gust_factor, profile)

    table = Table(title=f"{profile.name} @ {weight:g} lbs, gust {gust_factor} kts")
    table.add_column("Config")
    table.add_column("")
    table.add_column("Stall", justify="right")
    table.add_column("Approach", justify="right")
    table.add_column("Adds", justify="right")
    for cfg, row in zip(profile.configs, result.to_rows(profile.configs)):
        table.add_row(*row, style="bold blue" if cfg.highlighted else None)

    console = Console()
    console.print(table)
    console.print(f"Gust additive: +{gust_additive_display(gust_factor)} kts")
    console.print(
        f"DMMS: [bold]{result.maneuvering_speed} KIAS[/bold] "
        f"(+{result.maneuvering_buffer} kts above clean stall)"
    )


def main():
    # Set up argument parser
    parser = argparse.ArgumentParser(description="Approach speed calculator with live METAR/TAF gust lookup")
    parser.add_argument("--icao", default=DEFAULT_ICAO,
                        help=f"Airport ICAO code preset in the weather lookup (default: {DEFAULT_ICAO})")
    parser.add_argument("--weight", type=float,
                        help="Gross weight in lbs (default: the profile's max gross weight)")
    parser.add_argument("--gust", type=int, default=0,
                        help=f"Peak gust factor in kts, 0-{MAX_GUST_FACTOR} (default: 0)")
    parser.add_argument("--profile",
                        help="Id of the aircraft profile to select (default: last used)")
    parser.add_argument("--store",
                        help="Path to the profile store file (default: storage.json in the user data directory)")
    parser.add_argument("--no-ui", action="store_true",
                        help="Print the speed table and exit instead of starting the UI (default: False)")

    # Parse arguments
    args = parser.parse_args()

    ensure_user_directories()
    debug_logger.info("Application starting")

    store = KeyValueStore(args.store)
    state = load_profile_state(store)
    if args.profile:
        selected = select_profile(state, args.profile)
        if selected.active_id != args.profile:
            print(f"Warning: Profile '{args.profile}' not found, using '{active_profile(state).id}'")
        state = selected

    gust_factor = max(0, min(MAX_GUST_FACTOR, args.gust))
    weight = args.weight if args.weight is not None else default_weight_for(active_profile(state))

    if args.no_ui:
        print_performance_table(state, weight, gust_factor)
        return

    # Import the UI only when it is needed
    from ui import ApproachSpeedApp

    # Try to set terminal title before Textual takes over
    try:
        # Write to stderr to avoid buffering issues
        sys.stderr.write("\033]0;Approach Speed Calculator\007")
        sys.stderr.flush()
    except (OSError, AttributeError):
        pass  # Terminal may not support escape sequences

    # Run the Textual app
    app = ApproachSpeedApp(state, store=store, weight=weight, gust_factor=gust_factor, icao=args.icao.upper())
    app.run()


if __name__ == "__main__":
    main()
