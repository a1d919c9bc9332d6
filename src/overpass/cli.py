#!/usr/bin/env python3
"""Overpass command-line interface.

Usage::

    overpass estimate --lat 0.05 --lon -0.01 --elapsed 0.0
    overpass track --hours 1.65 --step 2 --plot track.png
    overpass fetch --norad-id 39084
"""
from __future__ import annotations

import sys
import logging
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from .estimator import EstimatorThresholds, InterceptEstimator
from .exceptions import OverpassError
from .geomath import GeoPoint
from .tracker import (
    LANDSAT_DESCENDING_HEADING_DEG,
    OrbitParameters,
    PositionTracker,
)

console = Console()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """Overpass: estimate when an orbital platform passes over a target."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(name)s: %(message)s")


def orbit_options(f):
    """Shared options describing the propagation model."""
    f = click.option("--period", type=float, default=None,
                     help="Orbital period in minutes (overrides --speed)")(f)
    f = click.option("--speed", type=float, default=None,
                     help="Ground speed in km/h (default: Landsat)")(f)
    f = click.option("--heading", type=float, default=LANDSAT_DESCENDING_HEADING_DEG,
                     show_default=True, help="Epoch heading, degrees from north")(f)
    f = click.option("--start-lon", type=float, default=0.0, show_default=True,
                     help="Epoch longitude")(f)
    f = click.option("--start-lat", type=float, default=0.0, show_default=True,
                     help="Epoch latitude")(f)
    return f


@main.command()
@click.option("--lat", type=float, required=True, help="Target latitude (degrees)")
@click.option("--lon", type=float, required=True, help="Target longitude (degrees)")
@click.option("--elapsed", "-e", type=float, default=0.0, show_default=True,
              help="Hours since the orbit epoch")
@click.option("--interpolate", is_flag=True,
              help="Estimate distance/speed when aligned but not overhead")
@orbit_options
def estimate(
    lat: float,
    lon: float,
    elapsed: float,
    interpolate: bool,
    start_lat: float,
    start_lon: float,
    heading: float,
    speed: Optional[float],
    period: Optional[float],
):
    """Estimate hours until the platform is overhead a target."""
    try:
        target = GeoPoint.validated(lat, lon)
        tracker = PositionTracker(_build_orbit(start_lat, start_lon, heading, speed, period))
        state = tracker.update(elapsed)
        thresholds = EstimatorThresholds(interpolate_on_alignment=interpolate)
        result = InterceptEstimator(thresholds).evaluate(state, target)
    except (OverpassError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    color = "yellow" if result.is_fallback else "green"
    console.print(
        Panel(
            f"Platform: {state.position} heading {state.heading_deg:.1f}° "
            f"at {state.speed_kmh:,.0f} km/h\n"
            f"Target: {target}\n"
            f"Distance: {result.ground_distance_km:,.2f} km\n"
            f"Decision: {result.decision.name}\n"
            f"Estimate: [bold {color}]{result.hours:.3f} h[/bold {color}]",
            title="Overhead Estimate",
            box=box.ROUNDED,
        )
    )


@main.command()
@click.option("--hours", "-H", type=float, default=1.65, show_default=True,
              help="Duration to tabulate")
@click.option("--step", "-s", type=float, default=5.0, show_default=True,
              help="Sample spacing in minutes")
@click.option("--output", "-o", type=click.Path(), help="Save track to CSV")
@click.option("--plot", "plot_path", type=click.Path(), help="Save a ground-track plot")
@orbit_options
def track(
    hours: float,
    step: float,
    output: Optional[str],
    plot_path: Optional[str],
    start_lat: float,
    start_lon: float,
    heading: float,
    speed: Optional[float],
    period: Optional[float],
):
    """Tabulate the platform's ground track."""
    try:
        tracker = PositionTracker(_build_orbit(start_lat, start_lon, heading, speed, period))
        df = tracker.ground_track(hours, step_minutes=step)
    except (OverpassError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    table = Table(title="Ground Track", box=box.SIMPLE_HEAVY)
    table.add_column("t (h)", justify="right", style="cyan")
    table.add_column("Lat (°)", justify="right")
    table.add_column("Lon (°)", justify="right")
    table.add_column("Heading (°)", justify="right")

    for _, row in df.head(50).iterrows():
        table.add_row(
            f"{row['elapsed_hours']:.3f}",
            f"{row['latitude']:+.4f}",
            f"{row['longitude']:+.4f}",
            f"{row['heading_deg']:.1f}",
        )

    if len(df) > 50:
        console.print(f"(showing 50 of {len(df)} samples)")
    console.print(table)

    if output:
        df.to_csv(output, index=False)
        console.print(f"\nTrack saved to {output}")

    if plot_path:
        from .viz import plot_ground_track
        plot_ground_track(df, save_path=plot_path)
        console.print(f"Plot saved to {plot_path}")


@main.command()
@click.option("--norad-id", "-n", type=int, default=39084, show_default=True,
              help="NORAD catalog ID (default: Landsat 8)")
@click.option("--no-cache", is_flag=True, help="Bypass the disk cache")
def fetch(norad_id: int, no_cache: bool):
    """Fetch a current TLE and show the derived orbit parameters."""
    from .celestrak import CelestrakClient

    try:
        tle = CelestrakClient().get_latest_tle(norad_id, use_cache=not no_cache)
    except OverpassError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    orbit = OrbitParameters.from_tle(tle, GeoPoint(0.0, 0.0), LANDSAT_DESCENDING_HEADING_DEG)
    console.print(
        Panel(
            f"[bold]{tle.name or 'UNKNOWN'}[/bold] (NORAD {tle.norad_id})\n"
            f"Epoch: {tle.epoch_dt:%Y-%m-%d %H:%M:%S} UTC\n"
            f"Altitude: {tle.altitude:.1f} km\n"
            f"Inclination: {tle.inclination:.2f}°\n"
            f"Period: {tle.period_minutes:.2f} min\n"
            f"Ground speed: [bold green]{orbit.ground_speed_kmh:,.0f} km/h[/bold green]",
            title="Orbit Parameters",
            box=box.ROUNDED,
        )
    )


def _build_orbit(
    start_lat: float,
    start_lon: float,
    heading: float,
    speed: Optional[float],
    period: Optional[float],
) -> OrbitParameters:
    start = GeoPoint.validated(start_lat, start_lon)
    if period is not None:
        return OrbitParameters.from_period(period, start, heading)
    if speed is not None:
        return OrbitParameters(start, heading, speed)
    landsat = OrbitParameters.for_landsat()
    return OrbitParameters(start, heading, landsat.ground_speed_kmh)


if __name__ == "__main__":
    main()
