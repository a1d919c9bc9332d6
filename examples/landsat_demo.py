"""
Example: Overhead estimates for a nominal Landsat pass.

Needs no network access. Propagates the default Landsat ground track,
estimates the wait for a handful of targets (some along the track, some
far away) and saves a ground-track plot.
"""

import sys
sys.path.insert(0, "src")

from overpass.estimator import EstimatorThresholds, estimate_batch
from overpass.geomath import GeoPoint
from overpass.platform import Landsat


def main():
    print("=" * 65)
    print("  OVERPASS: Landsat Overhead Demo")
    print("=" * 65)

    sat = Landsat(cloud_coverage=20)
    state = sat.refresh_position(0.25)
    print(f"\nPlatform at {state.position}, heading {state.heading_deg:.1f}°, "
          f"{state.speed_kmh:,.0f} km/h")

    # A target a few kilometres further along the current heading
    ahead = sat.tracker.propagate(state.elapsed_hours + 10.0 / state.speed_kmh).position

    targets = {
        "ALONG-TRACK": ahead,
        "MINNEAPOLIS": GeoPoint(44.98, -93.27),
        "NAIROBI": GeoPoint(-1.29, 36.82),
    }

    for label, thresholds in (
        ("Literal gates", EstimatorThresholds.for_landsat()),
        ("Interpolating", EstimatorThresholds.interpolating()),
    ):
        df = estimate_batch(state, targets, thresholds)
        print(f"\n{label}:")
        print(f"{'TARGET':15s} {'HOURS':>10} {'DECISION':>14} {'DIST (km)':>12}")
        print("-" * 55)
        for _, row in df.iterrows():
            print(
                f"{row['target']:15s} "
                f"{row['hours']:>10.4f} "
                f"{row['decision']:>14} "
                f"{row['distance_km']:>12.1f}"
            )

    try:
        import matplotlib
        matplotlib.use("Agg")
        from overpass.viz import plot_ground_track

        track = sat.tracker.ground_track(1.65, step_minutes=1.0)
        plot_ground_track(
            track,
            estimate_batch(state, targets, EstimatorThresholds.interpolating()),
            title="Landsat: Nominal Ground Track",
            save_path="data/demo_ground_track.png",
        )
        print("\nPlot saved to data/demo_ground_track.png")
    except (ImportError, OSError) as e:
        print(f"\nSkipping plot: {e}")


if __name__ == "__main__":
    main()
