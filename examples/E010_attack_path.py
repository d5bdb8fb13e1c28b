#!/usr/bin/env python3
"""
Builds a move-to path and one attack path per classifier outcome, prints every
point and writes an interactive 3D plot for each.
"""
import sys
import random
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from aircraftpath.path_planner import (
    AircraftMovementSettings, PathBuilder, Rotator, classify_attack_position,
)
from aircraftpath.path_planner.visualization import PathVisualizer

START = (0.0, 0.0, 2000.0)
HEADING = Rotator(pitch=0.0, yaw=0.0, roll=0.0)

SCENARIOS = {
    "dive": (4000.0, 1000.0, 0.0),
    "too_close": (300.0, 100.0, 0.0),
    "too_far": (6894.4, 5785.0, 0.0),
    "uturn": (-3000.0, 2500.0, 0.0),
    "extremely_far": (15000.0, -2000.0, 0.0),
}

def _print_path(name, path):
    print(f"\n--- {name}: {len(path)} points, {path.total_length():.0f} units ---")
    for i, point in enumerate(path):
        x, y, z = point.position
        print(f"  {i:3d} {point.point_type.value:<16} ({x:9.1f}, {y:9.1f}, {z:7.1f})  roll {point.roll:6.1f}")

def main():
    settings = AircraftMovementSettings()
    output_dir = Path(__file__).resolve().parent / "output"
    output_dir.mkdir(exist_ok=True)

    visualizer = PathVisualizer()
    builder = PathBuilder(settings.bezier, settings.attack, settings.dead_zone,
                          rng=random.Random(7), debug_sink=visualizer)

    path = builder.build_move_to_path(START, HEADING, (-300.0, 300.0, 2000.0))
    _print_path("move_to (dead zone)", path)
    visualizer.save_3d_plot(visualizer.create_3d_plot(title="Move-to"), str(output_dir / "move_to.html"))

    for name, target in SCENARIOS.items():
        visualizer.clear()
        result, info = classify_attack_position(
            START, HEADING, target, settings.attack.attack_dive_range, settings.attack.angle_allow_attack_dive)
        print(f"\n{name}: {result.value} at {info.distance:.0f} units, {info.abs_angle:.1f} deg")
        path = builder.build_attack_path(START, HEADING, target)
        _print_path(name, path)
        fig = visualizer.create_3d_plot(target=target, title=f"Attack path: {name}")
        visualizer.save_3d_plot(fig, str(output_dir / f"attack_{name}.html"))

if __name__ == "__main__":
    main()
