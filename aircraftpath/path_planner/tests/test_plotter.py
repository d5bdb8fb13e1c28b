# aircraftpath/path_planner/tests/test_plotter.py
import sys
from pathlib import Path

import numpy as np

# Add project root
project_root = Path(__file__).resolve().parent.parent.parent.parent
sys.path.append(str(project_root))

from aircraftpath.path_planner.core import PathBuilder
from aircraftpath.path_planner.data_models import Rotator
from aircraftpath.path_planner.visualization import PathVisualizer


def test_visualizer_collects_builder_output():
    visualizer = PathVisualizer()
    builder = PathBuilder(debug_sink=visualizer)
    path = builder.build_move_to_path(np.zeros(3), Rotator(), np.array([-300.0, 300.0, 0.0]))

    assert len(visualizer.paths) == 1
    assert visualizer.paths[0] is path
    assert [label for _, label in visualizer.marks] == ["Dead zone escape"]

    fig = visualizer.create_3d_plot(target=np.array([0.0, 500.0, 0.0]), title="Dead zone")
    # Path, start marker, one mark and the target.
    assert len(fig.data) == 4
    assert fig.layout.title.text == "Dead zone"

def test_visualizer_clear():
    visualizer = PathVisualizer()
    visualizer.on_point(np.zeros(3), "Mark")
    visualizer.clear()
    assert visualizer.marks == []
    assert len(visualizer.create_3d_plot().data) == 0
