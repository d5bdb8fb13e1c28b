# aircraftpath/path_planner/visualization/plotter.py
"""
Contains the PathVisualizer class, an optional debug sink that collects built
paths and marked points and renders them as interactive 3D plots.
"""
from typing import List, Optional, Tuple

import numpy as np
import plotly.graph_objects as go

from ..data_models import AircraftPath, PathPointType

POINT_TYPE_COLORS = {
    PathPointType.REGULAR: 'green',
    PathPointType.BEZIER: 'blue',
    PathPointType.ATTACK_DIVE: 'red',
    PathPointType.DIVE_RECOVERY: 'orange',
}


class PathVisualizer:
    """Records what the builder reports and draws it. Never changes the paths it is given."""

    def __init__(self):
        self.paths: List[AircraftPath] = []
        self.marks: List[Tuple[np.ndarray, str]] = []

    # --- Debug sink interface ---
    def on_point(self, position: np.ndarray, label: str) -> None:
        self.marks.append((np.array(position, dtype=float), label))

    def on_path_built(self, path: AircraftPath) -> None:
        self.paths.append(path)

    def clear(self) -> None:
        self.paths.clear()
        self.marks.clear()

    def create_3d_plot(self, target: Optional[np.ndarray] = None, title: str = 'Aircraft Path') -> go.Figure:
        fig = go.Figure()
        for i, path in enumerate(self.paths):
            coords = path.positions()
            if not len(coords):
                continue
            colors = [POINT_TYPE_COLORS[p.point_type] for p in path]
            hover = [f"{p.point_type.value}<br>roll {p.roll:.1f} deg" for p in path]
            fig.add_trace(go.Scatter3d(
                x=coords[:, 0], y=coords[:, 1], z=coords[:, 2], mode='lines+markers',
                line=dict(width=4, color='gray'), marker=dict(size=4, color=colors),
                text=hover, hoverinfo='text', name=f'Path {i + 1}'))
            fig.add_trace(go.Scatter3d(x=[coords[0, 0]], y=[coords[0, 1]], z=[coords[0, 2]], mode='markers',
                                       marker=dict(size=8, color='green', symbol='circle'), name=f'Start {i + 1}'))
        for position, label in self.marks:
            fig.add_trace(go.Scatter3d(x=[position[0]], y=[position[1]], z=[position[2]], mode='markers',
                                       marker=dict(size=6, color='purple', symbol='diamond'), name=label))
        if target is not None:
            fig.add_trace(go.Scatter3d(x=[target[0]], y=[target[1]], z=[target[2]], mode='markers',
                                       marker=dict(size=8, color='red', symbol='cross'), name='Target'))
        fig.update_layout(title=title, scene=dict(xaxis_title='X', yaxis_title='Y', zaxis_title='Z',
                                                  aspectmode='data'), margin=dict(r=20, l=10, b=10, t=40))
        return fig

    def save_3d_plot(self, fig: go.Figure, filename: str) -> None:
        fig.write_html(filename)
        print(f"-> Interactive 3D plot generated: '{filename}'.")
