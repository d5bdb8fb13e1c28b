from .plotter import PathVisualizer

__all__ = ["PathVisualizer"]
