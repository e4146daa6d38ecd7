"""
The MODEL layer contains pure data structures and the conic analysis engine.
It has NO knowledge of the GUI (Qt).
"""
from conicexplorer.model.analysis import GeometryDescriptor, analyze
from conicexplorer.model.classification import ConicKind, classify
from conicexplorer.model.coefficients import Coefficients
from conicexplorer.model.exact_form import ExactRotation, SurdTerm, resolve_exact
from conicexplorer.model.hover import HoverAxis, HoverState, hit_test_axes
from conicexplorer.model.raster import RasterResult, rasterize

__all__ = [
    "Coefficients",
    "GeometryDescriptor",
    "analyze",
    "ExactRotation",
    "SurdTerm",
    "resolve_exact",
    "RasterResult",
    "rasterize",
    "HoverAxis",
    "HoverState",
    "hit_test_axes",
    "ConicKind",
    "classify",
]
