"""
Session State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the current coefficient snapshot and the last
   explanation text in one place.
2. Decoupling: Views read from this object; panels write to it and then emit
   their `data_changed` signals.

Nothing derived from the coefficients is stored here. The geometry, the exact
rotation and the raster are recomputed from `coefficients` on every change.

Classes:
    ProjectState: The main container class.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from conicexplorer.model.coefficients import Coefficients
from conicexplorer.model.report import AnalysisReport, build_report

logger = logging.getLogger(__name__)


@dataclass
class ProjectState:
    """
    Single instance per window holding the session state.
    Pass this instance to the panels and the main window.
    """
    coefficients: Coefficients = field(default_factory=Coefficients)
    explanation: Optional[str] = None

    def set_coefficient(self, name: str, value: float) -> bool:
        """
        Replace one coefficient.

        Returns:
            True if the snapshot changed.
        """
        new = self.coefficients.with_value(name, value)
        if new == self.coefficients:
            return False
        logger.debug("%s: %s -> %s", name, getattr(self.coefficients, name), value)
        self.coefficients = new
        return True

    def report(self) -> AnalysisReport:
        return build_report(self.coefficients)

    def reset(self) -> None:
        """Back to the default snapshot."""
        self.coefficients = Coefficients()
        self.explanation = None
        logger.info("Session state has been reset.")
