"""
Configuration & Global Constants
================================
This module serves as the central registry for tolerances, drawing constants
and the settings of the optional explanation service.

Why is this file needed?
------------------------
1. Consistency: The analyzer, the rasterizer and the views must agree on the
   same tolerances (a branch taken by one must be taken by all of them).
2. Injection: The explanation service credential is read from the environment
   exactly once, in `main()`, and handed to the collaborator that needs it.

Exports:
    EPS (float): Absolute tolerance for every "is this zero?" test.
    SCALE (float): Device pixels per model unit.
    ExplanationSettings: Settings for the remote explanation collaborator.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

# Tolerances
EPS: float = 1e-6
EXACT_EPS: float = 1e-9
GRADIENT_EPS: float = 1e-6

# Canvas geometry (device pixels)
SCALE: float = 40.0
HOVER_THRESHOLD_PX: float = 20.0
CURVE_THRESHOLD_PX: float = 1.5
CURVE_ALPHA_FLOOR: float = 0.2
RESIZE_DEBOUNCE_MS: int = 50

# Upper bound for waiting on a pending explanation request when the window closes
SHUTDOWN_WAIT_MS: int = 2000

# Default snapshot: x^2 + xy + y^2 - 10 = 0 (rotated ellipse)
DEFAULT_COEFFICIENTS: tuple[float, float, float, float, float, float] = (1.0, 1.0, 1.0, 0.0, 0.0, -10.0)

# Colours
BACKGROUND_COLOR = "#0f172a"
GRID_COLOR = "#1e293b"
CURVE_RGB: tuple[int, int, int] = (34, 211, 238)
AXIS_COLOR = "#94a3b8"
TICK_LABEL_COLOR = "#cbd5e1"
ROTATED_AXIS_COLOR = "#fbbf24"
ROTATED_AXIS_ACTIVE_COLOR = "#fef08a"
QUADRATIC_COLOR = "#fb7185"
LINEAR_COLOR = "#22d3ee"
CONSTANT_COLOR = "#34d399"

# Remote explanation service
EXPLANATION_MODEL: str = "gemini-2.5-flash"
EXPLANATION_ENDPOINT: str = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
EXPLANATION_TIMEOUT_S: float = 30.0
EXPLANATION_TEMPERATURE: float = 0.2
API_KEY_ENV_VARS: tuple[str, ...] = ("GEMINI_API_KEY", "API_KEY")


@dataclass(frozen=True)
class ExplanationSettings:
    """Settings handed to the explanation client at construction time."""
    api_key: Optional[str] = None
    model: str = EXPLANATION_MODEL
    endpoint: str = EXPLANATION_ENDPOINT
    timeout: float = EXPLANATION_TIMEOUT_S

    @classmethod
    def from_env(cls) -> ExplanationSettings:
        """Read the credential from the first non-empty environment variable."""
        for name in API_KEY_ENV_VARS:
            value = os.environ.get(name)
            if value:
                return cls(api_key=value)
        return cls()
