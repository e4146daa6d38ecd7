"""
Remote Explanation Service
==========================
Asks a hosted text-generation model for a natural-language explanation of
the current curve.

Why is this file needed?
------------------------
1. Isolation: Every failure (missing key, network, service, malformed reply)
   is caught here and turned into a message string. Nothing raises into the
   geometry pipeline.
2. Testability: The credential is passed in at construction time; this
   module never reads the environment.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from conicexplorer.config import (
    EXPLANATION_ENDPOINT, EXPLANATION_MODEL, EXPLANATION_TEMPERATURE, EXPLANATION_TIMEOUT_S, ExplanationSettings
)
from conicexplorer.model.coefficients import Coefficients

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API Key missing. Cannot fetch analysis."
EMPTY_MESSAGE = "No analysis generated."
ERROR_MESSAGE = "An error occurred while communicating with the AI service."

SYSTEM_INSTRUCTION = "You are a helpful mathematics tutor specializing in geometry and linear algebra."

PROMPT_TEMPLATE = """
Analyze the conic section defined by the equation:
{equation}

Please provide a structured analysis in Markdown format:
1. **Classification**: Identify if it is an Ellipse, Hyperbola, Parabola, or a degenerate case.
2. **Rotation**: Explain how to eliminate the xy term (if present) using the rotation angle formula tan(2θ) = B / (A - C). Calculate the angle.
3. **Standard Form**: Provide the approximate standard form equation after rotation and translation.
4. **Key Features**: Mention center, vertices, or foci if applicable.

Keep the response concise and mathematically precise. Use LaTeX formatting for math equations (e.g., $x^2$).
"""


def build_prompt(coeffs: Coefficients) -> str:
    return PROMPT_TEMPLATE.format(equation=coeffs.equation())


def extract_text(data: Any) -> Optional[str]:
    """
    Concatenate the text parts of the first candidate.

    Raises:
        ValueError: If the reply does not have the expected structure.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected reply of type {type(data).__name__}.")
    candidates = data.get("candidates") or []
    if not candidates:
        return None
    try:
        parts = candidates[0].get("content", {}).get("parts", [])
        text = "".join(part.get("text", "") for part in parts)
    except (AttributeError, TypeError) as e:
        raise ValueError(f"Malformed candidate: {e}") from e
    return text or None


class ExplanationClient:
    """One request per call to `explain`; no retries, no coalescing."""
    def __init__(
        self,
        api_key: Optional[str],
        model: str = EXPLANATION_MODEL,
        endpoint: str = EXPLANATION_ENDPOINT,
        timeout: float = EXPLANATION_TIMEOUT_S
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.endpoint = endpoint
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: ExplanationSettings) -> ExplanationClient:
        return cls(settings.api_key, settings.model, settings.endpoint, settings.timeout)

    @property
    def url(self) -> str:
        return self.endpoint.format(model=self.model)

    def payload(self, coeffs: Coefficients) -> dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": [{"role": "user", "parts": [{"text": build_prompt(coeffs)}]}],
            "generationConfig": {"temperature": EXPLANATION_TEMPERATURE},
        }

    def explain(self, coeffs: Coefficients) -> str:
        """Return Markdown text, or a user-facing message on any failure."""
        if not self.api_key:
            logger.error("API key is missing; explanation request skipped.")
            return MISSING_KEY_MESSAGE

        logger.info("Requesting explanation for %s", coeffs.equation())
        try:
            response = requests.post(
                self.url,
                json=self.payload(coeffs),
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            text = extract_text(response.json())
        except requests.RequestException as e:
            logger.error("Explanation service error: %s", e)
            return ERROR_MESSAGE
        except ValueError as e:
            logger.error("Explanation service returned an invalid reply: %s", e)
            return ERROR_MESSAGE

        return text or EMPTY_MESSAGE
