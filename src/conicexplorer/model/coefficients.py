"""
Coefficients of the general second-degree equation
    a11*x^2 + a12*x*y + a22*y^2 + b1*x + b2*y + c = 0
and the text <-> number conversion used by the coefficient fields.
"""
from __future__ import annotations

import dataclasses
import math
import re
from dataclasses import dataclass
from typing import Optional

from conicexplorer.config import DEFAULT_COEFFICIENTS

COEFFICIENT_NAMES: tuple[str, ...] = ("a11", "a12", "a22", "b1", "b2", "c")

# Leading decimal number, e.g. "1.5", "-.5", "2e3", "7." (trailing garbage is ignored)
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class Coefficients:
    """An immutable snapshot of the six coefficients."""
    a11: float = DEFAULT_COEFFICIENTS[0]
    a12: float = DEFAULT_COEFFICIENTS[1]
    a22: float = DEFAULT_COEFFICIENTS[2]
    b1: float = DEFAULT_COEFFICIENTS[3]
    b2: float = DEFAULT_COEFFICIENTS[4]
    c: float = DEFAULT_COEFFICIENTS[5]

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return self.a11, self.a12, self.a22, self.b1, self.b2, self.c

    def with_value(self, name: str, value: float) -> Coefficients:
        """Return a new snapshot with one coefficient replaced."""
        if name not in COEFFICIENT_NAMES:
            raise KeyError(f"Unknown coefficient '{name}'.")
        return dataclasses.replace(self, **{name: float(value)})

    def evaluate(self, x, y):
        """f(x, y); works for scalars and numpy arrays alike."""
        return self.a11 * x * x + self.a12 * x * y + self.a22 * y * y + self.b1 * x + self.b2 * y + self.c

    def gradient(self, x, y):
        """Analytic partial derivatives (df/dx, df/dy)."""
        dfdx = 2 * self.a11 * x + self.a12 * y + self.b1
        dfdy = self.a12 * x + 2 * self.a22 * y + self.b2
        return dfdx, dfdy

    def equation(self) -> str:
        """Human-readable form, e.g. '1x^2 + 1xy + 1y^2 + 0x + 0y + -10 = 0'."""
        a11, a12, a22, b1, b2, c = (format_coefficient(v) for v in self.as_tuple())
        return f"{a11}x^2 + {a12}xy + {a22}y^2 + {b1}x + {b2}y + {c} = 0"


def parse_coefficient(text: str) -> float:
    """
    Parse the leading decimal number of `text`.

    Raises:
        ValueError: If no number can be read or the number is not finite.
    """
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        raise ValueError(f"'{text}' is not a number.")
    value = float(match.group(1))
    if not math.isfinite(value):
        raise ValueError(f"'{text}' is not a finite number.")
    return value


def format_coefficient(value: float) -> str:
    """Canonical text for a coefficient: '2' not '2.0', '0' not '-0'."""
    if value == 0:
        return "0"
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


class FieldBuffer:
    """
    Text state of one coefficient field, kept apart from the model value.

    Text that does not parse stays in the buffer but never reaches the model.
    On commit (focus loss) the text is either canonicalised or reverted.
    """
    def __init__(self, value: float) -> None:
        self.value = float(value)
        self.text = format_coefficient(self.value)

    def edit(self, text: str) -> Optional[float]:
        """Store new text; return the parsed value if it should propagate."""
        self.text = text
        try:
            parsed = parse_coefficient(text)
        except ValueError:
            return None
        self.value = parsed
        return parsed

    def commit(self) -> Optional[float]:
        """Finish editing; return the parsed value, or None after reverting."""
        try:
            parsed = parse_coefficient(self.text)
        except ValueError:
            self.text = format_coefficient(self.value)
            return None
        self.value = parsed
        self.text = format_coefficient(parsed)
        return parsed

    def sync(self, value: float) -> bool:
        """
        Follow an external model change.

        Returns:
            True if the text was replaced.
        """
        value = float(value)
        self.value = value
        try:
            if parse_coefficient(self.text) == value:
                return False
        except ValueError:
            pass
        self.text = format_coefficient(value)
        return True
