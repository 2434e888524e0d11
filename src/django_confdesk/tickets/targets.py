"""Ticket sales target curves.

A target curve maps sales-period progress (``0.0`` at the start of ticket
sales, ``1.0`` at the conference date) to the fraction of capacity that
should be sold by then. All curves start at 0 and reach exactly 1.
"""

import math
from dataclasses import dataclass

from django.db import models

_S_CURVE_STEEPNESS = 8


class TargetCurve(models.TextChoices):
    """Shape of the expected ticket sales progression."""

    LINEAR = "linear", "Linear"
    S_CURVE = "s_curve", "S-Curve"
    EARLY_PUSH = "early_push", "Early Push"
    LATE_PUSH = "late_push", "Late Push"


@dataclass(frozen=True, slots=True)
class CurvePoint:
    """A sampled point on a target curve."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class CurveMetadata:
    """Display metadata for a target curve."""

    name: str
    description: str
    icon: str


CURVE_METADATA: dict[str, CurveMetadata] = {
    TargetCurve.LINEAR: CurveMetadata(
        name="Linear",
        description="Steady, consistent growth throughout the period",
        icon="📈",
    ),
    TargetCurve.EARLY_PUSH: CurveMetadata(
        name="Early Push",
        description="Front-loaded sales with early momentum",
        icon="🚀",
    ),
    TargetCurve.LATE_PUSH: CurveMetadata(
        name="Late Push",
        description="Back-loaded sales with final sprint",
        icon="🏃",
    ),
    TargetCurve.S_CURVE: CurveMetadata(
        name="S-Curve",
        description="Slow start, rapid middle, steady end",
        icon="〰️",
    ),
}


def _sigmoid(x: float) -> float:
    return 1 / (1 + math.exp(-x))


def calculate_curve_value(progress: float, curve: str) -> float:
    """Return the target fraction of capacity for a point in the sales period.

    Args:
        progress: Fraction of the sales period elapsed. Values outside
            ``[0, 1]`` are clamped.
        curve: One of the :class:`TargetCurve` values. Unknown curves are
            treated as linear.

    Returns:
        The target fraction in ``[0, 1]``.
    """
    if progress >= 1:
        return 1.0
    if progress <= 0:
        return 0.0

    if curve == TargetCurve.EARLY_PUSH:
        return math.sqrt(progress)
    if curve == TargetCurve.LATE_PUSH:
        return progress**3
    if curve == TargetCurve.S_CURVE:
        k = _S_CURVE_STEEPNESS
        x = progress * k - k / 2
        # Normalised so the curve reaches exactly 1 at progress == 1.
        return _sigmoid(x) / _sigmoid(k / 2)
    return float(progress)


def generate_curve_data(curve: str, points: int = 100) -> list[CurvePoint]:
    """Sample a curve at ``points + 1`` evenly spaced progress values.

    Args:
        curve: The target curve to sample.
        points: Number of intervals between 0 and 1.

    Returns:
        Points from ``x=0`` to ``x=1`` inclusive.
    """
    if points <= 0:
        msg = "points must be a positive integer"
        raise ValueError(msg)
    return [CurvePoint(x=i / points, y=calculate_curve_value(i / points, curve)) for i in range(points + 1)]


def _format_coordinate(value: float) -> str:
    formatted = f"{float(value):.6f}".rstrip("0").rstrip(".")
    return "0" if formatted == "-0" else formatted


def generate_curve_svg_path(curve: str, width: int = 200, height: int = 100) -> str:
    """Build an SVG path ``d`` attribute previewing a curve.

    The path starts at the bottom-left corner and plots 51 samples with the
    y axis flipped so higher targets render higher.
    """
    path = f"M 0 {_format_coordinate(height)}"
    for point in generate_curve_data(curve, 50):
        x = point.x * width
        y = height - point.y * height
        path += f" L {_format_coordinate(x)} {_format_coordinate(y)}"
    return path


def get_curve_metadata(curve: str) -> CurveMetadata:
    """Return display metadata for *curve*, falling back to linear."""
    return CURVE_METADATA.get(curve, CURVE_METADATA[TargetCurve.LINEAR])
