"""
Module: erp_engines.clearance
Responsibility:
    Decide whether an oversize transport can pass a surveyed route point
    given the point's measured clearances, bridge capacity and available
    turn radius.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Safety margins (vertical 0.3 m, horizontal 0.5 m) are added to the
      transport's height and width before comparing.
    - A measurement that was not recorded is never a failure.
    - Exactly one issue per failed check; ``passable`` iff no issues.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from erp_kernel.domain.values import Number, to_decimal

VERTICAL_CLEARANCE_MARGIN = Decimal("0.3")
HORIZONTAL_CLEARANCE_MARGIN = Decimal("0.5")


@dataclass(frozen=True)
class TransportDimensions:
    """Loaded transport envelope, in metres and tons."""

    height: Decimal
    width: Decimal
    weight: Decimal
    turn_radius: Decimal


@dataclass(frozen=True)
class PassabilityResult:
    passable: bool
    issues: tuple[str, ...] = ()


def _display(value: Decimal) -> str:
    return format(value.normalize(), "f")


def assess_passability(
    dimensions: TransportDimensions,
    *,
    vertical_clearance: Number | None = None,
    horizontal_clearance: Number | None = None,
    bridge_capacity: Number | None = None,
    turn_radius_available: Number | None = None,
    vertical_margin: Decimal = VERTICAL_CLEARANCE_MARGIN,
    horizontal_margin: Decimal = HORIZONTAL_CLEARANCE_MARGIN,
) -> PassabilityResult:
    issues: list[str] = []

    if vertical_clearance is not None:
        available = to_decimal(vertical_clearance)
        required = to_decimal(dimensions.height) + vertical_margin
        if available < required:
            issues.append(
                f"Insufficient vertical clearance: {_display(available)}m available, "
                f"{required:.2f}m required"
            )

    if horizontal_clearance is not None:
        available = to_decimal(horizontal_clearance)
        required = to_decimal(dimensions.width) + horizontal_margin
        if available < required:
            issues.append(
                f"Insufficient horizontal clearance: {_display(available)}m available, "
                f"{required:.2f}m required"
            )

    if bridge_capacity is not None:
        capacity = to_decimal(bridge_capacity)
        weight = to_decimal(dimensions.weight)
        if capacity < weight:
            issues.append(
                f"Bridge capacity exceeded: {_display(capacity)}t capacity, "
                f"{_display(weight)}t required"
            )

    if turn_radius_available is not None:
        available = to_decimal(turn_radius_available)
        required = to_decimal(dimensions.turn_radius)
        if available < required:
            issues.append(
                f"Insufficient turn radius: {_display(available)}m available, "
                f"{_display(required)}m required"
            )

    return PassabilityResult(passable=not issues, issues=tuple(issues))
