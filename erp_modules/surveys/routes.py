"""
Route Survey Logic (``erp_modules.surveys.routes``).

Responsibility
--------------
Survey numbering, pipeline counts, search, waypoint ordering and the
per-waypoint passability check against the survey's transport envelope.

Architecture position
---------------------
**Modules layer** -- pure functions.  Clearance arithmetic is delegated to
``erp_engines.clearance``.

Invariants enforced
-------------------
* Waypoint order numbers start at 1 and, after a reorder, are contiguous.
* Sorting and reordering never mutate the caller's sequence.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import replace
from decimal import Decimal

from erp_engines.clearance import (
    HORIZONTAL_CLEARANCE_MARGIN,
    VERTICAL_CLEARANCE_MARGIN,
    PassabilityResult,
    TransportDimensions,
    assess_passability,
)
from erp_kernel.domain.values import to_decimal
from erp_modules.surveys.models import (
    ChecklistCategory,
    RouteSurvey,
    RouteWaypoint,
    SurveyChecklistItem,
    SurveyStatus,
    SurveyStatusCounts,
)

SURVEY_NUMBER_PATTERN = re.compile(r"^RSV-(\d{4})-(\d{4})$")


def is_valid_survey_number(survey_number: str) -> bool:
    return SURVEY_NUMBER_PATTERN.match(survey_number) is not None


def parse_survey_number(survey_number: str) -> tuple[int, int] | None:
    """``(year, sequence)`` for a well-formed number, else None."""
    match = SURVEY_NUMBER_PATTERN.match(survey_number)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def format_survey_number(year: int, sequence: int) -> str:
    return f"RSV-{year}-{sequence:04d}"


def calculate_status_counts(surveys: Iterable[RouteSurvey]) -> SurveyStatusCounts:
    counts = {"requested": 0, "scheduled": 0, "in_progress": 0, "completed": 0}
    for survey in surveys:
        if survey.status.value in counts:
            counts[survey.status.value] += 1
    return SurveyStatusCounts(**counts)


def search_surveys(surveys: Iterable[RouteSurvey], query: str) -> list[RouteSurvey]:
    """Case-insensitive match on number, cargo, origin or destination."""
    if not query.strip():
        return list(surveys)
    needle = query.lower()
    return [
        s for s in surveys
        if needle in s.survey_number.lower()
        or needle in s.cargo_description.lower()
        or needle in s.origin_location.lower()
        or needle in s.destination_location.lower()
    ]


def filter_surveys(
    surveys: Iterable[RouteSurvey],
    *,
    status: SurveyStatus | None = None,
    surveyor_id: str | None = None,
    search: str = "",
) -> list[RouteSurvey]:
    selected = [
        s for s in surveys
        if (status is None or s.status == status)
        and (surveyor_id is None or s.surveyor_id == surveyor_id)
    ]
    return search_surveys(selected, search)


def get_next_waypoint_order(waypoints: Sequence[RouteWaypoint]) -> int:
    if not waypoints:
        return 1
    return max(w.waypoint_order for w in waypoints) + 1


def sort_waypoints_by_order(waypoints: Iterable[RouteWaypoint]) -> list[RouteWaypoint]:
    return sorted(waypoints, key=lambda w: w.waypoint_order)


def reorder_waypoints(
    waypoints: Iterable[RouteWaypoint],
    from_index: int,
    to_index: int,
) -> list[RouteWaypoint]:
    """Move one waypoint within the route order and renumber from 1."""
    ordered = sort_waypoints_by_order(waypoints)
    moved = ordered.pop(from_index)
    ordered.insert(to_index, moved)
    return [replace(w, waypoint_order=i) for i, w in enumerate(ordered, start=1)]


def transport_dimensions_for(survey: RouteSurvey) -> TransportDimensions:
    """Loaded envelope of the survey; unmeasured dimensions count as zero."""
    return TransportDimensions(
        height=to_decimal(survey.total_height_m),
        width=to_decimal(survey.total_width_m),
        weight=to_decimal(survey.total_weight_tons),
        turn_radius=to_decimal(survey.turning_radius_m),
    )


def assess_waypoint_passability(
    waypoint: RouteWaypoint,
    dimensions: TransportDimensions,
    *,
    vertical_margin: Decimal = VERTICAL_CLEARANCE_MARGIN,
    horizontal_margin: Decimal = HORIZONTAL_CLEARANCE_MARGIN,
) -> PassabilityResult:
    return assess_passability(
        dimensions,
        vertical_clearance=waypoint.vertical_clearance_m,
        horizontal_clearance=waypoint.horizontal_clearance_m,
        bridge_capacity=waypoint.bridge_capacity_tons,
        turn_radius_available=waypoint.turn_radius_available_m,
        vertical_margin=vertical_margin,
        horizontal_margin=horizontal_margin,
    )


def impassable_waypoints(
    waypoints: Iterable[RouteWaypoint],
    dimensions: TransportDimensions,
) -> list[tuple[RouteWaypoint, PassabilityResult]]:
    """Failing waypoints in route order with their issues."""
    failing = []
    for waypoint in sort_waypoints_by_order(waypoints):
        result = assess_waypoint_passability(waypoint, dimensions)
        if not result.passable:
            failing.append((waypoint, result))
    return failing


def group_checklist_by_category(
    items: Iterable[SurveyChecklistItem],
) -> dict[ChecklistCategory, list[SurveyChecklistItem]]:
    grouped: dict[ChecklistCategory, list[SurveyChecklistItem]] = {c: [] for c in ChecklistCategory}
    for item in items:
        grouped[item.category].append(item)
    return grouped


def format_dimensions(
    length: Decimal | None = None,
    width: Decimal | None = None,
    height: Decimal | None = None,
) -> str:
    parts = [f"{v}m" for v in (length, width, height) if v is not None]
    return " × ".join(parts) or "-"


def format_travel_time(hours: Decimal | None) -> str:
    if hours is None:
        return "-"
    if hours < 1:
        return f"{round(hours * 60)} min"
    return f"{hours} hours"
