"""
Route Survey Models (``erp_modules.surveys.models``).

Responsibility
--------------
Value objects for pre-move route surveys of oversize cargo: the survey
header with cargo and transport envelope, the ordered waypoints along the
route, and the checklist items ticked off by the surveyor.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* Dimensions are metres, weights are tons, all as ``Decimal``.
* A measurement that was not taken is ``None``, never zero.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class SurveyStatus(str, Enum):
    REQUESTED = "requested"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Feasibility(str, Enum):
    FEASIBLE = "feasible"
    FEASIBLE_WITH_CONDITIONS = "feasible_with_conditions"
    NOT_FEASIBLE = "not_feasible"


class WaypointType(str, Enum):
    START = "start"
    CHECKPOINT = "checkpoint"
    OBSTACLE = "obstacle"
    BRIDGE = "bridge"
    INTERSECTION = "intersection"
    UNDERPASS = "underpass"
    OVERHEAD = "overhead"
    TURN = "turn"
    REST_POINT = "rest_point"
    DESTINATION = "destination"


class ChecklistStatus(str, Enum):
    PENDING = "pending"
    OK = "ok"
    WARNING = "warning"
    FAIL = "fail"


class ChecklistCategory(str, Enum):
    ROAD_CONDITION = "road_condition"
    CLEARANCES = "clearances"
    BRIDGES = "bridges"
    UTILITIES = "utilities"
    TRAFFIC = "traffic"
    PERMITS = "permits"
    ACCESS = "access"


@dataclass(frozen=True)
class RouteSurvey:
    id: str
    survey_number: str
    cargo_description: str
    origin_location: str
    destination_location: str
    status: SurveyStatus = SurveyStatus.REQUESTED
    customer_id: str | None = None
    job_order_id: str | None = None
    cargo_length_m: Decimal | None = None
    cargo_width_m: Decimal | None = None
    cargo_height_m: Decimal | None = None
    cargo_weight_tons: Decimal | None = None
    total_length_m: Decimal | None = None
    total_width_m: Decimal | None = None
    total_height_m: Decimal | None = None
    total_weight_tons: Decimal | None = None
    turning_radius_m: Decimal | None = None
    survey_date: date | None = None
    surveyor_id: str | None = None
    surveyor_name: str | None = None
    route_distance_km: Decimal | None = None
    estimated_travel_time_hours: Decimal | None = None
    feasibility: Feasibility | None = None
    feasibility_notes: str | None = None
    escort_required: bool = False
    total_route_cost_estimate: Decimal | None = None
    requested_at: datetime | None = None
    completed_at: datetime | None = None
    notes: str | None = None


@dataclass(frozen=True)
class RouteWaypoint:
    id: str
    survey_id: str
    waypoint_order: int
    waypoint_type: WaypointType
    location_name: str
    km_from_start: Decimal | None = None
    road_width_m: Decimal | None = None
    vertical_clearance_m: Decimal | None = None
    horizontal_clearance_m: Decimal | None = None
    bridge_name: str | None = None
    bridge_capacity_tons: Decimal | None = None
    turn_radius_available_m: Decimal | None = None
    action_required: str | None = None
    action_cost_estimate: Decimal | None = None
    is_passable: bool = True
    passable_notes: str | None = None


@dataclass(frozen=True)
class SurveyChecklistItem:
    id: str
    survey_id: str
    category: ChecklistCategory
    check_item: str
    status: ChecklistStatus = ChecklistStatus.PENDING
    notes: str | None = None
    checked_by: str | None = None
    checked_at: datetime | None = None


@dataclass(frozen=True)
class SurveyStatusCounts:
    """Open-pipeline counts; cancelled surveys are not counted."""
    requested: int = 0
    scheduled: int = 0
    in_progress: int = 0
    completed: int = 0
