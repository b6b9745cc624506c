"""Row mappers for expiring HSE records."""

from collections.abc import Mapping
from typing import Any

from erp_kernel.domain.dates import to_date
from erp_kernel.domain.rows import require_keys
from erp_modules.safety.models import (
    AssetDocumentRecord,
    EmployeeCertificationRecord,
    SafetyPermitRecord,
)

DOCUMENT_REQUIRED = ("id", "document_name", "document_type")
PERMIT_REQUIRED = (
    "id", "permit_type", "work_description", "work_location", "valid_to", "status",
)
CERTIFICATION_REQUIRED = (
    "id", "employee_id", "employee_name", "skill_id", "skill_name", "skill_code",
    "is_certified",
)


def asset_document_from_row(row: Mapping[str, Any]) -> AssetDocumentRecord:
    require_keys(row, "asset_document", DOCUMENT_REQUIRED)
    expiry = row.get("expiry_date")
    return AssetDocumentRecord(
        id=str(row["id"]),
        document_name=row["document_name"],
        document_type=row["document_type"],
        expiry_date=to_date(expiry) if expiry else None,
        asset_id=row.get("asset_id"),
        asset_code=row.get("asset_code"),
        asset_name=row.get("asset_name"),
        uploaded_by=row.get("uploaded_by"),
    )


def asset_document_to_row(doc: AssetDocumentRecord) -> dict[str, Any]:
    return {
        "id": doc.id,
        "document_name": doc.document_name,
        "document_type": doc.document_type,
        "expiry_date": doc.expiry_date,
        "asset_id": doc.asset_id,
        "asset_code": doc.asset_code,
        "asset_name": doc.asset_name,
        "uploaded_by": doc.uploaded_by,
    }


def safety_permit_from_row(row: Mapping[str, Any]) -> SafetyPermitRecord:
    require_keys(row, "safety_permit", PERMIT_REQUIRED)
    return SafetyPermitRecord(
        id=str(row["id"]),
        permit_type=row["permit_type"],
        work_description=row["work_description"],
        work_location=row["work_location"],
        valid_to=to_date(row["valid_to"]),
        status=row["status"],
        permit_number=row.get("permit_number"),
        requested_by=row.get("requested_by"),
        requester_name=row.get("requester_name"),
    )


def safety_permit_to_row(permit: SafetyPermitRecord) -> dict[str, Any]:
    return {
        "id": permit.id,
        "permit_number": permit.permit_number,
        "permit_type": permit.permit_type,
        "work_description": permit.work_description,
        "work_location": permit.work_location,
        "valid_to": permit.valid_to,
        "status": permit.status,
        "requested_by": permit.requested_by,
        "requester_name": permit.requester_name,
    }


def certification_from_row(row: Mapping[str, Any]) -> EmployeeCertificationRecord:
    require_keys(row, "employee_certification", CERTIFICATION_REQUIRED)
    expiry = row.get("expiry_date")
    return EmployeeCertificationRecord(
        id=str(row["id"]),
        employee_id=str(row["employee_id"]),
        employee_name=row["employee_name"],
        skill_id=str(row["skill_id"]),
        skill_name=row["skill_name"],
        skill_code=row["skill_code"],
        is_certified=bool(row["is_certified"]),
        expiry_date=to_date(expiry) if expiry else None,
        certification_number=row.get("certification_number"),
    )


def certification_to_row(cert: EmployeeCertificationRecord) -> dict[str, Any]:
    return {
        "id": cert.id,
        "employee_id": cert.employee_id,
        "employee_name": cert.employee_name,
        "skill_id": cert.skill_id,
        "skill_name": cert.skill_name,
        "skill_code": cert.skill_code,
        "certification_number": cert.certification_number,
        "expiry_date": cert.expiry_date,
        "is_certified": cert.is_certified,
    }
