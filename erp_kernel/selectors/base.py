"""
Module: erp_kernel.selectors.base
Responsibility: Base class for read-only query selectors.  Selectors return
    plain row mappings; turning a row into a typed model is the job of the
    mapper that owns that entity in ``erp_modules``.
Architecture position: Kernel > Selectors.  May import from db/.
    MUST NOT import from services/, modules, or engines.

Invariants enforced:
    - Read-only access: selectors never add, delete, flush or commit.
    - Session ownership: the caller owns the session and its scope.
"""

from abc import ABC
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select
from sqlalchemy.engine import RowMapping
from sqlalchemy.orm import Session


class BaseSelector(ABC):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept a Session from the caller, perform read-only
        queries, and return sequences of ``RowMapping``.
    """

    def __init__(self, session: Session):
        self.session = session

    def _fetch(self, stmt: Select[Any]) -> Sequence[RowMapping]:
        return self.session.execute(stmt).mappings().all()
