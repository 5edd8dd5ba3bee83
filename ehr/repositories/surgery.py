from enum import Enum

from sqlalchemy.orm import Session

from ehr.models.surgery import SurgicalCase, SurgicalProcedure, SurgicalTeamMember, SurgicalTimeEvent
from ehr.repositories.base import ChildCollection, PatientScopedRepository
from ehr.repositories.search import SearchKind, SearchParam


class SurgicalCaseFilter(str, Enum):
    PATIENT = "patient"
    SURGEON = "surgeon"
    STATUS = "status"
    CASE_CLASS = "case-class"
    DATE = "date"


class SurgicalCaseRepository(PatientScopedRepository[SurgicalCase]):
    model = SurgicalCase
    filters = SurgicalCaseFilter
    search_params = {
        SurgicalCaseFilter.PATIENT: SearchParam(SurgicalCase.patient_id, SearchKind.REFERENCE),
        SurgicalCaseFilter.SURGEON: SearchParam(SurgicalCase.primary_surgeon_id, SearchKind.REFERENCE),
        SurgicalCaseFilter.STATUS: SearchParam(SurgicalCase.status),
        SurgicalCaseFilter.CASE_CLASS: SearchParam(SurgicalCase.case_class),
        SurgicalCaseFilter.DATE: SearchParam(SurgicalCase.scheduled_date, SearchKind.DATE),
    }

    def __init__(self, session: Session):
        super().__init__(session)
        self.children["procedures"] = ChildCollection(
            session, SurgicalProcedure, "surgical_case_id", order_by=(SurgicalProcedure.sequence,)
        )
        self.children["team"] = ChildCollection(session, SurgicalTeamMember, "surgical_case_id")
        self.children["time-events"] = ChildCollection(
            session, SurgicalTimeEvent, "surgical_case_id", order_by=(SurgicalTimeEvent.event_time,)
        )
