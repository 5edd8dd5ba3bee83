from enum import Enum

from sqlalchemy.orm import Session

from ehr.models.billing import Claim, ClaimDiagnosis, ClaimItem, ClaimProcedure, Coverage
from ehr.repositories.base import ChildCollection, PatientScopedRepository
from ehr.repositories.search import SearchKind, SearchParam


class CoverageFilter(str, Enum):
    PATIENT = "patient"
    STATUS = "status"
    TYPE = "type"
    PAYOR = "payor"
    SUBSCRIBER_ID = "subscriber-id"


class CoverageRepository(PatientScopedRepository[Coverage]):
    model = Coverage
    filters = CoverageFilter
    search_params = {
        CoverageFilter.PATIENT: SearchParam(Coverage.patient_id, SearchKind.REFERENCE),
        CoverageFilter.STATUS: SearchParam(Coverage.status),
        CoverageFilter.TYPE: SearchParam(Coverage.type_code),
        CoverageFilter.PAYOR: SearchParam(Coverage.payor_org_id, SearchKind.REFERENCE),
        CoverageFilter.SUBSCRIBER_ID: SearchParam(Coverage.subscriber_id),
    }


class ClaimFilter(str, Enum):
    PATIENT = "patient"
    ENCOUNTER = "encounter"
    STATUS = "status"
    USE = "use"
    PROVIDER = "provider"
    INSURER = "insurer"
    CREATED = "created"


class ClaimRepository(PatientScopedRepository[Claim]):
    model = Claim
    filters = ClaimFilter
    search_params = {
        ClaimFilter.PATIENT: SearchParam(Claim.patient_id, SearchKind.REFERENCE),
        ClaimFilter.ENCOUNTER: SearchParam(Claim.encounter_id, SearchKind.REFERENCE),
        ClaimFilter.STATUS: SearchParam(Claim.status),
        ClaimFilter.USE: SearchParam(Claim.use_code),
        ClaimFilter.PROVIDER: SearchParam(Claim.provider_id, SearchKind.REFERENCE),
        ClaimFilter.INSURER: SearchParam(Claim.insurer_org_id, SearchKind.REFERENCE),
        ClaimFilter.CREATED: SearchParam(Claim.created_date, SearchKind.DATE),
    }

    def __init__(self, session: Session):
        super().__init__(session)
        self.diagnoses = ChildCollection(session, ClaimDiagnosis, "claim_id", order_by=(ClaimDiagnosis.sequence,))
        self.procedures = ChildCollection(session, ClaimProcedure, "claim_id", order_by=(ClaimProcedure.sequence,))
        self.items = ChildCollection(session, ClaimItem, "claim_id", order_by=(ClaimItem.sequence,))
        self.children.update(diagnoses=self.diagnoses, procedures=self.procedures, items=self.items)
