from enum import Enum

from sqlalchemy.orm import Session

from ehr.models.oncology import CancerDiagnosis, ChemoCycle, TreatmentProtocol
from ehr.repositories.base import ChildCollection, PatientScopedRepository, SQLAlchemyRepository
from ehr.repositories.search import SearchKind, SearchParam


class CancerDiagnosisFilter(str, Enum):
    PATIENT = "patient"
    STATUS = "status"
    CANCER_TYPE = "cancer-type"
    STAGE = "stage"
    ICD10 = "icd10"
    DIAGNOSED = "diagnosed"


class CancerDiagnosisRepository(PatientScopedRepository[CancerDiagnosis]):
    model = CancerDiagnosis
    filters = CancerDiagnosisFilter
    search_params = {
        CancerDiagnosisFilter.PATIENT: SearchParam(CancerDiagnosis.patient_id, SearchKind.REFERENCE),
        CancerDiagnosisFilter.STATUS: SearchParam(CancerDiagnosis.current_status),
        CancerDiagnosisFilter.CANCER_TYPE: SearchParam(CancerDiagnosis.cancer_type),
        CancerDiagnosisFilter.STAGE: SearchParam(CancerDiagnosis.stage_group),
        CancerDiagnosisFilter.ICD10: SearchParam(CancerDiagnosis.icd10_code),
        CancerDiagnosisFilter.DIAGNOSED: SearchParam(CancerDiagnosis.diagnosis_date, SearchKind.DATE),
    }


class TreatmentProtocolFilter(str, Enum):
    DIAGNOSIS = "diagnosis"
    STATUS = "status"
    TYPE = "type"
    INTENT = "intent"


class TreatmentProtocolRepository(SQLAlchemyRepository[TreatmentProtocol]):
    model = TreatmentProtocol
    filters = TreatmentProtocolFilter
    search_params = {
        TreatmentProtocolFilter.DIAGNOSIS: SearchParam(TreatmentProtocol.cancer_diagnosis_id, SearchKind.REFERENCE),
        TreatmentProtocolFilter.STATUS: SearchParam(TreatmentProtocol.status),
        TreatmentProtocolFilter.TYPE: SearchParam(TreatmentProtocol.protocol_type),
        TreatmentProtocolFilter.INTENT: SearchParam(TreatmentProtocol.intent),
    }

    def __init__(self, session: Session):
        super().__init__(session)
        self.cycles = ChildCollection(session, ChemoCycle, "protocol_id", order_by=(ChemoCycle.cycle_number,))
        self.children["cycles"] = self.cycles
