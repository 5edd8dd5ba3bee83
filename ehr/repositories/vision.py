from enum import Enum

from sqlalchemy.orm import Session

from ehr.models.vision import LensSpecification, VisionPrescription
from ehr.repositories.base import ChildCollection, PatientScopedRepository
from ehr.repositories.search import SearchKind, SearchParam


class VisionPrescriptionFilter(str, Enum):
    PATIENT = "patient"
    ENCOUNTER = "encounter"
    PRESCRIBER = "prescriber"
    STATUS = "status"
    DATE_WRITTEN = "datewritten"


class VisionPrescriptionRepository(PatientScopedRepository[VisionPrescription]):
    model = VisionPrescription
    filters = VisionPrescriptionFilter
    search_params = {
        VisionPrescriptionFilter.PATIENT: SearchParam(VisionPrescription.patient_id, SearchKind.REFERENCE),
        VisionPrescriptionFilter.ENCOUNTER: SearchParam(VisionPrescription.encounter_id, SearchKind.REFERENCE),
        VisionPrescriptionFilter.PRESCRIBER: SearchParam(VisionPrescription.prescriber_id, SearchKind.REFERENCE),
        VisionPrescriptionFilter.STATUS: SearchParam(VisionPrescription.status),
        VisionPrescriptionFilter.DATE_WRITTEN: SearchParam(VisionPrescription.date_written, SearchKind.DATE),
    }

    def __init__(self, session: Session):
        super().__init__(session)
        self.children["lens-specifications"] = ChildCollection(session, LensSpecification, "prescription_id")
