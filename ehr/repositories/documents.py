from enum import Enum

from sqlalchemy.orm import Session

from ehr.models.documents import Composition, CompositionSection, Consent, DocumentReference
from ehr.repositories.base import ChildCollection, PatientScopedRepository
from ehr.repositories.search import SearchKind, SearchParam


class ConsentFilter(str, Enum):
    PATIENT = "patient"
    STATUS = "status"
    SCOPE = "scope"
    CATEGORY = "category"
    DATE = "date"


class ConsentRepository(PatientScopedRepository[Consent]):
    model = Consent
    filters = ConsentFilter
    search_params = {
        ConsentFilter.PATIENT: SearchParam(Consent.patient_id, SearchKind.REFERENCE),
        ConsentFilter.STATUS: SearchParam(Consent.status),
        ConsentFilter.SCOPE: SearchParam(Consent.scope),
        ConsentFilter.CATEGORY: SearchParam(Consent.category_code),
        ConsentFilter.DATE: SearchParam(Consent.date_time, SearchKind.DATE),
    }


class DocumentReferenceFilter(str, Enum):
    PATIENT = "patient"
    ENCOUNTER = "encounter"
    STATUS = "status"
    TYPE = "type"
    CATEGORY = "category"
    AUTHOR = "author"
    DATE = "date"


class DocumentReferenceRepository(PatientScopedRepository[DocumentReference]):
    model = DocumentReference
    filters = DocumentReferenceFilter
    search_params = {
        DocumentReferenceFilter.PATIENT: SearchParam(DocumentReference.patient_id, SearchKind.REFERENCE),
        DocumentReferenceFilter.ENCOUNTER: SearchParam(DocumentReference.encounter_id, SearchKind.REFERENCE),
        DocumentReferenceFilter.STATUS: SearchParam(DocumentReference.status),
        DocumentReferenceFilter.TYPE: SearchParam(DocumentReference.type_code),
        DocumentReferenceFilter.CATEGORY: SearchParam(DocumentReference.category_code),
        DocumentReferenceFilter.AUTHOR: SearchParam(DocumentReference.author_id, SearchKind.REFERENCE),
        DocumentReferenceFilter.DATE: SearchParam(DocumentReference.date, SearchKind.DATE),
    }


class CompositionFilter(str, Enum):
    PATIENT = "patient"
    ENCOUNTER = "encounter"
    STATUS = "status"
    TYPE = "type"
    AUTHOR = "author"
    DATE = "date"


class CompositionRepository(PatientScopedRepository[Composition]):
    model = Composition
    filters = CompositionFilter
    search_params = {
        CompositionFilter.PATIENT: SearchParam(Composition.patient_id, SearchKind.REFERENCE),
        CompositionFilter.ENCOUNTER: SearchParam(Composition.encounter_id, SearchKind.REFERENCE),
        CompositionFilter.STATUS: SearchParam(Composition.status),
        CompositionFilter.TYPE: SearchParam(Composition.type_code),
        CompositionFilter.AUTHOR: SearchParam(Composition.author_id, SearchKind.REFERENCE),
        CompositionFilter.DATE: SearchParam(Composition.date, SearchKind.DATE),
    }

    def __init__(self, session: Session):
        super().__init__(session)
        self.sections = ChildCollection(
            session, CompositionSection, "composition_id", order_by=(CompositionSection.sort_order,)
        )
        self.children["sections"] = self.sections
