from enum import Enum

from ehr.models.reporting import MeasureReport
from ehr.repositories.base import SQLAlchemyRepository
from ehr.repositories.search import SearchKind, SearchParam


class MeasureReportFilter(str, Enum):
    MEASURE = "measure"
    PATIENT = "patient"
    STATUS = "status"
    TYPE = "type"
    PERIOD = "period"


class MeasureReportRepository(SQLAlchemyRepository[MeasureReport]):
    model = MeasureReport
    filters = MeasureReportFilter
    search_params = {
        MeasureReportFilter.MEASURE: SearchParam(MeasureReport.measure_id),
        MeasureReportFilter.PATIENT: SearchParam(MeasureReport.patient_id, SearchKind.REFERENCE),
        MeasureReportFilter.STATUS: SearchParam(MeasureReport.status),
        MeasureReportFilter.TYPE: SearchParam(MeasureReport.type),
        MeasureReportFilter.PERIOD: SearchParam(MeasureReport.period_start, SearchKind.DATE),
    }
