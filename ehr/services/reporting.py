from ehr.repositories.reporting import MeasureReportRepository
from ehr.services.base import ResourceService


class MeasureReportService(ResourceService):
    repository_class = MeasureReportRepository
    required_fields = ("measure_id",)
    default_status = "complete"
