from enum import Enum

from ehr.models.inbox import InboxMessage
from ehr.repositories.base import PatientScopedRepository
from ehr.repositories.search import SearchKind, SearchParam


class InboxMessageFilter(str, Enum):
    RECIPIENT = "recipient"
    SENDER = "sender"
    PATIENT = "patient"
    STATUS = "status"
    MESSAGE_TYPE = "message-type"
    PRIORITY = "priority"
    THREAD = "thread"
    URGENT = "urgent"


class InboxMessageRepository(PatientScopedRepository[InboxMessage]):
    model = InboxMessage
    filters = InboxMessageFilter
    search_params = {
        InboxMessageFilter.RECIPIENT: SearchParam(InboxMessage.recipient_id, SearchKind.REFERENCE),
        InboxMessageFilter.SENDER: SearchParam(InboxMessage.sender_id, SearchKind.REFERENCE),
        InboxMessageFilter.PATIENT: SearchParam(InboxMessage.patient_id, SearchKind.REFERENCE),
        InboxMessageFilter.STATUS: SearchParam(InboxMessage.status),
        InboxMessageFilter.MESSAGE_TYPE: SearchParam(InboxMessage.message_type),
        InboxMessageFilter.PRIORITY: SearchParam(InboxMessage.priority),
        InboxMessageFilter.THREAD: SearchParam(InboxMessage.thread_id, SearchKind.REFERENCE),
        InboxMessageFilter.URGENT: SearchParam(InboxMessage.is_urgent, SearchKind.BOOLEAN),
    }

    def list_by_recipient(self, recipient_id, limit: int, offset: int):
        return self.list_by(InboxMessage.recipient_id, recipient_id, limit, offset)
