from __future__ import annotations

import uuid

from ehr.errors import NotFoundError, ReferentialIntegrityError
from ehr.ids import new_id
from ehr.repositories.inbox import InboxMessageRepository
from ehr.services.base import ResourceService


class InboxMessageService(ResourceService):
    repository_class = InboxMessageRepository
    required_fields = ("message_type", "subject")
    default_status = "unread"
    defaults = {"priority": "normal", "is_urgent": False}
    allowed_statuses = frozenset({"unread", "read", "in-progress", "completed", "deferred", "cancelled"})

    def prepare(self, entity) -> None:
        # A reply joins its parent's thread; a new message starts its own
        if entity.thread_id is not None:
            return
        if entity.parent_id is not None:
            try:
                parent = self.repo.get_by_id(entity.parent_id)
            except NotFoundError:
                raise ReferentialIntegrityError(f"InboxMessage: parent_id {entity.parent_id} does not exist") from None
            entity.thread_id = parent.thread_id or parent.id
            return
        entity.id = entity.id or new_id()
        entity.thread_id = entity.id

    def list_by_recipient(self, recipient_id: uuid.UUID, limit: int, offset: int):
        return self.repo.list_by_recipient(recipient_id, limit, offset)
