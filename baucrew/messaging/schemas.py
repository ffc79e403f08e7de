"""
baucrew/messaging/schemas.py

Pydantic schemas for the messaging system:
- Sending messages (into a thread, or opening a thread on a job request)
- Reading threads with ordered messages
- Inbox listing with last-message previews
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from baucrew.core.schemas import ActionResult
from baucrew.job_request.models import ListingCategory
from baucrew.users.schemas import ProviderSummary, SenderInfo, UserSummary


# ---------------------------------------------------
# Message Schemas
# ---------------------------------------------------
class MessageRead(BaseModel):
    """A single message with its sender."""

    id: UUID
    thread_id: UUID
    body: str
    attachment_urls: list[str] = Field(default_factory=list)
    created_at: datetime
    sender: SenderInfo

    model_config = ConfigDict(from_attributes=True)


class ThreadRead(BaseModel):
    """A thread with its messages in chronological order."""

    id: UUID
    job_request_id: UUID
    customer_id: UUID
    provider_id: UUID
    booking_id: UUID | None = None
    created_at: datetime
    messages: list[MessageRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------
# Send Message Schemas
# ---------------------------------------------------
class SendMessageRequest(BaseModel):
    """
    Either `thread_id` (reply in an existing thread) or `job_request_id`
    (provider opens contact on a job request) must be given.
    """

    body: str = Field(..., max_length=5000, description="Message text")
    thread_id: UUID | None = Field(None, description="Existing thread to post into")
    job_request_id: UUID | None = Field(None, description="Job request to open a thread on")

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message body cannot be empty")
        return value

    @model_validator(mode="after")
    def target_given(self) -> "SendMessageRequest":
        if self.thread_id is None and self.job_request_id is None:
            raise ValueError("Either thread_id or job_request_id must be provided")
        return self


class SendMessageResult(ActionResult):
    thread_id: UUID


# ---------------------------------------------------
# Inbox Schemas
# ---------------------------------------------------
class LastMessagePreview(BaseModel):
    body: str
    created_at: datetime
    sender_id: UUID

    model_config = ConfigDict(from_attributes=True)


class ThreadJobRequestInfo(BaseModel):
    id: UUID
    title: str
    category: ListingCategory

    model_config = ConfigDict(from_attributes=True)


class InboxThreadRead(BaseModel):
    """Lightweight thread entry for the inbox."""

    id: UUID
    job_request_id: UUID
    booking_id: UUID | None = None
    customer_id: UUID
    provider_id: UUID
    created_at: datetime
    last_message: LastMessagePreview | None = None
    provider: ProviderSummary
    customer: UserSummary
    job_request: ThreadJobRequestInfo
