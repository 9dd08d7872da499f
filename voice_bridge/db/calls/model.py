"""
Call record model held by the in-memory call store.

A record is the service's view of one outbound call: seeded when the call is
created, then patched by provider webhooks until the end-of-call report.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CallLookup(BaseModel):
    """Who the call was placed for, captured once at creation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str | None = Field(None, description="Requesting user's display name")
    phone_number: str | None = Field(None, description="Requesting user's callback number")


class CallRecord(BaseModel):
    """Observed lifecycle of one outbound call."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    call_id: str = Field(..., description="Provider-assigned call identifier")
    status: str = Field(..., description="Provider status string, passed through verbatim")
    transcript: str = Field(default="", description="Transcript text in arrival order")
    summary: str | None = Field(None, description="End-of-call summary")
    recording_url: str | None = Field(None, description="Latest recording URL seen")
    last_update: datetime = Field(
        default_factory=utc_now, description="Time of the most recent mutation"
    )
    lookup: CallLookup | None = Field(None, description="Creation-time metadata")


# Fields a webhook patch may replace. call_id and lookup are fixed at creation.
PATCHABLE_FIELDS = frozenset({"status", "transcript", "summary", "recording_url"})
