"""Models for the OMI webhook."""

from pydantic import BaseModel


class OmiWebhookAck(BaseModel):
    ok: bool = True
    notified: bool = False
