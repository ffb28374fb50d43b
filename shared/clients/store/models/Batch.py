"""Generic batch export models, independent of the store backend."""

from typing import Any

from pydantic import BaseModel, ConfigDict

STATUS_COMPLETED = "COMPLETED"


class PageDescriptor(BaseModel):
    """
    One sub-request of a batch: a GET for a single page of the requested resource.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    path: str
    method: str = "GET"
    body: str = ""


class BatchTicket(BaseModel):
    """
    Opaque handle returned by the store when a batch is accepted.
    """
    ticket: str


class BatchResult(BaseModel):
    """
    A batch status response. ``payload`` is the body exactly as the store sent it.
    """
    status: str
    ticket: str | None = None
    payload: dict[str, Any] = {}

    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED
