"""Tagged results of the listing submission pipeline."""

from typing import Annotated, Any, Literal, Optional, Union
from pydantic import BaseModel, Field


class SubmissionSuccess(BaseModel):
    kind: Literal["success"] = "success"
    listing: Optional[dict[str, Any]] = None
    redirect_to: str = "/thank-you"


class UploadFailure(BaseModel):
    """An image upload failed; nothing was submitted."""
    kind: Literal["upload_error"] = "upload_error"
    message: str
    filename: Optional[str] = None


class ServerFailure(BaseModel):
    """The listing endpoint rejected the payload or could not be reached."""
    kind: Literal["server_error"] = "server_error"
    message: str
    status_code: Optional[int] = None


SubmissionResult = Annotated[
    Union[SubmissionSuccess, UploadFailure, ServerFailure],
    Field(discriminator="kind"),
]
