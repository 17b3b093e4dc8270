"""Seller wizard stages, state and actions."""

from typing import Annotated, Any, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from src.models.draft import ListingDraft, PendingImage


class EditingStep(BaseModel):
    """One of the three form steps."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["editing"] = "editing"
    step: Literal[1, 2, 3] = 1


class Previewing(BaseModel):
    """Full listing preview, reachable only from step 3."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["preview"] = "preview"


class Submitted(BaseModel):
    """Terminal stage after a successful submission."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["submitted"] = "submitted"
    listing: Optional[dict[str, Any]] = None
    redirect_to: str = "/thank-you"


WizardStage = Annotated[Union[EditingStep, Previewing, Submitted], Field(discriminator="kind")]


class SubmissionStatus(BaseModel):
    model_config = ConfigDict(frozen=True)
    is_submitting: bool = False
    succeeded: bool = False
    error: str = ""


class WizardState(BaseModel):
    """Everything the onboarding screen renders from."""
    model_config = ConfigDict(frozen=True)

    stage: WizardStage = Field(default_factory=EditingStep)
    draft: ListingDraft = Field(default_factory=ListingDraft)
    submission: SubmissionStatus = Field(default_factory=SubmissionStatus)

    @property
    def is_terminal(self) -> bool:
        return isinstance(self.stage, Submitted)


# Actions

class SetField(BaseModel):
    """Form control change, addressed by form name or attribute name."""
    model_config = ConfigDict(frozen=True)
    name: str
    value: Any = None


class NextStep(BaseModel):
    model_config = ConfigDict(frozen=True)


class PreviousStep(BaseModel):
    model_config = ConfigDict(frozen=True)


class OpenPreview(BaseModel):
    model_config = ConfigDict(frozen=True)


class ReturnToEdit(BaseModel):
    model_config = ConfigDict(frozen=True)


class AddImages(BaseModel):
    model_config = ConfigDict(frozen=True)
    images: tuple[PendingImage, ...]


class RemoveImage(BaseModel):
    model_config = ConfigDict(frozen=True)
    preview_url: str


class AIDescriptionReceived(BaseModel):
    """Generated description for the draft identified by ``draft_id``."""
    model_config = ConfigDict(frozen=True)
    draft_id: str
    description: str


class SubmissionStarted(BaseModel):
    model_config = ConfigDict(frozen=True)


class SubmissionSucceeded(BaseModel):
    model_config = ConfigDict(frozen=True)
    listing: Optional[dict[str, Any]] = None
    redirect_to: str = "/thank-you"


class SubmissionFailed(BaseModel):
    model_config = ConfigDict(frozen=True)
    message: str


WizardAction = Union[
    SetField,
    NextStep,
    PreviousStep,
    OpenPreview,
    ReturnToEdit,
    AddImages,
    RemoveImage,
    AIDescriptionReceived,
    SubmissionStarted,
    SubmissionSucceeded,
    SubmissionFailed,
]
