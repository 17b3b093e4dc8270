"""Seller onboarding wizard reducer.

``reduce(state, action)`` is pure: it returns a new ``WizardState`` and never
mutates the one passed in. Actions that are not legal in the current stage
raise ``InvalidTransitionError``.

Stages::

    step 1 <-> step 2 <-> step 3 -> preview -> submitted
                            ^          |
                            +--- edit -+
"""

from typing import Any

from pydantic import ValidationError

from src.models.draft import DRAFT_ONLY_FIELDS, ListingDraft
from src.models.wizard import (
    AddImages,
    AIDescriptionReceived,
    EditingStep,
    NextStep,
    OpenPreview,
    PreviousStep,
    Previewing,
    RemoveImage,
    ReturnToEdit,
    SetField,
    SubmissionFailed,
    SubmissionStarted,
    SubmissionStatus,
    SubmissionSucceeded,
    Submitted,
    WizardAction,
    WizardState,
)
from src.utils.errors import DraftError, InvalidTransitionError

LAST_STEP = 3
# Fields the first step marks as required.
STEP_ONE_REQUIRED = ("name", "email")

# Form control name (alias) or attribute name -> attribute name.
_EDITABLE_FIELDS: dict[str, str] = {}
for _attr, _field in ListingDraft.model_fields.items():
    if _attr in DRAFT_ONLY_FIELDS:
        continue
    _EDITABLE_FIELDS[_attr] = _attr
    if _field.alias:
        _EDITABLE_FIELDS[_field.alias] = _attr


def initial_state(draft: ListingDraft = None) -> WizardState:
    """Step 1, preview off; optionally seeded with an existing draft."""
    if draft is None:
        return WizardState()
    return WizardState(draft=draft)


def set_draft_field(draft: ListingDraft, name: str, value: Any) -> ListingDraft:
    """Return a copy of ``draft`` with one form field changed and validated."""
    attr = _EDITABLE_FIELDS.get(name)
    if attr is None:
        raise DraftError(f"Unknown draft field: {name}")

    values = dict(draft)
    values[attr] = value
    try:
        return ListingDraft.model_validate(values)
    except ValidationError as e:
        raise DraftError(f"Invalid value for {name}: {e.errors()[0]['msg']}") from e


def needs_ai_description(state: WizardState) -> bool:
    """Whether entering preview should request a generated description."""
    return isinstance(state.stage, Previewing) and not state.draft.ai_description


def _require_editing(state: WizardState, action: WizardAction) -> EditingStep:
    if not isinstance(state.stage, EditingStep):
        raise InvalidTransitionError(f"{type(action).__name__} requires a form step, stage is {state.stage.kind}")
    return state.stage


def _require_mutable(state: WizardState, action: WizardAction) -> None:
    if state.is_terminal:
        raise InvalidTransitionError(f"{type(action).__name__} after submission")
    if state.submission.is_submitting:
        raise InvalidTransitionError(f"{type(action).__name__} while a submission is in flight")


def reduce(state: WizardState, action: WizardAction) -> WizardState:
    """Apply ``action`` to ``state``."""
    if isinstance(action, SetField):
        _require_mutable(state, action)
        draft = set_draft_field(state.draft, action.name, action.value)
        return state.model_copy(update={"draft": draft})

    if isinstance(action, NextStep):
        _require_mutable(state, action)
        stage = _require_editing(state, action)
        if stage.step >= LAST_STEP:
            raise InvalidTransitionError("Step 3 continues to the preview, not a next step")
        if stage.step == 1:
            missing = [f for f in STEP_ONE_REQUIRED if not getattr(state.draft, f).strip()]
            if missing:
                raise DraftError(f"Missing required fields: {', '.join(missing)}")
        return state.model_copy(update={"stage": EditingStep(step=stage.step + 1)})

    if isinstance(action, PreviousStep):
        _require_mutable(state, action)
        stage = _require_editing(state, action)
        if stage.step <= 1:
            raise InvalidTransitionError("Step 1 has no previous step")
        return state.model_copy(update={"stage": EditingStep(step=stage.step - 1)})

    if isinstance(action, OpenPreview):
        _require_mutable(state, action)
        stage = _require_editing(state, action)
        if stage.step != LAST_STEP:
            raise InvalidTransitionError("Preview is only reachable from step 3")
        return state.model_copy(update={"stage": Previewing()})

    if isinstance(action, ReturnToEdit):
        _require_mutable(state, action)
        if not isinstance(state.stage, Previewing):
            raise InvalidTransitionError("Edit is only available from the preview")
        return state.model_copy(update={"stage": EditingStep(step=LAST_STEP)})

    if isinstance(action, AddImages):
        _require_mutable(state, action)
        draft = state.draft.model_copy(update={"images": state.draft.images + tuple(action.images)})
        return state.model_copy(update={"draft": draft})

    if isinstance(action, RemoveImage):
        _require_mutable(state, action)
        images = tuple(i for i in state.draft.images if i.preview_url != action.preview_url)
        stored = tuple(u for u in state.draft.existing_image_urls if u != action.preview_url)
        draft = state.draft.model_copy(update={"images": images, "existing_image_urls": stored})
        return state.model_copy(update={"draft": draft})

    if isinstance(action, AIDescriptionReceived):
        # Late results for another draft, or after submission, are dropped.
        if state.is_terminal or action.draft_id != state.draft.draft_id:
            return state
        if state.draft.ai_description:
            return state
        draft = state.draft.model_copy(update={"ai_description": action.description})
        return state.model_copy(update={"draft": draft})

    if isinstance(action, SubmissionStarted):
        _require_mutable(state, action)
        if not isinstance(state.stage, Previewing):
            raise InvalidTransitionError("Submission starts from the preview")
        return state.model_copy(update={"submission": SubmissionStatus(is_submitting=True)})

    if isinstance(action, SubmissionSucceeded):
        if not state.submission.is_submitting:
            raise InvalidTransitionError("No submission in flight")
        return state.model_copy(update={
            "stage": Submitted(listing=action.listing, redirect_to=action.redirect_to),
            "submission": SubmissionStatus(succeeded=True),
        })

    if isinstance(action, SubmissionFailed):
        if not state.submission.is_submitting:
            raise InvalidTransitionError("No submission in flight")
        return state.model_copy(update={"submission": SubmissionStatus(error=action.message)})

    raise InvalidTransitionError(f"Unknown wizard action: {type(action).__name__}")
