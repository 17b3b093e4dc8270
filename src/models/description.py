"""AI description request/response models."""

from pydantic import AliasChoices, BaseModel, Field

from src.models.draft import ListingDraft


class DescriptionRequest(BaseModel):
    """Seller answers the description generator works from."""
    summary: str = Field("", validation_alias=AliasChoices("summary", "sentenceSummary"))
    customers: str = ""
    opportunity: str = Field("", description="Growth / opportunity text")
    unique_edge: str = Field(
        "",
        validation_alias=AliasChoices("uniqueEdge", "unique_edge"),
        serialization_alias="uniqueEdge",
    )
    industry: str = ""
    location: str = ""

    @classmethod
    def from_draft(cls, draft: ListingDraft) -> "DescriptionRequest":
        return cls(
            summary=draft.sentence_summary,
            customers=draft.customers,
            opportunity=draft.growth_potential,
            unique_edge=draft.unique_edge,
            industry=draft.industry,
            location=draft.combined_location,
        )

    def is_empty(self) -> bool:
        return not any(self.model_dump().values())


class DescriptionResponse(BaseModel):
    description: str
