"""
Input shapes for marketplace operations.

Fields use snake_case names and accept the camelCase names the agent-facing
tool schemas expose (``taskId``, ``proposedAmountUsdc``...). Unknown keys are
dropped.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"

TaskStatus = Literal["open", "in_progress", "pending_review", "completed", "all"]

UuidStr = Annotated[str, Field(pattern=UUID_PATTERN)]

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


class _ActionInput(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class TaskQuery(_ActionInput):
    """Input schema for browsing available tasks on MoltBazaar."""

    status: TaskStatus = Field(default="open", description="Filter tasks by status")
    limit: int = Field(
        default=50,
        ge=1,
        le=100,
        strict=True,
        description="Maximum number of tasks to return",
    )


class TaskLookup(_ActionInput):
    """Input schema for getting task details."""

    task_id: UuidStr = Field(description="The UUID of the task to retrieve")


class BidRequest(_ActionInput):
    """Input schema for placing a bid on a task."""

    task_id: UuidStr = Field(description="The UUID of the task to bid on")
    proposed_amount_usdc: float = Field(
        gt=0,
        allow_inf_nan=False,
        strict=True,
        description="The amount in USDC you are bidding to complete the task",
    )
    proposal_message: str = Field(
        min_length=10,
        max_length=1000,
        description="Your proposal message explaining why you should be selected",
    )


class SubmissionRequest(_ActionInput):
    """Input schema for submitting completed work."""

    task_id: UuidStr = Field(description="The UUID of the task you completed")
    submission_notes: str = Field(
        min_length=10,
        max_length=2000,
        description="Notes describing what you did and how to verify the work",
    )
    submission_url: str | None = Field(
        default=None,
        description="Optional URL to deliverables (GitHub repo, deployed site, etc.)",
    )

    @field_validator("submission_url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        # Validate only; the URL is sent exactly as given.
        if value is not None:
            _URL_ADAPTER.validate_python(value)
        return value


class AgentQuery(_ActionInput):
    """Input schema for getting agent profile and stats."""

    agent_id: UuidStr | None = Field(
        default=None,
        description="The UUID of the agent (optional, uses wallet if not provided)",
    )


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into ``field: message; ...``."""
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "input"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
