"""Unit tests for operation input schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from moltbazaar_agent.schemas import (
    AgentQuery,
    BidRequest,
    SubmissionRequest,
    TaskLookup,
    TaskQuery,
    describe_validation_error,
)
from tests.helpers import AGENT_ID, TASK_ID


@pytest.mark.unit
class TestTaskQuery:
    """Tests for TaskQuery."""

    def test_defaults(self) -> None:
        query = TaskQuery()
        assert query.status == "open"
        assert query.limit == 50

    @pytest.mark.parametrize("status", ["open", "in_progress", "pending_review", "completed", "all"])
    def test_accepts_every_status(self, status: str) -> None:
        assert TaskQuery(status=status).status == status

    def test_rejects_unknown_status(self) -> None:
        with pytest.raises(ValidationError):
            TaskQuery(status="cancelled")

    @pytest.mark.parametrize("limit", [0, 101, -1])
    def test_rejects_limit_out_of_range(self, limit: int) -> None:
        with pytest.raises(ValidationError):
            TaskQuery(limit=limit)

    @pytest.mark.parametrize("limit", [1, 100])
    def test_accepts_limit_bounds(self, limit: int) -> None:
        assert TaskQuery(limit=limit).limit == limit

    def test_unknown_keys_are_dropped(self) -> None:
        query = TaskQuery.model_validate({"status": "all", "sort": "budget"})
        assert query.model_dump() == {"status": "all", "limit": 50}


@pytest.mark.unit
class TestTaskLookup:
    """Tests for TaskLookup."""

    def test_accepts_camel_case(self) -> None:
        assert TaskLookup.model_validate({"taskId": TASK_ID}).task_id == TASK_ID

    def test_accepts_snake_case(self) -> None:
        assert TaskLookup(task_id=TASK_ID).task_id == TASK_ID

    def test_keeps_uppercase_uuid_as_given(self) -> None:
        assert TaskLookup(task_id=TASK_ID.upper()).task_id == TASK_ID.upper()

    @pytest.mark.parametrize(
        "task_id",
        ["", "not-a-uuid", TASK_ID.replace("-", ""), TASK_ID + "0", f"{TASK_ID[:-1]}g"],
    )
    def test_rejects_malformed_uuid(self, task_id: str) -> None:
        with pytest.raises(ValidationError):
            TaskLookup(task_id=task_id)


@pytest.mark.unit
class TestBidRequest:
    """Tests for BidRequest."""

    def test_valid_bid(self) -> None:
        bid = BidRequest.model_validate(
            {
                "taskId": TASK_ID,
                "proposedAmountUsdc": 25,
                "proposalMessage": "I have shipped ten similar scrapers.",
            }
        )
        assert bid.proposed_amount_usdc == 25.0

    @pytest.mark.parametrize("amount", [0, -5, float("inf"), float("nan")])
    def test_rejects_non_positive_or_non_finite_amount(self, amount: float) -> None:
        with pytest.raises(ValidationError):
            BidRequest(task_id=TASK_ID, proposed_amount_usdc=amount, proposal_message="x" * 20)

    @pytest.mark.parametrize("length", [9, 1001])
    def test_rejects_message_length(self, length: int) -> None:
        with pytest.raises(ValidationError):
            BidRequest(task_id=TASK_ID, proposed_amount_usdc=5, proposal_message="x" * length)

    @pytest.mark.parametrize("length", [10, 1000])
    def test_accepts_message_length_bounds(self, length: int) -> None:
        bid = BidRequest(task_id=TASK_ID, proposed_amount_usdc=5, proposal_message="x" * length)
        assert len(bid.proposal_message) == length


@pytest.mark.unit
class TestSubmissionRequest:
    """Tests for SubmissionRequest."""

    def test_url_is_optional(self) -> None:
        submission = SubmissionRequest(task_id=TASK_ID, submission_notes="All tests pass now.")
        assert submission.submission_url is None

    def test_url_kept_exactly_as_given(self) -> None:
        submission = SubmissionRequest.model_validate(
            {
                "taskId": TASK_ID,
                "submissionNotes": "Deployed the landing page.",
                "submissionUrl": "https://example.com",
            }
        )
        assert submission.submission_url == "https://example.com"

    @pytest.mark.parametrize("url", ["not a url", "example.com/path", "://missing-scheme"])
    def test_rejects_malformed_url(self, url: str) -> None:
        with pytest.raises(ValidationError):
            SubmissionRequest(
                task_id=TASK_ID, submission_notes="Deployed the page.", submission_url=url
            )

    @pytest.mark.parametrize("length", [9, 2001])
    def test_rejects_notes_length(self, length: int) -> None:
        with pytest.raises(ValidationError):
            SubmissionRequest(task_id=TASK_ID, submission_notes="n" * length)


@pytest.mark.unit
class TestAgentQuery:
    """Tests for AgentQuery."""

    def test_agent_id_optional(self) -> None:
        assert AgentQuery().agent_id is None

    def test_accepts_agent_id(self) -> None:
        assert AgentQuery.model_validate({"agentId": AGENT_ID}).agent_id == AGENT_ID

    def test_rejects_malformed_agent_id(self) -> None:
        with pytest.raises(ValidationError):
            AgentQuery(agent_id="agent-7")


@pytest.mark.unit
class TestDescribeValidationError:
    """Tests for describe_validation_error."""

    def test_lists_each_failing_field(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            BidRequest.model_validate(
                {"taskId": "nope", "proposedAmountUsdc": -1, "proposalMessage": "short"}
            )
        detail = describe_validation_error(exc_info.value)
        assert "taskId" in detail
        assert "proposedAmountUsdc" in detail
        assert "proposalMessage" in detail
        assert detail.count(";") == 2


@pytest.mark.unit
class TestStrictNumbers:
    """Numeric fields accept JSON numbers only."""

    @pytest.mark.parametrize("limit", [10.5, True, "10"])
    def test_limit_must_be_integer(self, limit: object) -> None:
        with pytest.raises(ValidationError):
            TaskQuery.model_validate({"limit": limit})

    @pytest.mark.parametrize("amount", [True, "25"])
    def test_amount_must_be_number(self, amount: object) -> None:
        with pytest.raises(ValidationError):
            BidRequest.model_validate(
                {
                    "taskId": TASK_ID,
                    "proposedAmountUsdc": amount,
                    "proposalMessage": "Ready when you are.",
                }
            )

    def test_integer_amount_accepted(self) -> None:
        bid = BidRequest.model_validate(
            {"taskId": TASK_ID, "proposedAmountUsdc": 7, "proposalMessage": "Ready when you are."}
        )
        assert bid.proposed_amount_usdc == 7.0
