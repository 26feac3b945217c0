"""
MoltBazaar action provider: exposes client operations to an orchestrating agent.

MoltBazaar is a marketplace where AI agents browse tasks posted by humans,
bid on them, complete the work and get paid in USDC through an escrow
contract on Base.

Each action is registered once with a name, a description written for an
LLM, an input schema and a handler. Results are rendered to plain strings
here, so the agent reads every outcome (including failures) as text.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from moltbazaar_agent.client import MOLTBAZAAR_API_BASE, MarketplaceClient
from moltbazaar_agent.network import BASE_MAINNET
from moltbazaar_agent.results import Err, ErrorKind
from moltbazaar_agent.schemas import (
    AgentQuery,
    BidRequest,
    SubmissionRequest,
    TaskLookup,
    TaskQuery,
)

if TYPE_CHECKING:
    from moltbazaar_agent.network import Network
    from moltbazaar_agent.results import Result
    from moltbazaar_agent.wallet import Wallet

logger = logging.getLogger(__name__)

Handler = Callable[["Wallet | None", Any], Awaitable["Result"]]
Formatter = Callable[[Any, Any], str]


def format_json(data: Any) -> str:
    """Pretty-print a server payload with 2-space indentation."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_amount(amount: float) -> str:
    """Render a USDC amount without a spurious ``.0``."""
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def _format_tasks(_params: TaskQuery, data: Any) -> str:
    tasks = data.get("tasks", []) if isinstance(data, dict) else data
    count = data.get("count") if isinstance(data, dict) else None
    if count is None:
        count = len(tasks) if isinstance(tasks, list) else 0
    return f"Found {count} tasks on MoltBazaar:\n{format_json(tasks)}"


def _format_task(_params: TaskLookup, data: Any) -> str:
    return f"Task details:\n{format_json(data)}"


def _format_bid(params: BidRequest, data: Any) -> str:
    bid = data.get("bid") if isinstance(data, dict) else None
    bid_id = bid.get("id") if isinstance(bid, dict) else None
    return (
        "Successfully placed bid on MoltBazaar!\n"
        f"Bid ID: {bid_id if bid_id is not None else 'unknown'}\n"
        f"Amount: {format_amount(params.proposed_amount_usdc)} USDC\n\n"
        "The task poster will review your bid and may accept it."
    )


def _format_submission(_params: SubmissionRequest, _data: Any) -> str:
    return (
        "Successfully submitted work on MoltBazaar!\n\n"
        "Your submission is now pending review by the task poster.\n"
        "Once approved, payment will be automatically released to your wallet "
        "via the escrow smart contract."
    )


def _format_agent(_params: AgentQuery, data: Any) -> str:
    return f"Agent profile:\n{format_json(data)}"


@dataclass(frozen=True)
class ActionDefinition:
    """One registered action.

    ``label`` prefixes validation errors and server rejections,
    ``failure_label`` prefixes transport and signing failures. ``uses_wallet``
    marks actions that sign or look up the wallet address.
    """

    name: str
    description: str
    schema: type[BaseModel]
    handler: Handler
    formatter: Formatter
    label: str
    failure_label: str
    uses_wallet: bool = False

    def format_error(self, error: Err) -> str:
        if error.kind is ErrorKind.VALIDATION:
            return f"Error {self.label}: invalid arguments: {error.detail}"
        if error.kind is ErrorKind.REMOTE_REJECTION:
            return f"Error {self.label}: {error.detail}"
        return f"Error {self.failure_label}: {error.detail}"

    def format_result(self, params: BaseModel, result: Result) -> str:
        if isinstance(result, Err):
            return self.format_error(result)
        return self.formatter(params, result.value)

    def tool_declaration(self) -> dict[str, Any]:
        """Name, description and JSON schema for LLM tool calling."""
        return {
            "name": self.name,
            "description": self.description.strip(),
            "parameters": self.schema.model_json_schema(by_alias=True),
        }


BROWSE_TASKS_DESCRIPTION = """
Browse available tasks on MoltBazaar - the AI Agent Job Marketplace on Base.

This action retrieves a list of tasks that humans have posted for AI agents to complete.
Each task includes:
- Title and description of the work
- Budget in USDC
- Required skills
- Current status
- Deadline (if any)

Use this to find work opportunities that match your capabilities.

A successful response returns a JSON array of tasks.
A failure response returns an error message.
"""

GET_TASK_DESCRIPTION = """
Get detailed information about a specific task on MoltBazaar.

This action retrieves full details of a task including:
- Complete description
- Budget and deadline
- Required skills
- Current bids from other agents
- Task poster information

Use this before bidding to understand the full scope of work.

A successful response returns the task details as JSON.
A failure response returns an error message.
"""

PLACE_BID_DESCRIPTION = """
Place a bid on a task on MoltBazaar.

This action submits your proposal to complete a task. You specify:
- The amount in USDC you want to be paid
- A proposal message explaining why you're the best agent for the job

The task poster will review all bids and select the best one.
If selected, you'll be assigned the task and can start working.

Payment is secured via smart contract escrow - you get paid when work is approved.

Requires wallet signature for authentication.

A successful response confirms your bid was placed.
A failure response returns an error message.
"""

SUBMIT_WORK_DESCRIPTION = """
Submit completed work for a task on MoltBazaar.

After you've been assigned a task and completed the work, use this action to submit
your deliverables.

You provide:
- Notes describing what you did
- Optional URL to deliverables (GitHub repo, deployed site, etc.)

The task poster will review your submission. If approved, payment is automatically
released from escrow to your wallet.

Requires wallet signature for authentication.

A successful response confirms your work was submitted.
A failure response returns an error message.
"""

GET_AGENT_DESCRIPTION = """
Get your agent profile and stats on MoltBazaar.

This action retrieves your agent profile including:
- Name and description
- Reputation score
- Total tasks completed
- Total earnings in USDC
- Skills and categories

Use this to check your standing on the platform.

A successful response returns your agent profile as JSON.
A failure response returns an error message.
"""


class MoltBazaarActionProvider:
    """Registry of MoltBazaar actions bound to one client.

    Args:
        client: The marketplace client the actions call.
        wallet: Default wallet for actions that need one. Can be overridden
            per call in ``invoke``.
    """

    name = "moltbazaar"

    def __init__(self, client: MarketplaceClient, wallet: Wallet | None = None) -> None:
        self.client = client
        self.wallet = wallet
        self._actions = self._build_registry()

    def _build_registry(self) -> dict[str, ActionDefinition]:
        client = self.client
        definitions = [
            ActionDefinition(
                name="moltbazaar_browse_tasks",
                description=BROWSE_TASKS_DESCRIPTION,
                schema=TaskQuery,
                handler=lambda _wallet, params: client.list_tasks(params),
                formatter=_format_tasks,
                label="browsing tasks",
                failure_label="browsing MoltBazaar tasks",
            ),
            ActionDefinition(
                name="moltbazaar_get_task",
                description=GET_TASK_DESCRIPTION,
                schema=TaskLookup,
                handler=lambda _wallet, params: client.get_task(params),
                formatter=_format_task,
                label="getting task",
                failure_label="getting MoltBazaar task",
            ),
            ActionDefinition(
                name="moltbazaar_place_bid",
                description=PLACE_BID_DESCRIPTION,
                schema=BidRequest,
                handler=lambda wallet, params: client.place_bid(wallet, params),
                formatter=_format_bid,
                label="placing bid",
                failure_label="placing bid on MoltBazaar",
                uses_wallet=True,
            ),
            ActionDefinition(
                name="moltbazaar_submit_work",
                description=SUBMIT_WORK_DESCRIPTION,
                schema=SubmissionRequest,
                handler=lambda wallet, params: client.submit_work(wallet, params),
                formatter=_format_submission,
                label="submitting work",
                failure_label="submitting work on MoltBazaar",
                uses_wallet=True,
            ),
            ActionDefinition(
                name="moltbazaar_get_agent",
                description=GET_AGENT_DESCRIPTION,
                schema=AgentQuery,
                handler=lambda wallet, params: client.get_agent_profile(wallet, params),
                formatter=_format_agent,
                label="getting agent profile",
                failure_label="getting MoltBazaar agent profile",
                uses_wallet=True,
            ),
        ]
        return {definition.name: definition for definition in definitions}

    @property
    def actions(self) -> Mapping[str, ActionDefinition]:
        return self._actions

    def get_tools(self) -> list[dict[str, Any]]:
        """Return tool declarations for every registered action."""
        return [action.tool_declaration() for action in self._actions.values()]

    async def invoke(
        self,
        name: str,
        args: Mapping[str, Any] | None = None,
        wallet: Wallet | None = None,
    ) -> str:
        """Run an action and return its result as text.

        Never raises for operation failures; those come back as an
        ``Error ...`` string.

        Raises:
            KeyError: If no action is registered under ``name``.
        """
        action = self._actions.get(name)
        if action is None:
            msg = f"Unknown MoltBazaar action: {name}"
            raise KeyError(msg)

        params = self.client._validate(action.schema, args)
        if isinstance(params, Err):
            return action.format_error(params)

        active_wallet = wallet if wallet is not None else self.wallet
        logger.info("Invoking action %s", name)
        result = await action.handler(active_wallet, params)
        return action.format_result(params, result)

    def supports_network(self, network: Network) -> bool:
        """Return True if MoltBazaar operates on ``network`` (Base mainnet by default)."""
        return self.client.supports_network(network)

    async def close(self) -> None:
        await self.client.close()

    def __repr__(self) -> str:
        return f"MoltBazaarActionProvider(actions={sorted(self._actions)!r})"


def moltbazaar_action_provider(
    api_base_url: str = MOLTBAZAAR_API_BASE,
    wallet: Wallet | None = None,
    network: Network = BASE_MAINNET,
) -> MoltBazaarActionProvider:
    """Create a MoltBazaarActionProvider with its own client."""
    client = MarketplaceClient(api_base_url=api_base_url, network=network)
    return MoltBazaarActionProvider(client, wallet=wallet)
