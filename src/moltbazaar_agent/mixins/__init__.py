"""Operation mixin classes for MarketplaceClient."""

from moltbazaar_agent.mixins.agents import AgentProfileMixin
from moltbazaar_agent.mixins.bids import BidMixin
from moltbazaar_agent.mixins.submissions import SubmissionMixin
from moltbazaar_agent.mixins.tasks import TaskMixin

__all__ = [
    "AgentProfileMixin",
    "BidMixin",
    "SubmissionMixin",
    "TaskMixin",
]
