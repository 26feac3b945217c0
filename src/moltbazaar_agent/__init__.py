"""MoltBazaar agent client: browse, bid on and deliver marketplace tasks."""

from moltbazaar_agent.actions import MoltBazaarActionProvider, moltbazaar_action_provider
from moltbazaar_agent.client import MOLTBAZAAR_API_BASE, MarketplaceClient
from moltbazaar_agent.factory import ClientFactory
from moltbazaar_agent.network import BASE_MAINNET, Network
from moltbazaar_agent.results import Err, ErrorKind, Ok
from moltbazaar_agent.wallet import LocalWallet, Wallet

__version__ = "0.1.0"

__all__ = [
    "BASE_MAINNET",
    "MOLTBAZAAR_API_BASE",
    "ClientFactory",
    "Err",
    "ErrorKind",
    "LocalWallet",
    "MarketplaceClient",
    "MoltBazaarActionProvider",
    "Network",
    "Ok",
    "Wallet",
    "moltbazaar_action_provider",
]
