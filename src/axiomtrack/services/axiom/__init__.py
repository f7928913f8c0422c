"""Axiom venue integration: credentials, REST client and launch feed."""

from axiomtrack.services.axiom.client import AxiomClient
from axiomtrack.services.axiom.credentials import CredentialStore, Credentials
from axiomtrack.services.axiom.fallback import FallbackDataset
from axiomtrack.services.axiom.feed import FeedState, LaunchFeed, SubscriberRegistry

__all__ = [
    "AxiomClient",
    "CredentialStore",
    "Credentials",
    "FallbackDataset",
    "FeedState",
    "LaunchFeed",
    "SubscriberRegistry",
]
