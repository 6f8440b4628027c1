"""Resource-specific convenience wrappers."""
from .cards import CardRegistrationsResource, CardsResource
from .disputes import DisputesResource
from .hooks import EventsResource, HooksResource
from .kyc import KycDocumentsResource
from .transfers import PayInsResource, TransfersResource
from .users import UsersResource
from .wallets import WalletsResource

__all__ = [
    "UsersResource",
    "WalletsResource",
    "CardRegistrationsResource",
    "CardsResource",
    "TransfersResource",
    "PayInsResource",
    "HooksResource",
    "EventsResource",
    "DisputesResource",
    "KycDocumentsResource",
]
