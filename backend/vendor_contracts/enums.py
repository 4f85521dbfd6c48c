from enum import Enum


class ContractStatus(Enum):
    PENDING_PLANNER_SIGNATURE = "pending_planner_signature"
    REVISIONS_REQUESTED = "revisions_requested"
    ACTIVE = "active"

class ContractState(Enum):
    NO_CONTRACT = "no_contract"
    DRAFT = "draft"
    SAVED = "saved"

class UserRole(Enum):
    PLANNER = "planner"
    VENDOR = "vendor"

class ServiceType(Enum):
    CATERING = "catering"
    PHOTOGRAPHY = "photography"
    MUSIC = "music"
    DECOR = "decor"
    FLOWERS = "flowers"
    VENUE = "venue"
    OTHER = "other"

    @classmethod
    def from_label(cls, service_type: str | None) -> "ServiceType":
        """case-insensitive lookup falling back to OTHER for unrecognized service types"""

        try:
            return cls((service_type or "").strip().lower())
        except ValueError:
            return cls.OTHER

class ContractChange(Enum):
    SAVED = "saved"
    SIGNED = "signed"
    REVISION_REQUESTED = "revision_requested"
