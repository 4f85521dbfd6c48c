from typing import Literal, Optional, TypedDict

from vendor_contracts.common.schemas import ConfiguredBaseModel
from vendor_contracts.features.contracts.schemas import ContractChangeEvent


class RedisPubSubMessage(TypedDict):
    type: Literal['message', 'pmessage', 'subscribe', 'unsubscribe', 'psubscribe', 'punsubscribe']
    pattern: Optional[str]
    channel: str
    data: str

class NotificationEvent(ConfiguredBaseModel):
    event: Literal["contract"]
    data: ContractChangeEvent
