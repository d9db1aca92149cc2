from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Notification:
    owner: str
    text: str
    created_at: datetime
    id: UUID = field(default_factory=uuid4)
