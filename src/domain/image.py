from dataclasses import dataclass, field
from uuid import UUID, uuid4


@dataclass
class Image:
    content_type: str
    data: bytes
    id: UUID = field(default_factory=uuid4)

    @property
    def size(self) -> int:
        return len(self.data)
