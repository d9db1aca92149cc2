from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    username: str
    password_hash: str = ""
    is_admin: bool = False
    image_url: Optional[str] = None
