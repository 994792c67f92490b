from pydantic import BaseModel
from typing import Optional

class LockParams(BaseModel):
    target: Optional[str] = None
    user: Optional[str] = None
    ttl: Optional[str] = None

class UnlockParams(BaseModel):
    target: Optional[str] = None
    user: Optional[str] = None
