from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class InsightRead(BaseModel):
    id: int
    type: str
    title: str
    content: str
    data: Optional[Dict[str, Any]] = None
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True
