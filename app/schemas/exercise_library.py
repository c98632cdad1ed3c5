from pydantic import BaseModel
from typing import Optional, List


class ExerciseLibraryRead(BaseModel):
    id: str
    name: str
    force: Optional[str] = None
    level: Optional[str] = None
    mechanic: Optional[str] = None
    equipment: Optional[str] = None
    primary_muscles: List[str] = []
    secondary_muscles: List[str] = []
    instructions: List[str] = []
    category: Optional[str] = None
    images: List[str] = []

    class Config:
        from_attributes = True
