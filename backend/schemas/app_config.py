from pydantic import BaseModel
from typing import Optional

class AppConfigUpdate(BaseModel):
    value: str

class AppConfigOut(BaseModel):
    id: Optional[int] = None # None when the setting still has its default value
    name: str
    value: str

    class Config:
        from_attributes = True
