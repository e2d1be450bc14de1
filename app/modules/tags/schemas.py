from pydantic import BaseModel


class TagResponse(BaseModel):
    id: str
    label: str
