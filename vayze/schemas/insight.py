from vayze.schemas.base import VayzeModel


class Insight(VayzeModel):
    type: str
    icon: str
    text: str
    detail: str
    importance: int
