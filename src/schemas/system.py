from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class StatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    db_connected: bool = Field(alias="dbConnected")


class InitResponse(BaseModel):
    message: str
    counts: Dict[str, int]
