"""Pydantic schemas for user administration requests and responses."""

from __future__ import annotations

from typing import Dict
from typing import List
from typing import Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import StrictStr

# Flattened Cognito user: booleans for the verified/enabled flags,
# strings for every other attribute.
UserRecord = Dict[str, Union[StrictStr, bool]]


class UserRequest(BaseModel):
    """Body of the enable, disable, confirm and delete operations."""

    model_config = ConfigDict(populate_by_name=True)

    username: StrictStr = ""
    user_email: StrictStr = Field("", alias="userEmail")


class UserListResponse(BaseModel):
    """Users filtered by status, with their count."""

    model_config = ConfigDict(populate_by_name=True)

    users: List[UserRecord]
    total_item_count: int = Field(alias="totalItemCount")

    @classmethod
    def from_records(cls, records: List[UserRecord]) -> "UserListResponse":
        return cls(users=records, totalItemCount=len(records))
