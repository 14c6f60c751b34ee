"""DTO for the decoded session token"""

from cardledger.schemas.base import BaseSchema
from pydantic import ConfigDict, Field


class SessionClaim(BaseSchema):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: int = Field(alias="sub")
    group: str
    is_admin: bool = Field(default=False, alias="isAdmin")
    is_ss: bool = Field(default=False, alias="isSS")
    is_scards: bool = Field(default=False, alias="isSCards")

    @property
    def can_assign_cards(self) -> bool:
        return self.is_ss or self.is_admin or self.is_scards
