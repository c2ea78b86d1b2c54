from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, field_validator

from magnet_rss.schemas import AppBaseModel
from magnet_rss.services.magnet import is_valid_magnet


class MagnetState(AppBaseModel):
    """The stored magnet link and the time it was written."""

    magnet: str
    updated_at: Optional[datetime] = None


class UpdateRequest(AppBaseModel):
    """POST /update request body."""

    # Clients may send extra fields (e.g. a name); only "magnet" is read.
    model_config = ConfigDict(extra="ignore")

    magnet: str

    @field_validator("magnet")
    @classmethod
    def check_magnet(cls, value: str) -> str:
        if not is_valid_magnet(value):
            raise ValueError(
                "Invalid magnet link: expected magnet:?xt=urn:btih:<32-40 "
                "alphanumeric hash> with optional dn and tr parameters."
            )
        return value


class UpdateResponse(AppBaseModel):
    """POST /update response."""

    success: bool
    message: str
    display_name: str
    updated_at: datetime
