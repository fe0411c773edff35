"""The value types used in the `atelier` models: authors of the works and comments, and records' lifecycle."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class AtelierBaseModel(BaseModel):
    """The base model for all the value types in `atelier`."""

    model_config = ConfigDict(frozen=True)


# region Authors
class RegisteredAuthor(AtelierBaseModel):
    """The author who is a registered User."""

    kind: Literal["registered"] = "registered"
    user_id: int


class GuestAuthor(AtelierBaseModel):
    """The author who posted without an account, known only by the nickname."""

    kind: Literal["guest"] = "guest"
    nickname: str = Field(min_length=1)


Author = Annotated[RegisteredAuthor | GuestAuthor, Field(discriminator="kind")]

# endregion


# region Lifecycle
class Active(AtelierBaseModel):
    """The record is alive."""

    state: Literal["active"] = "active"


class Deleted(AtelierBaseModel):
    """The record is soft-deleted: still in the database, but excluded from the default reads."""

    state: Literal["deleted"] = "deleted"
    at: datetime


Lifecycle = Annotated[Active | Deleted, Field(discriminator="state")]

# endregion
