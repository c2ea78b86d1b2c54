from pydantic import BaseModel, ConfigDict


class AppBaseModel(BaseModel):
    # Strings are kept verbatim: a magnet link must match its grammar as sent.
    model_config = ConfigDict(
        str_max_length=65536,
        extra="forbid",
        validate_default=True,
    )
