"""Base model for sassd API responses."""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class CamelCaseModel(BaseModel):
    """Read-only snapshot of ledger or engine state, serialized as camelCase JSON.

    Responses are built once per request from live objects and never mutated.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
