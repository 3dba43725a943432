from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable value object serialized with camelCase keys for the dashboard UI."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
