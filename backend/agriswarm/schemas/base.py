from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FrozenModel(BaseModel):
    """Immutable record serialized with its python (snake_case) field names."""

    model_config = ConfigDict(frozen=True)


class CamelModel(BaseModel):
    """Immutable record serialized with camelCase names (soilMoisture, cropStage, ...)."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
