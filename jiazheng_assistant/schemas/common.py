from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    The dashboard front end speaks camelCase (createdAt, serviceType, ...).
    Responses are serialized with camelCase aliases; requests accept either style.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
