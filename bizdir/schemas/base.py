from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for documents and payloads exchanged with the UI and the store.

    Attributes are snake_case in Python and camelCase on the wire, matching
    the field names the frontend and the stored documents use.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, use_enum_values=True
    )
