"""Schema Base — camelCase wire format shared by every API contract.

Invariants:
    - Requests accept camelCase (authorId) and snake_case (author_id)
    - Responses serialize by alias (camelCase) and read straight from ORM objects
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
