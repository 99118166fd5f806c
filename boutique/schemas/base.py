"""
schemas/base.py
---------------
Shared pydantic plumbing for every request/response model.

Naming convention:
  XCreate  → inbound POST body
  XUpdate  → inbound PUT body (partial)
  XRead    → outbound response body

JSON uses camelCase (idSociete, nomArticle); snake_case is accepted on
input as well.
"""

from decimal import Decimal
from typing import Annotated, Any, ClassVar, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Numeric(10, 2) columns, rendered as JSON numbers rather than strings
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class PatchModel(CamelModel):
    """
    Partial update body.

    A field can be in three states and each means something different:
      - absent from the body      → leave the stored value alone
      - present with a value      → set it
      - present with null         → ignored, except for the optional
                                    foreign keys listed in CLEARABLE,
                                    where it clears the reference
    """

    CLEARABLE: ClassVar[FrozenSet[str]] = frozenset()

    def patch(self) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None and name not in self.CLEARABLE:
                continue
            changes[name] = value
        return changes


class MessageResponse(BaseModel):
    message: str
