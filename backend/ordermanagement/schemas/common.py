"""
Shared schema building blocks.

All request and response bodies use camelCase field names on the wire
while the Python attributes stay snake_case.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


# Generated ids range over the positive signed 64-bit integers
MAX_ID = 2**63 - 1

# Money amounts are exact Decimals internally and JSON numbers on the wire
MoneyAmount = Annotated[
    Decimal,
    PlainSerializer(lambda value: float(value), return_type=float, when_used="json"),
]

# Generated ids are integers internally and strings on the wire
IdString = Annotated[
    int,
    PlainSerializer(lambda value: str(value), return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base schema with camelCase aliases, populated by name or alias."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
