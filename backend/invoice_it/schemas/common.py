"""
Shared schema types
"""

from decimal import Decimal
from typing import Annotated

from pydantic import Field, PlainSerializer

# Monetary values are Numeric(12, 2) in the database and plain JSON numbers on the wire
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]

# Prices accepted from clients
Price = Annotated[Money, Field(ge=0, max_digits=12, decimal_places=2)]
