"""Parsing of client-supplied add-on lists.

Entry shapes are tried in order:

* ``{"description": str, "amount": number}``
* ``{"name": str, "price": number}``
* anything else carrying ``amount`` or ``price``, labelled by the first of
  ``description``, ``name`` or ``label`` that is present

All normalize to :class:`AddOnLine`. Entries with no usable amount (including
label-only entries such as ``{"description": "Towel"}``) are dropped rather
than billed at zero, so a typo never turns into a free line on the bill.
Input that is not a list (or a JSON string holding one) yields an empty list
rather than an error.
"""

import json
import logging
from decimal import Decimal
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

from hoteldesk.schemas.booking import AddOnLine

logger = logging.getLogger(__name__)

_DEFAULT_DESCRIPTION = "Add-on"

_FiniteDecimal = Annotated[Decimal, Field(allow_inf_nan=False)]


class _DescribedAddOn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    description: str
    amount: Decimal = Field(allow_inf_nan=False)

    def normalize(self) -> AddOnLine:
        return AddOnLine(description=self.description or _DEFAULT_DESCRIPTION, amount=self.amount)


class _NamedAddOn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    price: Decimal = Field(allow_inf_nan=False)

    def normalize(self) -> AddOnLine:
        return AddOnLine(description=self.name or _DEFAULT_DESCRIPTION, amount=self.price)


class _LooseAddOn(BaseModel):
    """Cross-named or decorated entries, e.g. ``{"name": ..., "amount": ...}``."""

    description: str | None = None
    name: str | None = None
    label: str | None = None
    amount: _FiniteDecimal | None = None
    price: _FiniteDecimal | None = None

    @model_validator(mode="after")
    def require_amount(self) -> "_LooseAddOn":
        if self.amount is None and self.price is None:
            raise ValueError("add-on has no amount")
        return self

    def normalize(self) -> AddOnLine:
        description = self.description or self.name or self.label or _DEFAULT_DESCRIPTION
        amount = self.amount if self.amount is not None else self.price
        return AddOnLine(description=description, amount=amount)


_entry_adapter: TypeAdapter[_DescribedAddOn | _NamedAddOn | _LooseAddOn] = TypeAdapter(
    Annotated[Union[_DescribedAddOn, _NamedAddOn, _LooseAddOn], Field(union_mode="left_to_right")],  # noqa: UP007
)


def parse_add_ons(raw: Any) -> list[AddOnLine]:
    """Normalize ``raw`` into add-on lines; never raises."""
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.info("Ignoring add-ons that are not valid JSON")
            return []
    if not isinstance(raw, list):
        return []

    lines: list[AddOnLine] = []
    for entry in raw:
        try:
            lines.append(_entry_adapter.validate_python(entry).normalize())
        except ValidationError:
            logger.info("Dropping unrecognized add-on entry: %r", entry)
    return lines


def add_ons_total(lines: list[AddOnLine]) -> Decimal:
    return sum((line.amount for line in lines), Decimal("0"))
