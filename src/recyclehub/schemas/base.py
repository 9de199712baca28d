"""Wire conventions shared by every RecycleHub payload.

JSON keys are camelCase (``totalPages``, ``displayOrder``) while Python
attributes stay snake_case. Preview bodies sent by the admin UI inherit
from ``APIRequest``; envelopes, pagination and status payloads from
``APIResponse``.
"""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


CAMEL_CASE: Final[ConfigDict] = ConfigDict(
    alias_generator=to_camel,
    validate_by_name=True,
    validate_by_alias=True,
    serialize_by_alias=True,
)


class APIRequest(BaseModel):
    """Incoming body. Keys the endpoint does not know about are dropped."""

    model_config = ConfigDict(**CAMEL_CASE, extra="ignore")


class APIResponse(BaseModel):
    """Outgoing payload, immutable once built.

    Undeclared keys are rejected so a typo in a handler fails loudly
    instead of leaking an extra property to clients.
    """

    model_config = ConfigDict(
        **CAMEL_CASE,
        extra="forbid",
        frozen=True,
        use_enum_values=True,
    )
