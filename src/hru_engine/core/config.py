"""HRU engine configuration.

Defines the validated configuration model consumed by
:class:`~hru_engine.matrix.state.ProtectionState`.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RightsPolicy = Literal["insensitive", "legacy"]


class HRUConfig(BaseModel):
    """Configuration for a protection-state engine instance.

    All fields carry defaults, so ``HRUConfig()`` is a complete
    configuration.  Each engine instance holds its own copy; nothing is
    shared between instances.
    """

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    engine_id: str = Field(
        default="default",
        min_length=1,
        description="Label identifying the engine instance in log records.",
    )
    rights_policy: RightsPolicy = Field(
        default="insensitive",
        description=(
            "How right tokens are matched.  'insensitive' accepts any "
            "casing; 'legacy' accepts only the lowercase and capitalised "
            "spellings (read/Read, write/Write, execute/Execute)."
        ),
    )
    validate_revoke_right: bool = Field(
        default=True,
        description=(
            "When True, revoke_access rejects tokens outside the "
            "vocabulary.  When False, such a token is simply not found."
        ),
    )
    raise_on_error: bool = Field(
        default=False,
        description=(
            "When True, failed preconditions raise the matching HRUError "
            "instead of returning a failed AccessResult."
        ),
    )
