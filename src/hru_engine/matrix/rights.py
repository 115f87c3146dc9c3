"""Rights-vocabulary validation.

Right tokens arrive as caller-supplied strings and are normalised into
:class:`~hru_engine.core.types.Right` here, before the engine touches any
state.  Two matching policies exist:

* ``"insensitive"`` -- any casing of ``read``, ``write`` or ``execute``.
* ``"legacy"`` -- only the lowercase and capitalised spellings
  (``read``/``Read`` and so on).

Under both policies the spellings collapse onto one ``Right``, so
``"Read"`` and ``"read"`` always address the same matrix cell.
"""
from __future__ import annotations

from hru_engine.core.config import RightsPolicy
from hru_engine.core.errors import InvalidRight
from hru_engine.core.types import Right

VALID_RIGHTS: frozenset[str] = frozenset(r.value for r in Right)
"""Canonical (lowercase) right tokens."""

_LEGACY_SPELLINGS: dict[str, Right] = {
    spelling: right
    for right in Right
    for spelling in (right.value, right.value.capitalize())
}


def parse_right(token: object, *, policy: RightsPolicy = "insensitive") -> Right:
    """Normalise *token* into a :class:`Right`.

    Parameters
    ----------
    token:
        The caller-supplied right.  A ``Right`` member passes through
        unchanged; strings are stripped of surrounding whitespace.
    policy:
        The matching policy (see module docstring).

    Returns
    -------
    Right
        The canonical right.

    Raises
    ------
    InvalidRight
        If *token* is not a recognised spelling under *policy*.
    """
    if isinstance(token, Right):
        return token
    if isinstance(token, str):
        candidate = token.strip()
        if policy == "legacy":
            right = _LEGACY_SPELLINGS.get(candidate)
        else:
            right = _lookup(candidate.lower())
        if right is not None:
            return right
    raise InvalidRight(
        f"Invalid access right {token!r}. "
        f"Valid rights: {', '.join(r.value for r in Right)}.",
        details={"right": repr(token), "policy": policy},
    )


def is_valid_right(token: object, *, policy: RightsPolicy = "insensitive") -> bool:
    """Return ``True`` if *token* would be accepted by :func:`parse_right`."""
    try:
        parse_right(token, policy=policy)
    except InvalidRight:
        return False
    return True


def _lookup(value: str) -> Right | None:
    if value in VALID_RIGHTS:
        return Right(value)
    return None
