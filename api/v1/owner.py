"""
Owner resolution for API views.
"""

from typing import Optional


def get_owner_id(request) -> Optional[int]:
    """
    Return the id of the owner attached by ``OwnerSessionMiddleware``.

    Handlers reject a None owner as unauthorized.
    """
    owner = getattr(request, "owner", None)
    return owner.pk if owner is not None else None
