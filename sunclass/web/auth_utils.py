"""
Shared credential cookie helpers.

Why:
    The auth guard, the login route and the logout route all write or evict
    the same `auth_token` cookie. Keeping the flags in one place prevents the
    eviction from missing the path or flags the cookie was set with.
"""

from __future__ import annotations

from fastapi import Request, Response

from sunclass.classroom.config import AUTH_COOKIE_NAME, is_prod_like
from sunclass.identity_access.domain import Identity

AUTH_COOKIE_MAX_AGE = 7 * 24 * 60 * 60


def cookie_opts(environment: str) -> dict:
    """Return cookie flags for the credential cookie.

    Returns a mapping with keys:
      - secure: True in prod-like environments
      - samesite: "strict"

    Note: Session cookies usually default to SameSite=Lax so they survive the
    top-level redirect back from an identity provider. Login here is a same-site
    form post answered by a local redirect, so no cross-site navigation ever needs
    the credential and "strict" costs nothing. Switch to "lax" if an external
    login redirect is introduced.
    """
    return {"secure": is_prod_like(environment), "samesite": "strict"}


def identity_from_request(request: Request) -> Identity:
    return Identity(auth_token=request.cookies.get(AUTH_COOKIE_NAME) or None)


def set_auth_cookie(response: Response, token: str, *, environment: str) -> None:
    opts = cookie_opts(environment)
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=opts["secure"],
        samesite=opts["samesite"],
        path="/",
        max_age=AUTH_COOKIE_MAX_AGE,
    )


def evict_auth_cookie(response: Response, *, environment: str) -> None:
    opts = cookie_opts(environment)
    response.delete_cookie(
        key=AUTH_COOKIE_NAME,
        path="/",
        secure=opts["secure"],
        httponly=True,
        samesite=opts["samesite"],
    )
