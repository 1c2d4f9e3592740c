"""Cookie jar capabilities consumed by the session engine.

``RequestCookies`` is the read side available on every request;
``ResponseCookies`` adds the write side needed to mint, refresh or drop the
session cookie. ``AiohttpCookieJar`` adapts an aiohttp request/response pair.
"""
from datetime import datetime, timezone
from typing import Optional, Protocol, runtime_checkable

from aiohttp import web


@runtime_checkable
class RequestCookies(Protocol):
    def get(self, name: str) -> Optional[str]: ...


@runtime_checkable
class ResponseCookies(RequestCookies, Protocol):
    def set(
        self,
        name: str,
        value: str,
        *,
        expires: Optional[datetime] = None,
        max_age: Optional[int] = None,
        samesite: Optional[str] = None,
        httponly: bool = False,
        path: str = "/",
        secure: bool = False
    ) -> None: ...

    def delete(self, name: str) -> None: ...


# RFC 7231 IMF-fixdate, as expected in Set-Cookie ``Expires``
_COOKIE_DATE = "%a, %d %b %Y %H:%M:%S GMT"


class AiohttpCookieJar:
    """Cookie jar over an aiohttp ``web.Request`` and optional ``web.StreamResponse``.

    Reads prefer cookies already set (or deleted) on the response within the
    same request, then fall back to the request cookies.
    """

    def __init__(
        self,
        request: web.Request,
        response: Optional[web.StreamResponse] = None
    ) -> None:
        self.request = request
        self.response = response

    def get(self, name: str) -> Optional[str]:
        if self.response is not None and name in self.response.cookies:
            morsel = self.response.cookies[name]
            if morsel.get("max-age") == "0":
                return None
            return morsel.value
        return self.request.cookies.get(name)

    def _writable(self) -> web.StreamResponse:
        if self.response is None:
            raise RuntimeError(
                "AiohttpCookieJar has no response attached, cookies are read-only"
            )
        return self.response

    def set(
        self,
        name: str,
        value: str,
        *,
        expires: Optional[datetime] = None,
        max_age: Optional[int] = None,
        samesite: Optional[str] = None,
        httponly: bool = False,
        path: str = "/",
        secure: bool = False
    ) -> None:
        self._writable().set_cookie(
            name,
            value,
            expires=(
                expires.astimezone(timezone.utc).strftime(_COOKIE_DATE)
                if expires else None
            ),
            max_age=max_age,
            samesite=samesite,
            httponly=httponly,
            path=path,
            secure=secure,
        )

    def delete(self, name: str) -> None:
        self._writable().del_cookie(
            name, path="/", secure=True, httponly=True, samesite="strict"
        )
