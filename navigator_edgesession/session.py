"""
EdgeSession — signed, cookie-addressed session state.

The browser only holds ``__Host-session=<id>.<hexmac>``; every value lives in
the session store under ``<kind>:<id>:<label>`` where ``kind`` is ``data``
(persistent fields) or ``flash`` (one-time fields).

Known limitations:
    * Without an atomic ``take_and_delete`` on the store, ``get_flash`` is a
      read followed by a delete: two concurrent requests may both read the
      same flash value.
    * Operations are not transactional; a cancelled request may leave the
      cookie refreshed without the matching store write.
"""
import asyncio
import calendar
import uuid
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from .conf import (
    DATA_LIFETIME_MONTHS,
    DATA_PREFIX,
    FLASH_LIFETIME,
    FLASH_PREFIX,
    KEY_SEPARATOR,
    SESSION_COOKIE,
    SESSION_COOKIE_PATH,
    SESSION_COOKIE_SAMESITE,
    EdgeSessionConfig,
)
from .cookies import RequestCookies, ResponseCookies
from .crypto import Signature
from .exceptions import StoreError
from .result import Ok, Result
from .serializers import StateValue, deserialize, serialize
from .storages.abstract import AtomicTake, SessionStore

logger = logging.getLogger("navigator.edgesession")


def add_months(dt: datetime, months: int) -> datetime:
    """Calendar month arithmetic, clamping the day to the target month."""
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


class EdgeSession:
    """Session engine binding a cookie jar to a session store.

    Args:
        signature: signer used for the session cookie.
        store: key-value backend holding data and flash entries.
        flash_lifetime: default flash lifetime in seconds.
    """

    def __init__(
        self,
        signature: Signature,
        store: SessionStore,
        flash_lifetime: int = FLASH_LIFETIME
    ) -> None:
        if flash_lifetime < 1:
            raise ValueError(
                f"Flash lifetime must be at least 1 second, got {flash_lifetime}"
            )
        self._signature = signature
        self._store = store
        self._flash_lifetime = flash_lifetime

    @classmethod
    def from_config(
        cls,
        config: EdgeSessionConfig,
        store: Optional[SessionStore] = None
    ) -> "EdgeSession":
        """Build an engine from configuration.

        Uses ``store`` when given, otherwise Redis when ``redis_url`` is
        configured, otherwise an in-memory store.
        """
        if store is None:
            if config.redis_url:
                from .storages.redis_store import RedisSessionStore
                store = RedisSessionStore.from_url(config.redis_url)
            else:
                from .storages.memory import MemorySessionStore
                logger.warning(
                    "No session store configured, using process memory"
                )
                store = MemorySessionStore()
        return cls(
            Signature(config.secret.get_secret_value()),
            store,
            flash_lifetime=config.flash_lifetime,
        )

    @property
    def store(self) -> SessionStore:
        return self._store

    # ------------------------------------------------------------------
    # Identifier lifecycle
    # ------------------------------------------------------------------

    @staticmethod
    def _index(session_id: str, kind: str, label: str) -> str:
        return KEY_SEPARATOR.join((kind, session_id, label))

    @staticmethod
    def _prefix(session_id: str, kind: str) -> str:
        return f"{kind}{KEY_SEPARATOR}{session_id}{KEY_SEPARATOR}"

    async def session_id(self, cookies: RequestCookies) -> Optional[str]:
        """Return the verified session id, or None.

        A missing cookie and a forged or corrupted one are both "no session".
        """
        token = cookies.get(SESSION_COOKIE)
        if not token:
            return None
        res = await self._signature.unsign(token)
        if not res.success:
            logger.warning("Ignoring session cookie: %s signature", res.error.value)
            return None
        return res.data

    async def ensure_session_id(
        self,
        cookies: ResponseCookies,
        expires: datetime
    ) -> str:
        """Return the current session id, minting one if needed.

        The cookie is rewritten on every call, which refreshes its expiry.
        A naive ``expires`` is taken as local time.
        """
        expires = expires.astimezone(timezone.utc)
        session_id = await self.session_id(cookies)
        if session_id is None:
            session_id = str(uuid.uuid4())
            logger.debug("Minted new session identifier")
        max_age = int((expires - datetime.now(timezone.utc)).total_seconds())
        cookies.set(
            SESSION_COOKIE,
            await self._signature.sign(session_id),
            expires=expires,
            max_age=max(max_age, 0),
            samesite=SESSION_COOKIE_SAMESITE,
            httponly=True,
            path=SESSION_COOKIE_PATH,
            secure=True,
        )
        return session_id

    # ------------------------------------------------------------------
    # Data fields
    # ------------------------------------------------------------------

    async def get(
        self,
        cookies: RequestCookies,
        label: str
    ) -> Result[Optional[StateValue], StoreError]:
        session_id = await self.session_id(cookies)
        if session_id is None:
            return Ok(None)
        res = await self._store.get(self._index(session_id, DATA_PREFIX, label))
        if not res.success:
            return res
        return Ok(deserialize(res.data))

    async def commit(
        self,
        cookies: ResponseCookies,
        label: str,
        value: Optional[StateValue],
        expires: Optional[datetime] = None
    ) -> Result[None, StoreError]:
        """Store ``value`` under ``label``; ``None`` removes the field.

        ``expires`` defaults to one calendar month from now and applies to
        the cookie and to the stored entry; a naive value is taken as local
        time.
        """
        payload = None if value is None else serialize(value)
        now = datetime.now(timezone.utc)
        if expires is None:
            expires = add_months(now, DATA_LIFETIME_MONTHS)
        else:
            expires = expires.astimezone(timezone.utc)
        session_id = await self.ensure_session_id(cookies, expires)
        key = self._index(session_id, DATA_PREFIX, label)
        if payload is None:
            logger.debug("Session commit: delete data label=%s", label)
            return await self._store.delete(key)
        logger.debug("Session commit: set data label=%s", label)
        return await self._store.set(
            key,
            payload,
            expires_in=max(int((expires - now).total_seconds()), 1),
        )

    async def destroy(self, cookies: ResponseCookies) -> Result[None, StoreError]:
        """Remove every data and flash entry of the session, then its cookie."""
        session_id = await self.session_id(cookies)
        if session_id is None:
            return Ok(None)
        results = await asyncio.gather(
            self._store.delete_all(self._prefix(session_id, DATA_PREFIX)),
            self._store.delete_all(self._prefix(session_id, FLASH_PREFIX)),
        )
        for res in results:
            if not res.success:
                # cookie is kept so a later destroy can retry
                return res
        cookies.delete(SESSION_COOKIE)
        logger.debug("Session destroyed")
        return Ok(None)

    # ------------------------------------------------------------------
    # Flash fields
    # ------------------------------------------------------------------

    async def has_flash(
        self,
        cookies: RequestCookies,
        label: str
    ) -> Result[bool, StoreError]:
        """True when a flash entry exists for ``label``, without consuming it."""
        session_id = await self.session_id(cookies)
        if session_id is None:
            return Ok(False)
        res = await self._store.get(self._index(session_id, FLASH_PREFIX, label))
        if not res.success:
            return res
        return Ok(res.data is not None)

    async def get_flash(
        self,
        cookies: RequestCookies,
        label: str
    ) -> Result[Optional[StateValue], StoreError]:
        """Read and consume the flash entry for ``label``."""
        session_id = await self.session_id(cookies)
        if session_id is None:
            return Ok(None)
        key = self._index(session_id, FLASH_PREFIX, label)
        if isinstance(self._store, AtomicTake):
            res = await self._store.take_and_delete(key)
            if not res.success:
                return res
            return Ok(deserialize(res.data))
        res = await self._store.get(key)
        if not res.success:
            return res
        deleted = await self._store.delete(key)
        if not deleted.success:
            return deleted
        return Ok(deserialize(res.data))

    async def commit_flash(
        self,
        cookies: ResponseCookies,
        label: str,
        value: Optional[StateValue],
        lifetime: Optional[int] = None
    ) -> Result[None, StoreError]:
        """Store a one-time ``value`` under ``label``.

        ``None`` is ignored: flash entries are only cleared by ``get_flash``.

        Raises:
            ValueError: ``lifetime`` is below one second.
        """
        if value is None:
            return Ok(None)
        if lifetime is None:
            lifetime = self._flash_lifetime
        if lifetime < 1:
            raise ValueError(f"Flash lifetime must be at least 1 second, got {lifetime}")
        payload = serialize(value)
        session_id = await self.ensure_session_id(
            cookies,
            datetime.now(timezone.utc) + timedelta(seconds=lifetime)
        )
        logger.debug("Session commit: set flash label=%s", label)
        return await self._store.set(
            self._index(session_id, FLASH_PREFIX, label),
            payload,
            expires_in=lifetime,
        )


__all__ = ("EdgeSession", "add_months")
