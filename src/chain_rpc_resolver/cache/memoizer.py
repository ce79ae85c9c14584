"""On-disk memoization for zero-argument async producers."""

import asyncio
import contextlib
import logging
import os
import re
import time
import uuid
from collections.abc import Awaitable, Callable
from functools import wraps
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from chain_rpc_resolver.core.exceptions import CacheIOError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CACHE_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class CacheEntry(BaseModel):
    """
    Persisted producer result.

    Attributes
    ----------
    cache_id : str
        Identity the value was stored under
    created_at : float
        Unix timestamp of the write
    value : Any
        JSON-encoded producer result

    """

    cache_id: str
    created_at: float
    value: Any


class DiskMemoizer(Generic[T]):
    """
    Identity-keyed on-disk cache for a producer with no meaningful input.

    Entries never expire; they are read on every call until ``invalidate()``
    removes them.

    Parameters
    ----------
    cache_dir : str | Path
        Directory the entry file lives in (created on first write)
    cache_id : str
        Entry identity, used as the file name stem
    adapter : TypeAdapter[T] | None
        Adapter encoding and decoding the producer result. Plain JSON values if None.
    strict : bool
        Raise CacheIOError on unreadable entries and failed writes instead of
        logging them

    """

    def __init__(
        self,
        cache_dir: str | Path,
        cache_id: str,
        adapter: TypeAdapter[T] | None = None,
        *,
        strict: bool = False,
    ) -> None:
        if not _CACHE_ID_PATTERN.match(cache_id):
            msg = f"Invalid cache id {cache_id!r}"
            raise ValueError(msg)
        self.cache_dir = Path(cache_dir)
        self.cache_id = cache_id
        self.adapter: TypeAdapter[Any] = adapter or TypeAdapter(Any)
        self.strict = strict

    @property
    def path(self) -> Path:
        """Path of the entry file."""
        return self.cache_dir / f"{self.cache_id}.json"

    def fn(self, producer: Callable[[], Awaitable[T]]) -> Callable[[], Awaitable[T]]:
        """
        Wrap a producer with this cache.

        Parameters
        ----------
        producer : Callable[[], Awaitable[T]]
            Zero-argument coroutine function

        Returns
        -------
        Callable[[], Awaitable[T]]
            Coroutine function returning the cached value, or the producer's
            result after persisting it

        """

        @wraps(producer)
        async def wrapper() -> T:
            cached = await asyncio.to_thread(self._load)
            if cached is not None:
                logger.debug("Cache hit for %s at %s", self.cache_id, self.path)
                return cached.value

            logger.debug("Cache miss for %s, invoking producer", self.cache_id)
            value = await producer()
            await asyncio.to_thread(self._store, value)
            return value

        return wrapper

    def invalidate(self) -> bool:
        """
        Delete the persisted entry.

        Returns
        -------
        bool
            True if an entry was removed

        Raises
        ------
        CacheIOError
            If the entry exists but cannot be removed

        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            msg = f"Failed to remove cache entry {self.path}: {e}"
            raise CacheIOError(msg) from e
        logger.debug("Invalidated cache entry %s", self.path)
        return True

    def _load(self) -> CacheEntry | None:
        """
        Read and decode the entry file.

        Returns
        -------
        CacheEntry | None
            Entry with its value decoded, or None on a miss

        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            return self._fail(f"Failed to read cache entry {self.path}: {e}", e)

        try:
            entry = CacheEntry.model_validate_json(raw)
            if entry.cache_id != self.cache_id:
                msg = f"entry belongs to {entry.cache_id!r}"
                raise ValueError(msg)
            value = self.adapter.validate_python(entry.value)
        except (ValidationError, ValueError) as e:
            return self._fail(f"Corrupt cache entry {self.path}: {e}", e)

        return entry.model_copy(update={"value": value})

    def _store(self, value: T) -> None:
        """Atomically write the entry file."""
        try:
            entry = CacheEntry(
                cache_id=self.cache_id,
                created_at=time.time(),
                value=self.adapter.dump_python(value, mode="json", by_alias=True),
            )
        except PydanticSerializationError as e:
            self._fail(f"Failed to encode cache entry {self.cache_id}: {e}", e)
            return

        tmp_path = self.path.with_name(f"{self.path.name}.{uuid.uuid4().hex}.tmp")
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(entry.model_dump_json(), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            self._fail(f"Failed to write cache entry {self.path}: {e}", e)
            return
        logger.debug("Stored cache entry %s", self.path)

    def _fail(self, msg: str, cause: Exception) -> None:
        if self.strict:
            raise CacheIOError(msg) from cause
        logger.warning(msg)


def memoize(
    cache_dir: str | Path,
    cache_id: str,
    producer: Callable[[], Awaitable[T]],
    adapter: TypeAdapter[T] | None = None,
    *,
    strict: bool = False,
) -> Callable[[], Awaitable[T]]:
    """
    Wrap a zero-argument producer with an on-disk cache.

    Parameters
    ----------
    cache_dir : str | Path
        Directory for the entry file
    cache_id : str
        Entry identity
    producer : Callable[[], Awaitable[T]]
        Coroutine function to memoize
    adapter : TypeAdapter[T] | None
        Adapter for encoding the result
    strict : bool
        Make cache read/write failures fatal

    Returns
    -------
    Callable[[], Awaitable[T]]
        Memoized coroutine function

    """
    return DiskMemoizer(cache_dir, cache_id, adapter, strict=strict).fn(producer)
