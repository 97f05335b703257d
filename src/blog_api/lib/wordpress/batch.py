"""Concurrent fan-out over several WordPress requests.

``gather_settled`` runs a set of named awaitables together and waits for all
of them, whatever their outcome.  ``fetch_many`` builds on it to load several
collections at once: a failing collection is logged and reported in
``BatchResult.errors`` while its siblings still complete.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Generic, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .query import CategoryQuery, MediaQuery, PageQuery, PostQuery, TagQuery, UserQuery

if TYPE_CHECKING:
    from .client import WordPressClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Settled(BaseModel, Generic[T]):
    """Outcome of one awaitable: exactly one of ``value`` / ``error`` is meaningful."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def gather_settled(awaitables: Mapping[str, Awaitable[T]]) -> dict[str, Settled[T]]:
    """Await every entry of *awaitables* concurrently and key the outcomes by name.

    Exceptions are captured per entry; this coroutine itself does not raise
    because of them.
    """
    names = list(awaitables)
    outcomes = await asyncio.gather(*awaitables.values(), return_exceptions=True)
    settled: dict[str, Settled[T]] = {}
    for name, outcome in zip(names, outcomes):
        if isinstance(outcome, BaseException):
            settled[name] = Settled(error=outcome)
        else:
            settled[name] = Settled(value=outcome)
    return settled


class BatchRequest(BaseModel):
    """Named collection requests.  Omitted collections are not fetched."""

    posts: PostQuery | None = None
    pages: PageQuery | None = None
    categories: CategoryQuery | None = None
    tags: TagQuery | None = None
    media: MediaQuery | None = None
    users: UserQuery | None = None


class BatchResult(BaseModel):
    """Successful collections keyed by name, plus a message per failed one."""

    results: dict[str, list[Any]] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)


async def fetch_many(client: "WordPressClient", request: BatchRequest) -> BatchResult:
    """Fetch every collection named in *request* concurrently."""
    pending = {
        name: client.fetch_collection(name, options)
        for name, options in request
        if options is not None
    }
    result = BatchResult()
    for name, outcome in (await gather_settled(pending)).items():
        if outcome.ok:
            result.results[name] = outcome.value
        else:
            logger.error("Batch request '%s' failed: %s", name, outcome.error)
            result.errors[name] = str(outcome.error)
    return result
