"""
Lazy iteration over server side paginated collections.

A list operation is described by one page fetcher:

    get_page(continuation_token, max_page_size) -> (items or None, next_link or None)

With a None token the fetcher sends the initial request (carrying the page
size hint); otherwise it follows the token, which is the next link returned by
the service, verbatim. The token is never parsed on the client side.
"""

import itertools
import time
from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

from loguru import logger

from .exceptions import PagingTimeoutError

T = TypeVar("T")

PageFetcher = Callable[
    [Optional[str], Optional[int]], Tuple[Optional[List[T]], Optional[str]]
]


class PageIterator(Iterator[List[T]], Generic[T]):
    """
    Iterates over the pages of a collection, one round trip per page. After each
    page, `continuation_token` holds the token of the next page (None once the
    last page was returned), so the iteration can be resumed later with
    ItemPaged.by_page(continuation_token=...).
    """

    def __init__(
        self,
        get_page: PageFetcher,
        continuation_token: Optional[str] = None,
        max_page_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self._get_page = get_page
        self.continuation_token = continuation_token
        self._max_page_size = max_page_size
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._started = False
        self._done = False

    def __iter__(self) -> "PageIterator[T]":
        return self

    def __next__(self) -> List[T]:
        if self._done:
            raise StopIteration
        if self._started and self.continuation_token is None:
            self._done = True
            raise StopIteration
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._done = True
            raise PagingTimeoutError(
                "Timed out before all the pages of the collection were fetched."
            )
        items, next_link = self._get_page(self.continuation_token, self._max_page_size)
        self._started = True
        self.continuation_token = next_link or None
        if items is None:
            # A page without a value array ends the collection.
            self._done = True
            raise StopIteration
        logger.trace(
            f"Fetched a page of {len(items)} items, more pages:"
            f" {self.continuation_token is not None}"
        )
        return list(items)


class ItemPaged(Iterator[T], Generic[T]):
    """
    A forward only, lazy sequence over all the items of a paginated collection.
    Pages are fetched only when the items of the previous page are used up.

    Iterating an ItemPaged consumes it: it cannot be restarted once started. Use
    by_page() to get the pages themselves, optionally starting at a saved
    continuation token.
    """

    def __init__(
        self,
        get_page: PageFetcher,
        max_page_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self._get_page = get_page
        self._max_page_size = max_page_size
        self._timeout = timeout
        self._items: Optional[Iterator[T]] = None

    def by_page(
        self,
        continuation_token: Optional[str] = None,
        max_page_size: Optional[int] = None,
    ) -> PageIterator[T]:
        """
        Returns an iterator of pages, each page being a list of items.

        :param continuation_token: the token returned by a previous iteration, to
            start from the page it points to. None starts from the first page.
        :param max_page_size: hint for the number of items per page. The service
            may return fewer.
        """
        return PageIterator(
            self._get_page,
            continuation_token=continuation_token,
            max_page_size=(
                max_page_size if max_page_size is not None else self._max_page_size
            ),
            timeout=self._timeout,
        )

    def __iter__(self) -> "ItemPaged[T]":
        return self

    def __next__(self) -> T:
        if self._items is None:
            self._items = itertools.chain.from_iterable(self.by_page())
        return next(self._items)

    def __repr__(self):
        return f"<ItemPaged max_page_size={self._max_page_size}>"
