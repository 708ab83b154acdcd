import os
import tempfile

# Set cache dir to a temp dir before importing anything from azkit
tmpdir = tempfile.mkdtemp()
os.environ["AZKIT_CACHE_DIR"] = tmpdir

import unittest
from unittest import mock

from azkit.core.exceptions import PagingTimeoutError
from azkit.core.paging import ItemPaged


class FakeCollection(object):
    """
    Serves pages keyed by continuation token; None is the first page.
    """

    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def __call__(self, token, page_size):
        self.calls.append((token, page_size))
        return self.pages[token]


THREE_PAGES = {
    None: ([1, 2], "link-2"),
    "link-2": ([3], "link-3"),
    "link-3": ([4, 5], None),
}


class TestItemPaged(unittest.TestCase):
    def test_items_equal_concatenated_pages(self):
        pages = list(ItemPaged(FakeCollection(THREE_PAGES)).by_page())
        items = list(ItemPaged(FakeCollection(THREE_PAGES)))
        self.assertEqual(pages, [[1, 2], [3], [4, 5]])
        self.assertEqual(items, [item for page in pages for item in page])

    def test_lazy(self):
        collection = FakeCollection(THREE_PAGES)
        paged = ItemPaged(collection)
        self.assertEqual(collection.calls, [])
        self.assertEqual(next(paged), 1)
        self.assertEqual(next(paged), 2)
        self.assertEqual(len(collection.calls), 1)
        self.assertEqual(next(paged), 3)
        self.assertEqual(len(collection.calls), 2)

    def test_forward_only(self):
        paged = ItemPaged(FakeCollection(THREE_PAGES))
        self.assertEqual(list(paged), [1, 2, 3, 4, 5])
        self.assertEqual(list(paged), [])

    def test_page_size_hint_and_tokens(self):
        collection = FakeCollection(THREE_PAGES)
        list(ItemPaged(collection, max_page_size=2))
        self.assertEqual(
            collection.calls, [(None, 2), ("link-2", 2), ("link-3", 2)]
        )

    def test_first_page_without_value(self):
        collection = FakeCollection({None: (None, "ignored")})
        self.assertEqual(list(ItemPaged(collection)), [])
        self.assertEqual(len(collection.calls), 1)

    def test_empty_pages_in_between(self):
        collection = FakeCollection(
            {None: ([], "link-2"), "link-2": ([], "link-3"), "link-3": ([7], "")}
        )
        self.assertEqual(list(ItemPaged(collection)), [7])

    def test_resume_from_continuation_token(self):
        paged = ItemPaged(FakeCollection(THREE_PAGES))
        pages = paged.by_page()
        self.assertEqual(next(pages), [1, 2])
        token = pages.continuation_token
        self.assertEqual(token, "link-2")

        resumed = ItemPaged(FakeCollection(THREE_PAGES)).by_page(
            continuation_token=token
        )
        self.assertEqual(list(resumed), [[3], [4, 5]])
        self.assertIsNone(resumed.continuation_token)

    def test_timeout(self):
        collection = FakeCollection(THREE_PAGES)
        pages = ItemPaged(collection, timeout=10).by_page()
        with mock.patch("azkit.core.paging.time.monotonic") as monotonic:
            monotonic.return_value = 1e12
            with self.assertRaises(PagingTimeoutError):
                next(pages)
        self.assertEqual(collection.calls, [])

    def test_fetch_errors_propagate(self):
        def get_page(token, page_size):
            raise ConnectionError("boom")

        with self.assertRaises(ConnectionError):
            list(ItemPaged(get_page))


if __name__ == "__main__":
    unittest.main()
