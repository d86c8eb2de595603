import unittest

from restmodel.core import PaginationResult
from tests.models import Article, BlogPost
from tests.utils import API_ROOT, FakeAPIMixin

ARTICLES_URL = f"{API_ROOT}/v1/articles"


class TestPaginate(FakeAPIMixin, unittest.TestCase):
    def test_paginate_uses_model_pagination(self):
        self.api.add(
            "GET",
            ARTICLES_URL,
            json={"data": [{"id": i} for i in range(11, 21)], "meta": {}},
            headers={"X-Total-Count": "57"},
        )

        page = Article.objects.paginate(10, 2)

        self.assertEqual(page.total, 57)
        self.assertEqual(page.per_page, 10)
        self.assertEqual(page.current_page, 2)
        self.assertEqual(len(page), 10)
        self.assertEqual(page.last_page, 6)
        self.assertTrue(page.has_more_pages)
        self.assertEqual([article.id for article in page][:2], [11, 12])
        self.assertEqual(
            dict(self.api.last_request.url.params), {"page": "2", "per_page": "10"}
        )
        self.assertEqual(len(self.api.requests), 1)

    def test_paginate_defaults_to_first_page(self):
        self.api.add("GET", ARTICLES_URL, json={"data": []}, headers={"X-Total-Count": "0"})

        page = Article.objects.paginate(25)

        self.assertEqual(page.current_page, 1)
        self.assertEqual(page.total, 0)
        self.assertEqual(page.last_page, 1)
        self.assertEqual(self.api.last_request.url.params["page"], "1")

    def test_total_falls_back_to_result_count(self):
        self.api.add("GET", ARTICLES_URL, json={"data": [{"id": 1}, {"id": 2}]})

        page = Article.objects.paginate(10)

        self.assertEqual(page.total, 2)

    def test_paginate_without_pagination_support(self):
        self.api.add("GET", f"{API_ROOT}/v1/blog_post", json=[{"id": 1}, {"id": 2}, {"id": 3}])

        page = BlogPost.objects.paginate(2, 1)

        self.assertEqual(page.total, 3)
        self.assertEqual(len(page), 3)
        self.assertEqual(dict(self.api.last_request.url.params), {})


class TestPaginationResult(unittest.TestCase):
    def test_last_page(self):
        self.assertEqual(PaginationResult(total=57, per_page=10).last_page, 6)
        self.assertEqual(PaginationResult(total=60, per_page=10).last_page, 6)
        self.assertEqual(PaginationResult(total=0, per_page=10).last_page, 1)
        self.assertEqual(PaginationResult(total=5, per_page=0).last_page, 1)

    def test_has_more_pages(self):
        self.assertTrue(PaginationResult(total=30, per_page=10, current_page=2).has_more_pages)
        self.assertFalse(PaginationResult(total=30, per_page=10, current_page=3).has_more_pages)

    def test_to_dict(self):
        page = PaginationResult(items=[BlogPost({"id": 1}), {"id": 2}], total=2, per_page=1)
        self.assertEqual(
            page.to_dict(),
            {
                "data": [{"id": 1}, {"id": 2}],
                "total": 2,
                "per_page": 1,
                "current_page": 1,
                "last_page": 2,
            },
        )


if __name__ == "__main__":
    unittest.main()
