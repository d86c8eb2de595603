import unittest

from hypothesis import given
from hypothesis import settings as hypothesis_settings
from hypothesis import strategies as st

from restmodel.core.config import ConnectionConfig
from restmodel.core.endpoint import assemble_endpoint, resolve_namespace
from tests.models import BlogPost, Comment, Status, User

segment = st.one_of(
    st.none(),
    st.just(""),
    st.text(alphabet="abc/-_ 19", max_size=12),
    st.integers(min_value=0, max_value=10_000),
)


class TestAssembleEndpoint(unittest.TestCase):
    def test_url_namespace_and_id(self):
        config = ConnectionConfig(url="https://api.x", version=None)
        self.assertEqual(assemble_endpoint(config, "users", 5, None), "https://api.x/users/5")

    def test_all_segments_in_order(self):
        config = ConnectionConfig(url="https://api.x", version="v1")
        self.assertEqual(
            assemble_endpoint(config, "users", 5, "posts"), "https://api.x/v1/users/5/posts"
        )

    def test_skips_empty_segments(self):
        config = ConnectionConfig(url="https://api.x/", version="")
        self.assertEqual(assemble_endpoint(config, None, "", "search"), "https://api.x/search")
        self.assertEqual(assemble_endpoint(config), "https://api.x")

    def test_strips_surrounding_separators(self):
        config = ConnectionConfig(url="https://api.x/", version="/v1/")
        self.assertEqual(
            assemble_endpoint(config, "/users/", "7", "/feed/"), "https://api.x/v1/users/7/feed"
        )

    def test_collapses_doubled_separators(self):
        config = ConnectionConfig(url="https://api.x//base//", version="v1")
        self.assertEqual(
            assemble_endpoint(config, "admin//users", None, None), "https://api.x/base/v1/admin/users"
        )

    def test_zero_id_is_kept(self):
        config = ConnectionConfig(url="https://api.x")
        self.assertEqual(assemble_endpoint(config, "users", 0), "https://api.x/users/0")

    @hypothesis_settings(max_examples=200)
    @given(version=segment, namespace=segment, resource_id=segment, action=segment)
    def test_no_doubled_or_trailing_separators(self, version, namespace, resource_id, action):
        config = ConnectionConfig(url="https://api.x", version=version)
        endpoint = assemble_endpoint(config, namespace, resource_id, action)

        path = endpoint[len("https://"):]
        self.assertTrue(endpoint.startswith("https://api.x"))
        self.assertNotIn("//", path)
        self.assertFalse(endpoint.endswith("/"))


class TestResolveNamespace(unittest.TestCase):
    def test_derived_from_class_name(self):
        self.assertEqual(resolve_namespace(BlogPost()), "blog_post")
        self.assertEqual(resolve_namespace(User), "user")

    def test_explicit_namespace(self):
        self.assertEqual(resolve_namespace(Comment()), "comments")

    def test_disabled_namespace(self):
        self.assertIsNone(resolve_namespace(Status()))


if __name__ == "__main__":
    unittest.main()
