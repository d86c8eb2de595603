"""
Models used throughout the test suite.
"""
from restmodel.core import Paginate, RestModel, accessor, scope


class User(RestModel):
    root = "users"
    take = "limit"
    order_by = "sort"
    scopes = ["active"]
    dates = ["created_at"]
    appends = ["full_name"]

    @scope
    def scope_active(self, builder):
        builder.where("active", 1)

    @scope
    def scope_named(self, builder, name):
        builder.where("name", name)

    @scope(name="search")
    def search_for(self, builder, term, field="q"):
        builder.action("search").where(field, term)

    @accessor("full_name")
    def get_full_name(self):
        return " ".join(
            bit for bit in (self.attributes.get("first_name"), self.attributes.get("last_name")) if bit
        )


class BlogPost(RestModel):
    pass


class Comment(RestModel):
    namespace = "comments"


class Status(RestModel):
    use_namespace = False
    connection = "backup"


class Tracked(RestModel):
    namespace = "tracked"
    scopes = ["first", "missing", "second"]

    @scope
    def scope_first(self, builder):
        builder.where("calls", builder.get_query().get("calls", []) + ["first"])

    @scope
    def scope_second(self, builder):
        builder.where("calls", builder.get_query().get("calls", []) + ["second"])


class Article(Paginate, RestModel):
    namespace = "articles"
    root = "data"

    def set_pagination(self, builder, per_page, current_page):
        builder.where("page", current_page).where("per_page", per_page)

    def get_total(self, builder):
        response = builder.get_response()
        if response is None:
            return None
        return int(response.headers.get("X-Total-Count", 0))


class Feed(RestModel):
    root = "data.items"
