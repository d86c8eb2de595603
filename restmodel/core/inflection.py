"""
Naming helpers used to derive namespaces and response root keys.

Only English resource names are handled; REST APIs that use other languages
should declare ``namespace`` and ``root`` explicitly on the model.
"""
from django.utils.text import camel_case_to_spaces

# Irregular plural -> singular forms
IRREGULAR_SINGULARS = {
    "people": "person",
    "men": "man",
    "women": "woman",
    "children": "child",
    "teeth": "tooth",
    "feet": "foot",
    "mice": "mouse",
    "geese": "goose",
    "indices": "index",
    "matrices": "matrix",
    "vertices": "vertex",
    "analyses": "analysis",
    "statuses": "status",
    "aliases": "alias",
    "quizzes": "quiz",
    "movies": "movie",
    "criteria": "criterion",
    "data": "datum",
}

# Words that are the same in singular and plural form
UNCOUNTABLE = {
    "equipment",
    "information",
    "metadata",
    "news",
    "series",
    "species",
    "sheep",
    "fish",
    "money",
    "status",
}

# Words ending in "s" that are already singular
SINGULAR_ENDINGS = ("ss", "us", "is")


def snake_case(value: str) -> str:
    """
    Convert a class or resource name to lowercase underscore form.

    Examples:
        >>> snake_case("BlogPost")
        'blog_post'
        >>> snake_case("users")
        'users'
    """
    return "_".join(camel_case_to_spaces(value).split())


def _match_case(original: str, word: str) -> str:
    if original.isupper():
        return word.upper()
    if original[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


def singularize(word: str) -> str:
    """
    Singularize an English word. Words that are already singular are returned
    unchanged.

    Examples:
        >>> singularize("users")
        'user'
        >>> singularize("categories")
        'category'
        >>> singularize("user")
        'user'
    """
    if not word:
        return word

    # Only the last part of compound names is inflected: "blog_posts" -> "blog_post"
    head, sep, tail = word.rpartition("_")
    if sep:
        return head + sep + singularize(tail)

    lower = word.lower()

    if lower in UNCOUNTABLE:
        return word
    if lower in IRREGULAR_SINGULARS:
        return _match_case(word, IRREGULAR_SINGULARS[lower])

    if lower.endswith("ies") and len(lower) > 3:
        return word[:-3] + _match_case(word[-3:], "y")
    if lower.endswith(("sses", "xes", "ches", "shes", "zzes")):
        return word[:-2]
    if lower.endswith("s") and not lower.endswith(SINGULAR_ENDINGS) and len(lower) > 1:
        return word[:-1]

    # If we can't singularize, return as-is
    return word
