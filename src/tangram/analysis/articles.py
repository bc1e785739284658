"""Article queries used by ``tg:articles``, ``tg:links`` and ``tg:link``."""

from __future__ import annotations

from collections.abc import Iterable

from tangram.attributes import OrderBy, TagFilter, glob_to_regex
from tangram.environment.repository import Template


def article_key(article: Template) -> str:
    """Path relative to ``articles/`` without ``.html`` (``blog/first``)."""
    return article.name.removeprefix("articles/")


def matches_pattern(article: Template, pattern: str | None) -> bool:
    """Glob-match an article against its key or its relative file path."""
    if pattern is None:
        return True
    regex = glob_to_regex(pattern)
    key = article_key(article)
    return regex.fullmatch(key) is not None or regex.fullmatch(key + ".html") is not None


def article_tags(article: Template) -> list[str]:
    tags = article.main.get("tags")
    if isinstance(tags, str):
        return [t.strip() for t in tags.split(",") if t.strip()]
    if isinstance(tags, list):
        return [str(t) for t in tags]
    return []


def article_index(article: Template) -> int | None:
    index = article.main.get("index")
    if isinstance(index, int) and not isinstance(index, bool):
        return index
    return None


def filter_articles(
    articles: Iterable[Template], pattern: str | None, tag_filter: TagFilter | None = None
) -> list[Template]:
    """Articles matching *pattern* and, when given, carrying the filter's tag."""
    selected = []
    for article in articles:
        if not matches_pattern(article, pattern):
            continue
        if tag_filter is not None and tag_filter.tag not in article_tags(article):
            continue
        selected.append(article)
    return selected


def sort_articles(articles: list[Template], order_by: OrderBy | None) -> list[Template]:
    """Sort by ``main.index``.

    Indexed articles come first, ascending, ties broken by path. Articles
    without an index follow in their original relative order. For
    ``desc`` the whole ascending result is reversed, so unindexed articles
    lead and keep reversed relative order.
    """
    if order_by is None:
        return list(articles)

    def key(article: Template) -> tuple[bool, int, str]:
        index = article_index(article)
        if index is None:
            return (True, 0, "")
        return (False, index, article.path)

    ordered = sorted(articles, key=key)
    if order_by.descending:
        ordered.reverse()
    return ordered


def query_articles(
    articles: Iterable[Template],
    *,
    pattern: str | None,
    filter_value: str | None = None,
    order_by: str | None = None,
    include_drafts: bool = False,
) -> list[Template]:
    """Filter, sort and (unless *include_drafts*) drop draft articles."""
    selected = filter_articles(articles, pattern, TagFilter.parse(filter_value))
    selected = sort_articles(selected, OrderBy.parse(order_by))
    if not include_drafts:
        selected = [a for a in selected if not a.is_draft]
    return selected
