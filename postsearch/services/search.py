"""Full-text search expressions for posts.

Index side:
- searchable = to_tsvector(config, concat_ws(' ', title, content))

Query side:
- websearch_to_tsquery(config, q): stop words, stemming, "quoted phrases",
  "or", and -negation; never raises on malformed input
- matches: searchable @@ query
- ranking: ts_rank(searchable, query) DESC, then created_at DESC, then id DESC
"""

from sqlalchemy import ColumnElement, Select, String, cast, func, literal, select
from sqlalchemy.dialects.postgresql import REGCONFIG

from postsearch.models.post import PostRow


DEFAULT_SEARCH_CONFIG = "english"


def _regconfig(config: str) -> ColumnElement:
    return cast(literal(config, type_=String), REGCONFIG)


def search_vector(title: str, content: str, config: str = DEFAULT_SEARCH_CONFIG) -> ColumnElement:
    """Build the tsvector expression for a post's text.

    Bound to the same parameters as the title/content being written, so the
    vector and the text land in one statement.
    """
    document = func.concat_ws(" ", literal(title, type_=String), literal(content, type_=String))
    return func.to_tsvector(_regconfig(config), document)


def search_query(query: str, config: str = DEFAULT_SEARCH_CONFIG) -> ColumnElement:
    """Build the websearch_to_tsquery expression for a user query."""
    return func.websearch_to_tsquery(_regconfig(config), literal(query, type_=String))


def normalize_query(query: str | None) -> str:
    """Collapse whitespace; blank input becomes ''.

    Queries PostgreSQL cannot even receive (NUL bytes) are treated as
    malformed and also become '', i.e. an empty result.
    """
    if not query or "\x00" in query:
        return ""
    return " ".join(query.split())


def build_search_select(query: str, config: str = DEFAULT_SEARCH_CONFIG) -> Select:
    """Select matching posts ordered by relevance (no pagination)."""
    tsquery = search_query(query, config)
    rank = func.ts_rank(PostRow.searchable, tsquery)
    return (
        select(PostRow)
        .where(PostRow.searchable.bool_op("@@")(tsquery))
        .order_by(rank.desc(), PostRow.created_at.desc(), PostRow.id.desc())
    )


def build_search_count(query: str, config: str = DEFAULT_SEARCH_CONFIG) -> Select:
    """Count posts matching a query."""
    tsquery = search_query(query, config)
    return (
        select(func.count())
        .select_from(PostRow)
        .where(PostRow.searchable.bool_op("@@")(tsquery))
    )
