"""
Cache key layout.

Key                          | TTL      | Invalidated by
-----------------------------+----------+-------------------------------------
blog:{id}                    | none     | comment, reply, upvote, bookmark, delete
comments:{blog_id}           | none     | comment, reply, delete
replies:{blog_id}:{parent}   | none     | reply, delete
search:{query}:{page}        | 1 hour   | expiry only
tags:trending                | 10 min   | create, delete
stats:words-users            | 30 min   | create, delete
"""

TRENDING_TAGS_KEY = "tags:trending"
STATS_KEY = "stats:words-users"


def blog_key(blog_id: int) -> str:
    return f"blog:{blog_id}"


def comments_key(blog_id: int) -> str:
    return f"comments:{blog_id}"


def replies_key(blog_id: int, parent_id: int) -> str:
    return f"replies:{blog_id}:{parent_id}"


def replies_pattern(blog_id: int) -> str:
    return f"replies:{blog_id}:*"


def search_key(query: str, page: int) -> str:
    return f"search:{query.strip().lower()}:{page}"
