# app/utils/text.py

import markdown2

WORDS_PER_MINUTE = 200


def word_count(content: str) -> int:
    return len(content.split())


def calculate_reading_time(content: str) -> str:
    """Reading time label at 200 words per minute, e.g. '4 min read' or '45 sec read'"""
    minutes = word_count(content) / WORDS_PER_MINUTE
    if minutes < 0.5:
        return f"{round(minutes * 60)} sec read"
    return f"{round(minutes)} min read"


def format_count(count: int) -> str:
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(count)


def render_markdown(content: str) -> str:
    # Convert markdown to HTML with extras; raw HTML in the source is escaped
    return markdown2.markdown(content, safe_mode="escape", extras=[
        'fenced-code-blocks',
        'header-ids',
        'tables',
        'break-on-newline',
        'cuddled-lists'
    ])


LIKE_ESCAPE = "\\"


def contains_pattern(query: str) -> str:
    """LIKE pattern matching query as a literal substring; use with escape=LIKE_ESCAPE"""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
