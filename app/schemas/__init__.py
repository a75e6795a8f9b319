from .user import AuthorSummary, User, UserLogin, FollowResult, ImageCreate, ImageDelete, ImageOut, ActorRequest
from .blog import (
    BlogCreate,
    BlogPublish,
    BlogCard,
    BlogDetail,
    ScoredBlog,
    Recommendations,
    TagCount,
    PlatformStats,
    ToggleResult,
    InteractionStatus,
)
from .profile import UserProfile
from .comment import CommentCreate, CommentOut
from .search import SearchResult
from .social import ShareRequest, TweetOut, ThreadOut

__all__ = [
    "AuthorSummary", "User", "UserLogin", "UserProfile", "FollowResult", "ImageCreate", "ImageDelete", "ImageOut",
    "ActorRequest",
    "BlogCreate", "BlogPublish", "BlogCard", "BlogDetail", "ScoredBlog", "Recommendations",
    "TagCount", "PlatformStats", "ToggleResult", "InteractionStatus",
    "CommentCreate", "CommentOut",
    "SearchResult",
    "ShareRequest", "TweetOut", "ThreadOut",
]
