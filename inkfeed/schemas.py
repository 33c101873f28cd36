"""
Pydantic models for API request/response validation.

Response field names use the camelCase keys the web client reads.
"""

from pydantic import BaseModel, Field, field_validator

from .database import DBArticle, DBDraft, DBTag, DBUser
from .database.converters import format_timestamp


# ─────────────────────────────────────────────────────────────
# Auth Schemas
# ─────────────────────────────────────────────────────────────

class AuthRequest(BaseModel):
    """Credentials for register and login."""
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=6, max_length=20)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username must not be empty")
        return value


class UserResponse(BaseModel):
    """Public user profile."""
    id: int
    username: str
    nickname: str | None = None
    avatar: str | None = None

    @classmethod
    def from_db(cls, user: DBUser) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            nickname=user.nickname,
            avatar=user.avatar,
        )


class RegisterResponse(BaseModel):
    msg: str
    userId: int


class LoginResponse(BaseModel):
    access_token: str
    user: UserResponse


class MessageResponse(BaseModel):
    msg: str


# ─────────────────────────────────────────────────────────────
# Article Schemas
# ─────────────────────────────────────────────────────────────

class TagResponse(BaseModel):
    id: int
    name: str

    @classmethod
    def from_db(cls, tag: DBTag) -> "TagResponse":
        return cls(id=tag.id, name=tag.name)


class TagStatsResponse(BaseModel):
    """Tag with the number of articles carrying it."""
    id: int
    name: str
    articleCount: int

    @classmethod
    def from_db(cls, tag: DBTag) -> "TagStatsResponse":
        return cls(id=tag.id, name=tag.name, articleCount=tag.article_count)


class AuthorResponse(BaseModel):
    id: int
    username: str
    avatar: str | None = None


class ArticleResponse(BaseModel):
    """Published article as returned by every article endpoint."""
    id: int
    title: str
    content: str
    authorId: int
    author: AuthorResponse | None = None
    likes: int
    views: int
    createdAt: str
    updatedAt: str
    tags: list[TagResponse]

    @classmethod
    def from_db(cls, article: DBArticle) -> "ArticleResponse":
        author = None
        if article.author_username is not None:
            author = AuthorResponse(
                id=article.author_id,
                username=article.author_username,
                avatar=article.author_avatar,
            )

        return cls(
            id=article.id,
            title=article.title,
            content=article.content,
            authorId=article.author_id,
            author=author,
            likes=article.likes,
            views=article.views,
            createdAt=format_timestamp(article.created_at),
            updatedAt=format_timestamp(article.updated_at),
            tags=[TagResponse.from_db(t) for t in article.tags],
        )


class ArticleListResponse(BaseModel):
    """One page of the feed."""
    articles: list[ArticleResponse]
    total: int
    page: int
    limit: int


class CreateArticleRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Must not be empty")
        return value


class UpdateArticleRequest(BaseModel):
    """Partial update; omitted fields keep their current value."""
    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("Must not be empty")
        return value


class LikeResponse(BaseModel):
    likes: int


# ─────────────────────────────────────────────────────────────
# Draft Schemas
# ─────────────────────────────────────────────────────────────

class SaveDraftRequest(BaseModel):
    title: str = Field(default="", max_length=255)
    content: str = ""


class DraftResponse(BaseModel):
    id: int
    title: str
    content: str
    updatedAt: str

    @classmethod
    def from_db(cls, draft: DBDraft) -> "DraftResponse":
        return cls(
            id=draft.id,
            title=draft.title,
            content=draft.content,
            updatedAt=format_timestamp(draft.updated_at),
        )


# ─────────────────────────────────────────────────────────────
# Upload Schemas
# ─────────────────────────────────────────────────────────────

class UploadResponse(BaseModel):
    url: str
    filename: str
