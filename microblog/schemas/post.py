"""Pydantic schemas for post API."""

from pydantic import BaseModel, Field

from microblog.models.post import Post


class PostCreateRequest(BaseModel):
    """Request for creating a post."""

    content: str = ""


class PostResponse(BaseModel):
    """A single post."""

    id: int
    content: str
    author: int
    when: int = Field(description="Unix timestamp (seconds, UTC) of creation")

    @classmethod
    def from_model(cls, post: Post) -> "PostResponse":
        return cls(id=post.id, content=post.content, author=post.author, when=post.post_time)


class PostListResponse(BaseModel):
    """Posts by one account, newest first."""

    posts: list[PostResponse]
