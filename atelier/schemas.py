"""The Schemas used to serialize the `atelier` models. Password hashes and deletion marks are never exposed."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from . import models


class AtelierSchema(BaseModel):
    """The base schema, readable straight from the ORM objects."""

    model_config = ConfigDict(from_attributes=True)


class UserSchema(AtelierSchema):
    """The schema for User."""

    id: int
    email: str
    name: str
    nickname: str
    avatar_url: str | None
    bio: str | None

    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user: models.User) -> UserSchema:
        """Build the schema from the model."""
        return cls.model_validate(user)


class ExternalAccountSchema(AtelierSchema):
    """The schema for ExternalAccount."""

    id: int
    user_id: int
    provider: str
    external_id: str

    created_at: datetime

    @classmethod
    def from_model(cls, external_account: models.ExternalAccount) -> ExternalAccountSchema:
        """Build the schema from the model."""
        return cls.model_validate(external_account)


class TagSchema(AtelierSchema):
    """The schema for Tag."""

    id: int
    name: str

    created_at: datetime

    @classmethod
    def from_model(cls, tag: models.Tag) -> TagSchema:
        """Build the schema from the model."""
        return cls.model_validate(tag)


class WorkSchema(AtelierSchema):
    """The schema for Work, with its author, tags and counters."""

    id: int
    title: str
    description: str | None

    file_url: str
    thumbnail_url: str | None

    code_shared: bool
    code_content: str | None

    views: int

    user_id: int | None
    is_guest: bool
    guest_nickname: str | None

    created_at: datetime
    updated_at: datetime

    user: UserSchema | None = None
    tags: list[TagSchema] = []

    likes_count: int = 0
    comments_count: int = 0

    @classmethod
    async def from_model(cls, work: models.Work) -> WorkSchema:
        """Build the schema from the model, fetching the author, the tags and the counters.

        A soft-deleted author is left out, the `user_id` stays.
        """
        user = await models.User.get_active_or_none(work.user_id) if work.user_id is not None else None
        tags = await work.tags.all().order_by("name")
        await work.fetch_counts()

        return cls(
            id=work.id,
            title=work.title,
            description=work.description,
            file_url=work.file_url,
            thumbnail_url=work.thumbnail_url,
            code_shared=work.code_shared,
            code_content=work.code_content,
            views=work.views,
            user_id=work.user_id,
            is_guest=work.is_guest,
            guest_nickname=work.guest_nickname,
            created_at=work.created_at,
            updated_at=work.updated_at,
            user=UserSchema.from_model(user) if user else None,
            tags=[TagSchema.from_model(tag) for tag in tags],
            likes_count=work.likes_count,
            comments_count=work.comments_count,
        )


class LikeSchema(AtelierSchema):
    """The schema for Like."""

    user_id: int
    work_id: int

    created_at: datetime

    @classmethod
    def from_model(cls, like: models.Like) -> LikeSchema:
        """Build the schema from the model."""
        return cls.model_validate(like)


class CommentSchema(AtelierSchema):
    """The schema for Comment, with its author."""

    id: int
    content: str
    work_id: int

    user_id: int | None
    is_guest: bool
    guest_nickname: str | None

    created_at: datetime
    updated_at: datetime

    user: UserSchema | None = None

    @classmethod
    async def from_model(cls, comment: models.Comment) -> CommentSchema:
        """Build the schema from the model, fetching the author. A soft-deleted author is left out."""
        user = await models.User.get_active_or_none(comment.user_id) if comment.user_id is not None else None

        return cls(
            id=comment.id,
            content=comment.content,
            work_id=comment.work_id,
            user_id=comment.user_id,
            is_guest=comment.is_guest,
            guest_nickname=comment.guest_nickname,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            user=UserSchema.from_model(user) if user else None,
        )
