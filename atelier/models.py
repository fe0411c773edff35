"""The ORM models used in `atelier`."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from tortoise import fields, timezone
from tortoise.exceptions import IntegrityError
from tortoise.expressions import F
from tortoise.fields import ForeignKeyRelation
from tortoise.models import Model
from tortoise.queryset import QuerySet

from .exceptions import EntityDeleted, InvalidAuthor
from .toolkit.loguru_logging import logger
from .types_ import Active, Author, Deleted, GuestAuthor, Lifecycle, RegisteredAuthor


class BaseModel(Model):
    """The base model for all `atelier` models."""

    id = fields.IntField(pk=True)

    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:  # pylint: disable=too-few-public-methods
        """The metaclass for the base model."""

        abstract = True


class TimestampedModel(BaseModel):
    """The base model for the records that are edited after creation."""

    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:  # pylint: disable=too-few-public-methods
        """The metaclass for the model."""

        abstract = True


class SoftDeleteModel(TimestampedModel):
    """The base model for the soft-deletable records.

    A soft-deleted record stays in the table, so the references to it keep working. The default reads go through
    `.active()`, while the plain `.get()` / `.filter()` are the administrative path that sees everything.
    """

    deleted_at = fields.DatetimeField(null=True)

    class Meta:  # pylint: disable=too-few-public-methods
        """The metaclass for the model."""

        abstract = True

    @classmethod
    def active(cls) -> QuerySet:
        """Get the queryset of the records that are not soft-deleted."""
        return cls.filter(deleted_at__isnull=True)

    @classmethod
    async def get_active(cls, pk: int):
        """Get the active record by its primary key. Raises `DoesNotExist` for the soft-deleted ones."""
        return await cls.active().get(pk=pk)

    @classmethod
    async def get_active_or_none(cls, pk: int):
        """Get the active record by its primary key, or `None`."""
        return await cls.active().get_or_none(pk=pk)

    @property
    def lifecycle(self) -> Lifecycle:
        """The lifecycle state of the record."""
        if self.deleted_at is None:
            return Active()
        return Deleted(at=self.deleted_at)

    @property
    def is_deleted(self) -> bool:
        """Whether the record is soft-deleted."""
        return self.deleted_at is not None

    async def soft_delete(self, at: datetime | None = None):
        """Mark the record as deleted. An already deleted record keeps its original deletion time."""
        if self.deleted_at is not None:
            return

        self.deleted_at = at or timezone.now()
        await self.save(update_fields=["deleted_at", "updated_at"])

    async def restore(self):
        """Bring the soft-deleted record back."""
        if self.deleted_at is None:
            return

        self.deleted_at = None
        await self.save(update_fields=["deleted_at", "updated_at"])


class AuthoredMixin:
    """The mixin for the records written either by a registered User or by a guest.

    The concrete models define the nullable `user` foreign key themselves.
    """

    is_guest = fields.BooleanField(default=False)
    guest_nickname = fields.CharField(max_length=255, null=True)

    @property
    def author(self) -> Author:
        """The author of the record."""
        self.validate_author()
        if self.is_guest:
            return GuestAuthor(nickname=self.guest_nickname)
        return RegisteredAuthor(user_id=self.user_id)

    def set_author(self, author: Author):
        """Set the author of the record. Doesn't save it."""
        if isinstance(author, GuestAuthor):
            self.user_id = None
            self.is_guest = True
            self.guest_nickname = author.nickname
        else:
            self.user_id = author.user_id
            self.is_guest = False
            self.guest_nickname = None

    def validate_author(self):
        """Check that the guest flag, the guest nickname and the user agree."""
        if self.is_guest:
            if self.user_id is not None:
                raise InvalidAuthor(f"The guest {self.__class__.__name__} can't reference a user.")
            if not self.guest_nickname:
                raise InvalidAuthor(f"The guest {self.__class__.__name__} needs a nickname.")
        else:
            if self.user_id is None:
                raise InvalidAuthor(f"The {self.__class__.__name__} needs either a user or a guest nickname.")
            if self.guest_nickname:
                raise InvalidAuthor(f"The {self.__class__.__name__} by a user can't have a guest nickname.")

    async def save(self, *args, **kwargs):
        """Validate the author and save the record."""
        self.validate_author()
        await super().save(*args, **kwargs)


class User(SoftDeleteModel):
    """The model for User."""

    email = fields.CharField(max_length=255, unique=True)
    password = fields.CharField(max_length=255, description="The password hash")

    name = fields.CharField(max_length=255)
    nickname = fields.CharField(max_length=255)

    avatar_url = fields.CharField(max_length=1024, null=True)
    bio = fields.TextField(null=True)

    external_accounts: fields.ReverseRelation[ExternalAccount]
    works: fields.ReverseRelation[Work]
    likes: fields.ReverseRelation[Like]
    comments: fields.ReverseRelation[Comment]

    class Meta:  # pylint: disable=too-few-public-methods
        """The metaclass for the model."""

        table = "users"

    def __str__(self) -> str:
        """Return the string representation of the model."""
        return f"{self.nickname} <{self.email}>"


class ExternalAccount(BaseModel):
    """The model for the account of a User at an external auth provider."""

    user: ForeignKeyRelation[User] = fields.ForeignKeyField(
        "atelier.User", related_name="external_accounts", on_delete=fields.CASCADE
    )

    provider = fields.CharField(max_length=64)
    external_id = fields.CharField(max_length=255)

    class Meta:  # pylint: disable=too-few-public-methods
        """The metaclass for the model."""

        table = "external_accounts"
        unique_together = (("provider", "external_id"),)

    def __str__(self) -> str:
        """Return the string representation of the model."""
        return f"{self.provider}:{self.external_id}"


class Tag(BaseModel):
    """The model for Tag."""

    name = fields.CharField(max_length=255, unique=True)

    works: fields.ManyToManyRelation[Work]

    class Meta:  # pylint: disable=too-few-public-methods
        """The metaclass for the model."""

        table = "tags"

    def __str__(self) -> str:
        """Return the string representation of the model."""
        return self.name

    @classmethod
    async def get_or_create_many(cls, names: Iterable[str]) -> list[Tag]:
        """Get the tags by their names, creating the missing ones. Blank and repeated names are skipped."""
        normalized_names = list(dict.fromkeys(name.strip() for name in names if name.strip()))

        tags = []
        for name in normalized_names:
            tag, _ = await cls.get_or_create(name=name)
            tags.append(tag)
        return tags


class Work(AuthoredMixin, SoftDeleteModel):
    """The model for Work."""

    title = fields.CharField(max_length=255)
    description = fields.TextField(null=True)

    file_url = fields.CharField(max_length=1024)
    thumbnail_url = fields.CharField(max_length=1024, null=True)

    code_shared = fields.BooleanField(default=False)
    code_content = fields.TextField(null=True)

    views = fields.IntField(default=0)

    user: ForeignKeyRelation[User] | None = fields.ForeignKeyField(
        "atelier.User", related_name="works", null=True, on_delete=fields.RESTRICT
    )
    tags: fields.ManyToManyRelation[Tag] = fields.ManyToManyField(
        "atelier.Tag", related_name="works", through="work_tags"
    )

    likes: fields.ReverseRelation[Like]
    comments: fields.ReverseRelation[Comment]

    # Computed by `.fetch_counts()`, never stored
    likes_count: int | None = None
    comments_count: int | None = None

    class Meta:  # pylint: disable=too-few-public-methods
        """The metaclass for the model."""

        table = "works"

    def __str__(self) -> str:
        """Return the string representation of the model."""
        return self.title

    async def fetch_counts(self) -> Work:
        """Count the likes and the active comments of the work."""
        self.likes_count = await Like.filter(work_id=self.pk).count()
        self.comments_count = await Comment.active().filter(work_id=self.pk).count()
        return self

    async def set_tags(self, names: Iterable[str]) -> list[Tag]:
        """Replace the tags of the work."""
        tags = await Tag.get_or_create_many(names)

        await self.tags.clear()
        if tags:
            await self.tags.add(*tags)
        return tags

    async def increment_views(self) -> int:
        """Add one view to the work and return the new number of views."""
        await Work.filter(pk=self.pk).update(views=F("views") + 1)
        await self.refresh_from_db(fields=["views"])
        return self.views


class Like(BaseModel):
    """The model for Like. A User likes a Work at most once."""

    user: ForeignKeyRelation[User] = fields.ForeignKeyField(
        "atelier.User", related_name="likes", on_delete=fields.CASCADE
    )
    work: ForeignKeyRelation[Work] = fields.ForeignKeyField(
        "atelier.Work", related_name="likes", on_delete=fields.CASCADE
    )

    class Meta:  # pylint: disable=too-few-public-methods
        """The metaclass for the model."""

        table = "likes"
        unique_together = (("user", "work"),)

    def __str__(self) -> str:
        """Return the string representation of the model."""
        return f"User {self.user_id} likes Work {self.work_id}"

    @classmethod
    async def toggle(cls, user: User, work: Work) -> bool:
        """Like the work, or take the like back. Returns whether the work is liked afterwards.

        A like created concurrently between the removal attempt and the creation counts as the same like.
        """
        for entity in (user, work):
            if entity.is_deleted:
                raise EntityDeleted(entity)

        if await cls.filter(user_id=user.pk, work_id=work.pk).delete():
            return False

        try:
            await cls.create(user=user, work=work)
        except IntegrityError:
            logger.debug(f"User {user.pk} already likes Work {work.pk}, the like was created concurrently.")
        return True


class Comment(AuthoredMixin, SoftDeleteModel):
    """The model for Comment."""

    content = fields.TextField()

    work: ForeignKeyRelation[Work] = fields.ForeignKeyField(
        "atelier.Work", related_name="comments", on_delete=fields.CASCADE
    )
    user: ForeignKeyRelation[User] | None = fields.ForeignKeyField(
        "atelier.User", related_name="comments", null=True, on_delete=fields.RESTRICT
    )

    class Meta:  # pylint: disable=too-few-public-methods
        """The metaclass for the model."""

        table = "comments"

    def __str__(self) -> str:
        """Return the string representation of the model."""
        return f"Comment {self.pk} on Work {self.work_id}"
