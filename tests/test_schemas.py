import pytest

from atelier.models import Comment, ExternalAccount, Like, User, Work
from atelier.schemas import CommentSchema, ExternalAccountSchema, LikeSchema, TagSchema, UserSchema, WorkSchema


@pytest.mark.asyncio
async def test_user_schema_hides_the_password(user: User):
    data = UserSchema.from_model(user).model_dump()

    assert data["email"] == "ada@example.com"
    assert "password" not in data
    assert "deleted_at" not in data


@pytest.mark.asyncio
async def test_work_schema(work: Work, user: User):
    await work.set_tags(["retro", "engine"])
    await Like.create(user=user, work=work)
    await Comment.create(content="Lovely", work=work, is_guest=True, guest_nickname="anon")

    schema = await WorkSchema.from_model(work)

    assert schema.title == "Analytical Engine"
    assert schema.user is not None and schema.user.nickname == "ada"
    assert [tag.name for tag in schema.tags] == ["engine", "retro"]
    assert schema.likes_count == 1
    assert schema.comments_count == 1
    assert "password" not in schema.model_dump_json()


@pytest.mark.asyncio
async def test_guest_work_schema_has_no_user(db):
    work = await Work.create(
        title="Doodle", file_url="https://cdn.example.com/d.png", is_guest=True, guest_nickname="wanderer"
    )

    schema = await WorkSchema.from_model(work)

    assert schema.user is None
    assert schema.user_id is None
    assert schema.guest_nickname == "wanderer"
    assert schema.tags == []
    assert schema.likes_count == 0


@pytest.mark.asyncio
async def test_comment_schema(work: Work, user: User):
    comment = await Comment.create(content="Mine", work=work, user=user)

    schema = await CommentSchema.from_model(comment)

    assert schema.work_id == work.pk
    assert schema.user is not None and schema.user.id == user.pk
    assert schema.is_guest is False


@pytest.mark.asyncio
async def test_small_schemas(work: Work, user: User):
    account = await ExternalAccount.create(user=user, provider="google", external_id="abc")
    like = await Like.create(user=user, work=work)
    (tag,) = await work.set_tags(["retro"])

    assert ExternalAccountSchema.from_model(account).provider == "google"
    assert LikeSchema.from_model(like).model_dump(exclude={"created_at"}) == {"user_id": user.pk, "work_id": work.pk}
    assert TagSchema.from_model(tag).name == "retro"


@pytest.mark.asyncio
async def test_work_schema_leaves_out_a_deleted_author(work: Work, user: User):
    await user.soft_delete()

    schema = await WorkSchema.from_model(work)

    assert schema.user is None
    assert schema.user_id == user.pk
    assert "ada@example.com" not in schema.model_dump_json()


@pytest.mark.asyncio
async def test_comment_schema_leaves_out_a_deleted_author(work: Work, user: User):
    comment = await Comment.create(content="Mine", work=work, user=user)
    await user.soft_delete()

    schema = await CommentSchema.from_model(comment)

    assert schema.user is None
    assert "ada@example.com" not in schema.model_dump_json()
