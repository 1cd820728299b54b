"""Post Manager — lifecycle operations against the SQLite-backed repository.

Invariants:
    - Create stamps owner and equal created_at/updated_at; store assigns id
    - Duplicate title -> ConflictError, store left consistent
    - Update preserves created_at and owner, advances updated_at, returns new state
    - Update/Delete on missing posts -> ResourceNotFoundError
    - List windows are bounded and stable
"""

import uuid

import pytest

from app.core.domain_types import Requester, UserId
from app.core.errors import ConflictError, ResourceNotFoundError
from app.core.post import PostChanges, PostFields


async def _seed(manager, requester, count: int):
    return [
        await manager.create_post(
            requester, PostFields(title=f"post {i}", content=f"body {i}"),
        )
        for i in range(count)
    ]


# --- Create -------------------------------------------------------------------

async def test_create_returns_populated_post(manager, requester):
    post = await manager.create_post(
        requester, PostFields(title="Hello", content="World", image="cat.png"),
    )
    assert post.id
    assert post.title == "Hello"
    assert post.content == "World"
    assert post.image == "cat.png"
    assert post.owner == requester.id
    assert post.created_at == post.updated_at


async def test_create_without_image_stores_empty_string(manager, requester):
    post = await manager.create_post(requester, PostFields(title="t", content="c"))
    assert post.image == ""


async def test_create_duplicate_title_is_conflict(manager, requester):
    await manager.create_post(requester, PostFields(title="t1", content="a"))
    with pytest.raises(ConflictError) as exc_info:
        await manager.create_post(requester, PostFields(title="t1", content="b"))
    assert exc_info.value.http_status == 409
    assert exc_info.value.field == "title"


async def test_conflict_scenario_keeps_first_post(manager, requester):
    a = await manager.create_post(requester, PostFields(title="t1", content="a"))
    with pytest.raises(ConflictError):
        await manager.create_post(requester, PostFields(title="t1", content="b"))

    assert await manager.get_post(str(a.id)) == a

    await manager.delete_post(str(a.id), requester)
    with pytest.raises(ResourceNotFoundError):
        await manager.get_post(str(a.id))


# --- Get ----------------------------------------------------------------------

async def test_get_returns_exact_stored_fields(manager, requester):
    created = await manager.create_post(
        requester, PostFields(title="t", content="c", image="i"),
    )
    fetched = await manager.get_post(str(created.id))
    assert fetched == created


async def test_get_missing_post_is_not_found(manager):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await manager.get_post(str(uuid.uuid4()))
    assert exc_info.value.http_status == 404


async def test_get_unparsable_id_is_not_found(manager):
    with pytest.raises(ResourceNotFoundError):
        await manager.get_post("not-a-uuid")


# --- Update -------------------------------------------------------------------

async def test_update_missing_post_is_not_found(manager, requester):
    with pytest.raises(ResourceNotFoundError):
        await manager.update_post(
            str(uuid.uuid4()), requester, PostChanges(title="x"),
        )


async def test_update_preserves_created_at_and_advances_updated_at(manager, requester):
    post = await manager.create_post(requester, PostFields(title="t", content="c"))
    updated = await manager.update_post(
        str(post.id), requester, PostChanges(content="new body"),
    )
    assert updated.created_at == post.created_at
    assert updated.updated_at > post.updated_at


async def test_update_returns_post_update_state(manager, requester):
    post = await manager.create_post(requester, PostFields(title="t", content="c"))
    updated = await manager.update_post(
        str(post.id), requester,
        PostChanges(title="t2", content="c2", image="pic"),
    )
    assert (updated.title, updated.content, updated.image) == ("t2", "c2", "pic")
    assert await manager.get_post(str(post.id)) == updated


async def test_update_keeps_omitted_fields(manager, requester):
    post = await manager.create_post(
        requester, PostFields(title="t", content="c", image="pic"),
    )
    updated = await manager.update_post(
        str(post.id), requester, PostChanges(title="renamed"),
    )
    assert updated.title == "renamed"
    assert updated.content == "c"
    assert updated.image == "pic"


async def test_update_with_empty_image_clears_it(manager, requester):
    post = await manager.create_post(
        requester, PostFields(title="t", content="c", image="pic"),
    )
    updated = await manager.update_post(
        str(post.id), requester, PostChanges(image=""),
    )
    assert updated.image == ""


async def test_update_by_other_user_keeps_original_owner(manager, requester):
    post = await manager.create_post(requester, PostFields(title="t", content="c"))
    editor = Requester(id=UserId(uuid.uuid4()))
    updated = await manager.update_post(
        str(post.id), editor, PostChanges(content="edited"),
    )
    assert updated.owner == requester.id


async def test_update_to_taken_title_is_conflict(manager, requester):
    await manager.create_post(requester, PostFields(title="taken", content="a"))
    post = await manager.create_post(requester, PostFields(title="free", content="b"))
    with pytest.raises(ConflictError):
        await manager.update_post(str(post.id), requester, PostChanges(title="taken"))
    assert (await manager.get_post(str(post.id))).title == "free"


# --- List ---------------------------------------------------------------------

async def test_list_first_page_of_fifteen_has_ten(manager, requester):
    await _seed(manager, requester, 15)
    page = await manager.list_posts(1, 10)
    assert page.count == 10


async def test_list_second_page_has_remaining_five(manager, requester):
    seeded = await _seed(manager, requester, 15)
    first = await manager.list_posts(1, 10)
    second = await manager.list_posts(2, 10)
    assert second.count == 5
    ids = [p.id for p in first.posts + second.posts]
    assert ids == [p.id for p in seeded]


async def test_list_non_numeric_input_matches_defaults(manager, requester):
    await _seed(manager, requester, 12)
    default = await manager.list_posts("1", "10")
    degraded = await manager.list_posts("abc", "xyz")
    assert [p.id for p in degraded.posts] == [p.id for p in default.posts]
    assert degraded.window == default.window


async def test_list_page_zero_is_clamped_to_first_page(manager, requester):
    await _seed(manager, requester, 3)
    page = await manager.list_posts(0, 2)
    assert page.window.page == 1
    assert page.count == 2


async def test_list_limit_is_clamped_to_max(repository, clock, requester):
    from app.services.post_manager import PostManager

    manager = PostManager(repository, clock=clock, max_limit=4)
    await _seed(manager, requester, 6)
    page = await manager.list_posts(1, 1000)
    assert page.window.limit == 4
    assert page.count == 4


async def test_list_past_last_page_is_empty(manager, requester):
    await _seed(manager, requester, 3)
    page = await manager.list_posts(5, 10)
    assert page.posts == []
    assert page.count == 0


async def test_list_page_beyond_64_bit_offset_is_empty(manager, requester):
    await _seed(manager, requester, 3)
    page = await manager.list_posts("100000000000000000000", "10")
    assert page.posts == []
    assert page.count == 0


# --- Delete -------------------------------------------------------------------

async def test_delete_then_get_is_not_found(manager, requester):
    post = await manager.create_post(requester, PostFields(title="t", content="c"))
    await manager.delete_post(str(post.id), requester)
    with pytest.raises(ResourceNotFoundError):
        await manager.get_post(str(post.id))


async def test_delete_missing_post_is_not_found(manager, requester):
    with pytest.raises(ResourceNotFoundError):
        await manager.delete_post(str(uuid.uuid4()), requester)


async def test_delete_twice_reports_not_found_second_time(manager, requester):
    post = await manager.create_post(requester, PostFields(title="t", content="c"))
    await manager.delete_post(str(post.id), requester)
    with pytest.raises(ResourceNotFoundError):
        await manager.delete_post(str(post.id), requester)
