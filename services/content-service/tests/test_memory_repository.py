"""
Tests for in-memory repositories.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.domain.entities import Comment, Ordering, Publication

BASE = datetime(2024, 3, 1, tzinfo=timezone.utc)


def _publication(content: str, author: str = "a", minutes: int = 0, tags=()) -> Publication:
    return Publication(
        content=content,
        author_id=author,
        created_on=BASE + timedelta(minutes=minutes),
        tags=set(tags),
    )


def _comment(publication_id: str, content: str, minutes: int = 0) -> Comment:
    return Comment(
        content=content,
        publication_id=publication_id,
        author_id="a",
        created_on=BASE + timedelta(minutes=minutes),
    )


class TestInMemoryPublicationRepository:
    """Test dictionary-backed publication store."""

    @pytest.mark.asyncio
    async def test_insert_assigns_id_without_mutating_input(self, publication_repo):
        publication = _publication("hello")

        publication_id = await publication_repo.insert_one(publication)

        assert publication_id
        assert publication.id is None
        stored = await publication_repo.find_one_by_id(publication_id)
        assert stored.id == publication_id

    @pytest.mark.asyncio
    async def test_returned_copies_are_isolated(self, publication_repo):
        publication_id = await publication_repo.insert_one(_publication("hello", tags=["x"]))

        stored = await publication_repo.find_one_by_id(publication_id)
        stored.tags.add("y")
        stored.content = "changed"

        again = await publication_repo.find_one_by_id(publication_id)
        assert again.tags == {"x"}
        assert again.content == "hello"

    @pytest.mark.asyncio
    async def test_find_many_any_tag(self, publication_repo):
        await publication_repo.insert_one(_publication("one", minutes=1, tags=["a"]))
        await publication_repo.insert_one(_publication("two", minutes=2, tags=["b"]))
        await publication_repo.insert_one(_publication("three", minutes=3, tags=["c"]))

        page, total = await publication_repo.find_many(0, 10, ["a", "b"], Ordering.ASC)

        assert total == 2
        assert [p.content for p in page] == ["one", "two"]

    @pytest.mark.asyncio
    async def test_find_many_orders_and_pages(self, publication_repo):
        for minutes in (3, 1, 2):
            await publication_repo.insert_one(_publication(f"p{minutes}", minutes=minutes))

        page, total = await publication_repo.find_many(0, 2, [], Ordering.DESC)

        assert total == 3
        assert [p.content for p in page] == ["p3", "p2"]

    @pytest.mark.asyncio
    async def test_skip_past_end(self, publication_repo):
        await publication_repo.insert_one(_publication("only"))

        page, total = await publication_repo.find_many(5, 10, [], Ordering.ASC)

        assert page == []
        assert total == 1

    @pytest.mark.asyncio
    async def test_find_many_by_author(self, publication_repo):
        await publication_repo.insert_one(_publication("mine", author="me"))
        await publication_repo.insert_one(_publication("theirs", author="them"))

        page, total = await publication_repo.find_many_by_author(0, 10, "me", Ordering.ASC)

        assert total == 1
        assert page[0].content == "mine"

    @pytest.mark.asyncio
    async def test_update_images_url_is_conditional(self, publication_repo):
        publication_id = await publication_repo.insert_one(_publication("hello"))

        assert await publication_repo.update_images_url(publication_id, "u1") is True
        assert await publication_repo.update_images_url(publication_id, "u2") is False
        assert await publication_repo.update_images_url("missing", "u3") is False

        stored = await publication_repo.find_one_by_id(publication_id)
        assert stored.images_url == "u1"

        await publication_repo.delete_images_url(publication_id)
        stored = await publication_repo.find_one_by_id(publication_id)
        assert stored.images_url is None

    @pytest.mark.asyncio
    async def test_update_and_delete(self, publication_repo):
        publication_id = await publication_repo.insert_one(_publication("hello", tags=["a"]))
        stored = await publication_repo.find_one_by_id(publication_id)
        stored.content = "changed"
        stored.tags = {"b"}
        stored.updated_on = BASE + timedelta(hours=1)

        await publication_repo.update_one(stored)
        updated = await publication_repo.find_one_by_id(publication_id)
        assert updated.content == "changed"
        assert updated.tags == {"b"}
        assert updated.updated_on == BASE + timedelta(hours=1)

        await publication_repo.delete_one(publication_id)
        await publication_repo.delete_one(publication_id)
        assert await publication_repo.find_one_by_id(publication_id) is None


class TestInMemoryCommentRepository:
    """Test dictionary-backed comment store."""

    @pytest.mark.asyncio
    async def test_find_many_oldest_first(self, comment_repo):
        await comment_repo.insert_one(_comment("p1", "late", minutes=5))
        await comment_repo.insert_one(_comment("p1", "early", minutes=1))
        await comment_repo.insert_one(_comment("p2", "other"))

        page, total = await comment_repo.find_many("p1", 0, 10)

        assert total == 2
        assert [c.content for c in page] == ["early", "late"]

    @pytest.mark.asyncio
    async def test_is_comment_in_publication(self, comment_repo):
        comment_id = await comment_repo.insert_one(_comment("p1", "hello"))

        assert await comment_repo.is_comment_in_publication(comment_id, "p1")
        assert not await comment_repo.is_comment_in_publication(comment_id, "p2")
        assert not await comment_repo.is_comment_in_publication("missing", "p1")

    @pytest.mark.asyncio
    async def test_find_featured_limit(self, comment_repo):
        for minutes in range(4):
            await comment_repo.insert_one(_comment("p1", f"c{minutes}", minutes=minutes))

        featured = await comment_repo.find_featured(["p1", "p2"], 2)

        assert [c.content for c in featured["p1"].comments] == ["c2", "c3"]
        assert featured["p1"].total_count == 4
        assert featured["p2"].total_count == 0

    @pytest.mark.asyncio
    async def test_find_featured_zero_limit(self, comment_repo):
        await comment_repo.insert_one(_comment("p1", "c"))

        featured = await comment_repo.find_featured(["p1"], 0)

        assert featured["p1"].comments == []
        assert featured["p1"].total_count == 1

    @pytest.mark.asyncio
    async def test_delete_by_publication(self, comment_repo):
        await comment_repo.insert_one(_comment("p1", "a"))
        await comment_repo.insert_one(_comment("p1", "b"))
        keep = await comment_repo.insert_one(_comment("p2", "c"))

        await comment_repo.delete_by_publication("p1")

        assert len(comment_repo) == 1
        assert await comment_repo.find_one_by_id(keep) is not None
