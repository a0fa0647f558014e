"""Unit tests for CommentService ownership and validation."""

import pytest

from peakflow.application.services import CommentService
from peakflow.domain.entities import AuthUser
from peakflow.domain.exceptions import (
    AuthenticationRequiredError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)


@pytest.fixture
def article(article_repo):
    return article_repo.add(title="Post", published=True)


@pytest.fixture
def service(comment_repo, article_repo) -> CommentService:
    return CommentService(comment_repo, article_repo)


@pytest.mark.asyncio
async def test_add_comment_derives_author_from_email(service, article, alice):
    comment = await service.add_comment(article.id, alice, "  Lovely read  ")

    assert comment.author_name == "alice"
    assert comment.content == "Lovely read"
    assert comment.user_id == alice.id


@pytest.mark.asyncio
async def test_add_comment_without_email_is_anonymous(service, article):
    comment = await service.add_comment(article.id, AuthUser(id="u1"), "Hi")
    assert comment.author_name == "Anonymous"


@pytest.mark.asyncio
async def test_add_comment_requires_user(service, article, comment_repo):
    with pytest.raises(AuthenticationRequiredError):
        await service.add_comment(article.id, None, "Hi")
    assert comment_repo.calls == []


@pytest.mark.asyncio
async def test_add_comment_rejects_blank_content(service, article, alice, comment_repo):
    with pytest.raises(ValidationError):
        await service.add_comment(article.id, alice, "   ")
    assert comment_repo.calls == []


@pytest.mark.asyncio
async def test_add_comment_to_draft_is_not_found(service, article_repo, alice):
    draft = article_repo.add(title="Draft", published=False)
    with pytest.raises(EntityNotFoundError):
        await service.add_comment(draft.id, alice, "Hi")


@pytest.mark.asyncio
async def test_only_owner_may_update(service, comment_repo, article, alice, bob):
    comment = comment_repo.add(article_id=article.id, user_id=alice.id, content="Mine", author_name="alice")

    with pytest.raises(PermissionDeniedError):
        await service.update_comment(comment.id, bob, "Hijacked")
    updated = await service.update_comment(comment.id, alice, "Edited")

    assert updated.content == "Edited"


@pytest.mark.asyncio
async def test_only_owner_may_delete(service, comment_repo, article, alice, bob):
    comment = comment_repo.add(article_id=article.id, user_id=alice.id, content="Mine", author_name="alice")

    with pytest.raises(PermissionDeniedError):
        await service.delete_comment(comment.id, bob)
    assert await service.delete_comment(comment.id, alice) is True
    assert await service.list_for_article(article.id) == []


@pytest.mark.asyncio
async def test_delete_missing_comment_is_not_found(service, alice):
    with pytest.raises(EntityNotFoundError):
        await service.delete_comment("missing", alice)
