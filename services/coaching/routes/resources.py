"""
Study Resource Routes
=====================

CRUD endpoints for notes, words, sentences, word-sentence pairs and
lessons. Each resource type gets the same ownership rules: callers see and
change only what they own, admins see and change everything. Ids a body
points at must exist and be accessible to the caller.

Version: 0.1.0
"""

from collections.abc import Awaitable, Callable
from operator import attrgetter
from typing import Any, get_args
from uuid import UUID

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from pydantic.fields import FieldInfo

from services.coaching.dependencies import CurrentUserDep, RepositoriesDep
from services.coaching.repositories import Repositories, Repository
from shared.auth.authorization import can_access, ownership_filter
from shared.errors import ForbiddenError, NotFoundError, ValidationError
from shared.logging import get_logger
from shared.models.resources import (
    Lesson,
    LessonCreate,
    LessonUpdate,
    Note,
    NoteCreate,
    NoteUpdate,
    OwnedModel,
    Sentence,
    SentenceCreate,
    SentenceUpdate,
    Word,
    WordCreate,
    WordSentence,
    WordSentenceCreate,
    WordSentenceUpdate,
    WordUpdate,
)
from shared.models.user import User

logger = get_logger(__name__)


def _accepts_none(field: FieldInfo) -> bool:
    return field.annotation is None or type(None) in get_args(field.annotation)


def _update_changes(body: BaseModel, model_class: type[OwnedModel]) -> dict[str, Any]:
    """Fields the client sent, minus nulls for fields that cannot hold one."""
    changes = body.model_dump(exclude_unset=True)
    return {
        name: value
        for name, value in changes.items()
        if value is not None or _accepts_none(model_class.model_fields[name])
    }


ReferenceCheck = Callable[[Repositories, User, dict[str, Any]], Awaitable[None]]


async def _ensure_referable(
    repo: Repository[Any], item_id: UUID, user: User, noun: str,
) -> None:
    """A referenced resource must exist and be accessible to the caller."""
    item = await repo.get(item_id)
    if item is None:
        raise ValidationError(
            f"{noun.capitalize()} does not exist", details={"id": str(item_id)},
        )
    if not can_access(user, item):
        raise ForbiddenError(f"You don't have permission to access this {noun}")


async def check_word_sentence_refs(
    repos: Repositories, user: User, values: dict[str, Any],
) -> None:
    if values.get("word_id") is not None:
        await _ensure_referable(repos.words, values["word_id"], user, "word")
    if values.get("sentence_id") is not None:
        await _ensure_referable(repos.sentences, values["sentence_id"], user, "sentence")


async def check_lesson_refs(
    repos: Repositories, user: User, values: dict[str, Any],
) -> None:
    for pair_id in values.get("word_sentences") or ():
        await _ensure_referable(repos.word_sentences, pair_id, user, "word sentence")


def build_owned_router(
    kind: str,
    model_class: type[OwnedModel],
    create_class: type[BaseModel],
    update_class: type[BaseModel],
    noun: str | None = None,
    check_refs: ReferenceCheck | None = None,
    dependents: tuple[tuple[str, str], ...] = (),
) -> APIRouter:
    """
    Build the CRUD router for one owned resource type.

    Args:
        kind: Attribute name on `Repositories` (e.g. "notes")
        model_class: Stored model
        create_class: POST body
        update_class: PUT body, every field optional
        noun: Name used in messages (defaults to the lowercased class name)
        check_refs: Validates ids the body points at, on create and update
        dependents: (repositories attribute, field) pairs whose rows are
            deleted along with an item
    """
    router = APIRouter()
    repository_for: Any = attrgetter(kind)
    noun = noun or model_class.__name__.lower()
    label = noun.capitalize()

    async def load_accessible(
        repo: Repository[Any], item_id: UUID, user: User,
    ) -> OwnedModel:
        item = await repo.get(item_id)
        if item is None:
            raise NotFoundError(f"{label} not found", details={"id": str(item_id)})
        if not can_access(user, item):
            logger.warning(
                "resource_access_denied",
                resource=noun,
                resource_id=str(item_id),
                user_id=str(user.id),
            )
            raise ForbiddenError(f"You don't have permission to access this {noun}")
        return item

    def repo_of(repos: Repositories) -> Repository[Any]:
        return repository_for(repos)

    @router.get("", response_model=list[model_class])
    async def list_items(user: CurrentUserDep, repos: RepositoriesDep) -> Any:
        return await repo_of(repos).list(owner_id=ownership_filter(user))

    @router.get("/{item_id}", response_model=model_class)
    async def get_item(item_id: UUID, user: CurrentUserDep, repos: RepositoriesDep) -> Any:
        return await load_accessible(repo_of(repos), item_id, user)

    @router.post("", response_model=model_class, status_code=status.HTTP_201_CREATED)
    async def create_item(
        body: create_class,  # type: ignore[valid-type]
        user: CurrentUserDep,
        repos: RepositoriesDep,
    ) -> Any:
        values = body.model_dump()
        if check_refs is not None:
            await check_refs(repos, user, values)
        item = model_class(user_id=user.id, **values)
        created = await repo_of(repos).create(item)
        logger.info("resource_created", resource=noun, resource_id=str(created.id), user_id=str(user.id))
        return created

    @router.put("/{item_id}", response_model=model_class)
    async def update_item(
        item_id: UUID,
        body: update_class,  # type: ignore[valid-type]
        user: CurrentUserDep,
        repos: RepositoriesDep,
    ) -> Any:
        repo = repo_of(repos)
        await load_accessible(repo, item_id, user)
        changes = _update_changes(body, model_class)
        if check_refs is not None:
            await check_refs(repos, user, changes)
        updated = await repo.update(item_id, changes)
        if updated is None:
            raise NotFoundError(f"{label} not found", details={"id": str(item_id)})
        return updated

    @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_item(item_id: UUID, user: CurrentUserDep, repos: RepositoriesDep) -> Response:
        repo = repo_of(repos)
        await load_accessible(repo, item_id, user)
        for attribute, field in dependents:
            await attrgetter(attribute)(repos).delete_by(field, item_id)
        await repo.delete(item_id)
        logger.info("resource_deleted", resource=noun, resource_id=str(item_id), user_id=str(user.id))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


notes = build_owned_router("notes", Note, NoteCreate, NoteUpdate)
words = build_owned_router(
    "words", Word, WordCreate, WordUpdate,
    dependents=(("word_sentences", "word_id"),),
)
sentences = build_owned_router(
    "sentences", Sentence, SentenceCreate, SentenceUpdate,
    dependents=(("word_sentences", "sentence_id"),),
)
word_sentences = build_owned_router(
    "word_sentences", WordSentence, WordSentenceCreate, WordSentenceUpdate,
    noun="word sentence",
    check_refs=check_word_sentence_refs,
)
lessons = build_owned_router(
    "lessons", Lesson, LessonCreate, LessonUpdate,
    check_refs=check_lesson_refs,
)
