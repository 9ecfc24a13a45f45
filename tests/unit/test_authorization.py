"""
Unit tests for ownership authorization.
"""

from uuid import uuid4

import pytest

from shared.auth import OwnedResource, can_access, is_admin, ownership_filter, require_admin
from shared.errors import ForbiddenError
from shared.models.resources import Note
from shared.models.user import Role, User


def make_user(role: Role) -> User:
    return User(email=f"{uuid4().hex}@x.io", display_name="U", password_hash="h", role=role)


@pytest.fixture
def student() -> User:
    return make_user(Role.STUDENT)


@pytest.fixture
def admin() -> User:
    return make_user(Role.ADMIN)


class TestCanAccess:
    """Tests for per-resource access decisions."""

    def test_owner_can_access(self, student: User) -> None:
        note = Note(user_id=student.id, title="t", content="c")

        assert can_access(student, note) is True

    def test_other_student_cannot_access(self, student: User) -> None:
        note = Note(user_id=uuid4(), title="t", content="c")

        assert can_access(student, note) is False

    def test_teacher_has_no_special_access(self) -> None:
        teacher = make_user(Role.TEACHER)
        note = Note(user_id=uuid4(), title="t", content="c")

        assert can_access(teacher, note) is False

    def test_admin_can_access_anything(self, admin: User) -> None:
        note = Note(user_id=uuid4(), title="t", content="c")

        assert can_access(admin, note) is True

    def test_note_is_owned_resource(self) -> None:
        assert isinstance(Note(user_id=uuid4(), title="t", content="c"), OwnedResource)


class TestOwnershipFilter:
    """Tests for list query scoping."""

    def test_admin_unfiltered(self, admin: User) -> None:
        assert ownership_filter(admin) is None

    @pytest.mark.parametrize("role", [Role.STUDENT, Role.TEACHER])
    def test_non_admin_scoped_to_self(self, role: Role) -> None:
        user = make_user(role)

        assert ownership_filter(user) == user.id


class TestRequireAdmin:
    """Tests for the admin guard."""

    def test_admin_passes(self, admin: User) -> None:
        assert is_admin(admin)
        require_admin(admin)

    def test_student_rejected(self, student: User) -> None:
        with pytest.raises(ForbiddenError):
            require_admin(student)
