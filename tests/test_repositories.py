import pytest
from sqlalchemy.exc import IntegrityError

from models import ContentHistoryModel, CourseModel, LearningMaterialModel, UserModel
from repositories import (
    ContentHistoryRepository,
    CourseRepository,
    LearningMaterialRepository,
    UserRepository,
)
from schemas.enums import ContentType, DifficultyLevel, UserRole


def _user(email, role=UserRole.STUDENT):
    return UserModel(email=email, password_hash="hash", role=role, profile={})


def test_save_sets_created_once_and_refreshes_modified(session, clock):
    users = UserRepository(session, clock)
    user = users.save(_user("Mixed@Case.test"))
    created = user.created_date
    assert user.email == "mixed@case.test"
    assert user.last_modified_date == created

    user.active = False
    users.save(user)
    assert user.created_date == created
    assert user.last_modified_date > created


def test_email_lookups_ignore_case(session, clock):
    users = UserRepository(session, clock)
    users.save(_user("a@x"))
    assert users.exists_by_email("A@X")
    assert users.find_by_email(" a@x ").email == "a@x"
    assert users.find_active_user_by_email("a@x") is not None


def test_email_is_unique(session, clock):
    users = UserRepository(session, clock)
    users.save(_user("a@x"))
    with pytest.raises(IntegrityError):
        users.save(_user("A@x"))


def test_find_by_role(session, clock):
    users = UserRepository(session, clock)
    users.save(_user("s@x"))
    users.save(_user("i@x", UserRole.INSTRUCTOR))
    assert [u.email for u in users.find_by_role(UserRole.INSTRUCTOR)] == ["i@x"]


def test_course_finders(session, clock):
    courses = CourseRepository(session, clock)
    courses.save(CourseModel(title="Algebra", subject="math", difficulty=DifficultyLevel.BEGINNER, published=True))
    courses.save(CourseModel(title="Topology", subject="math", difficulty=DifficultyLevel.EXPERT, published=True))
    courses.save(CourseModel(title="Draft", subject="math", difficulty=DifficultyLevel.BEGINNER))

    found = courses.find_published_by_subject_and_difficulty("math", DifficultyLevel.BEGINNER)
    assert [c.title for c in found] == ["Algebra"]
    assert len(courses.find_by_published(True)) == 2
    assert [c.title for c in courses.find_by_title_containing_ignore_case("")] == [
        "Algebra", "Topology", "Draft"
    ]


def test_material_finders(session, clock):
    materials = LearningMaterialRepository(session, clock)
    materials.save(LearningMaterialModel(title="Clip", type=ContentType.VIDEO, topic_id="t", published=True))
    materials.save(LearningMaterialModel(title="Notes", type=ContentType.LECTURE, topic_id="t"))

    assert [m.title for m in materials.find_published_by_type(ContentType.VIDEO)] == ["Clip"]
    assert [m.title for m in materials.find_by_type(ContentType.LECTURE)] == ["Notes"]
    assert len(materials.find_by_topic_id("t")) == 2
    assert all(m.version == 1 for m in materials.find_all())


def test_history_version_is_unique_per_material(session, clock):
    history = ContentHistoryRepository(session, clock)
    history.save(ContentHistoryModel(material_id="m", version=1, changed_by="u"))
    history.save(ContentHistoryModel(material_id="other", version=1, changed_by="u"))
    assert [h.material_id for h in history.find_by_changed_by("u")] == ["other", "m"]
    with pytest.raises(IntegrityError):
        history.save(ContentHistoryModel(material_id="m", version=1, changed_by="u"))


def test_delete_user(session, clock):
    users = UserRepository(session, clock)
    user = users.save(_user("gone@x"))
    users.delete(user)
    assert users.find_by_id(user.id) is None
    assert not users.exists_by_email("gone@x")
