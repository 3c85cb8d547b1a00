import pytest

from campus_events.domain.errors import (
    AdminCannotLeaveError,
    AlreadyMemberError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    NotMemberError,
    ValidationFailedError,
)
from campus_events.domain.values import Role, RsoStatus
from campus_events.models.rso import Rso, RsoMember
from campus_events.services import memberships
from campus_events.services.rsos import create_rso, join_rso, leave_rso, list_rsos, recompute_status


@pytest.mark.parametrize(
    ('current', 'count', 'joined', 'expected'),
    [
        (RsoStatus.INACTIVE, 4, True, RsoStatus.INACTIVE),
        (RsoStatus.INACTIVE, 5, True, RsoStatus.ACTIVE),
        (RsoStatus.ACTIVE, 6, True, RsoStatus.ACTIVE),
        (RsoStatus.ACTIVE, 4, True, RsoStatus.ACTIVE),
        (RsoStatus.ACTIVE, 4, False, RsoStatus.INACTIVE),
        (RsoStatus.ACTIVE, 5, False, RsoStatus.ACTIVE),
        (RsoStatus.INACTIVE, 7, False, RsoStatus.INACTIVE),
    ],
)
def test_recompute_status_only_moves_in_the_direction_of_the_change(current, count, joined, expected) -> None:
    assert recompute_status(current, count, joined=joined, threshold=5) is expected


def test_create_rso_starts_inactive_with_creator_as_member(db, seed, as_principal) -> None:
    university = seed.university()
    admin = seed.user(university, role=Role.ADMIN)

    snapshot = create_rso(db, as_principal(admin), '  Chess Club ', 'Weekly blitz')

    assert snapshot.name == 'Chess Club'
    assert snapshot.status is RsoStatus.INACTIVE
    assert snapshot.member_count == 1
    assert snapshot.is_member is True
    assert snapshot.admin_id == admin.id
    assert memberships.is_member(db, admin.id, snapshot.id)


def test_create_rso_stays_inactive_even_when_threshold_is_one(db, seed, as_principal, monkeypatch) -> None:
    monkeypatch.setattr('campus_events.core.config.RSO_ACTIVATION_THRESHOLD', 1)
    university = seed.university()
    admin = seed.user(university, role=Role.ADMIN)

    snapshot = create_rso(db, as_principal(admin), 'Solo Club')

    assert snapshot.status is RsoStatus.INACTIVE


def test_create_rso_rejects_students(db, seed, as_principal) -> None:
    university = seed.university()
    student = seed.user(university)

    with pytest.raises(ForbiddenError):
        create_rso(db, as_principal(student), 'Chess Club')

    assert db.query(Rso).count() == 0


def test_create_rso_requires_university(db, seed, as_principal) -> None:
    super_admin = seed.user(role=Role.SUPER_ADMIN)

    with pytest.raises(ValidationFailedError):
        create_rso(db, as_principal(super_admin), 'Chess Club')


def test_create_rso_requires_name(db, seed, as_principal) -> None:
    university = seed.university()
    admin = seed.user(university, role=Role.ADMIN)

    with pytest.raises(ValidationFailedError):
        create_rso(db, as_principal(admin), '   ')


def test_create_rso_name_is_unique_per_university(db, seed, as_principal) -> None:
    ucf = seed.university()
    usf = seed.university(name='University of South Florida', domain='usf.edu')
    ucf_admin = seed.user(ucf, role=Role.ADMIN)
    usf_admin = seed.user(usf, role=Role.ADMIN)

    create_rso(db, as_principal(ucf_admin), 'Chess Club')
    create_rso(db, as_principal(usf_admin), 'Chess Club')

    with pytest.raises(ConflictError):
        create_rso(db, as_principal(ucf_admin), 'Chess Club')

    assert db.query(Rso).count() == 2


def test_fifth_member_activates_and_leaving_deactivates(db, seed, as_principal) -> None:
    university = seed.university()
    admin = seed.user(university, role=Role.ADMIN)
    rso = seed.rso(admin, members=4)
    fifth = seed.user(university)

    joined = join_rso(db, as_principal(fifth), rso.id)

    assert joined.member_count == 5
    assert joined.status is RsoStatus.ACTIVE
    assert joined.is_member is True
    assert db.get(Rso, rso.id).status == 'active'

    left = leave_rso(db, as_principal(fifth), rso.id)

    assert left.member_count == 4
    assert left.status is RsoStatus.INACTIVE
    assert left.is_member is False
    assert db.get(Rso, rso.id).status == 'inactive'


def test_status_matches_threshold_after_every_join_and_leave(db, seed, as_principal) -> None:
    university = seed.university()
    admin = seed.user(university, role=Role.ADMIN)
    rso = seed.rso(admin, members=1)
    students = [seed.user(university) for _ in range(6)]

    for student in students:
        snapshot = join_rso(db, as_principal(student), rso.id)
        assert (snapshot.status is RsoStatus.ACTIVE) == (snapshot.member_count >= 5)

    for student in reversed(students):
        snapshot = leave_rso(db, as_principal(student), rso.id)
        assert (snapshot.status is RsoStatus.ACTIVE) == (snapshot.member_count >= 5)

    assert db.get(Rso, rso.id).status == 'inactive'


def test_join_uses_configured_threshold(db, seed, as_principal, monkeypatch) -> None:
    monkeypatch.setattr('campus_events.core.config.RSO_ACTIVATION_THRESHOLD', 2)
    university = seed.university()
    admin = seed.user(university, role=Role.ADMIN)
    rso = seed.rso(admin, members=1)

    snapshot = join_rso(db, as_principal(seed.user(university)), rso.id)

    assert snapshot.status is RsoStatus.ACTIVE


def test_join_twice_fails_already_member(db, seed, as_principal) -> None:
    university = seed.university()
    admin = seed.user(university, role=Role.ADMIN)
    rso = seed.rso(admin)
    student = seed.user(university)

    join_rso(db, as_principal(student), rso.id)

    with pytest.raises(AlreadyMemberError):
        join_rso(db, as_principal(student), rso.id)

    assert memberships.count_members(db, rso.id) == 2


def test_duplicate_insert_during_join_fails_already_member(db, seed, as_principal, monkeypatch) -> None:
    university = seed.university()
    admin = seed.user(university, role=Role.ADMIN)
    rso = seed.rso(admin, members=4)
    student = seed.user(university)
    join_rso(db, as_principal(student), rso.id)

    # A concurrent join that already passed the membership check.
    monkeypatch.setattr(memberships, 'is_member', lambda *args: False)

    with pytest.raises(AlreadyMemberError):
        join_rso(db, as_principal(student), rso.id)

    assert memberships.count_members(db, rso.id) == 5
    assert db.get(Rso, rso.id).status == 'active'


def test_join_rso_at_other_university_is_not_found(db, seed, as_principal) -> None:
    ucf = seed.university()
    usf = seed.university(name='University of South Florida', domain='usf.edu')
    rso = seed.rso(seed.user(ucf, role=Role.ADMIN))
    outsider = seed.user(usf)

    with pytest.raises(NotFoundError):
        join_rso(db, as_principal(outsider), rso.id)

    assert db.query(RsoMember).filter(RsoMember.user_id == outsider.id).count() == 0


def test_join_missing_rso_is_not_found(db, seed, as_principal) -> None:
    university = seed.university()
    student = seed.user(university)

    with pytest.raises(NotFoundError):
        join_rso(db, as_principal(student), 999)


def test_admin_cannot_leave_own_rso(db, seed, as_principal) -> None:
    university = seed.university()
    admin = seed.user(university, role=Role.ADMIN)
    rso = seed.rso(admin, members=5, status=RsoStatus.ACTIVE)

    with pytest.raises(AdminCannotLeaveError):
        leave_rso(db, as_principal(admin), rso.id)

    assert memberships.is_member(db, admin.id, rso.id)
    assert db.get(Rso, rso.id).status == 'active'


def test_leave_without_membership_fails_not_member(db, seed, as_principal) -> None:
    university = seed.university()
    rso = seed.rso(seed.user(university, role=Role.ADMIN))
    student = seed.user(university)

    with pytest.raises(NotMemberError):
        leave_rso(db, as_principal(student), rso.id)


def test_leave_missing_rso_is_not_found(db, seed, as_principal) -> None:
    student = seed.user(seed.university())

    with pytest.raises(NotFoundError):
        leave_rso(db, as_principal(student), 999)


def test_list_rsos_reports_counts_and_membership(db, seed, as_principal) -> None:
    ucf = seed.university()
    usf = seed.university(name='University of South Florida', domain='usf.edu')
    admin = seed.user(ucf, role=Role.ADMIN)
    chess = seed.rso(admin, name='Chess Club', members=3)
    seed.rso(admin, name='Anime Club', members=2)
    seed.rso(seed.user(usf, role=Role.ADMIN), name='Bulls Robotics')
    student = seed.user(ucf)
    join_rso(db, as_principal(student), chess.id)

    listed = list_rsos(db, as_principal(student))

    assert [item.name for item in listed] == ['Anime Club', 'Chess Club']
    by_name = {item.name: item for item in listed}
    assert by_name['Chess Club'].member_count == 4
    assert by_name['Chess Club'].is_member is True
    assert by_name['Anime Club'].member_count == 2
    assert by_name['Anime Club'].is_member is False


def test_list_rsos_requires_university(db, seed, as_principal) -> None:
    with pytest.raises(ValidationFailedError):
        list_rsos(db, as_principal(seed.user()))
