"""Tests for branch scoping, scoped event writes, guarded branch delete and admin creation."""

import unittest
from datetime import datetime
from unittest.mock import patch

from sqlalchemy.orm import sessionmaker

from youth_cms.core.database import build_engine
from youth_cms.models import Base, Branch, Event, User, UserRole
from youth_cms.schemas.admins import AdminCreate
from youth_cms.schemas.auth import SessionPrincipal
from youth_cms.schemas.events import EventInput
from youth_cms.services import accounts
from youth_cms.services.access import (
    BranchInUseError,
    BranchNotFoundError,
    BranchScopeError,
    branch_scope,
    count_branch_relations,
    delete_branch,
    require_branch_scope,
)
from youth_cms.services.events import delete_event, list_events, update_event

ADMIN_7 = SessionPrincipal(sub=2, username="admin7", role=UserRole.ADMIN, branch_id=7)
ADMIN_NO_BRANCH = SessionPrincipal(sub=3, username="orphan", role=UserRole.ADMIN, branch_id=None)
SUPERADMIN = SessionPrincipal(sub=1, username="superadmin", role=UserRole.SUPERADMIN, branch_id=None)


def _branch(branch_id: int, name: str) -> Branch:
    return Branch(
        id=branch_id,
        name=name,
        governorate=name,
        address=f"{name} address",
        phone="0933000000",
        whatsapp="0933000000",
    )


def _event_input(title: str = "Edited title") -> EventInput:
    return EventInput(
        title=title,
        imageUrl="https://cdn.example.org/e.png",
        announcement="Edited announcement",
        eventDate="2026-06-01T10:00:00",
        location="Edited location",
    )


class TestBranchScope(unittest.TestCase):
    """branch_scope / require_branch_scope pick the branch a caller may act on."""

    def test_admin_is_pinned_to_claim_branch(self) -> None:
        self.assertEqual(branch_scope(ADMIN_7, None), 7)
        self.assertEqual(branch_scope(ADMIN_7, 9), 7)
        self.assertEqual(require_branch_scope(ADMIN_7, 9), 7)

    def test_admin_without_branch_is_rejected(self) -> None:
        with self.assertRaises(BranchScopeError):
            branch_scope(ADMIN_NO_BRANCH, None)
        with self.assertRaises(BranchScopeError):
            require_branch_scope(ADMIN_NO_BRANCH, 9)

    def test_superadmin_flag_follows_role(self) -> None:
        self.assertTrue(SUPERADMIN.is_superadmin)
        self.assertFalse(ADMIN_7.is_superadmin)

    def test_superadmin_uses_requested_branch(self) -> None:
        self.assertEqual(branch_scope(SUPERADMIN, 9), 9)
        self.assertIsNone(branch_scope(SUPERADMIN, None))
        self.assertEqual(require_branch_scope(SUPERADMIN, 9), 9)

    def test_superadmin_must_name_branch_when_required(self) -> None:
        with self.assertRaises(BranchScopeError) as ctx:
            require_branch_scope(SUPERADMIN, None)
        self.assertEqual(ctx.exception.status_code, 400)


class _DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory database with branches 7, 9 and 11 (11 has no dependents)."""

    def setUp(self) -> None:
        self.engine = build_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False)
        self.db = self.Session()
        self.db.add_all([_branch(7, "Damascus"), _branch(9, "Aleppo"), _branch(11, "Homs")])
        self.db.flush()
        self.db.add_all(
            [
                User(
                    id=1,
                    username="superadmin",
                    display_name="Superadmin",
                    password_hash="x",
                    role=UserRole.SUPERADMIN.value,
                ),
                User(
                    id=2,
                    username="admin7",
                    display_name="Admin 7",
                    password_hash="x",
                    role=UserRole.ADMIN.value,
                    branch_id=7,
                ),
            ]
        )
        self.db.flush()
        self.event_9 = Event(
            branch_id=9,
            title="Aleppo meetup",
            image_url="https://cdn.example.org/a.png",
            announcement="Original",
            event_date=datetime(2026, 5, 1, 18, 0),
            location="Aleppo",
            created_by=1,
        )
        self.event_7 = Event(
            branch_id=7,
            title="Damascus meetup",
            image_url="https://cdn.example.org/d.png",
            announcement="Original",
            event_date=datetime(2026, 4, 1, 18, 0),
            location="Damascus",
            created_by=2,
        )
        self.db.add_all([self.event_9, self.event_7])
        self.db.commit()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def _fresh(self, model, pk):
        with self.Session() as s:
            return s.get(model, pk)


class TestScopedEventWrites(_DatabaseTestCase):
    """Admins cannot touch another branch's events even with a valid event id."""

    def test_admin_update_of_other_branch_event_affects_nothing(self) -> None:
        scope = branch_scope(ADMIN_7, 9)
        affected = update_event(self.db, self.event_9.id, scope, _event_input())
        self.assertEqual(affected, 0)
        unchanged = self._fresh(Event, self.event_9.id)
        self.assertEqual(unchanged.title, "Aleppo meetup")
        self.assertEqual(unchanged.announcement, "Original")

    def test_admin_update_of_own_event(self) -> None:
        affected = update_event(self.db, self.event_7.id, branch_scope(ADMIN_7, None), _event_input())
        self.assertEqual(affected, 1)
        self.assertEqual(self._fresh(Event, self.event_7.id).title, "Edited title")

    def test_superadmin_update_is_unscoped(self) -> None:
        affected = update_event(self.db, self.event_9.id, branch_scope(SUPERADMIN, None), _event_input())
        self.assertEqual(affected, 1)

    def test_admin_delete_of_other_branch_event_affects_nothing(self) -> None:
        self.assertEqual(delete_event(self.db, self.event_9.id, branch_scope(ADMIN_7, 9)), 0)
        self.assertIsNotNone(self._fresh(Event, self.event_9.id))

    def test_list_events_scoped(self) -> None:
        titles = [e.title for e in list_events(self.db, branch_scope(ADMIN_7, 9))]
        self.assertEqual(titles, ["Damascus meetup"])
        all_titles = [e.title for e in list_events(self.db, branch_scope(SUPERADMIN, None))]
        self.assertEqual(all_titles, ["Aleppo meetup", "Damascus meetup"])


class TestDeleteBranch(_DatabaseTestCase):
    """delete_branch refuses while admins or events reference the branch."""

    def test_branch_with_one_event_conflicts(self) -> None:
        with self.assertRaises(BranchInUseError) as ctx:
            delete_branch(self.db, 9)
        self.assertEqual(ctx.exception.events_count, 1)
        self.assertEqual(ctx.exception.admins_count, 0)
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertIsNotNone(self._fresh(Branch, 9))

    def test_branch_with_admin_and_event_reports_both(self) -> None:
        with self.assertRaises(BranchInUseError) as ctx:
            delete_branch(self.db, 7)
        self.assertEqual((ctx.exception.admins_count, ctx.exception.events_count), (1, 1))

    def test_unreferenced_branch_is_deleted(self) -> None:
        delete_branch(self.db, 11)
        self.assertIsNone(self._fresh(Branch, 11))

    def test_missing_branch(self) -> None:
        with self.assertRaises(BranchNotFoundError):
            delete_branch(self.db, 404)

    def test_count_relations(self) -> None:
        self.assertEqual(count_branch_relations(self.db, 7), (1, 1))
        self.assertEqual(count_branch_relations(self.db, 9), (0, 1))
        self.assertEqual(count_branch_relations(self.db, 11), (0, 0))


class TestCreateAdmin(_DatabaseTestCase):
    """create_admin reports a username lost to a concurrent insert as a conflict."""

    def setUp(self) -> None:
        super().setUp()
        patcher = patch("youth_cms.core.security.BCRYPT_ROUNDS", 4)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _body(self, username: str, branch_id: int = 9) -> AdminCreate:
        return AdminCreate(
            username=username,
            displayName="New admin",
            password="long-enough",
            branchId=branch_id,
        )

    def test_username_taken_after_precheck(self) -> None:
        real_lookup = accounts.get_by_username
        lookups = []

        def stale_then_real(db, username):
            lookups.append(username)
            if len(lookups) == 1:
                return None
            return real_lookup(db, username)

        with patch.object(accounts, "get_by_username", side_effect=stale_then_real):
            with self.assertRaises(accounts.UsernameTakenError):
                accounts.create_admin(self.db, self._body("admin7"))
        self.assertEqual(len(lookups), 2)
        with self.Session() as s:
            self.assertEqual(s.get(User, 2).branch_id, 7)

    def test_creates_admin(self) -> None:
        user = accounts.create_admin(self.db, self._body("aleppo-admin"))
        self.assertEqual(user.branch_id, 9)
        self.assertEqual(user.role, UserRole.ADMIN.value)


if __name__ == "__main__":
    unittest.main()
