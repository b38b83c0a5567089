"""Tests for the section state machine."""

from unittest.mock import Mock

from django.test import SimpleTestCase

from notification_feed.controller import COLLAPSED, EXPANDED, UNMOUNTED, SectionController
from notification_feed.entities import SectionIdentity
from notification_feed.exceptions import SectionConfigError, TransportError
from notification_feed.router import QueryParamRouter
from notification_feed.tests.factories import FakeTalkAPIClient


class SectionControllerTestMixin:
    """Builds a controller over a 12-item fake feed with five items per page."""

    user_token = "user-token"

    def make_controller(self, identity=None, user_token="default", **kwargs):
        self.talk = FakeTalkAPIClient(total=12)
        self.projects = Mock()
        self.dispatch = Mock()
        self.router = QueryParamRouter({"page": "3"})
        token = self.user_token if user_token == "default" else user_token
        controller = SectionController(
            identity or SectionIdentity.global_scope("zooniverse"),
            self.router,
            user_token=token,
            talk_client=self.talk,
            project_client=self.projects,
            **kwargs,
        )
        controller.read_marker.dispatch = self.dispatch
        return controller

    def dispatched_ids(self):
        return [c.args[0] for c in self.dispatch.call_args_list]


class SectionControllerLifecycleTest(SectionControllerTestMixin, SimpleTestCase):
    """Mount, toggle and teardown transitions."""

    def test_mount_global_section(self):
        controller = self.make_controller()
        controller.mount()

        self.assertEqual(controller.state, COLLAPSED)
        self.assertEqual(controller.name, "Zooniverse")
        self.assertEqual(controller.unread, 12)
        self.projects.get_project.assert_not_called()
        self.assertEqual(self.talk.page_requests, [])

    def test_mount_project_section(self):
        controller = self.make_controller(SectionIdentity.for_project(42))
        self.projects.get_project.return_value = {"display_name": "Penguin Watch", "avatar_src": "img/p.png", "slug": "owner/penguins"}

        controller.mount()

        self.projects.get_project.assert_called_once_with("42")
        self.assertEqual(controller.name, "Penguin Watch")
        self.assertEqual(controller.avatar, "img/p.png")
        self.assertEqual(controller.slug, "owner/penguins")
        self.assertEqual(self.talk.calls[-1]["section"], "project-42")

    def test_project_metadata_failure_goes_to_error_slot(self):
        controller = self.make_controller(SectionIdentity.for_project(42))
        self.projects.get_project.side_effect = TransportError("not found", status_code=404)

        controller.mount()

        self.assertIsInstance(controller.error, TransportError)
        self.assertIsNone(controller.name)
        self.assertEqual(controller.unread, 12)

    def test_project_section_needs_project_id(self):
        with self.assertRaises(SectionConfigError):
            self.make_controller(SectionIdentity("project-", project_id=""))

    def test_toggle_expands_on_page_one(self):
        controller = self.make_controller()
        controller.mount()

        controller.toggle()

        self.assertEqual(controller.state, EXPANDED)
        self.assertEqual(self.router.page, 1)
        self.assertEqual(self.talk.page_requests, [1])
        self.assertEqual(controller.page, 1)

    def test_toggle_notifies_parent_instead_of_applying(self):
        on_toggle = Mock()
        controller = self.make_controller(on_toggle=on_toggle)
        controller.mount()

        controller.toggle()

        on_toggle.assert_called_once_with("zooniverse")
        self.assertEqual(controller.state, COLLAPSED)

    def test_page_change_ignored_while_collapsed(self):
        controller = self.make_controller()
        controller.mount()

        self.router.set_page(2)
        controller.change_page(2)

        self.assertEqual(self.talk.page_requests, [])

    def test_invalid_page_rejected(self):
        controller = self.make_controller()
        controller.mount()
        controller.toggle()

        with self.assertRaises(SectionConfigError):
            controller.change_page("abc")
        with self.assertRaises(SectionConfigError):
            controller.change_page(0)

    def test_second_mount_keeps_one_page_listener(self):
        controller = self.make_controller()
        controller.mount()
        controller.mount()
        controller.toggle()

        self.router.set_page(2)

        self.assertEqual(self.talk.page_requests, [1, 2])

    def test_unmount_stops_listening(self):
        controller = self.make_controller()
        controller.mount()
        controller.toggle()

        controller.unmount()
        self.router.set_page(2)

        self.assertEqual(controller.state, UNMOUNTED)
        self.assertEqual(self.talk.page_requests, [1])


class SectionControllerScenarioTest(SectionControllerTestMixin, SimpleTestCase):
    """Paging and read-marking scenarios over a 12-item, 3-page feed."""

    def setUp(self):
        """Expand a mounted section (scenario A)."""
        self.controller = self.make_controller()
        self.controller.mount()
        self.controller.toggle()

    def test_expand_fetches_first_page(self):
        """Scenario A: first = last = current = page 1."""
        boundary = self.controller.boundary

        self.assertEqual(len(self.controller.notifications), 5)
        self.assertEqual(boundary.current_meta.count, 12)
        self.assertEqual(boundary.current_meta.page_count, 3)
        self.assertEqual(boundary.first_meta.page, 1)
        self.assertEqual(boundary.last_meta.page, 1)
        self.assertEqual(boundary.current_meta.page, 1)
        self.assertEqual(len(self.controller.cache), 5)

    def test_next_page_marks_old_first_boundary(self):
        """Scenario B: the five page-1 items are marked once, last moves to 2."""
        self.controller.next_page()
        boundary = self.controller.boundary

        self.assertEqual(boundary.first_meta.page, 1)
        self.assertEqual(boundary.last_meta.page, 2)
        self.assertEqual(boundary.current_meta.page, 2)
        self.assertEqual(self.router.page, 2)
        self.assertEqual(sorted(self.dispatched_ids()), ["n1", "n2", "n3", "n4", "n5"])

    def test_return_to_first_page(self):
        """Scenario C: going back re-fetches page 1 without marking again."""
        self.controller.next_page()
        self.dispatch.reset_mock()

        self.controller.previous_page()
        boundary = self.controller.boundary

        self.assertEqual(boundary.current_meta.page, 1)
        self.assertEqual(boundary.first_meta.page, 1)
        self.assertEqual(boundary.first_meta.page, boundary.last_meta.page)
        self.dispatch.assert_not_called()
        self.assertEqual(self.talk.page_requests, [1, 2, 1])

    def test_collapse_marks_both_boundaries_once(self):
        """Scenario D: every undelivered item on pages 1 and 2 is written once."""
        self.controller.change_page(2)
        self.assertEqual(self.controller.boundary.first_meta.page, 1)
        self.assertEqual(self.controller.boundary.last_meta.page, 2)

        marked = self.controller.collapse()

        self.assertCountEqual(marked, [f"n{i}" for i in range(1, 11)])
        self.assertCountEqual(self.dispatched_ids(), [f"n{i}" for i in range(1, 11)])
        self.assertEqual(self.controller.state, COLLAPSED)
        self.assertTrue(self.controller.boundary.is_empty)

    def test_collapse_after_next_page_does_not_rewrite(self):
        self.controller.next_page()
        self.controller.collapse()

        ids = self.dispatched_ids()
        self.assertEqual(len(ids), len(set(ids)))
        self.assertCountEqual(ids, [f"n{i}" for i in range(1, 11)])

    def test_forward_back_then_collapse_writes_each_id_once(self):
        """Page 1 re-fetched with stale flags is not written again on collapse."""
        self.controller.next_page()
        self.controller.previous_page()
        self.assertFalse(self.controller.cache.get("n1").delivered)

        marked = self.controller.collapse()

        ids = self.dispatched_ids()
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(sorted(ids), sorted(f"n{i}" for i in range(1, 6)))
        self.assertEqual(marked, [])

    def test_unmount_without_identity_never_writes(self):
        """Scenario E: anonymous teardown issues zero writes."""
        controller = self.make_controller(user_token=None)
        controller.mount()
        controller.toggle()
        controller.change_page(2)

        self.assertEqual(controller.unmount(), [])
        controller.collapse()
        self.dispatch.assert_not_called()

    def test_unmount_with_identity_flushes(self):
        self.controller.change_page(3)

        marked = self.controller.unmount()

        self.assertCountEqual(marked, [f"n{i}" for i in range(1, 6)] + ["n11", "n12"])

    def test_router_page_change_fetches(self):
        self.router.set_page(3)

        self.assertEqual(self.talk.page_requests, [1, 3])
        self.assertEqual(self.controller.boundary.last_meta.page, 3)

    def test_unread_refreshed_after_every_fetch(self):
        self.talk.calls = []

        self.controller.change_page(2)

        self.assertEqual([c["delivered"] for c in self.talk.calls], [None, False])

    def test_next_page_stops_at_page_count(self):
        self.controller.change_page(3)
        self.dispatch.reset_mock()

        self.controller.next_page()

        self.assertEqual(self.controller.page, 3)
        self.dispatch.assert_not_called()

    def test_previous_page_stops_at_first_page(self):
        self.controller.previous_page()

        self.assertEqual(self.talk.page_requests, [1])

    def test_fetch_failure_keeps_loaded_state(self):
        self.talk.fail_pages.add(2)

        self.controller.change_page(2)

        self.assertIsInstance(self.controller.error, TransportError)
        self.assertEqual(self.controller.page, 1)
        self.assertEqual(self.controller.boundary.last_meta.page, 1)
        self.assertEqual(len(self.controller.notifications), 5)

    def test_successful_fetch_clears_error(self):
        self.talk.fail_pages.add(2)
        self.controller.change_page(2)
        self.assertIsInstance(self.controller.error, TransportError)

        self.talk.fail_pages.clear()
        self.controller.change_page(2)

        self.assertIsNone(self.controller.error)
        self.assertEqual(self.controller.page, 2)

    def test_unread_failure_keeps_count(self):
        self.talk.fail_unread = True

        self.controller.change_page(2)

        self.assertEqual(self.controller.unread, 12)
        self.assertIsInstance(self.controller.error, TransportError)
        self.assertEqual(self.controller.boundary.last_meta.page, 2)

    def test_user_change_refetches_current_page(self):
        self.controller.change_page(2)

        self.controller.set_user("other-token")

        self.assertEqual(self.talk.auth_token, "other-token")
        self.assertEqual(self.controller.read_marker.auth_token, "other-token")
        self.assertEqual(self.talk.page_requests, [1, 2, 2])

    def test_same_user_does_not_refetch(self):
        self.controller.set_user(self.user_token)

        self.assertEqual(self.talk.page_requests, [1])
