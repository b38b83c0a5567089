"""Management command to page through a notification section from the shell."""

import json

from django.core.management.base import BaseCommand, CommandError

from notification_feed.config import get_feed_config
from notification_feed.controller import SectionController
from notification_feed.entities import SectionIdentity
from notification_feed.exceptions import SectionConfigError
from notification_feed.presenters import SectionPresenter
from notification_feed.router import QueryParamRouter


class Command(BaseCommand):
    """Open a section, visit pages in order, then collapse it."""

    help = "Open a notification section, visit the given pages and collapse it, marking seen pages read"

    def add_arguments(self, parser):
        """Add command line arguments."""
        parser.add_argument(
            "--section",
            type=str,
            help="Global section key (defaults to NOTIFICATION_FEED['GLOBAL_SECTION'])",
        )

        parser.add_argument(
            "--project",
            type=str,
            help="Show the section of this project id instead of the global one",
        )

        parser.add_argument(
            "--token",
            type=str,
            help="Bearer token of the viewing user; without one nothing is marked read",
        )

        parser.add_argument(
            "--pages",
            type=int,
            nargs="*",
            default=[],
            help="Pages to visit after page 1, e.g. --pages 2 3 2",
        )

        parser.add_argument(
            "--next",
            type=int,
            default=0,
            help="Number of times to use the forward control after the listed pages",
        )

        parser.add_argument(
            "--json",
            action="store_true",
            help="Output each step in JSON format",
        )

    def handle(self, *args, **options):
        """Handle the command execution."""
        if options["project"] and options["section"]:
            raise CommandError("Use either --section or --project, not both")

        if options["project"]:
            identity = SectionIdentity.for_project(options["project"])
        else:
            identity = SectionIdentity.global_scope(options["section"] or get_feed_config()["GLOBAL_SECTION"])

        router = QueryParamRouter()
        try:
            controller = SectionController(identity, router, user_token=options["token"])
        except SectionConfigError as e:
            raise CommandError(str(e))

        presenter = SectionPresenter(controller)

        controller.mount()
        controller.toggle()
        self._report(presenter, options)

        for page in options["pages"]:
            router.set_page(page)
            self._report(presenter, options)

        for _ in range(options["next"]):
            controller.next_page()
            self._report(presenter, options)

        marked = controller.collapse()
        controller.unmount()

        self.stdout.write(self.style.SUCCESS(f"Marked {len(marked)} notification(s) read on collapse"))

    def _report(self, presenter: SectionPresenter, options):
        view = presenter.as_dict()

        if options["json"]:
            self.stdout.write(json.dumps(view, indent=2))
            return

        header = view["header"]
        unread = header["unread"]["count"] if header["unread"] else 0
        self.stdout.write(f"{header['name'] or header['section']} ({unread} unread)")

        if view["error"]:
            self.stdout.write(self.style.ERROR(f"  {view['error']}"))

        for item in view["notifications"]:
            status = " " if item["delivered"] else "*"
            self.stdout.write(f"  {status} [{item['id']}] {item['message']}")

        paginator = view["paginator"]
        if paginator and paginator["item_range"]:
            self.stdout.write(f"  page {paginator['page']} of {paginator['page_count']}: {paginator['item_range']}")
