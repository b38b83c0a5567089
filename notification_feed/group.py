"""Parent container for notification sections."""

import logging
from typing import Dict, List, Optional

from .controller import SectionController
from .entities import SectionIdentity
from .router import QueryParamRouter

logger = logging.getLogger(__name__)


class SectionGroup:
    """Owns a set of sections sharing one router; at most one is expanded."""

    def __init__(self, router: QueryParamRouter = None, user_token: Optional[str] = None, **controller_kwargs):
        self.router = router or QueryParamRouter()
        self.user_token = user_token
        self.controller_kwargs = controller_kwargs
        self.sections: Dict[str, SectionController] = {}
        self.expanded_key: Optional[str] = None

    def add_section(self, identity: SectionIdentity, **kwargs) -> SectionController:
        """Create and mount a section controller wired to this group."""
        options = {**self.controller_kwargs, **kwargs}
        controller = SectionController(
            identity,
            self.router,
            user_token=self.user_token,
            on_toggle=self.toggle,
            **options,
        )
        self.sections[identity.section] = controller
        controller.mount()
        return controller

    def toggle(self, section_key: Optional[str]):
        """Expand ``section_key``, or collapse everything when it is None."""
        if self.expanded_key is not None and self.expanded_key != section_key:
            self.sections[self.expanded_key].collapse()
            self.expanded_key = None

        if section_key is not None:
            self.expanded_key = section_key
            self.sections[section_key].expand()

    def set_user(self, user_token: Optional[str]):
        self.user_token = user_token
        for controller in self.sections.values():
            controller.set_user(user_token)

    def unmount(self) -> List[str]:
        """Tear down every section."""
        marked = []
        for controller in self.sections.values():
            marked.extend(controller.unmount())
        self.sections = {}
        self.expanded_key = None
        return marked
