"""Boundary tracking for paged notification feeds."""

import logging

from .entities import BoundaryState, PageMeta

logger = logging.getLogger(__name__)


class PaginationMetaTracker:
    """Keeps the outermost pages visited so far, plus the page on screen.

    Only the first and last boundaries are ever marked read, so paging
    through the middle of a feed never widens the set of pages written to.
    """

    @staticmethod
    def reconcile(boundary: BoundaryState, new_meta: PageMeta) -> BoundaryState:
        """Return the boundary state after fetching ``new_meta``.

        Args:
            boundary: Boundary state before the fetch
            new_meta: Metadata of the page that was just fetched

        Returns:
            BoundaryState: A new state; ``boundary`` is left untouched
        """
        first_meta = boundary.first_meta
        last_meta = boundary.last_meta
        page = new_meta.page

        # An unset page on either side never compares, so the first fetch
        # always lands in the final branch.
        if page is not None and last_meta.page is not None and page > last_meta.page:
            logger.debug(f"Page {page} extends last boundary (was {last_meta.page})")
            last_meta = new_meta
        elif page is not None and first_meta.page is not None and page < first_meta.page:
            logger.debug(f"Page {page} extends first boundary (was {first_meta.page})")
            first_meta = new_meta
        else:
            logger.debug(f"Page {page} resets both boundaries")
            first_meta = last_meta = new_meta

        return BoundaryState(first_meta=first_meta, last_meta=last_meta, current_meta=new_meta)
