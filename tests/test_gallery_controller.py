"""Unit tests for GalleryController."""

from unittest.mock import MagicMock

from catgallery.controllers.gallery_controller import GalleryController
from catgallery.errors import NetworkError
from catgallery.models.cat_model import ImageItem
from catgallery.models.filter_state import FilterState
from catgallery.models.gallery_state import Status
from catgallery.services.cat_api_service import IMAGES_ERROR
from catgallery.services.dispatcher import DeferredDispatcher, ImmediateDispatcher
from conftest import page_payload


def _page(prefix: str, count: int = 9) -> list[ImageItem]:
    return [ImageItem.from_dict(raw) for raw in page_payload(prefix, count)]


def _search_by_page() -> MagicMock:
    return MagicMock(side_effect=lambda filters, page: _page(f"p{page}-"))


class TestApplyFilters:
    """Tests for apply_filters."""

    def test_initial_load(self) -> None:
        """Test that the first apply loads page 0 and goes idle."""
        search = _search_by_page()
        controller = GalleryController(search, ImmediateDispatcher())

        controller.apply_filters(FilterState())

        search.assert_called_once_with(FilterState(), 0)
        assert len(controller.state.items) == 9
        assert controller.state.page == 0
        assert controller.state.status is Status.IDLE

    def test_apply_replaces_appended_items(self) -> None:
        """Test that applying after paging resets page and replaces the list."""
        search = _search_by_page()
        controller = GalleryController(search, ImmediateDispatcher())
        controller.apply_filters(FilterState())
        controller.advance()
        controller.advance()
        assert controller.state.page == 2

        controller.apply_filters(FilterState().with_breed("abys"))

        assert controller.state.page == 0
        assert [i.id for i in controller.state.items] == [f"p0-{i}" for i in range(9)]
        assert search.call_args.args == (FilterState().with_breed("abys"), 0)

    def test_failure_keeps_items_and_sets_error(self) -> None:
        """Test that a failing reset keeps loaded items and shows the message."""
        search = _search_by_page()
        controller = GalleryController(search, ImmediateDispatcher())
        controller.apply_filters(FilterState())
        search.side_effect = NetworkError(IMAGES_ERROR)

        controller.apply_filters(FilterState())

        assert controller.state.status is Status.ERROR
        assert controller.state.error == IMAGES_ERROR
        assert len(controller.state.items) == 9

    def test_unexpected_exception_becomes_generic_error(self) -> None:
        """Test that non-domain failures still end in the error state."""
        controller = GalleryController(MagicMock(side_effect=KeyError("x")), ImmediateDispatcher())

        controller.apply_filters(FilterState())

        assert controller.state.status is Status.ERROR
        assert controller.state.error == IMAGES_ERROR

    def test_stale_reset_is_discarded(self) -> None:
        """Test that a response from a superseded filter session is ignored."""
        dispatcher = DeferredDispatcher()
        calls: list[FilterState] = []

        def search(filters: FilterState, page: int) -> list[ImageItem]:
            calls.append(filters)
            return _page("abys-" if filters.breed_id else "all-")

        controller = GalleryController(search, dispatcher)
        controller.apply_filters(FilterState())
        controller.apply_filters(FilterState().with_breed("abys"))

        # first job resolves after the second apply: must not land
        job, on_success, _ = dispatcher.pending.pop(0)
        on_success(job())
        assert controller.state.loading
        assert controller.state.items == ()

        dispatcher.run_pending()
        assert controller.state.items[0].id == "abys-0"
        assert controller.state.status is Status.IDLE


class TestAdvance:
    """Tests for advance (end-of-list signal)."""

    def test_appends_next_page(self) -> None:
        """Test that advancing appends the next page."""
        search = _search_by_page()
        controller = GalleryController(search, ImmediateDispatcher())
        controller.apply_filters(FilterState())

        controller.advance()

        assert len(controller.state.items) == 18
        assert controller.state.page == 1
        assert search.call_args.args[1] == 1

    def test_double_signal_while_loading_fetches_once(self) -> None:
        """Test that two signals during a pending fetch issue one request."""
        search = _search_by_page()
        dispatcher = DeferredDispatcher()
        controller = GalleryController(search, dispatcher)
        controller.apply_filters(FilterState())
        dispatcher.run_pending()

        # the page-1 job is never run, so the fetch stays in flight
        first = controller.advance()
        second = controller.advance()

        assert first is not None
        assert second is None
        assert len(dispatcher.pending) == 1
        assert search.call_count == 1

    def test_signal_ignored_during_initial_load(self) -> None:
        """Test that the end-of-list signal is masked while page 0 loads."""
        dispatcher = DeferredDispatcher()
        controller = GalleryController(_search_by_page(), dispatcher)
        controller.apply_filters(FilterState())

        assert controller.advance() is None
        assert len(dispatcher.pending) == 1

    def test_failed_append_keeps_page(self) -> None:
        """Test that a failed page fetch does not advance the page index."""
        search = _search_by_page()
        controller = GalleryController(search, ImmediateDispatcher())
        controller.apply_filters(FilterState())
        search.side_effect = NetworkError(IMAGES_ERROR)

        controller.advance()

        assert controller.state.page == 0
        assert controller.state.status is Status.ERROR
        assert len(controller.state.items) == 9

    def test_empty_pages_do_not_block_further_signals(self) -> None:
        """Test that repeated empty pages keep accepting signals."""
        search = MagicMock(side_effect=lambda filters, page: _page("p0-") if page == 0 else [])
        controller = GalleryController(search, ImmediateDispatcher())
        controller.apply_filters(FilterState())

        controller.advance()
        controller.advance()

        assert search.call_count == 3
        assert controller.state.page == 2
        assert len(controller.state.items) == 9


class TestListeners:
    """Tests for on_change notifications."""

    def test_listener_sees_loading_then_idle(self) -> None:
        """Test that listeners get every transition in order."""
        controller = GalleryController(_search_by_page(), ImmediateDispatcher())
        seen: list[Status] = []
        controller.on_change(lambda state: seen.append(state.status))

        controller.apply_filters(FilterState())

        assert seen == [Status.LOADING, Status.IDLE]
