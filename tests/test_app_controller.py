"""Unit tests for AppController wiring, with mocked views and services."""

from unittest.mock import MagicMock

import pytest

from catgallery.controllers.app_controller import SAVE_FAVORITES_ERROR, AppController
from catgallery.errors import NetworkError, StorageError
from catgallery.models.cat_model import Breed, FavoriteRecord, ImageItem
from catgallery.models.filter_state import FilterState, Order
from catgallery.services.cat_api_service import BREEDS_ERROR
from catgallery.services.dispatcher import ImmediateDispatcher
from catgallery.services.favorites_service import FavoritesStore, MemoryStorage
from catgallery.services.image_service import DETAIL_SIZE
from conftest import ABYS, BENG, page_payload


def _page(prefix: str, count: int = 9) -> list[ImageItem]:
    return [ImageItem.from_dict(raw) for raw in page_payload(prefix, count)]


@pytest.fixture
def api() -> MagicMock:
    """Fake CatApiService with two breeds and numbered pages."""
    fake = MagicMock()
    fake.fetch_breeds.return_value = [Breed.from_dict(ABYS), Breed.from_dict(BENG)]
    fake.search_images.side_effect = lambda filters, page, breeds_by_id=None: _page(f"p{page}-")
    return fake


@pytest.fixture
def storage() -> MemoryStorage:
    """Empty in-memory favorites storage."""
    return MemoryStorage()


@pytest.fixture
def controller(api: MagicMock, storage: MemoryStorage) -> AppController:
    """Controller with mocked views and synchronous dispatching."""
    ctrl = AppController(
        header=MagicMock(),
        filter_bar=MagicMock(),
        gallery_view=MagicMock(),
        bottom=MagicMock(),
        favorites_panel=MagicMock(),
        detail=MagicMock(),
        api=api,
        images=MagicMock(),
        favorites_store=FavoritesStore(storage),
        dispatcher=ImmediateDispatcher(),
    )
    ctrl.bind_events()
    return ctrl


class TestStart:
    """Tests for the initial load."""

    def test_initial_load_fetches_breeds_and_first_page(self, controller: AppController, api: MagicMock) -> None:
        """Test one breed fetch and one page-0 search with default filters."""
        controller.start()

        api.fetch_breeds.assert_called_once_with()
        api.search_images.assert_called_once()
        args, kwargs = api.search_images.call_args
        assert args == (FilterState(), 0)
        assert set(kwargs["breeds_by_id"]) == {"abys", "beng"}
        assert len(controller.gallery.state.items) == 9
        assert controller.gallery.state.page == 0

    def test_breed_menu_enabled_after_catalog(self, controller: AppController) -> None:
        """Test that the breed selector is filled once the catalog loads."""
        controller.start()

        controller.filter_bar.set_breeds.assert_called_with(
            ["Todas las razas", "Abyssinian", "Bengal"], enabled=True
        )

    def test_breed_failure_disables_filter_and_shows_message(
        self, controller: AppController, api: MagicMock
    ) -> None:
        """Test that a failing catalog leaves breed filtering disabled."""
        api.fetch_breeds.side_effect = NetworkError(BREEDS_ERROR)

        controller.start()

        controller.filter_bar.set_breeds.assert_called_once_with(["Todas las razas"], enabled=False)
        assert controller.notice == BREEDS_ERROR
        assert controller.breeds == ()
        # the gallery still loads
        assert len(controller.gallery.state.items) == 9
        controller.bottom.set_status.assert_called_with(BREEDS_ERROR, is_error=True)

    def test_loads_stored_favorites(self, api: MagicMock, storage: MemoryStorage) -> None:
        """Test that persisted favorites are shown at startup."""
        FavoritesStore(storage).save([FavoriteRecord(id="abc", url="http://x/abc.jpg")])
        ctrl = AppController(
            header=MagicMock(),
            filter_bar=MagicMock(),
            gallery_view=MagicMock(),
            bottom=MagicMock(),
            favorites_panel=MagicMock(),
            detail=MagicMock(),
            api=api,
            images=MagicMock(),
            favorites_store=FavoritesStore(storage),
            dispatcher=ImmediateDispatcher(),
        )

        ctrl.start()

        ctrl.header.set_favorites_count.assert_called_with(1)
        assert [r.id for r in ctrl.favorites] == ["abc"]

    def test_thumbnails_requested_for_each_item(self, controller: AppController) -> None:
        """Test that every loaded card gets its image delivered."""
        controller.start()

        assert controller.images.thumbnail.call_count == 9
        assert controller.gallery_view.set_item_image.call_count == 9


class TestFilters:
    """Tests for the explicit-apply filter policy."""

    def test_changes_do_not_fetch_until_apply(self, controller: AppController, api: MagicMock) -> None:
        """Test that editing filters issues no request by itself."""
        controller.start()
        api.search_images.reset_mock()

        controller.filter_bar.on_breed_change("Abyssinian")
        controller.filter_bar.on_order_change("Populares")
        controller.filter_bar.on_mime_toggle("png")
        controller.filter_bar.on_has_breeds_change(True)

        api.search_images.assert_not_called()
        assert controller.filters.breed_id == "abys"
        assert controller.filters.order is Order.DESC
        assert controller.filters.mime_types == frozenset({"jpg", "png"})

        controller.filter_bar.on_apply()

        api.search_images.assert_called_once()
        assert api.search_images.call_args.args == (controller.filters, 0)

    def test_reset_restores_defaults_without_fetch(self, controller: AppController, api: MagicMock) -> None:
        """Test that Limpiar resets the draft but waits for Aplicar."""
        controller.start()
        controller.filter_bar.on_breed_change("Bengal")
        api.search_images.reset_mock()

        controller.filter_bar.on_reset()

        assert controller.filters == FilterState.default()
        api.search_images.assert_not_called()
        controller.filter_bar.set_filters.assert_called_with(
            breed="Todas las razas", order="Aleatorio", mime_types=frozenset({"jpg"}), has_breeds=False
        )

    def test_all_breeds_label_clears_breed(self, controller: AppController) -> None:
        """Test that choosing all breeds removes the breed filter."""
        controller.start()
        controller.filter_bar.on_breed_change("Bengal")

        controller.filter_bar.on_breed_change("Todas las razas")

        assert controller.filters.breed_id == ""

    def test_apply_after_paging_resets(self, controller: AppController) -> None:
        """Test that apply replaces appended results with a fresh page 0."""
        controller.start()
        controller.bottom.on_load_more()
        assert controller.gallery.state.page == 1

        controller.filter_bar.on_apply()

        assert controller.gallery.state.page == 0
        assert len(controller.gallery.state.items) == 9


class TestPaging:
    """Tests for end-of-list signals from the view."""

    def test_end_reached_appends_page(self, controller: AppController, api: MagicMock) -> None:
        """Test that the gallery scroll signal loads the next page."""
        controller.start()

        controller.gallery_view.on_end_reached()

        assert api.search_images.call_args.args[1] == 1
        assert len(controller.gallery.state.items) == 18

    def test_append_requests_only_new_thumbnails(self, controller: AppController) -> None:
        """Test that paging only loads images for the appended cards."""
        controller.start()
        controller.images.thumbnail.reset_mock()

        controller.gallery_view.on_end_reached()

        assert controller.images.thumbnail.call_count == 9


class TestFavorites:
    """Tests for favorite toggling."""

    def test_toggle_persists_and_reloads(self, controller: AppController, storage: MemoryStorage) -> None:
        """Test that a toggled favorite is first after reloading the store."""
        controller.start()
        item = ImageItem(id="abc", url="http://x/abc.jpg")

        controller.gallery_view.on_toggle_favorite(item)

        reloaded = FavoritesStore(storage).load()
        assert reloaded[0] == FavoriteRecord(id="abc", url="http://x/abc.jpg")
        controller.header.set_favorites_count.assert_called_with(1)
        controller.gallery_view.set_favorite_ids.assert_called_with(frozenset({"abc"}))

    def test_enriched_item_saved_without_catalog_breed(self, controller: AppController, storage: MemoryStorage) -> None:
        """Test that starring an item shown with a catalog breed stores only API data."""
        controller.start()
        item = ImageItem(id="abc", url="http://x/abc.jpg").with_breed(Breed.from_dict(ABYS))

        controller.gallery_view.on_toggle_favorite(item)

        assert FavoritesStore(storage).load() == [FavoriteRecord(id="abc", url="http://x/abc.jpg")]

    def test_toggle_twice_removes(self, controller: AppController, storage: MemoryStorage) -> None:
        """Test that toggling from the panel removes the favorite again."""
        controller.start()
        item = ImageItem(id="abc", url="http://x/abc.jpg")
        controller.gallery_view.on_toggle_favorite(item)

        controller.favorites_panel.on_toggle_favorite(controller.favorites[0])

        assert FavoritesStore(storage).load() == []
        controller.favorites_panel.set_records.assert_called_with([])

    def test_save_failure_keeps_memory_and_shows_notice(self, controller: AppController) -> None:
        """Test that a storage failure is reported but not fatal."""
        controller.start()
        controller.favorites_store = MagicMock()
        controller.favorites_store.save.side_effect = StorageError("disk full")

        controller.toggle_favorite(ImageItem(id="abc", url="http://x/abc.jpg"))

        assert [r.id for r in controller.favorites] == ["abc"]
        assert controller.notice == SAVE_FAVORITES_ERROR
        controller.bottom.set_status.assert_called_with(SAVE_FAVORITES_ERROR, is_error=True)

    def test_panel_toggles_visibility(self, controller: AppController) -> None:
        """Test that the header button opens and closes the panel."""
        controller.header.on_toggle_favorites()
        controller.header.on_toggle_favorites()

        controller.favorites_panel.show.assert_called_once()
        controller.favorites_panel.hide.assert_called_once()


class TestDetail:
    """Tests for the detail modal."""

    def test_select_opens_modal_and_loads_image(self, controller: AppController) -> None:
        """Test that selecting a card shows it and delivers the large image."""
        controller.start()
        item = controller.gallery.state.items[0]

        controller.gallery_view.on_select(item)

        controller.detail.show.assert_called_once_with(item)
        controller.images.thumbnail.assert_called_with(item.url, DETAIL_SIZE)
        controller.detail.set_image.assert_called_once_with(item.id, controller.images.thumbnail.return_value)
        assert controller.selected is item

    def test_image_failure_delivers_placeholder(self, controller: AppController) -> None:
        """Test that a failed download passes None to the view."""
        controller.images.thumbnail.side_effect = NetworkError("No se pudo descargar la imagen.")
        item = ImageItem(id="x", url="http://x/x.jpg")

        controller.select(item)

        controller.detail.set_image.assert_called_once_with("x", None)

    def test_close_clears_selection(self, controller: AppController) -> None:
        """Test that closing the modal forgets the selected item."""
        controller.select(ImageItem(id="x", url="http://x/x.jpg"))

        controller.detail.on_close()

        assert controller.selected is None
        controller.detail.hide.assert_called_once()
