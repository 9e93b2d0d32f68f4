"""Tests for the photo store."""

import pytest

from listing_photos.services.store import DuplicatePhotoError, PhotoStore
from tests.conftest import make_confirmed


def test_add_photo_appends_without_renumbering() -> None:
    store = PhotoStore()
    store.add_photo(make_confirmed("p1", 7, is_primary=False))
    store.add_photo(make_confirmed("p2", 3, is_primary=True))

    assert [(photo.id, photo.sort_order) for photo in store.photos] == [
        ("p1", 7),
        ("p2", 3),
    ]
    assert [photo.is_primary for photo in store.photos] == [False, True]


def test_add_photo_rejects_duplicate_id() -> None:
    store = PhotoStore()
    store.add_photo(make_confirmed("p1", 0, is_primary=True))

    with pytest.raises(DuplicatePhotoError):
        store.add_photo(make_confirmed("p1", 1))


def test_remove_photo_keeps_remaining_order_fields() -> None:
    store = PhotoStore()
    store.set_photos(
        [
            make_confirmed("p1", 0, is_primary=True),
            make_confirmed("p2", 1),
            make_confirmed("p3", 2),
        ]
    )

    store.remove_photo("p1")

    assert [(photo.id, photo.sort_order) for photo in store.photos] == [
        ("p2", 1),
        ("p3", 2),
    ]
    assert not any(photo.is_primary for photo in store.photos)


def test_update_photo_merges_fields() -> None:
    store = PhotoStore()
    store.add_photo(make_confirmed("p1", 0, is_primary=True))

    store.update_photo("p1", width=1024, height=768)

    photo = store.get_photo("p1")
    assert photo is not None
    assert (photo.width, photo.height) == (1024, 768)
    assert photo.cdn_url == "https://cdn.test/p1.jpg"


def test_unknown_ids_are_ignored_without_notification() -> None:
    store = PhotoStore()
    store.add_photo(make_confirmed("p1", 0, is_primary=True))
    notified: list[int] = []
    store.subscribe(lambda current: notified.append(len(current)))

    store.update_photo("missing", width=1)
    store.remove_photo("missing")

    assert notified == []
    assert len(store) == 1


def test_reorder_photos_renumbers_and_moves_primary() -> None:
    store = PhotoStore()
    store.set_photos(
        [
            make_confirmed("p1", 0, is_primary=True),
            make_confirmed("p2", 1),
            make_confirmed("p3", 2),
        ]
    )

    store.reorder_photos(["p3", "unknown", "p1", "p2", "p3"])

    assert [
        (photo.id, photo.sort_order, photo.is_primary) for photo in store.photos
    ] == [("p3", 0, True), ("p1", 1, False), ("p2", 2, False)]


def test_remaining_slots_tracks_ceiling() -> None:
    store = PhotoStore(max_photos=2)
    assert store.remaining_slots() == 2

    store.add_photo(make_confirmed("p1", 0, is_primary=True))
    assert store.remaining_slots() == 1

    store.set_max_photos(1)
    assert store.remaining_slots() == 0


def test_subscribers_are_notified_until_unsubscribed() -> None:
    store = PhotoStore()
    sizes: list[int] = []
    unsubscribe = store.subscribe(lambda current: sizes.append(len(current)))

    store.add_photo(make_confirmed("p1", 0, is_primary=True))
    store.set_loading(True)
    unsubscribe()
    store.add_photo(make_confirmed("p2", 1))

    assert sizes == [1, 1]
    assert store.is_loading is True


def test_failing_listener_does_not_block_mutation() -> None:
    store = PhotoStore()
    seen: list[int] = []

    def broken(current: PhotoStore) -> None:
        raise RuntimeError("listener failed")

    store.subscribe(broken)
    store.subscribe(lambda current: seen.append(len(current)))

    store.add_photo(make_confirmed("p1", 0, is_primary=True))

    assert len(store) == 1
    assert seen == [1]


def test_set_photos_rejects_duplicates() -> None:
    store = PhotoStore()

    with pytest.raises(DuplicatePhotoError):
        store.set_photos([make_confirmed("p1", 0), make_confirmed("p1", 1)])

    assert store.photos == []
