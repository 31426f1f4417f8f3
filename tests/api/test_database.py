"""
Unit tests for the in-memory book store.
"""

import threading

import pytest

from api.database import (
    BookConflictError, BookNotFoundError, BookStore, BookStoreError, InvalidBookError
)
from api.models import Book, BookUpdate


class TestBookStoreRead:
    """Test cases for listing and fetching books."""

    def test_sample_data(self, book_store):
        books = book_store.list_books()

        assert set(books) == {"1", "2"}
        assert books["1"].title == "1984"
        assert books["2"].author == "Harper Lee"

    def test_empty_store(self):
        store = BookStore()

        assert store.list_books() == {}
        assert store.count() == 0

    def test_get_book(self, book_store):
        book = book_store.get_book("1")

        assert book == Book(id="1", title="1984", author="George Orwell")

    def test_get_unknown_book(self, book_store):
        with pytest.raises(BookNotFoundError):
            book_store.get_book("42")

    def test_list_is_a_snapshot(self, book_store):
        books = book_store.list_books()
        books["1"].title = "Changed"
        del books["2"]

        assert book_store.get_book("1").title == "1984"
        assert book_store.count() == 2


class TestBookStoreCreate:
    """Test cases for creating books."""

    def test_create_then_get(self, book_store):
        book_store.create_book(Book(id="1984-x", title="Nineteen Eighty-Four", author="Orwell"))

        book = book_store.get_book("1984-x")

        assert book.title == "Nineteen Eighty-Four"
        assert book.author == "Orwell"

    def test_duplicate_id_conflicts(self, book_store):
        with pytest.raises(BookConflictError):
            book_store.create_book(Book(id="1", title="Animal Farm", author="George Orwell"))

        assert book_store.get_book("1").title == "1984"

    def test_empty_id_rejected(self, book_store):
        with pytest.raises(InvalidBookError) as exc_info:
            book_store.create_book(Book(title="No id"))

        assert str(exc_info.value) == "Book ID is required"
        assert book_store.count() == 2

    def test_errors_share_base_class(self):
        assert issubclass(BookNotFoundError, BookStoreError)
        assert issubclass(BookConflictError, BookStoreError)
        assert issubclass(InvalidBookError, BookStoreError)


class TestBookStoreReplace:
    """Test cases for partial updates."""

    def test_merge_keeps_missing_fields(self, book_store):
        book = book_store.replace_book("1", BookUpdate(title="Nineteen Eighty-Four"))

        assert book == Book(id="1", title="Nineteen Eighty-Four", author="George Orwell")
        assert book_store.get_book("1") == book

    def test_body_id_is_ignored(self, book_store):
        book = book_store.replace_book("1", BookUpdate(id="99", author="Eric Blair"))

        assert book.id == "1"
        assert book_store.get_book("1").author == "Eric Blair"
        with pytest.raises(BookNotFoundError):
            book_store.get_book("99")

    def test_null_fields_are_ignored(self, book_store):
        book = book_store.replace_book("2", BookUpdate.model_validate({"title": None}))

        assert book.title == "To Kill a Mockingbird"

    def test_empty_update_is_noop(self, book_store):
        assert book_store.replace_book("2", BookUpdate()) == book_store.get_book("2")

    def test_replace_unknown_book(self, book_store):
        with pytest.raises(BookNotFoundError):
            book_store.replace_book("42", BookUpdate(title="Ghost"))

        assert book_store.count() == 2


class TestBookStoreDelete:
    """Test cases for deleting books."""

    def test_delete_then_get(self, book_store):
        book_store.delete_book("1")

        with pytest.raises(BookNotFoundError):
            book_store.get_book("1")
        assert book_store.count() == 1

    def test_delete_unknown_book(self, book_store):
        with pytest.raises(BookNotFoundError):
            book_store.delete_book("42")


def test_concurrent_creates_all_land():
    store = BookStore()

    def create(start):
        for i in range(start, start + 50):
            store.create_book(Book(id=str(i), title=f"Book {i}"))

    threads = [threading.Thread(target=create, args=(n * 50,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert store.count() == 200


def test_book_null_fields_decode_as_empty():
    book = Book.model_validate_json('{"id": "5", "title": null}')

    assert book == Book(id="5", title="", author="")
