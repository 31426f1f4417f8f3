"""
In-memory book store for the FastAPI application.
"""

import threading
from typing import Dict, Iterable, Optional

import structlog

from api.models import Book, BookUpdate

logger = structlog.get_logger(__name__)

SAMPLE_BOOKS = (
    Book(id="1", title="1984", author="George Orwell"),
    Book(id="2", title="To Kill a Mockingbird", author="Harper Lee"),
)


class BookStoreError(Exception):
    """Base class for book store failures."""


class BookNotFoundError(BookStoreError):
    """No book is stored under the requested id."""

    def __init__(self, book_id: str):
        super().__init__(f"Book '{book_id}' not found")
        self.book_id = book_id


class BookConflictError(BookStoreError):
    """A book with the same id already exists."""

    def __init__(self, book_id: str):
        super().__init__(f"Book '{book_id}' already exists")
        self.book_id = book_id


class InvalidBookError(BookStoreError):
    """The book cannot be stored as given."""


class BookStore:
    """
    Mapping of book id to Book owned by the application.

    All operations take the store lock, so concurrent requests see each
    mutation as a whole. Books are copied on the way in and out; callers
    never hold a reference to a stored record.
    """

    def __init__(self, books: Optional[Iterable[Book]] = None):
        self._books: Dict[str, Book] = {}
        self._lock = threading.Lock()
        for book in books or ():
            self._books[book.id] = book.model_copy()

    @classmethod
    def with_sample_data(cls) -> "BookStore":
        """Create a store holding the two sample books."""
        return cls(SAMPLE_BOOKS)

    def list_books(self) -> Dict[str, Book]:
        """
        Snapshot of every stored book keyed by id.

        Returns:
            Dictionary of id to Book, in no particular order
        """
        with self._lock:
            return {book_id: book.model_copy() for book_id, book in self._books.items()}

    def get_book(self, book_id: str) -> Book:
        """
        Get a single book by ID.

        Raises:
            BookNotFoundError: If the id is unknown
        """
        with self._lock:
            book = self._books.get(book_id)
            if book is None:
                raise BookNotFoundError(book_id)
            return book.model_copy()

    def create_book(self, book: Book) -> Book:
        """
        Insert a new book.

        Args:
            book: Book to store; its id becomes the key

        Returns:
            The stored book

        Raises:
            InvalidBookError: If the id is empty
            BookConflictError: If the id is already taken
        """
        if not book.id:
            raise InvalidBookError("Book ID is required")

        with self._lock:
            if book.id in self._books:
                raise BookConflictError(book.id)
            self._books[book.id] = book.model_copy()

        logger.info("Book created", book_id=book.id)
        return book.model_copy()

    def replace_book(self, book_id: str, update: BookUpdate) -> Book:
        """
        Merge a partial update onto an existing book.

        The stored id is always ``book_id``, whatever id the update carries.

        Args:
            book_id: Id of the book to change
            update: Fields to overwrite

        Returns:
            The book as stored after the merge

        Raises:
            BookNotFoundError: If the id is unknown
        """
        changes = update.changes()
        changes["id"] = book_id

        with self._lock:
            current = self._books.get(book_id)
            if current is None:
                raise BookNotFoundError(book_id)
            book = current.model_copy(update=changes)
            self._books[book_id] = book

        logger.info("Book updated", book_id=book_id, fields=sorted(changes))
        return book.model_copy()

    def delete_book(self, book_id: str) -> None:
        """
        Remove a book.

        Raises:
            BookNotFoundError: If the id is unknown
        """
        with self._lock:
            if book_id not in self._books:
                raise BookNotFoundError(book_id)
            del self._books[book_id]

        logger.info("Book deleted", book_id=book_id)

    def count(self) -> int:
        with self._lock:
            return len(self._books)
