from flask import current_app

from library_backend.errors import ConflictError, NotFoundError, ValidationError
from library_backend.models.book import Book
from library_backend.repositories.book_repo import BookRepo
from library_backend.repositories.loan_repo import LoanRepo
from library_backend.storage import transaction
from library_backend.utils.validators import clean_str, parse_int, require_str


class BookService:
    @staticmethod
    def list_books(q: str | None = None):
        return BookRepo.list_all(clean_str(q))

    @staticmethod
    def get_book(book_id: int):
        book = BookRepo.get(book_id)
        if not book:
            raise NotFoundError("Book not found")
        return book

    @staticmethod
    def create_book(data: dict):
        title = clean_str(data.get("title"))
        author = clean_str(data.get("author"))
        copies = parse_int(data.get("copies"), "copies", minimum=1)
        if not title or not author or copies is None:
            raise ValidationError("Title, author, and copies are required.")

        isbn = clean_str(data.get("isbn"))
        with transaction():
            if isbn and BookRepo.get_by_isbn(isbn):
                raise ConflictError(f"A book with ISBN {isbn} already exists.")

            book = BookRepo.add(Book(
                title=title,
                author=author,
                isbn=isbn,
                genre=clean_str(data.get("genre")),
                year=parse_int(data.get("year"), "year"),
                copies=copies,
                available=copies,
                cover_url=clean_str(data.get("coverUrl")),
            ))

        current_app.logger.info(f"[books] Created book #{book.id} '{book.title}' ({copies} copies)")
        return book

    @staticmethod
    def update_book(book_id: int, data: dict):
        with transaction():
            # lock so a concurrent borrow cannot move `available` under us
            book = BookRepo.get_for_update(book_id)
            if not book:
                raise NotFoundError("Book not found")

            if "title" in data:
                book.title = require_str(data, "title", "Title")
            if "author" in data:
                book.author = require_str(data, "author", "Author")
            if "isbn" in data:
                isbn = clean_str(data["isbn"])
                if isbn and isbn != book.isbn and BookRepo.get_by_isbn(isbn):
                    raise ConflictError(f"A book with ISBN {isbn} already exists.")
                book.isbn = isbn
            if "genre" in data:
                book.genre = clean_str(data["genre"])
            if "year" in data:
                book.year = parse_int(data["year"], "year")
            if "coverUrl" in data:
                book.cover_url = clean_str(data["coverUrl"])

            new_copies = parse_int(data.get("copies"), "copies", minimum=1)
            if new_copies is not None:
                new_available = book.available + (new_copies - book.copies)
                if new_available < 0:
                    raise ConflictError("Cannot reduce copies below the number currently borrowed.")
                book.copies = new_copies
                book.available = new_available

        current_app.logger.info(f"[books] Updated book #{book_id}")
        return book

    @staticmethod
    def delete_book(book_id: int):
        with transaction():
            book = BookRepo.get_for_update(book_id)
            if not book:
                raise NotFoundError("Book not found or already deleted.")
            if LoanRepo.exists_for_book(book_id):
                raise ConflictError("Cannot delete a borrowed book.")
            BookRepo.delete(book)

        current_app.logger.info(f"[books] Deleted book #{book_id}")
