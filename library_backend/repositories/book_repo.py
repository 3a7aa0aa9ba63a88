from sqlalchemy import String, cast, func, or_

from library_backend.extensions import db
from library_backend.models.book import Book
from library_backend.storage import lock_for_update


class BookRepo:
    @staticmethod
    def list_all(q: str | None = None):
        query = Book.query
        if q:
            pattern = f"%{q}%"
            query = query.filter(or_(
                Book.title.like(pattern),
                Book.author.like(pattern),
                Book.genre.like(pattern),
                cast(Book.year, String).like(pattern),
            ))
        return query.order_by(Book.id).all()

    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def lock_query(book_id: int):
        return lock_for_update(Book.query.filter(Book.id == book_id))

    @staticmethod
    def get_for_update(book_id: int):
        return BookRepo.lock_query(book_id).first()

    @staticmethod
    def get_by_isbn(isbn: str):
        return Book.query.filter_by(isbn=isbn).first()

    @staticmethod
    def add(book: Book):
        db.session.add(book)
        db.session.flush()
        return book

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)

    @staticmethod
    def adjust_available(book_id: int, delta: int):
        # single UPDATE so the store does the arithmetic
        return Book.query.filter(Book.id == book_id).update(
            {Book.available: Book.available + delta}, synchronize_session="fetch"
        )

    @staticmethod
    def totals():
        total, available = db.session.query(
            func.count(Book.id), func.coalesce(func.sum(Book.available), 0)
        ).one()
        return int(total), int(available)
