# library_backend/controllers/book_controller.py

from flask import Blueprint, request, jsonify

from library_backend.services.book_service import BookService
from library_backend.services.loan_service import LoanService
from library_backend.utils.validators import get_json_object

book_bp = Blueprint("books", __name__, url_prefix="/api")


@book_bp.get("/books")
def list_books():
    books = BookService.list_books(request.args.get("q"))
    return jsonify([b.to_dict() for b in books])


@book_bp.get("/books/<int:book_id>")
def get_book(book_id: int):
    return jsonify(BookService.get_book(book_id).to_dict())


@book_bp.get("/books/<int:book_id>/borrowed")
def book_loans(book_id: int):
    return jsonify([x.to_dict() for x in LoanService.loans_for_book(book_id)])


@book_bp.post("/books")
def create_book():
    data = get_json_object()
    book = BookService.create_book(data)
    return jsonify(book.to_dict()), 201


@book_bp.put("/books/<int:book_id>")
def update_book(book_id: int):
    data = get_json_object()
    book = BookService.update_book(book_id, data)
    return jsonify({"message": "Book updated successfully.", "book": book.to_dict()})


@book_bp.delete("/books/<int:book_id>")
def delete_book(book_id: int):
    BookService.delete_book(book_id)
    return "", 204
