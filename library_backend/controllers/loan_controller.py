from flask import Blueprint, jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from library_backend.services.loan_service import LoanService
from library_backend.utils.validators import get_json_object, parse_int

loan_bp = Blueprint("loans", __name__, url_prefix="/api")


@loan_bp.get("/borrowed")
def list_borrowed():
    return jsonify([x.to_dict() for x in LoanService.list_loans()])


@loan_bp.post("/borrow")
def borrow_book():
    data = get_json_object()
    loan = LoanService.borrow(
        book_id=parse_int(data.get("bookId"), "bookId"),
        due_date=data.get("dueDate"),
        member_id=parse_int(data.get("memberId"), "memberId"),
    )
    return jsonify({"message": "Book borrowed successfully.", "loan": loan.to_dict()}), 201


@loan_bp.post("/student/borrow")
def student_borrow():
    data = get_json_object()
    user_id = parse_int(data.get("userId"), "userId")
    if user_id is None:
        # token only consulted when the body has no userId
        verify_jwt_in_request(optional=True)
        user_id = parse_int(get_jwt_identity(), "userId")
    if user_id is None:
        return jsonify({"message": "userId is required."}), 403

    loan = LoanService.borrow(
        book_id=parse_int(data.get("bookId"), "bookId"),
        due_date=data.get("dueDate"),
        user_id=user_id,
    )
    return jsonify({"message": "Book borrowed successfully.", "loan": loan.to_dict()}), 201


@loan_bp.post("/return")
def return_book():
    data = get_json_object()
    result = LoanService.return_loan(parse_int(data.get("borrowId"), "borrowId"))
    return jsonify(result.to_dict())
