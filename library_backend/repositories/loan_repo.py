from datetime import date

from sqlalchemy import func

from library_backend.extensions import db
from library_backend.models.loan import Loan
from library_backend.storage import lock_for_update


class LoanRepo:
    @staticmethod
    def list_all():
        return Loan.query.order_by(Loan.id).all()

    @staticmethod
    def list_by_member(member_id: int):
        return Loan.query.filter_by(member_id=member_id).order_by(Loan.id).all()

    @staticmethod
    def list_by_book(book_id: int):
        return Loan.query.filter_by(book_id=book_id).order_by(Loan.id).all()

    @staticmethod
    def get_for_update(loan_id: int):
        return lock_for_update(Loan.query.filter(Loan.id == loan_id)).first()

    @staticmethod
    def exists_for_book(book_id: int) -> bool:
        return Loan.query.filter_by(book_id=book_id).first() is not None

    @staticmethod
    def exists_for_member(member_id: int) -> bool:
        return Loan.query.filter_by(member_id=member_id).first() is not None

    @staticmethod
    def find_overdue(today: date):
        return Loan.query.filter(Loan.due_date < today).order_by(Loan.due_date).all()

    @staticmethod
    def add(loan: Loan):
        db.session.add(loan)
        db.session.flush()
        return loan

    @staticmethod
    def delete(loan: Loan):
        db.session.delete(loan)

    @staticmethod
    def count():
        return int(db.session.query(func.count(Loan.id)).scalar() or 0)
