from dataclasses import dataclass
from datetime import date

from flask import current_app

from library_backend.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from library_backend.models.loan import Loan
from library_backend.repositories.book_repo import BookRepo
from library_backend.repositories.loan_repo import LoanRepo
from library_backend.repositories.member_repo import MemberRepo
from library_backend.storage import transaction
from library_backend.utils.validators import parse_date

DAILY_FINE_RATE = 100


@dataclass
class ReturnResult:
    loan_id: int
    fine: int
    days_overdue: int
    message: str

    def to_dict(self):
        return {"message": self.message, "fine": self.fine, "daysOverdue": self.days_overdue}


def compute_fine(due_date: date, today: date, rate: int = DAILY_FINE_RATE):
    """
    Returns (days_overdue, fine). No grace period: one day late is one day
    of fine, returning on the due date costs nothing.
    """
    if today <= due_date:
        return 0, 0
    days = (today - due_date).days
    return days, days * rate


class LoanService:
    @staticmethod
    def fine_rate() -> int:
        return int(current_app.config.get("DAILY_FINE_RATE", DAILY_FINE_RATE))

    @staticmethod
    def _resolve_member(member_id, user_id):
        if member_id is not None:
            member = MemberRepo.get(member_id)
            if not member:
                raise NotFoundError("Member not found.")
            return member

        if user_id is not None:
            member = MemberRepo.get_by_user(user_id)
            if not member:
                raise ForbiddenError("No member profile is linked to this account.")
            return member

        raise ValidationError("memberId is required.")

    @staticmethod
    def list_loans():
        return LoanRepo.list_all()

    @staticmethod
    def loans_for_book(book_id: int):
        if not BookRepo.get(book_id):
            raise NotFoundError("Book not found")
        return LoanRepo.list_by_book(book_id)

    @staticmethod
    def borrow(book_id, due_date, member_id=None, user_id=None, today: date | None = None):
        """
        Lend one copy of a book.

        The book row is locked before `available` is checked, so two
        concurrent borrowers of the last copy serialize and the second one
        sees zero and fails. Everything runs in one transaction.
        """
        if book_id is None:
            raise ValidationError("bookId is required.")
        due = parse_date(due_date, "dueDate")
        today = today or date.today()

        with transaction():
            member = LoanService._resolve_member(member_id, user_id)

            book = BookRepo.get_for_update(book_id)
            if not book or book.available <= 0:
                raise ConflictError("Book is unavailable.")

            book.available -= 1
            # book row first, then member: same lock order as return_loan
            MemberRepo.apply_loan_delta(member.id, 1)
            loan = LoanRepo.add(Loan(
                book_id=book.id,
                member_id=member.id,
                book_title=book.title,
                member_name=member.name,
                borrow_date=today,
                due_date=due,
            ))

        current_app.logger.info(
            f"[loans] Loan #{loan.id}: book #{loan.book_id} -> member #{loan.member_id}, due {loan.due_date}"
        )
        return loan

    @staticmethod
    def return_loan(loan_id, today: date | None = None) -> ReturnResult:
        if loan_id is None:
            raise ValidationError("borrowId is required.")
        today = today or date.today()

        with transaction():
            # lock the loan so a double return cannot credit twice
            loan = LoanRepo.get_for_update(loan_id)
            if not loan:
                raise NotFoundError("Borrow record not found.")

            days, fine = compute_fine(loan.due_date, today, LoanService.fine_rate())

            BookRepo.adjust_available(loan.book_id, 1)
            MemberRepo.apply_loan_delta(loan.member_id, -1, fine)
            LoanRepo.delete(loan)

        message = "Book returned successfully."
        if fine:
            message += f" A fine of ₹{fine:.2f} for {days} day(s) overdue added."

        current_app.logger.info(f"[loans] Loan #{loan_id} returned (fine={fine}, days_overdue={days})")
        return ReturnResult(loan_id=loan_id, fine=fine, days_overdue=days, message=message)
