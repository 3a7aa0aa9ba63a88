from library_backend.repositories.book_repo import BookRepo
from library_backend.repositories.loan_repo import LoanRepo
from library_backend.repositories.member_repo import MemberRepo


class StatsService:
    @staticmethod
    def summary():
        total_books, available_books = BookRepo.totals()
        return {
            "totalBooks": total_books,
            "availableBooks": available_books,
            "borrowedBooks": LoanRepo.count(),
            "totalMembers": MemberRepo.count(),
        }
