from datetime import date

from library_backend.extensions import db


class Loan(db.Model):
    """One outstanding borrow. Returning a book deletes the row."""

    __tablename__ = "borrowed_records"

    id = db.Column(db.Integer, primary_key=True)

    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)
    member_id = db.Column(db.Integer, db.ForeignKey("members.id"), nullable=False, index=True)

    # snapshots at borrow time; renaming the book/member later does not touch these
    book_title = db.Column(db.String(200), nullable=False)
    member_name = db.Column(db.String(200), nullable=False)

    borrow_date = db.Column(db.Date, nullable=False, default=date.today)
    due_date = db.Column(db.Date, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "bookId": self.book_id,
            "memberId": self.member_id,
            "bookTitle": self.book_title,
            "memberName": self.member_name,
            "borrowDate": self.borrow_date.isoformat() if self.borrow_date else None,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
        }
