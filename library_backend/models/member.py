from datetime import date

from library_backend.extensions import db


class Member(db.Model):
    __tablename__ = "members"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=True, index=True)
    join_date = db.Column(db.Date, nullable=False, default=date.today)

    books_borrowed = db.Column(db.Integer, nullable=False, default=0)
    outstanding_fines = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    # optional 1:1 link to a self-service login
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=True, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "joinDate": self.join_date.isoformat() if self.join_date else None,
            "booksBorrowed": self.books_borrowed,
            "outstandingFines": float(self.outstanding_fines or 0),
        }
