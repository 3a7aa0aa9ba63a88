from sqlalchemy import func

from library_backend.extensions import db
from library_backend.models.member import Member
from library_backend.storage import lock_for_update


class MemberRepo:
    @staticmethod
    def list_all():
        return Member.query.order_by(Member.id).all()

    @staticmethod
    def get(member_id: int):
        return db.session.get(Member, member_id)

    @staticmethod
    def get_for_update(member_id: int):
        return lock_for_update(Member.query.filter(Member.id == member_id)).first()

    @staticmethod
    def get_by_user(user_id: int):
        return Member.query.filter_by(user_id=user_id).first()

    @staticmethod
    def get_by_email(email: str):
        return Member.query.filter_by(email=email).first()

    @staticmethod
    def add(member: Member):
        db.session.add(member)
        db.session.flush()
        return member

    @staticmethod
    def delete(member: Member):
        db.session.delete(member)

    @staticmethod
    def apply_loan_delta(member_id: int, borrowed_delta: int, fine=0):
        return Member.query.filter(Member.id == member_id).update(
            {
                Member.books_borrowed: Member.books_borrowed + borrowed_delta,
                Member.outstanding_fines: Member.outstanding_fines + fine,
            },
            synchronize_session="fetch",
        )

    @staticmethod
    def count():
        return int(db.session.query(func.count(Member.id)).scalar() or 0)
