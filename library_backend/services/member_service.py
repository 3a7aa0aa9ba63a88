from flask import current_app

from library_backend.errors import ConflictError, NotFoundError, ValidationError
from library_backend.models.member import Member
from library_backend.repositories.loan_repo import LoanRepo
from library_backend.repositories.member_repo import MemberRepo
from library_backend.storage import transaction
from library_backend.utils.validators import clean_str


class MemberService:
    @staticmethod
    def list_members():
        return MemberRepo.list_all()

    @staticmethod
    def get_member(member_id: int):
        member = MemberRepo.get(member_id)
        if not member:
            raise NotFoundError("Member not found.")
        return member

    @staticmethod
    def member_loans(member_id: int):
        MemberService.get_member(member_id)
        return LoanRepo.list_by_member(member_id)

    @staticmethod
    def _check_email_free(email, member_id=None):
        if not email:
            return
        other = MemberRepo.get_by_email(email)
        if other and other.id != member_id:
            raise ConflictError(f"A member with email {email} already exists.")

    @staticmethod
    def create_member(name, email=None):
        name = clean_str(name)
        email = clean_str(email)
        if not name:
            raise ValidationError("Name is required.")

        with transaction():
            MemberService._check_email_free(email)
            member = MemberRepo.add(Member(
                name=name,
                email=email,
                books_borrowed=0,
                outstanding_fines=0,
            ))

        current_app.logger.info(f"[members] Created member #{member.id} '{member.name}'")
        return member

    @staticmethod
    def update_member(member_id: int, data: dict):
        name = clean_str(data.get("name"))
        email = clean_str(data.get("email"))
        if not name:
            raise ValidationError("Name is required.")

        with transaction():
            member = MemberRepo.get_for_update(member_id)
            if not member:
                raise NotFoundError("Member not found.")
            MemberService._check_email_free(email, member_id)
            member.name = name
            member.email = email

        return member

    @staticmethod
    def delete_member(member_id: int):
        with transaction():
            member = MemberRepo.get_for_update(member_id)
            if not member:
                raise NotFoundError("Member not found.")
            if LoanRepo.exists_for_member(member_id):
                raise ConflictError("Cannot delete member with borrowed books.")
            MemberRepo.delete(member)

        current_app.logger.info(f"[members] Deleted member #{member_id}")

    @staticmethod
    def clear_fines(member_id: int):
        """Reset the member's balance to zero. Safe to repeat."""
        with transaction():
            member = MemberRepo.get_for_update(member_id)
            if not member:
                raise NotFoundError("Member not found.")
            previous = member.outstanding_fines
            member.outstanding_fines = 0

        current_app.logger.info(f"[members] Cleared fines of member #{member_id} (was {previous})")
        return member
