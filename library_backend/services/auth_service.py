from flask import current_app
from flask_jwt_extended import create_access_token
from werkzeug.security import check_password_hash, generate_password_hash

from library_backend.errors import AuthError, ConflictError, NotFoundError, ValidationError
from library_backend.models.member import Member
from library_backend.models.user import User
from library_backend.repositories.loan_repo import LoanRepo
from library_backend.repositories.member_repo import MemberRepo
from library_backend.repositories.user_repo import UserRepo
from library_backend.storage import transaction
from library_backend.utils.validators import clean_str


class AuthService:
    @staticmethod
    def _create_account(name: str, email: str, password: str, role: str):
        with transaction():
            if UserRepo.get_by_email(email) or MemberRepo.get_by_email(email):
                raise ConflictError("Email is already registered.")

            user = UserRepo.add(User(
                email=email,
                password_hash=generate_password_hash(password),
                role=role,
            ))
            member = MemberRepo.add(Member(
                name=name,
                email=email,
                user_id=user.id,
                books_borrowed=0,
                outstanding_fines=0,
            ))
        return user, member

    @staticmethod
    def register(name, email, password):
        """Create a student login together with its member profile."""
        name = clean_str(name)
        email = clean_str(email)
        email = email.lower() if email else None
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required.")
        if not isinstance(password, str):
            raise ValidationError("Password must be a string.")

        user, member = AuthService._create_account(name, email, password, role="student")
        current_app.logger.info(f"[auth] Registered user #{user.id} ({user.email}) as member #{member.id}")
        return {"id": user.id, "email": user.email, "role": user.role, "name": member.name}

    @staticmethod
    def create_admin(email, password, name="Administrator"):
        email = clean_str(email)
        if not email or not password:
            raise ValidationError("Email and password are required.")
        if not isinstance(password, str):
            raise ValidationError("Password must be a string.")
        user, _member = AuthService._create_account(clean_str(name) or "Administrator", email.lower(), password, role="admin")
        return user

    @staticmethod
    def login(email, password):
        email = (clean_str(email) or "").lower()
        user = UserRepo.get_by_email(email)
        if not user or not isinstance(password, str) or not password or not check_password_hash(user.password_hash, password):
            raise AuthError("Invalid email or password.")

        token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
        return {"id": user.id, "email": user.email, "role": user.role, "accessToken": token}

    @staticmethod
    def profile(user_id: int):
        member = MemberRepo.get_by_user(user_id)
        if not member:
            raise NotFoundError("Member profile not found.")
        data = member.to_dict()
        data["borrowedBooks"] = [loan.to_dict() for loan in LoanRepo.list_by_member(member.id)]
        return data
