from __future__ import annotations

from flask import current_app
from flask_mail import Message

from library_backend.extensions import mail
from library_backend.models.loan import Loan


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[mail] Could not send mail to {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def send_overdue_reminder(loan: Loan, to_email: str, days_overdue: int, fine_so_far: int) -> bool:
        subject = "Library: overdue book reminder"
        body = (
            f"Hello {loan.member_name},\n\n"
            f"'{loan.book_title}' was due on {loan.due_date.isoformat()} "
            f"and is now {days_overdue} day(s) overdue.\n"
            f"If returned today the fine would be {fine_so_far:.2f}.\n\n"
            f"Please return it as soon as possible.\n"
        )
        ok, _err = MailService.send_email(to_email, subject, body)
        return ok
