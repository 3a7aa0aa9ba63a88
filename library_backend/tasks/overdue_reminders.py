from datetime import date

from flask import current_app

from library_backend.repositories.loan_repo import LoanRepo
from library_backend.repositories.member_repo import MemberRepo
from library_backend.services.loan_service import LoanService, compute_fine
from library_backend.services.mail_service import MailService


def send_overdue_reminders(today: date | None = None) -> dict:
    """
    Mail every member holding an overdue loan. Read-only: fines are only
    charged when the book comes back.
    Needs an app context.
    """
    today = today or date.today()
    rate = LoanService.fine_rate()

    overdue = LoanRepo.find_overdue(today)
    sent = failed = skipped = 0

    for loan in overdue:
        member = MemberRepo.get(loan.member_id)
        if not member or not member.email:
            skipped += 1
            continue

        days, fine = compute_fine(loan.due_date, today, rate)
        if MailService.send_overdue_reminder(loan, member.email, days, fine):
            sent += 1
        else:
            failed += 1

    current_app.logger.info(
        f"[overdue_reminders] overdue={len(overdue)} sent={sent} failed={failed} skipped={skipped}"
    )
    return {"overdue": len(overdue), "sent": sent, "failed": failed, "skipped": skipped}


def run_overdue_reminder_job(app):
    with app.app_context():
        try:
            send_overdue_reminders()
        except Exception as e:
            app.logger.exception(f"[overdue_reminders] Error: {e}")
