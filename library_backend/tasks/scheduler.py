from __future__ import annotations

import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


def start_scheduler(app):
    """
    Starts the overdue reminder job when OVERDUE_REMINDERS_ENABLED is set.
    - Skips the secondary process of the debug reloader.
    - Stored in app.extensions so shutdown_scheduler can stop it.
    """
    if not app.config.get("OVERDUE_REMINDERS_ENABLED"):
        return None

    # Werkzeug reloader runs two processes; WERKZEUG_RUN_MAIN=true marks the real one
    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    from library_backend.tasks.overdue_reminders import run_overdue_reminder_job

    hours = app.config.get("OVERDUE_REMINDER_HOURS", 24)
    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        func=run_overdue_reminder_job,
        args=[app],
        trigger=IntervalTrigger(hours=hours),
        id="overdue_reminder_job",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=600,
    )
    scheduler.start()
    app.logger.info(f"[scheduler] Overdue reminder job started (every {hours} hours).")

    app.extensions["apscheduler"] = scheduler
    return scheduler


def shutdown_scheduler(app):
    scheduler = app.extensions.get("apscheduler")
    if scheduler and scheduler.running:
        scheduler.shutdown(wait=False)
        app.logger.info("[scheduler] Scheduler shutdown.")
