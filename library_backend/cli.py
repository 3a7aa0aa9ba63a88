import click

from library_backend.extensions import db


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("password")
    @click.option("--name", default="Administrator", help="Member name for the admin profile.")
    def create_admin(email, password, name):
        """Create a staff account."""
        from library_backend.services.auth_service import AuthService

        user = AuthService.create_admin(email, password, name)
        click.echo(f"Admin #{user.id} ({user.email}) created.")

    @app.cli.command("send-overdue-reminders")
    def send_overdue_reminders_command():
        """Mail members with overdue loans now."""
        from library_backend.tasks.overdue_reminders import send_overdue_reminders

        summary = send_overdue_reminders()
        click.echo(
            f"overdue={summary['overdue']} sent={summary['sent']} "
            f"failed={summary['failed']} skipped={summary['skipped']}"
        )
