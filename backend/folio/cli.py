import click
from flask.cli import with_appcontext
from folio.extensions import db
from folio.models.user import AdminUser
from folio.application.content.sections import sync_sections


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create tables and provision the configured sections."""
    db.create_all()
    created = sync_sections()

    click.secho("\n✅  Database ready.", fg="green")
    if created:
        click.echo(f"Provisioned sections: {', '.join(created)}")


@click.command("create-admin")
@click.option("--username", prompt=True, help="Admin username")
@click.option("--email", default=None, help="Optional contact email")
@click.password_option(help="Admin password")
@with_appcontext
def create_admin_command(username: str, email: str | None, password: str):
    """Create an admin account, or reset the password of an existing one."""
    username = username.strip()
    user = AdminUser.query.filter_by(username=username).first()
    created = user is None

    if created:
        user = AdminUser()
        user.username = username
        user.role = "admin"
        db.session.add(user)

    if email:
        user.email = email
    user.set_password(password)
    db.session.commit()

    verb = "created" if created else "updated"
    click.secho(f"\n🔑  Admin {username!r} {verb}.", fg="yellow")


def register_cli(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(create_admin_command)
