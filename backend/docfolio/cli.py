import click
from flask.cli import with_appcontext
from docfolio.extensions import db
from docfolio.models.user import User


def register_commands(app):
    app.cli.add_command(create_admin)


@click.command("create-admin")
@click.argument("email")
@click.password_option()
@with_appcontext
def create_admin(email, password):
    """Create an admin account, or promote and reset an existing one."""
    user = User.query.filter_by(email=email).first()
    if not user:
        user = User()
        user.email = email
        db.session.add(user)

    user.role = "admin"
    user.set_password(password)
    user.is_active = True
    db.session.commit()
    click.echo(f"Admin {email} ready")
