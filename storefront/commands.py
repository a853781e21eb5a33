# storefront/commands.py
import os

import click
from flask import Flask
from sqlalchemy import select

from storefront.extensions import db


def register_commands(app: Flask) -> None:
    @app.cli.command("create-tables")
    def create_tables():
        """Create all tables that do not exist yet."""
        from storefront import models as _models  # noqa: F401
        db.create_all()
        click.echo("✅ Tables ready")

    @app.cli.command("seed")
    @click.option("--reset", is_flag=True, default=False,
                  help="Delete all users, products and orders first")
    def seed_command(reset: bool):
        """Seed default admin/user accounts and the product catalog."""
        from storefront.seed import seed
        db.create_all()
        result = seed(reset=reset)
        click.echo(f"✅ Seeded admin #{result['admin'].id}, user #{result['user'].id}, "
                   f"{len(result['products'])} products")

    @app.cli.command("create-admin")
    @click.option("--email", default=lambda: os.environ.get("ADMIN_EMAIL", "admin@example.com"),
                  show_default=True, help="Admin e-mail")
    @click.option("--password", default=lambda: os.environ.get("ADMIN_PASSWORD"),
                  help="Password (prompted when omitted)")
    @click.option("--force", is_flag=True, default=False,
                  help="If the account exists, reset its password and role")
    def create_admin(email: str, password: str | None, force: bool):
        """Create or reset an admin account."""
        from storefront.models.user import User, ROLE_ADMIN

        db.create_all()
        if not password:
            password = click.prompt("Password", hide_input=True, confirmation_prompt=True)

        user = db.session.execute(select(User).where(User.email == email)).scalar_one_or_none()
        if user and not force:
            click.echo(f"❗ User '{email}' already exists. Use --force to reset the password.")
            return

        if not user:
            user = User(email=email)
            db.session.add(user)
        user.role = ROLE_ADMIN
        user.set_password(password)
        db.session.commit()
        click.echo(f"✅ Admin ready: {email}")
