"""Operator commands registered on ``flask``."""

import click
from flask import current_app

from .core.identity import AuthProviderError
from .errors import AppError
from .extensions import backend
from .membership import InvitationService
from .seed import generate_posts, seed_default_data
from .user.models import ROLE_ADMIN


def register_commands(app):
    """Attach the jamaah commands to ``app.cli``."""

    @app.cli.command("seed")
    def seed_command():
        """Write the default community data once."""
        if seed_default_data(backend.store):
            click.echo("Default data initialized.")
        else:
            click.echo("Default data already present; nothing to do.")

    @app.cli.command("create-invitation")
    @click.argument("code")
    def create_invitation_command(code):
        """Create an invitation code."""
        try:
            InvitationService.create(backend.store, code)
        except AppError as e:
            raise click.ClickException(e.message) from e
        click.echo(f"Invitation code {code} created.")

    @app.cli.command("grant-admin")
    @click.argument("uid")
    def grant_admin_command(uid):
        """Give the account ``uid`` the Admin role."""
        try:
            backend.auth.update_claims(uid, {"role": ROLE_ADMIN})
        except AuthProviderError as e:
            raise click.ClickException(e.message) from e
        current_app.logger.info(f"Granted admin role to {uid}")
        click.echo(f"{uid} is now an admin. The change applies on the next sign-in.")

    @app.cli.command("generate-posts")
    @click.argument("count", type=int, default=10)
    @click.option("--seed", type=int, default=None, help="Seed for Faker.")
    def generate_posts_command(count, seed):
        """Write COUNT fake timeline posts for demos."""
        posts = generate_posts(backend.store, count, seed=seed)
        click.echo(f"Generated {len(posts)} timeline posts.")
