"""
Flask CLI commands:

    flask ravenscroft seed
    flask ravenscroft grant-admin <uid> [--email you@example.com]
"""

import click
from flask import current_app
from flask.cli import AppGroup

from .modules.auth import grant_admin
from .modules.content import seed_sample_content

ravenscroft_cli = AppGroup('ravenscroft', help='Ravenscroft site maintenance commands.')


@ravenscroft_cli.command('seed')
def seed_command():
    """Write sample about text, artwork and event documents."""
    store = current_app.extensions['ravenscroft'].store
    count = seed_sample_content(store)
    click.echo(f"Seeded {count} sample documents into {store.path}")


@ravenscroft_cli.command('grant-admin')
@click.argument('uid')
@click.option('--email', default=None, help='Email to record on the user document.')
def grant_admin_command(uid, email):
    """Give UID the admin role (users/{uid}.role = "admin")."""
    store = current_app.extensions['ravenscroft'].store
    grant_admin(store, uid, email=email)
    click.echo(f"User {uid} is now an admin")
