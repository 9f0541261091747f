"""
Command-line interface for the FoxLauncher authlib server.
"""

from __future__ import annotations

import base64
import os
import secrets

import click

from foxauth.common.config import Config
from foxauth.common.exceptions import AuthlibError
from foxauth.server import start_server
from foxauth.server.auth import TokenAuthenticator
from foxauth.server.keystore import KeyStore

SECRET_BYTES = 32


@click.group()
def cli() -> None:
    """FoxLauncher authlib CLI"""


@cli.command()
@click.option(
    "--keys-dir",
    default=None,
    help="Directory holding private.pem/public.pem (default: ./data/authlib)",
)
def keygen(keys_dir: str | None) -> None:
    """Load or generate the authlib RSA keypair"""
    if keys_dir:
        os.environ["FOXAUTH_KEYS_DIR"] = keys_dir

    key_store = KeyStore(keys_dir=Config().KEYS_DIR)
    try:
        key_store.initialize()
    except AuthlibError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Keys ready in {key_store.keys_dir}")


@cli.command()
@click.option("--keys-dir", default=None, help="Directory holding the keypair")
@click.option(
    "--single-line",
    is_flag=True,
    help="Print the key without newlines, as served by GET /authlib",
)
def pubkey(keys_dir: str | None, single_line: bool) -> None:  # noqa: FBT001
    """Print the signature public key as PEM"""
    if keys_dir:
        os.environ["FOXAUTH_KEYS_DIR"] = keys_dir

    try:
        pem = KeyStore(keys_dir=Config().KEYS_DIR).initialize().export_public_key_pem()
    except AuthlibError as e:
        raise click.ClickException(str(e)) from e
    click.echo(pem.replace("\n", "") if single_line else pem)


@cli.command()
def secret() -> None:
    """Generate a random base64 secret for FOXAUTH_JWT_SECRET"""
    click.echo(base64.b64encode(secrets.token_bytes(SECRET_BYTES)).decode("ascii"))


@cli.command()
@click.option("--uuid", "profile_uuid", required=True, help="Profile UUID")
@click.option("--username", default=None, help="Profile name")
@click.option("--admin", is_flag=True, help="Grant the admin role")
@click.option(
    "--secret",
    "jwt_secret",
    envvar="FOXAUTH_JWT_SECRET",
    required=True,
    help="Base64 signing secret (default: FOXAUTH_JWT_SECRET env)",
)
def token(
    profile_uuid: str,
    username: str | None,
    admin: bool,  # noqa: FBT001
    jwt_secret: str,
) -> None:
    """Issue a bearer token for a profile"""
    config = Config()
    roles = [config.USER_ROLE, config.ADMIN_ROLE] if admin else [config.USER_ROLE]
    try:
        authenticator = TokenAuthenticator(jwt_secret, config)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--secret") from e
    click.echo(authenticator.issue(profile_uuid, username=username, roles=roles))


@cli.command()
@click.option(
    "--content-root",
    default=None,
    help="Directory containing data/ (default: FOXAUTH_CONTENT_ROOT env or cwd)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind server to (default: from FOXAUTH_SERVER_HOST env or 127.0.0.1)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind server to (default: from FOXAUTH_SERVER_PORT env or 8000)",
)
def serve(content_root: str | None, host: str | None, port: int | None) -> None:
    """Start the authlib session server"""
    # Set environment variables before building the config
    if content_root:
        os.environ["FOXAUTH_CONTENT_ROOT"] = content_root
    if host:
        os.environ["FOXAUTH_SERVER_HOST"] = host
    if port:
        os.environ["FOXAUTH_SERVER_PORT"] = str(port)

    try:
        start_server(Config())
    except (AuthlibError, ValueError) as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    cli()
