"""Shared CLI parameter definitions.

The functions return ``typer.Option`` instances for use inside ``Annotated``
signatures, so every command and the connection callback share the same
flags, environment variables and help text.

Usage:
    @app.command()
    def my_command(
        endpoint_url: Annotated[Optional[str], endpoint_url_option()] = None,
    ):
        pass
"""

from typing import Annotated, Optional

import typer


def root_option() -> Annotated[Optional[str], typer.Option]:
    """Bucket and optional root prefix."""
    return typer.Option(
        "--root",
        envvar="BUCKETFS_ROOT",
        help="Bucket and root prefix, e.g. s3://bucket/prefix",
    )


def aws_access_key_option() -> Annotated[Optional[str], typer.Option]:
    """AWS access key ID option."""
    return typer.Option(
        "--access-key-id", envvar="AWS_ACCESS_KEY_ID", help="AWS access key ID"
    )


def aws_secret_key_option() -> Annotated[Optional[str], typer.Option]:
    """AWS secret access key option."""
    return typer.Option(
        "--secret-access-key",
        envvar="AWS_SECRET_ACCESS_KEY",
        help="AWS secret access key",
    )


def aws_session_token_option() -> Annotated[Optional[str], typer.Option]:
    """AWS session token option."""
    return typer.Option(
        "--session-token", envvar="AWS_SESSION_TOKEN", help="AWS session token"
    )


def aws_region_option() -> Annotated[str, typer.Option]:
    """AWS region option."""
    return typer.Option("--region", help="AWS region name")


def endpoint_url_option() -> Annotated[Optional[str], typer.Option]:
    """Endpoint URL option."""
    return typer.Option(
        "--endpoint-url", envvar="BUCKETFS_ENDPOINT_URL", help="Custom S3 endpoint URL"
    )


def aws_profile_option() -> Annotated[Optional[str], typer.Option]:
    """AWS profile option."""
    return typer.Option("--aws-profile", help="AWS CLI profile name")


def insecure_option() -> Annotated[bool, typer.Option]:
    """Plain HTTP transport option."""
    return typer.Option(
        "--insecure", help="Talk to the endpoint over plain HTTP instead of HTTPS"
    )


def visibility_option(
    help_text: str = "Visibility: public or private",
) -> Annotated[Optional[str], typer.Option]:
    return typer.Option("--visibility", help=help_text)


def mimetype_option() -> Annotated[Optional[str], typer.Option]:
    return typer.Option("--mimetype", help="Content type to store with the file")


def recursive_option() -> Annotated[bool, typer.Option]:
    return typer.Option("--recursive", "-r", help="Descend into subdirectories")


def expires_in_option() -> Annotated[Optional[int], typer.Option]:
    return typer.Option(
        "--expires-in",
        help="Return a signed URL valid for this many seconds",
    )

