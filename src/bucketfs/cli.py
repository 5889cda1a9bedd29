"""Command-line interface for bucketfs.

This module exposes the filesystem adapter as shell commands against one
bucket, optionally below a root prefix.

Commands:
    - ls: List a directory
    - cat: Print a file
    - put: Upload a local file
    - rm / rmdir: Delete a file / a directory tree
    - mkdir: Create a directory marker
    - cp / mv: Copy / rename a file
    - stat: Show file metadata
    - visibility: Show or change file visibility
    - url: Print a public or signed URL

Connection options go before the command:

    bucketfs --root s3://bucket/prefix --aws-profile myprofile ls data
"""

import time
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import __version__
from .adapter import ObjectStorageAdapter, build_adapter
from .cli_params import (
    aws_access_key_option,
    aws_profile_option,
    aws_region_option,
    aws_secret_key_option,
    aws_session_token_option,
    endpoint_url_option,
    expires_in_option,
    insecure_option,
    mimetype_option,
    recursive_option,
    root_option,
    visibility_option,
)
from .core.exceptions import BucketFSError
from .objectstorage.clients import S3ClientConfig, S3ClientManager
from .storage_config import AdapterConfig

app = typer.Typer(
    name="bucketfs",
    help="Filesystem operations on S3-compatible object storage.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"bucketfs {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    root: Annotated[Optional[str], root_option()] = None,
    access_key_id: Annotated[Optional[str], aws_access_key_option()] = None,
    secret_access_key: Annotated[Optional[str], aws_secret_key_option()] = None,
    session_token: Annotated[Optional[str], aws_session_token_option()] = None,
    region_name: Annotated[str, aws_region_option()] = "us-east-1",
    endpoint_url: Annotated[Optional[str], endpoint_url_option()] = None,
    aws_profile: Annotated[Optional[str], aws_profile_option()] = None,
    insecure: Annotated[bool, insecure_option()] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version."
        ),
    ] = None,
) -> None:
    """
    bucketfs: a filesystem view of one bucket.

    The bucket and optional root prefix are given with --root (or BUCKETFS_ROOT).
    """
    ctx.obj = {
        "root": root,
        "client": S3ClientConfig(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
            use_ssl=not insecure,
        ),
    }


def _adapter(ctx: typer.Context) -> ObjectStorageAdapter:
    """Build the adapter from the connection options."""
    root = ctx.obj.get("root")
    if not root:
        _fail("--root (or BUCKETFS_ROOT) is required, e.g. s3://bucket/prefix")

    try:
        bucket, prefix = S3ClientManager.parse_s3_path(root)
    except BucketFSError as e:
        _fail(str(e))

    return build_adapter(
        AdapterConfig(bucket=bucket, prefix=prefix or None, client=ctx.obj["client"])
    )


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _write_config(
    visibility: Optional[str], mimetype: Optional[str]
) -> dict[str, str]:
    config = {}
    if visibility:
        config["visibility"] = visibility
    if mimetype:
        config["mimetype"] = mimetype
    return config


@app.command("ls")
def ls_cmd(
    ctx: typer.Context,
    directory: Annotated[str, typer.Argument(help="Directory to list")] = "",
    recursive: Annotated[bool, recursive_option()] = False,
) -> None:
    """
    List a directory.

    Each line shows the entry type, size (files only), timestamp and path.
    """
    adapter = _adapter(ctx)
    try:
        entries = adapter.list_contents(directory, recursive=recursive)
    except BucketFSError as e:
        _fail(str(e))

    if not entries:
        typer.echo("No entries found.")
        return

    for entry in entries:
        size = "-" if entry.size is None else f"{entry.size:,}"
        typer.echo(
            f"{entry.type.value:<4} {size:>14} {entry.timestamp:>10}  {entry.path}"
        )


@app.command("cat")
def cat_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to print")],
) -> None:
    """Print the contents of a file."""
    result = _adapter(ctx).read(path)
    if result is None:
        _fail(f"Could not read {path}")
    typer.echo(result.contents, nl=False)


@app.command("put")
def put_cmd(
    ctx: typer.Context,
    source: Annotated[
        Path,
        typer.Argument(
            help="Local file to upload", exists=True, dir_okay=False, readable=True
        ),
    ],
    path: Annotated[str, typer.Argument(help="Destination path")],
    visibility: Annotated[Optional[str], visibility_option()] = None,
    mimetype: Annotated[Optional[str], mimetype_option()] = None,
) -> None:
    """Upload a local file."""
    adapter = _adapter(ctx)
    try:
        with source.open("rb") as stream:
            result = adapter.write_stream(
                path, stream, _write_config(visibility, mimetype)
            )
    except BucketFSError as e:
        _fail(str(e))

    if result is None:
        _fail(f"Could not write {path}")
    typer.echo(f"Wrote {path} ({result.size:,} bytes, {result.mimetype})")


@app.command("rm")
def rm_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to delete")],
) -> None:
    """Delete a file."""
    if not _adapter(ctx).delete(path):
        _fail(f"Could not delete {path}")
    typer.echo(f"Deleted {path}")


@app.command("rmdir")
def rmdir_cmd(
    ctx: typer.Context,
    directory: Annotated[str, typer.Argument(help="Directory to delete")],
) -> None:
    """Delete a directory and everything below it."""
    if not _adapter(ctx).delete_dir(directory):
        _fail(f"Could not delete directory {directory}")
    typer.echo(f"Deleted directory {directory}")


@app.command("mkdir")
def mkdir_cmd(
    ctx: typer.Context,
    directory: Annotated[str, typer.Argument(help="Directory to create")],
    visibility: Annotated[Optional[str], visibility_option()] = None,
) -> None:
    """Create a directory marker."""
    adapter = _adapter(ctx)
    try:
        result = adapter.create_dir(directory, _write_config(visibility, None))
    except BucketFSError as e:
        _fail(str(e))

    if result is None:
        _fail(f"Could not create directory {directory}")
    typer.echo(f"Created directory {result.path}")


@app.command("cp")
def cp_cmd(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Source path")],
    destination: Annotated[str, typer.Argument(help="Destination path")],
) -> None:
    """Copy a file."""
    if not _adapter(ctx).copy(source, destination):
        _fail(f"Could not copy {source} to {destination}")
    typer.echo(f"Copied {source} -> {destination}")


@app.command("mv")
def mv_cmd(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Source path")],
    destination: Annotated[str, typer.Argument(help="Destination path")],
) -> None:
    """
    Rename a file.

    Renaming copies then deletes; if the delete fails the copy remains.
    """
    if not _adapter(ctx).rename(source, destination):
        _fail(f"Could not rename {source} to {destination}")
    typer.echo(f"Renamed {source} -> {destination}")


@app.command("stat")
def stat_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to describe")],
) -> None:
    """Show file metadata."""
    metadata = _adapter(ctx).get_metadata(path)
    if metadata is None:
        _fail(f"Could not read metadata for {path}")

    for name, value in metadata.to_dict().items():
        typer.echo(f"{name}: {value}")


@app.command("visibility")
def visibility_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to inspect")],
    set_to: Annotated[
        Optional[str], visibility_option("Change visibility to public or private")
    ] = None,
) -> None:
    """Show or change the visibility of a file."""
    adapter = _adapter(ctx)
    try:
        if set_to:
            if adapter.set_visibility(path, set_to) is None:
                _fail(f"Could not set visibility of {path}")
        result = adapter.get_visibility(path)
    except BucketFSError as e:
        _fail(str(e))

    if result is None:
        _fail(f"Could not read visibility of {path}")
    typer.echo(f"{path}: {result.visibility.value}")


@app.command("url")
def url_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to link")],
    expires_in: Annotated[Optional[int], expires_in_option()] = None,
) -> None:
    """
    Print a URL for a file.

    Without --expires-in the file must be public and an unsigned URL is printed.
    """
    adapter = _adapter(ctx)
    try:
        if expires_in is not None:
            url = adapter.get_temporary_url(path, time.time() + expires_in)
        else:
            url = adapter.get_url(path)
    except BucketFSError as e:
        _fail(str(e))

    typer.echo(url)


if __name__ == "__main__":
    app()
