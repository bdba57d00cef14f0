"""Command-line interface for s3-tools.

This module provides the CLI for working with objects in an S3 bucket.

Commands:
    - list: List object keys under a prefix, optionally filtered by a regex
    - upload: Upload a local file as a single object
    - delete: Delete every object under a prefix whose key matches a regex
    - help: Display help information

Bucket, prefix, filter and credentials default to environment variables
(S3_BUCKET, S3_PREFIX, S3_FILTER, AWS_PROFILE, ...), which may also be set in
a .env file in the working directory.
"""

from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from dotenv import load_dotenv

from . import __version__
from .cli_params import (
    AccessKeyIdOption,
    BucketOption,
    EndpointUrlOption,
    FilterOption,
    PageSizeOption,
    PrefixOption,
    ProfileOption,
    RegionOption,
    SecretAccessKeyOption,
    SessionTokenOption,
)
from .core.exceptions import S3ToolsError
from .objectstorage import (
    S3ClientConfig,
    delete_matching_objects,
    select_objects,
    upload_object,
)

app = typer.Typer(
    name="s3-tools",
    help="A command-line tool for listing, uploading and deleting S3 objects.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"s3-tools {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    S3-Tools: list, upload and delete objects in an S3 bucket.
    """
    # Runs before subcommand options are parsed, so .env values act as defaults
    env_file = Path.cwd() / ".env"
    if env_file.is_file():
        load_dotenv(env_file)


def _client_config(
    access_key_id: Optional[str],
    secret_access_key: Optional[str],
    session_token: Optional[str],
    region_name: str,
    endpoint_url: Optional[str],
    aws_profile: Optional[str],
) -> S3ClientConfig:
    """Build the client configuration shared by one command invocation."""
    return S3ClientConfig(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )


def _fail(error: S3ToolsError) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


@app.command("help")
def help_cmd(ctx: typer.Context) -> None:
    """Display help information."""
    parent = ctx.parent or ctx
    typer.echo(parent.get_help())


@app.command("list")
def list_cmd(
    bucket: BucketOption = None,
    prefix: PrefixOption = "",
    key_filter: FilterOption = None,
    page_size: PageSizeOption = None,
    access_key_id: AccessKeyIdOption = None,
    secret_access_key: SecretAccessKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = "us-east-1",
    endpoint_url: EndpointUrlOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    List object keys in the bucket, one per line.

    Examples:
        s3-tools list --bucket my-bucket --prefix logs/
        s3-tools list --bucket my-bucket --filter '\\.txt$' --profile dev
    """
    config = _client_config(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )

    try:
        selection = select_objects(
            bucket, config, prefix=prefix, pattern=key_filter, page_size=page_size
        )
    except S3ToolsError as e:
        _fail(e)

    if selection.bucket_empty:
        typer.echo("No files found in the bucket.")
        return
    if not selection.keys:
        typer.echo("No files matched the filter.")
        return

    for key in selection.keys:
        typer.echo(key)


@app.command("upload")
def upload_cmd(
    file: Annotated[
        Path,
        typer.Option("--file", help="Local file to upload", dir_okay=False),
    ],
    key: Annotated[
        Optional[str],
        typer.Option("--key", "-k", help="Destination key, defaults to the file name"),
    ] = None,
    bucket: BucketOption = None,
    prefix: PrefixOption = "",
    access_key_id: AccessKeyIdOption = None,
    secret_access_key: SecretAccessKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = "us-east-1",
    endpoint_url: EndpointUrlOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Upload a local file to the bucket.

    The destination is PREFIX/KEY when a prefix is set, otherwise KEY.

    Examples:
        s3-tools upload --file report.csv --bucket my-bucket --prefix reports
        s3-tools upload --file report.csv --key 2024/report.csv
    """
    config = _client_config(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )

    try:
        result = upload_object(bucket, file, config, key=key, prefix=prefix)
    except S3ToolsError as e:
        _fail(e)

    typer.echo(f"Uploaded {file} to {result.s3_path}")


@app.command("delete")
def delete_cmd(
    key_filter: FilterOption = None,
    bucket: BucketOption = None,
    prefix: PrefixOption = "",
    page_size: PageSizeOption = None,
    access_key_id: AccessKeyIdOption = None,
    secret_access_key: SecretAccessKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = "us-east-1",
    endpoint_url: EndpointUrlOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Delete every object under the prefix whose key matches the filter.

    All matching keys are collected first and removed with one batch request.
    There is no confirmation step: a pattern such as '.*' deletes everything
    under the prefix.

    Examples:
        s3-tools delete --bucket my-bucket --prefix tmp/ --filter '\\.log$'
    """
    config = _client_config(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )

    try:
        summary = delete_matching_objects(
            bucket, key_filter, config, prefix=prefix, page_size=page_size
        )
    except S3ToolsError as e:
        _fail(e)

    if summary.selection.bucket_empty:
        typer.echo("No files found in the bucket.")
        return
    if not summary.result.attempted:
        typer.echo("Nothing to delete.")
        return

    for key in summary.result.deleted:
        typer.echo(key)

    for failure in summary.result.errors:
        typer.echo(
            f"Failed to delete {failure.key}: {failure.code} {failure.message}",
            err=True,
        )

    for key in summary.result.unconfirmed:
        typer.echo(f"Deletion not confirmed for {key}", err=True)

    if not summary.result.complete:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
