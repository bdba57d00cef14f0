"""Shared CLI parameter definitions.

Every command takes the same bucket selection and client options. Defining
them once here keeps names, environment defaults and help text consistent
between ``list``, ``upload`` and ``delete``.

Each alias is an ``Annotated`` type that can be used directly in a command
signature:

    @app.command()
    def my_command(bucket: BucketOption = None, region: RegionOption = "us-east-1"):
        pass

Parameter Categories:
    - Selection parameters: bucket, prefix and key filter
    - AWS parameters: credentials, profile, region and endpoint
    - Listing parameters: page size
"""

from typing import Annotated, Optional

import typer

# Selection parameters
BucketOption = Annotated[
    Optional[str],
    typer.Option("--bucket", "-b", envvar="S3_BUCKET", help="The S3 bucket name"),
]

PrefixOption = Annotated[
    Optional[str],
    typer.Option("--prefix", "-p", envvar="S3_PREFIX", help="The S3 key prefix"),
]

FilterOption = Annotated[
    Optional[str],
    typer.Option(
        "--filter",
        "-f",
        envvar="S3_FILTER",
        help="Regular expression matched against each object key",
    ),
]

# AWS parameters
AccessKeyIdOption = Annotated[
    Optional[str],
    typer.Option("--access-key-id", envvar="AWS_ACCESS_KEY_ID", help="AWS access key ID"),
]

SecretAccessKeyOption = Annotated[
    Optional[str],
    typer.Option(
        "--secret-access-key",
        envvar="AWS_SECRET_ACCESS_KEY",
        help="AWS secret access key",
    ),
]

SessionTokenOption = Annotated[
    Optional[str],
    typer.Option("--session-token", envvar="AWS_SESSION_TOKEN", help="AWS session token"),
]

RegionOption = Annotated[
    str, typer.Option("--region", envvar="AWS_REGION", help="AWS region name")
]

EndpointUrlOption = Annotated[
    Optional[str],
    typer.Option(
        "--endpoint-url", envvar="S3_ENDPOINT_URL", help="Custom S3 endpoint URL"
    ),
]

ProfileOption = Annotated[
    Optional[str],
    typer.Option(
        "--aws-profile", "--profile", envvar="AWS_PROFILE", help="AWS CLI profile name"
    ),
]

# Listing parameters
PageSizeOption = Annotated[
    Optional[int],
    typer.Option("--page-size", min=1, help="Number of keys requested per list call"),
]
