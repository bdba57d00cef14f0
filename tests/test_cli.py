"""Tests for the command-line interface."""

from unittest.mock import patch

import boto3
from botocore.exceptions import ClientError
from moto import mock_aws
from typer.testing import CliRunner

from s3_tools import __version__
from s3_tools.cli import app

runner = CliRunner()

KEYS = ["a/1.txt", "a/2.log", "b/1.txt"]


class TestGeneralCommands:
    """Test help and version output."""

    def test_version(self):
        """Test --version prints the package version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"s3-tools {__version__}" in result.stdout

    def test_help_command(self):
        """Test the help command lists every command."""
        result = runner.invoke(app, ["help"])
        assert result.exit_code == 0
        for command in ("list", "upload", "delete"):
            assert command in result.stdout


@mock_aws
class TestListCommand:
    """Test the list command against mocked S3."""

    def setup_method(self, method):
        """Set up test environment."""
        self.s3_client = boto3.client("s3", region_name="us-east-1")
        self.s3_client.create_bucket(Bucket="test-bucket")
        for key in KEYS:
            self.s3_client.put_object(Bucket="test-bucket", Key=key, Body=b"x")

    def test_list_all(self):
        """Test every key is printed, one per line, in listing order."""
        result = runner.invoke(
            app, ["list", "--bucket", "test-bucket", "--page-size", "1"]
        )
        assert result.exit_code == 0
        assert result.stdout.splitlines() == KEYS

    def test_list_with_prefix_and_filter(self):
        """Test prefix and filter narrow the output."""
        result = runner.invoke(
            app,
            ["list", "--bucket", "test-bucket", "--prefix", "a/", "--filter", r"\.txt$"],
        )
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["a/1.txt"]

    def test_list_uses_environment_defaults(self, monkeypatch):
        """Test bucket and prefix fall back to environment variables."""
        monkeypatch.setenv("S3_BUCKET", "test-bucket")
        monkeypatch.setenv("S3_PREFIX", "b/")
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["b/1.txt"]

    def test_list_empty_prefix(self):
        """Test an empty listing is reported, not treated as an error."""
        result = runner.invoke(
            app, ["list", "--bucket", "test-bucket", "--prefix", "none/"]
        )
        assert result.exit_code == 0
        assert "No files found in the bucket." in result.stdout

    def test_list_no_match(self):
        """Test an unmatched filter is reported separately from an empty bucket."""
        result = runner.invoke(
            app, ["list", "--bucket", "test-bucket", "--filter", r"\.csv$"]
        )
        assert result.exit_code == 0
        assert "No files matched the filter." in result.stdout

    def test_list_invalid_filter(self):
        """Test a malformed filter exits non-zero."""
        result = runner.invoke(app, ["list", "--bucket", "test-bucket", "-f", "["])
        assert result.exit_code == 1
        assert "invalid filter pattern" in result.output

    def test_list_missing_bucket(self):
        """Test listing a bucket that does not exist is an error."""
        result = runner.invoke(app, ["list", "--bucket", "no-such-bucket"])
        assert result.exit_code == 1
        assert "Failed to list objects" in result.output


class TestListCommandValidation:
    """Test list command validation."""

    def test_bucket_required(self):
        """Test running without a bucket exits non-zero."""
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "bucket name is required" in result.output


class TestDotenvLoading:
    """Test option defaults read from a .env file."""

    @patch("s3_tools.cli.select_objects")
    def test_env_file_in_working_directory_used(
        self, mock_select, tmp_path, monkeypatch
    ):
        """Test a .env in the working directory supplies the bucket."""
        (tmp_path / ".env").write_text("S3_BUCKET=from-cwd-env\n")
        monkeypatch.chdir(tmp_path)
        mock_select.return_value.bucket_empty = True

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert mock_select.call_args.args[0] == "from-cwd-env"

    @patch("s3_tools.cli.select_objects")
    def test_env_file_in_parent_directory_ignored(
        self, mock_select, tmp_path, monkeypatch
    ):
        """Test a .env above the working directory is not loaded."""
        (tmp_path / ".env").write_text("S3_BUCKET=from-parent-env\n")
        work_dir = tmp_path / "work"
        work_dir.mkdir()
        monkeypatch.chdir(work_dir)
        mock_select.return_value.bucket_empty = True

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert mock_select.call_args.args[0] is None


@mock_aws
class TestDeleteCommand:
    """Test the delete command against mocked S3."""

    def setup_method(self, method):
        """Set up test environment."""
        self.s3_client = boto3.client("s3", region_name="us-east-1")
        self.s3_client.create_bucket(Bucket="test-bucket")
        for key in KEYS:
            self.s3_client.put_object(Bucket="test-bucket", Key=key, Body=b"x")

    def _remaining(self):
        response = self.s3_client.list_objects_v2(Bucket="test-bucket")
        return [obj["Key"] for obj in response.get("Contents", [])]

    def test_delete_matching(self):
        """Test matching keys are deleted and printed."""
        result = runner.invoke(
            app,
            ["delete", "--bucket", "test-bucket", "--filter", r"1\.txt$", "--page-size", "2"],
        )
        assert result.exit_code == 0
        assert sorted(result.stdout.splitlines()) == ["a/1.txt", "b/1.txt"]
        assert self._remaining() == ["a/2.log"]

    def test_delete_nothing_matched(self):
        """Test an unmatched filter deletes nothing."""
        result = runner.invoke(
            app, ["delete", "--bucket", "test-bucket", "--filter", "^zzz"]
        )
        assert result.exit_code == 0
        assert "Nothing to delete." in result.stdout
        assert self._remaining() == KEYS

    def test_delete_empty_prefix(self):
        """Test an empty prefix reports no files."""
        result = runner.invoke(
            app,
            ["delete", "--bucket", "test-bucket", "--prefix", "none/", "--filter", ".*"],
        )
        assert result.exit_code == 0
        assert "No files found in the bucket." in result.stdout

    def test_delete_requires_filter(self):
        """Test delete refuses to run without a filter."""
        result = runner.invoke(app, ["delete", "--bucket", "test-bucket"])
        assert result.exit_code == 1
        assert "filter pattern is required" in result.output
        assert self._remaining() == KEYS


class TestDeleteCommandFailures:
    """Test delete command error reporting with a stubbed client."""

    @patch("s3_tools.objectstorage.s3_operations.S3ClientManager")
    def test_listing_error_on_second_page(self, mock_manager):
        """Test a listing failure prints no keys, deletes nothing, exits non-zero."""

        def paginate(**kwargs):
            yield {"Contents": [{"Key": "a/1.txt"}], "NextContinuationToken": "X"}
            raise ClientError(
                {"Error": {"Code": "InternalError", "Message": "reset"}},
                "ListObjectsV2",
            )

        client = mock_manager.return_value.client
        client.get_paginator.return_value.paginate.side_effect = paginate

        result = runner.invoke(app, ["delete", "--bucket", "b", "--filter", ".*"])

        assert result.exit_code == 1
        assert "a/1.txt" not in result.stdout
        assert "Failed to list objects" in result.output
        client.delete_objects.assert_not_called()

    @patch("s3_tools.objectstorage.s3_operations.S3ClientManager")
    def test_partial_failure_reported_by_key(self, mock_manager):
        """Test confirmed keys are printed and failed keys reported."""
        client = mock_manager.return_value.client
        client.get_paginator.return_value.paginate.return_value = [
            {"Contents": [{"Key": "a"}, {"Key": "b"}]}
        ]
        client.delete_objects.return_value = {
            "Deleted": [{"Key": "a"}],
            "Errors": [{"Key": "b", "Code": "AccessDenied", "Message": "Access Denied"}],
        }

        result = runner.invoke(app, ["delete", "--bucket", "bucket", "--filter", ".*"])

        assert result.exit_code == 1
        assert "Failed to delete b: AccessDenied Access Denied" in result.output
        assert result.stdout.splitlines()[0] == "a"

    @patch("s3_tools.objectstorage.s3_operations.S3ClientManager")
    def test_unconfirmed_key_reported(self, mock_manager):
        """Test a key missing from both Deleted and Errors is reported and fails."""
        client = mock_manager.return_value.client
        client.get_paginator.return_value.paginate.return_value = [
            {"Contents": [{"Key": "a"}, {"Key": "b"}]}
        ]
        client.delete_objects.return_value = {"Deleted": [{"Key": "a"}]}

        result = runner.invoke(app, ["delete", "--bucket", "bucket", "--filter", ".*"])

        assert result.exit_code == 1
        assert "Deletion not confirmed for b" in result.output
        assert result.stdout.splitlines()[0] == "a"

    @patch("s3_tools.objectstorage.s3_operations.S3ClientManager")
    def test_delete_request_failure(self, mock_manager):
        """Test a failed delete request exits non-zero."""
        client = mock_manager.return_value.client
        client.get_paginator.return_value.paginate.return_value = [
            {"Contents": [{"Key": "a"}]}
        ]
        client.delete_objects.side_effect = ClientError(
            {"Error": {"Code": "InternalError", "Message": "boom"}}, "DeleteObjects"
        )

        result = runner.invoke(app, ["delete", "--bucket", "bucket", "--filter", ".*"])

        assert result.exit_code == 1
        assert "Failed to delete 1 object(s)" in result.output


@mock_aws
class TestUploadCommand:
    """Test the upload command against mocked S3."""

    def setup_method(self, method):
        """Set up test environment."""
        self.s3_client = boto3.client("s3", region_name="us-east-1")
        self.s3_client.create_bucket(Bucket="test-bucket")

    def test_upload(self, sample_file):
        """Test the file is stored and the destination is printed."""
        result = runner.invoke(
            app,
            [
                "upload",
                "--file",
                str(sample_file),
                "--key",
                "report.csv",
                "--bucket",
                "test-bucket",
                "--prefix",
                "reports",
            ],
        )
        assert result.exit_code == 0
        assert "s3://test-bucket/reports/report.csv" in result.stdout
        body = self.s3_client.get_object(Bucket="test-bucket", Key="reports/report.csv")
        assert body["Body"].read() == sample_file.read_bytes()

    def test_upload_missing_file(self, tmp_path):
        """Test a missing local file exits non-zero."""
        result = runner.invoke(
            app,
            ["upload", "--file", str(tmp_path / "nope"), "--bucket", "test-bucket"],
        )
        assert result.exit_code == 1
        assert "file not found" in result.output

    def test_upload_requires_file_option(self):
        """Test --file is a required option."""
        result = runner.invoke(app, ["upload", "--bucket", "test-bucket"])
        assert result.exit_code != 0
