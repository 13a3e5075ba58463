"""Tests for the CLI."""

import json
import logging
from unittest.mock import patch

from click.testing import CliRunner

from docker_image.cli import main

DIGEST = "sha256:deadbeefcafe1234567890abcdef1234567890abcdef1234567890abcdef1234"
SHORT_DIGEST = "sha256:deadbeef1234567890abcdef1234567890abcdef1234567890abcdef1234"


class TestCliBasics:
    """Test basic CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "docker-image" in result.output

    def test_parse_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["parse", "--help"])
        assert result.exit_code == 0
        assert "REFERENCE" in result.output

    @patch("docker_image.cli.logging.basicConfig")
    def test_verbose_enables_debug_logging(self, mock_basic_config):
        runner = CliRunner()
        result = runner.invoke(main, ["-v", "check", "nginx"])
        assert result.exit_code == 0
        assert mock_basic_config.call_args.kwargs["level"] == logging.DEBUG


class TestParseCommand:
    """Test the parse command."""

    def test_parse_full_reference(self):
        runner = CliRunner()
        result = runner.invoke(
            main, ["parse", f"my-registry.local:5000/library/image-name:v1@{DIGEST}"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "name": "library/image-name",
            "registry": "my-registry.local:5000",
            "tag": "v1",
            "digest": DIGEST,
        }

    def test_parse_no_pretty(self):
        runner = CliRunner()
        result = runner.invoke(main, ["parse", "nginx", "--no-pretty"])
        assert result.exit_code == 0
        assert result.output.strip() == (
            '{"name": "nginx", "registry": null, "tag": null, "digest": null}'
        )

    def test_parse_invalid_reference(self):
        runner = CliRunner()
        result = runner.invoke(main, ["parse", "nginx::latest"])
        assert result.exit_code != 0
        assert "Invalid Docker image format" in result.output


class TestRenderCommand:
    """Test the render command."""

    def test_render_name_only(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", "--name", "nginx"])
        assert result.exit_code == 0
        assert result.output.strip() == "nginx"

    def test_render_full_reference(self):
        runner = CliRunner()
        result = runner.invoke(
            main,
            [
                "render",
                "--registry",
                "docker.io",
                "--name",
                "library/nginx",
                "--tag",
                "latest",
                "--digest",
                DIGEST,
            ],
        )
        assert result.exit_code == 0
        assert result.output.strip() == f"docker.io/library/nginx:latest@{DIGEST}"

    def test_render_invalid_tag(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", "--name", "nginx", "--tag", "a:b"])
        assert result.exit_code != 0
        assert "Invalid Docker image format" in result.output

    def test_render_requires_name(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", "--tag", "latest"])
        assert result.exit_code != 0

    def test_render_short_digest(self):
        runner = CliRunner()
        result = runner.invoke(
            main, ["render", "--name", "ubuntu", "--digest", SHORT_DIGEST]
        )
        assert result.exit_code != 0
        assert "Invalid Docker image format" in result.output


class TestCheckCommand:
    """Test the check command."""

    def test_all_valid(self):
        runner = CliRunner()
        result = runner.invoke(main, ["check", "nginx", "ghcr.io/nginx/nginx:1.27"])
        assert result.exit_code == 0
        assert result.output.count("ok") == 2

    def test_some_invalid(self):
        runner = CliRunner()
        result = runner.invoke(main, ["check", "nginx", "nginx::latest"])
        assert result.exit_code == 1
        assert "invalid  nginx::latest" in result.output
        assert "ok       nginx" in result.output
