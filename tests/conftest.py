"""Pytest configuration and shared fixtures."""

import json

import pytest
from click.testing import CliRunner

from tfctl import config
from tfctl.cli import cli


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point tfctl at a config file that does not exist.

    The cached config in tfctl.config persists across tests, and a developer's
    own ~/tfctl.yaml must never leak into results. Timezone and filter
    delimiter overrides are cleared for the same reason.
    """
    monkeypatch.setenv("TFCTL_CONFIG", str(tmp_path / "missing-tfctl.yaml"))
    monkeypatch.delenv("TZ", raising=False)
    monkeypatch.delenv("TFCTL_FILTER_DELIM", raising=False)
    monkeypatch.delenv("TFCTL_LOG", raising=False)
    config.reset()
    yield
    config.reset()


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional input.

    Usage:
        result = invoke(["sq", "terraform.tfstate"])
        result = invoke(["query", "-", "-k", "run"], input_data=payload)
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke


@pytest.fixture
def state_doc():
    """A small Terraform state with a counted, a data and a module resource."""
    return {
        "version": 4,
        "terraform_version": "1.7.5",
        "resources": [
            {
                "mode": "managed",
                "type": "aws_s3_bucket",
                "name": "logs_bucket",
                "provider": 'provider["registry.terraform.io/hashicorp/aws"]',
                "instances": [
                    {
                        "index_key": 0,
                        "schema_version": 0,
                        "attributes": {"id": "logs-0", "name": "logs-zero"},
                    },
                    {
                        "index_key": 1,
                        "schema_version": 0,
                        "attributes": {"id": "logs-1", "name": "logs-one"},
                    },
                ],
            },
            {
                "mode": "data",
                "type": "aws_caller_identity",
                "name": "current",
                "provider": 'provider["registry.terraform.io/hashicorp/aws"]',
                "instances": [{"attributes": {"id": "123456789012"}}],
            },
            {
                "module": "module.net",
                "mode": "managed",
                "type": "aws_vpc",
                "name": "main",
                "provider": 'provider["registry.terraform.io/hashicorp/aws"]',
                "instances": [{"attributes": {"id": "vpc-1", "name": "core"}}],
            },
        ],
    }


@pytest.fixture
def state_file(tmp_path, state_doc):
    """Write state_doc to a terraform.tfstate file."""
    path = tmp_path / "terraform.tfstate"
    path.write_text(json.dumps(state_doc))
    return path


@pytest.fixture
def workspaces_doc():
    """A JSON:API workspace listing."""
    return {
        "data": [
            {
                "id": "ws-1",
                "type": "workspaces",
                "attributes": {
                    "name": "prod-web",
                    "resource-count": 12,
                    "created-at": "2024-01-15T10:30:00Z",
                    "tag-names": ["prod", "web"],
                },
            },
            {
                "id": "ws-2",
                "type": "workspaces",
                "attributes": {
                    "name": "dev-api",
                    "resource-count": 3,
                    "created-at": "2024-02-01T08:00:00Z",
                    "tag-names": ["dev"],
                },
            },
            {
                "id": "ws-3",
                "type": "workspaces",
                "attributes": {
                    "name": "prod-api",
                    "resource-count": 40,
                    "created-at": "2023-11-20T16:45:00Z",
                    "tag-names": [],
                },
            },
        ]
    }


@pytest.fixture
def workspaces_file(tmp_path, workspaces_doc):
    """Write workspaces_doc to a JSON file."""
    path = tmp_path / "workspaces.json"
    path.write_text(json.dumps(workspaces_doc))
    return path
