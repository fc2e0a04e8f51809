"""End-to-end tests for add/remove/update/show/leaves/stats via the CLI."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from proftree.cli import cli


def _add(runner: CliRunner, *args: str) -> str:
    result = runner.invoke(cli, ["-q", "add", *args])
    assert result.exit_code == 0, result.output
    return result.output.strip()


@pytest.fixture
def stem(cli_runner: CliRunner, _isolated_project: None) -> dict[str, str]:
    """Build the STEM v2 tree through the CLI and return the created ids."""
    assert cli_runner.invoke(cli, ["init"]).exit_code == 0
    ids: dict[str, str] = {}
    ids["domain"] = _add(cli_runner, "STEM")
    ids["industry"] = _add(cli_runner, "Software", "--parent", ids["domain"])
    ids["profession"] = _add(cli_runner, "Software Engineering", "--parent", ids["industry"])
    ids["field"] = _add(cli_runner, "Backend", "--parent", ids["profession"])
    ids["role"] = _add(cli_runner, "API Engineer", "--parent", ids["field"])
    ids["task1"] = _add(cli_runner, "Design REST endpoints", "--parent", ids["role"])
    ids["task2"] = _add(cli_runner, "Implement authentication", "--parent", ids["role"])
    return ids


@pytest.mark.usefixtures("_isolated_project")
class TestAddCommand:
    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["add", "--help"])
        assert result.exit_code == 0
        assert "--parent" in result.output
        assert "--skill" in result.output

    def test_human_output(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        result = cli_runner.invoke(cli, ["add", "STEM"])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "Domain" in result.output

    def test_v1_attributes(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init", "--schema", "v1"])
        domain = _add(cli_runner, "Engineering")
        specialization = _add(cli_runner, "Backend", "--parent", domain, "--focus", "APIs")
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "add",
                "Tech Lead",
                "--parent",
                specialization,
                "--seniority",
                "Lead",
                "--skill",
                "Python",
                "--tool",
                "Git",
            ],
        )
        assert result.exit_code == 0, result.output
        role_id = json.loads(result.output)["data"]["id"]
        shown = json.loads(cli_runner.invoke(cli, ["--json", "show", role_id]).output)
        node = shown["data"]["node"]
        assert node["seniority"] == "Lead"
        assert [a["name"] for a in node["attributes"]] == ["Python", "Git"]

    def test_field_not_on_layer(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        result = cli_runner.invoke(cli, ["--json", "add", "STEM", "--focus", "x"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "VALIDATION_FAILED"

    def test_without_tree(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["add", "STEM"])
        assert result.exit_code == 1
        assert "proftree init" in result.output

    def test_unknown_parent(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        result = cli_runner.invoke(cli, ["add", "x", "--parent", "missing"])
        assert result.exit_code == 1
        assert "No node found" in result.output


@pytest.mark.usefixtures("_isolated_project")
class TestQueryCommands:
    def test_leaves_in_order(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        result = cli_runner.invoke(cli, ["--json", "leaves"])
        assert result.exit_code == 0
        labels = [i["label"] for i in json.loads(result.output)["data"]["items"]]
        assert labels == ["Design REST endpoints", "Implement authentication"]

    def test_leaves_quiet(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        result = cli_runner.invoke(cli, ["-q", "leaves", stem["role"]])
        assert result.output.split() == [stem["task1"], stem["task2"]]

    def test_show(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        result = cli_runner.invoke(cli, ["show", stem["field"]])
        assert result.exit_code == 0
        assert "Field: Backend" in result.output
        assert "Role: API Engineer" in result.output
        assert "Task: Implement authentication" in result.output

    def test_show_missing(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        assert cli_runner.invoke(cli, ["show", "missing"]).exit_code == 1

    def test_stats(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        data = json.loads(cli_runner.invoke(cli, ["--json", "stats"]).output)["data"]
        assert data["total_nodes"] == 7
        assert data["total_leaves"] == 2

    def test_layers(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["layers", "v1"])
        assert result.exit_code == 0
        assert "4. Responsibility" in result.output

    def test_layers_default(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "layers"])
        assert json.loads(result.output)["data"]["leaf_layer"] == "Task"


@pytest.mark.usefixtures("_isolated_project")
class TestRemoveCommand:
    def test_remove_field(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        result = cli_runner.invoke(cli, ["--json", "remove", stem["field"]])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["leaves_removed"] == 2
        assert data["remaining_leaves"] == 0
        leaves = json.loads(cli_runner.invoke(cli, ["--json", "leaves"]).output)
        assert leaves["data"]["count"] == 0

    def test_remove_missing(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        result = cli_runner.invoke(cli, ["remove", "missing"])
        assert result.exit_code == 1


@pytest.mark.usefixtures("_isolated_project")
class TestUpdateCommand:
    def test_label(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        result = cli_runner.invoke(cli, ["--json", "update", stem["role"], "--label", "API Lead"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["fields_changed"] == ["title"]

    def test_description_maps_to_summary(
        self, cli_runner: CliRunner, stem: dict[str, str]
    ) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "update", stem["role"], "--description", "Owns the API"]
        )
        assert json.loads(result.output)["data"]["fields_changed"] == ["summary"]

    def test_no_changes(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        result = cli_runner.invoke(cli, ["update", stem["role"]])
        assert result.exit_code == 1
        assert "No changes specified" in result.output

    def test_not_found(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        result = cli_runner.invoke(cli, ["update", "missing", "--label", "x"])
        assert result.exit_code == 1

    def test_unchanged_warning(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        result = cli_runner.invoke(cli, ["update", stem["domain"], "--label", "STEM"])
        assert result.exit_code == 0
        assert "WARNING: Already up to date: name" in result.output

    def test_attribute_options(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init", "--schema", "v1"])
        domain = _add(cli_runner, "Engineering", "--skill", "Perl")
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "update",
                domain,
                "--add-skill",
                "Python",
                "--add-trait",
                "Curious",
                "--remove-attribute",
                "Perl",
            ],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["fields_changed"] == ["attributes"]
        shown = json.loads(cli_runner.invoke(cli, ["--json", "show", domain]).output)
        attributes = shown["data"]["node"]["attributes"]
        assert [(a["name"], a["type"]) for a in attributes] == [
            ("Python", "Skill"),
            ("Curious", "Trait"),
        ]

    def test_attribute_options_on_v2(self, cli_runner: CliRunner, stem: dict[str, str]) -> None:
        result = cli_runner.invoke(cli, ["--json", "update", stem["role"], "--add-tool", "Git"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "INVARIANT_VIOLATION"
