"""Unit tests for srebuddy.prompts module."""

import pytest

from srebuddy.classifier import parse_task
from srebuddy.prompts import (
    EXTERNAL_CONTEXT_SECTION,
    FallbackPromptLoader,
    build_generic_prompt,
    compose_prompt,
    configure_fallback_loader,
    get_fallback_loader,
    substitute_placeholders,
)
from srebuddy.templates import parse_templates

PLACEHOLDERS = ("{target}", "{environment}", "{rawInput}", "{raw_input}", "{type}")


@pytest.fixture
def implement_template(sample_corpus):
    """The implement template of the sample corpus."""
    return parse_templates(sample_corpus)[0]


class TestSubstitutePlaceholders:
    """Tests for substitute_placeholders."""

    def test_all_occurrences_replaced(self):
        """Test every occurrence of a placeholder is replaced."""
        task = parse_task("deploy redis to staging")
        body = "{target} {target} in {environment}; {rawInput} / {raw_input} as {type}"

        assert substitute_placeholders(body, task) == (
            "redis redis in staging; deploy redis to staging / deploy redis to staging as deploy"
        )

    def test_missing_environment(self):
        """Test an unspecified environment."""
        assert substitute_placeholders("{environment}", parse_task("deploy redis")) == "unspecified"

    def test_other_braces_untouched(self):
        """Test JSON snippets in a body survive substitution."""
        body = '{"service": "{target}", "replicas": 3}'

        assert substitute_placeholders(body, parse_task("deploy redis")) == '{"service": "redis", "replicas": 3}'


class TestComposePrompt:
    """Tests for compose_prompt."""

    def test_from_template(self, implement_template):
        """Test a matched template body is used with placeholders filled."""
        task = parse_task("implement dynatrace agent in production kubernetes")

        result = compose_prompt(implement_template, "implement", task)

        assert result == (
            "You are an SRE assistant.\n"
            "Implement dynatrace in production.\n"
            "Request: implement dynatrace agent in production kubernetes (implement)"
        )

    def test_from_fallback(self):
        """Test the built-in fallback prompt when no template matched."""
        result = compose_prompt(None, "deploy", parse_task("deploy redis to staging"))

        assert result.startswith("You are SreBuddy, an expert Site Reliability Engineer assistant specializing")
        assert "Task: Deploy redis" in result
        assert "Environment: staging" in result
        assert "Context: deploy redis to staging" in result

    @pytest.mark.parametrize("command", ["implement", "deploy", "monitor", "configure", "troubleshoot"])
    def test_fallback_has_no_placeholders_left(self, command):
        """Test fallback bodies are fully substituted."""
        result = compose_prompt(None, command, parse_task("handle vault in dev"))

        for placeholder in PLACEHOLDERS:
            assert placeholder not in result

    def test_generic_prompt(self):
        """Test the generic prompt for a command without fallback."""
        task = parse_task("where is the redis guide")

        result = compose_prompt(None, "docs", task)

        assert result == build_generic_prompt(task, "docs")
        assert "Task: docs redis" in result
        assert "Environment: unspecified" in result
        assert "Context: where is the redis guide" in result

    @pytest.mark.parametrize("use_template,command", [(True, "implement"), (False, "deploy"), (False, "docs")])
    def test_parameters_appended_on_every_path(self, implement_template, use_template, command):
        """Test extracted parameters are listed whichever body was used."""
        task = parse_task("install redis on port 6379")
        template = implement_template if use_template else None

        result = compose_prompt(template, command, task)

        assert result.endswith("\n\nAdditional Context:\n- port: 6379")

    def test_no_parameters_section_without_parameters(self):
        """Test nothing is appended when there are no parameters."""
        assert "Additional Context:" not in compose_prompt(None, "deploy", parse_task("deploy redis"))

    def test_external_context_appended_after_parameters(self):
        """Test documentation context is embedded last."""
        task = parse_task("deploy redis on port 6379")

        result = compose_prompt(None, "deploy", task, "### Redis Runbook\n\nUse sentinel.")

        expected_tail = EXTERNAL_CONTEXT_SECTION.replace("{context}", "### Redis Runbook\n\nUse sentinel.")
        assert result.endswith(expected_tail)
        assert result.index("Additional Context:") < result.index("## Additional Context from Internal Documentation")

    def test_blank_external_context_ignored(self):
        """Test whitespace-only context adds nothing."""
        task = parse_task("deploy redis")

        assert compose_prompt(None, "deploy", task, "  \n") == compose_prompt(None, "deploy", task)

    def test_failure_falls_back_to_generic(self, implement_template, monkeypatch):
        """Test that an internal fault yields the generic prompt."""
        def boom(body, descriptor):
            raise RuntimeError("boom")

        monkeypatch.setattr("srebuddy.prompts.substitute_placeholders", boom)
        task = parse_task("install dynatrace")

        assert compose_prompt(implement_template, "implement", task) == build_generic_prompt(task, "implement")


class TestFallbackPromptLoader:
    """Tests for FallbackPromptLoader."""

    def test_builtin_commands(self):
        """Test the built-in fallback prompts."""
        loader = FallbackPromptLoader()

        assert loader.list_commands() == ["configure", "deploy", "implement", "monitor", "troubleshoot"]
        assert loader.load("docs") is None
        assert loader.load("DEPLOY") == loader.load("deploy")

    def test_custom_dir_overrides_builtin(self, tmp_path):
        """Test a custom file replaces the built-in prompt."""
        (tmp_path / "deploy.md").write_text("Custom deploy of {target}.\n", encoding="utf-8")
        configure_fallback_loader(str(tmp_path))

        assert compose_prompt(None, "deploy", parse_task("deploy redis")) == "Custom deploy of redis."

    def test_custom_dir_adds_commands(self, tmp_path):
        """Test a custom file for a command without built-in prompt."""
        (tmp_path / "docs.md").write_text("Document {target}.", encoding="utf-8")
        loader = FallbackPromptLoader(custom_dir=str(tmp_path))

        assert loader.load("docs") == "Document {target}."
        assert "docs" in loader.list_commands()

    def test_global_loader_is_reused(self):
        """Test the global loader is created once."""
        assert get_fallback_loader() is get_fallback_loader()
