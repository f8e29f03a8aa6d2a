"""Unit tests for srebuddy.classifier module."""

import pytest

from srebuddy.classifier import (
    TOOL_PATTERNS,
    extract_parameters,
    extract_target,
    extract_task_type,
    parse_task,
    resolve_command,
)
from srebuddy.enums import Environment, TaskType, Urgency


class TestParseTask:
    """Tests for parse_task."""

    def test_implement_dynatrace_in_production(self):
        """Test the canonical implement request."""
        task = parse_task("implement dynatrace agent in production kubernetes")

        assert task.type == TaskType.IMPLEMENT
        assert task.target == "dynatrace"
        assert task.environment == Environment.PRODUCTION

    def test_monitor_prometheus(self):
        """Test that monitor requests pick the first matching tool."""
        task = parse_task("monitor prometheus setup with grafana dashboard")

        assert task.type == TaskType.MONITOR
        assert task.target == "prometheus"

    def test_raw_input_preserved_verbatim(self):
        """Test that the original text is kept as typed."""
        text = "  Deploy Redis   to STAGING  "
        task = parse_task(text)

        assert task.raw_input == text

    def test_empty_input_uses_defaults(self):
        """Test classification is total over the empty string."""
        task = parse_task("")

        assert task.type == TaskType.IMPLEMENT
        assert task.target == "unknown"
        assert task.parameters == {}
        assert task.environment is None
        assert task.urgency is None

    def test_non_string_input_is_treated_as_empty(self):
        """Test that classification never fails."""
        task = parse_task(None)

        assert task.type == TaskType.IMPLEMENT
        assert task.target == "unknown"

    def test_deterministic(self):
        """Test that the same input always yields the same descriptor."""
        text = "urgent: fix nginx on port 8080 in staging"

        assert parse_task(text) == parse_task(text)


class TestTaskType:
    """Tests for task type resolution."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("set up alerting for the api", TaskType.MONITOR),
            ("install the agent", TaskType.IMPLEMENT),
            ("customize nginx", TaskType.CONFIGURE),
            ("rollout the new release", TaskType.DEPLOY),
            ("where is the reference guide", TaskType.DOCS),
            ("troubleshoot the crashing pods", TaskType.TROUBLESHOOT),
            ("xyzzy", TaskType.IMPLEMENT),
        ],
    )
    def test_type_patterns(self, text, expected):
        """Test each category resolves from its keywords."""
        assert extract_task_type(text) == expected

    def test_monitor_wins_over_implement(self):
        """Test that monitor patterns are checked before implement patterns."""
        assert extract_task_type("implement monitoring for redis") == TaskType.MONITOR

    def test_implement_wins_over_deploy(self):
        """Test that implement patterns are checked before deploy patterns."""
        assert extract_task_type("deploy and install jenkins") == TaskType.IMPLEMENT

    def test_case_insensitive(self):
        """Test that type resolution ignores case."""
        assert extract_task_type("DEPLOY THE THING") == TaskType.DEPLOY

    def test_resolve_command(self):
        """Test the command for a descriptor is its lower-case type."""
        assert resolve_command(parse_task("deploy redis")) == "deploy"


class TestTarget:
    """Tests for target resolution."""

    @pytest.mark.parametrize("tool", [name for name, _ in TOOL_PATTERNS])
    def test_canonical_names(self, tool):
        """Test every known tool resolves to its canonical name regardless of case."""
        assert extract_target(f"please handle {tool.upper()} today") == tool

    def test_tool_aliases(self):
        """Test alias keywords map to the canonical tool."""
        assert extract_target("apply with kubectl") == "kubernetes"
        assert extract_target("set up a reverse proxy") == "nginx"
        assert extract_target("write infrastructure as code") == "terraform"

    def test_first_tool_in_list_wins(self):
        """Test that tool order, not position in the text, decides."""
        assert extract_target("grafana on top of datadog") == "datadog"

    def test_stopword_and_length_filter(self):
        """Test fallback skips short words and stopwords."""
        assert extract_target("the for and xyzzy") == "xyzzy"

    def test_stopwords_longer_than_three_are_skipped(self):
        """Test that 'with', 'using' and 'from' never become targets."""
        assert extract_target("with using from vault") == "vault"

    def test_fallback_lowercases(self):
        """Test the fallback token is lower-cased."""
        assert extract_target("Vault") == "vault"

    def test_unknown(self):
        """Test that nothing usable yields 'unknown'."""
        assert extract_target("do it on the box") == "unknown"


class TestParameters:
    """Tests for parameter extraction."""

    def test_version_keyword(self):
        """Test 'version <n>' extraction."""
        assert extract_parameters("upgrade to version 2.4.1") == {"version": "2.4.1"}

    def test_version_prefix(self):
        """Test 'v<n>' extraction."""
        assert extract_parameters("roll out v1.2") == {"version": "1.2"}

    def test_port_keyword_and_colon(self):
        """Test both port syntaxes."""
        assert extract_parameters("listen on port 8080")["port"] == "8080"
        assert extract_parameters("expose localhost:9090")["port"] == "9090"

    def test_namespace(self):
        """Test namespace extraction."""
        assert extract_parameters("into namespace Monitoring-Prod") == {"namespace": "monitoring-prod"}

    def test_independent_probes_keep_order(self):
        """Test all probes run and keys keep extraction order."""
        params = extract_parameters("namespace obs port 3000 version 10.1")

        assert list(params) == ["version", "port", "namespace"]
        assert params == {"version": "10.1", "port": "3000", "namespace": "obs"}

    def test_no_parameters(self):
        """Test that nothing is set when no probe matches."""
        assert extract_parameters("install grafana") == {}


class TestEnvironmentAndUrgency:
    """Tests for environment and urgency resolution."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("push to live", Environment.PRODUCTION),
            ("deploy to uat", Environment.STAGING),
            ("run it locally", Environment.DEVELOPMENT),
            ("qa cluster", Environment.TESTING),
            ("somewhere", None),
        ],
    )
    def test_environment(self, text, expected):
        """Test environment patterns."""
        assert parse_task(text).environment == expected

    def test_production_checked_before_testing(self):
        """Test first-match order between environments."""
        assert parse_task("test in production").environment == Environment.PRODUCTION

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("this is urgent", Urgency.HIGH),
            ("need it asap", Urgency.HIGH),
            ("moderate priority change", Urgency.MEDIUM),
            ("low priority, do it when possible", Urgency.LOW),
            ("whenever", None),
        ],
    )
    def test_urgency(self, text, expected):
        """Test urgency patterns."""
        assert parse_task(text).urgency == expected
