"""InvokerConfig and Operation model tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from invoker_core import Delete, Get, GetCollection, InvokerConfig, Operation, Patch, Post, Put


class TestInvokerConfig:
    """Test configuration defaults, environment and YAML loading."""

    def test_defaults(self):
        """Test reserved keys and aliases default values."""
        config = InvokerConfig()

        assert config.route_params_key == "route-params"
        assert config.operation_key == "operation"
        assert config.payload_key == "payload"
        assert config.payload_aliases == ["data", "input"]
        assert config.log_level == "info"
        assert config.handlers == {}

    def test_rejects_unknown_fields(self):
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            InvokerConfig(route_key="x")

    def test_rejects_bad_log_level(self):
        """Test the log level is validated."""
        with pytest.raises(ValidationError):
            InvokerConfig(log_level="verbose")

    def test_from_env(self):
        """Test INVOKER_* variables override defaults."""
        config = InvokerConfig.from_env(
            {
                "INVOKER_ROUTE_PARAMS_KEY": "_route_params",
                "INVOKER_OPERATION_KEY": "_api_operation",
                "INVOKER_PAYLOAD_KEY": "data",
                "INVOKER_PAYLOAD_ALIASES": "data, body ,",
                "INVOKER_LOG_LEVEL": "debug",
                "UNRELATED": "x",
            }
        )

        assert config.route_params_key == "_route_params"
        assert config.operation_key == "_api_operation"
        assert config.payload_key == "data"
        assert config.payload_aliases == ["data", "body"]
        assert config.log_level == "debug"

    def test_from_env_empty(self):
        """Test an empty environment yields defaults."""
        assert InvokerConfig.from_env({}) == InvokerConfig()

    def test_from_env_reads_os_environ(self, monkeypatch):
        """Test os.environ is read by default."""
        monkeypatch.setenv("INVOKER_PAYLOAD_KEY", "body")
        assert InvokerConfig.from_env().payload_key == "body"

    def test_from_file_nested(self, tmp_path):
        """Test YAML under an invoker key."""
        path = tmp_path / "invoker.yaml"
        path.write_text(
            "invoker:\n"
            "  payload_aliases: [data, body]\n"
            "  handlers:\n"
            "    app.publish: tests.fixtures.processors.PublishArticleProcessor\n"
        )

        config = InvokerConfig.from_file(path)

        assert config.payload_aliases == ["data", "body"]
        assert config.handlers == {"app.publish": "tests.fixtures.processors.PublishArticleProcessor"}

    def test_from_file_top_level(self, tmp_path):
        """Test YAML with top-level fields."""
        path = tmp_path / "invoker.yaml"
        path.write_text("log_level: warn\n")

        assert InvokerConfig.from_file(str(path)).log_level == "warn"

    def test_from_file_empty(self, tmp_path):
        """Test an empty file yields defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert InvokerConfig.from_file(path) == InvokerConfig()

    def test_from_file_unknown_field(self, tmp_path):
        """Test unknown YAML fields are rejected."""
        path = tmp_path / "bad.yaml"
        path.write_text("invoker:\n  unknown: 1\n")

        with pytest.raises(ValidationError):
            InvokerConfig.from_file(path)


class TestOperation:
    """Test operation metadata models."""

    def test_verb_subclasses(self):
        """Test each subclass carries its HTTP method."""
        assert [op().method for op in (Get, GetCollection, Post, Put, Patch, Delete)] == [
            "GET",
            "GET",
            "POST",
            "PUT",
            "PATCH",
            "DELETE",
        ]
        assert all(issubclass(op, Operation) for op in (Get, GetCollection, Post, Put, Patch, Delete))

    def test_handler_identifiers(self):
        """Test processor and provider identifiers."""
        operation = Post(name="create_user", processor="app.create_user", uri_template="/users")

        assert operation.processor == "app.create_user"
        assert operation.provider is None

    def test_frozen(self):
        """Test operations are immutable."""
        operation = Get()
        with pytest.raises(ValidationError):
            operation.name = "changed"

    def test_rejects_unknown_fields(self):
        """Test unknown fields are rejected."""
        with pytest.raises(ValidationError):
            Get(handler="x")
