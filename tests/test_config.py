"""Tests for NamespaceConfig construction."""

from __future__ import annotations

import re

import pytest

from selector_namespace.config import ConfigurationError, NamespaceConfig


class TestNamespaceConfig:
    def test_defaults(self):
        config = NamespaceConfig()
        assert config.namespace == ".self"
        assert config.self_selector.pattern == ":--namespace"
        assert config.root_selector.pattern == ":root"
        assert config.ignore_root is True
        assert config.drop_root is True
        assert config.process_html_tag_specifically is False

    def test_string_patterns_are_compiled(self):
        config = NamespaceConfig.from_options(self_selector="&|:--component", root_selector=":host")
        assert isinstance(config.self_selector, re.Pattern)
        assert config.self_selector.search("& .a")
        assert config.root_selector.match(":host .a")

    def test_compiled_patterns_are_kept(self):
        pattern = re.compile(r":--component", re.IGNORECASE)
        config = NamespaceConfig.from_options(self_selector=pattern)
        assert config.self_selector is pattern

    def test_invalid_pattern_fails_at_construction(self):
        with pytest.raises(ConfigurationError, match="self_selector"):
            NamespaceConfig.from_options(self_selector="(unclosed")

    def test_invalid_root_pattern(self):
        with pytest.raises(ConfigurationError, match="root_selector"):
            NamespaceConfig.from_options(root_selector="[")

    def test_non_pattern_rejected(self):
        with pytest.raises(ConfigurationError):
            NamespaceConfig.from_options(root_selector=42)

    def test_unknown_option_rejected(self):
        with pytest.raises(ConfigurationError, match="selfSelector"):
            NamespaceConfig.from_options(selfSelector=":--x")

    def test_namespace_must_be_string_or_callable(self):
        with pytest.raises(ConfigurationError):
            NamespaceConfig.from_options(namespace=3)

    def test_callable_namespace_accepted(self):
        config = NamespaceConfig.from_options(namespace=lambda file: ".x")
        assert callable(config.namespace)

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_frozen(self):
        config = NamespaceConfig()
        with pytest.raises(AttributeError):
            config.namespace = ".other"
