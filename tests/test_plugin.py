"""Tests for the namespacing plugin, end to end through the processor."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from selector_namespace import Processor, selector_namespace, transform
from selector_namespace.config import ConfigurationError, NamespaceConfig
from selector_namespace.tree import parse_stylesheet

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _compare_fixture(name: str, **options) -> None:
    """Helper: transform fixtures/css/<name> and compare with fixtures/expected/<name>."""
    source = (FIXTURES_DIR / "css" / name).read_text()
    expected = (FIXTURES_DIR / "expected" / name).read_text()
    assert transform(source, **options).css == expected


def _expect_unchanged(css: str, **options) -> None:
    assert transform(css, **options).css == css


class TestBasicFunctionality:
    def test_fixture(self):
        _compare_fixture("basic.css", self_selector=r":--component", namespace=".namespaced")

    def test_default_self_selector(self):
        assert transform(":--namespace {}", namespace=".my-component").css == ".my-component {}"

    def test_default_namespace(self):
        assert transform(".foo {}").css == ".self .foo {}"

    def test_pattern_matching_several_tokens(self):
        _compare_fixture("multiself.css", self_selector=r":--self|:--component", namespace=".my-component")

    def test_nested_and_supports(self):
        _compare_fixture("nested.css", namespace=".widget")

    def test_selector_group(self):
        assert transform(".a, .b {}", namespace=".c").css == ".c .a, .c .b {}"


class TestRootHandling:
    def test_root_prefix_dropped(self):
        assert transform(":root .foo {}", namespace=".my-component").css == ".foo {}"

    def test_root_only_unchanged(self):
        _expect_unchanged(":root {}", namespace=".my-component")

    def test_keep_root(self):
        _expect_unchanged(":root .foo {}", namespace=".c", drop_root=False)

    def test_prefix_root(self):
        css = transform(":root .foo {}", namespace=".c", ignore_root=False).css
        assert css == ".c :root .foo {}"


class TestAtRules:
    def test_keyframes_unchanged(self):
        _expect_unchanged("@keyframes fadeout { from { opacity: 1 } to { opacity: 0 }}")

    def test_vendor_keyframes_unchanged(self):
        _expect_unchanged("@-webkit-keyframes fadeout { 0% { opacity: 1 } 100% { opacity: 0 }}")

    def test_supports(self):
        css = transform(
            "@supports (display: flex) { .bar { display: flex; } }",
            namespace=".my-component",
        ).css
        assert css == "@supports (display: flex) { .my-component .bar { display: flex; } }"

    def test_media(self):
        css = transform("@media screen { .bar { color: red; } }", namespace=".c").css
        assert css == "@media screen { .c .bar { color: red; } }"

    def test_media_inside_supports(self):
        css = transform(
            "@supports (display: grid) { @media print { .a { color: red; } } }",
            namespace=".c",
        ).css
        assert css == "@supports (display: grid) { @media print { .c .a { color: red; } } }"

    def test_nested_rules_not_double_namespaced(self):
        css = transform(".card { .title { color: red; } }", namespace=".c").css
        assert css == ".c .card { .title { color: red; } }"


class TestMultipleNamespaces:
    def test_prefix_fan_out(self):
        assert transform(".foo {}", namespace=".a,.b").css == ".a .foo,.b .foo {}"

    def test_self_fan_out(self):
        assert transform(":--namespace {}", namespace=".a,.b").css == ".a,.b {}"


class TestNamespaceFunction:
    def test_called_with_source_file(self):
        seen = []

        def namespace(file):
            seen.append(file)
            return "." + os.path.splitext(os.path.basename(file))[0]

        result = transform(".foo {}", file="components/button.css", namespace=namespace)
        assert result.css == ".button .foo {}"
        assert seen == ["components/button.css"]

    @pytest.mark.parametrize("value", ["", False, None, ",", " , "])
    def test_falsy_result_disables_run(self, value):
        result = transform(".foo {}\n:--namespace {}", namespace=lambda file: value)
        assert result.css == ".foo {}\n:--namespace {}"
        assert result.rewritten == 0

    def test_errors_propagate(self):
        def namespace(file):
            raise LookupError("no namespace for " + str(file))

        with pytest.raises(LookupError):
            transform(".foo {}", namespace=namespace)


class TestHtmlTagMode:
    def test_html_tag_qualified(self):
        css = transform("html body {}", namespace=".app", process_html_tag_specifically=True).css
        assert css == "html.app body {}"

    def test_other_selectors_still_prefixed(self):
        css = transform(
            "html, .foo {}", namespace=".app", process_html_tag_specifically=True
        ).css
        assert css == "html.app, .app .foo {}"

    def test_disabled_by_default(self):
        assert transform("html body {}", namespace=".app").css == ".app html body {}"


class TestPluginUnit:
    def test_once_returns_rewritten_count(self):
        plugin = selector_namespace(namespace=".c")
        root = parse_stylesheet(".a, :root {}\n.b {}")
        assert plugin.once(root) == 2
        assert [r.selectors for r in root.rules()] == [[".c .a", ":root"], [".c .b"]]

    def test_accepts_config(self):
        plugin = selector_namespace(NamespaceConfig(namespace=".c"))
        assert plugin.config.namespace == ".c"

    def test_config_and_options_conflict(self):
        with pytest.raises(TypeError):
            selector_namespace(NamespaceConfig(), namespace=".c")

    def test_invalid_pattern_fails_before_processing(self):
        with pytest.raises(ConfigurationError):
            selector_namespace(self_selector="(")

    def test_failure_leaves_tree_untouched(self, monkeypatch):
        plugin = selector_namespace(namespace=".c")
        root = parse_stylesheet(".a {}\n.b {}")
        calls = []

        def failing(selector, namespace):
            calls.append(selector)
            if selector == ".b":
                raise RuntimeError("rewrite failed")
            return namespace + " " + selector

        monkeypatch.setattr(plugin, "namespace_selector", failing)
        with pytest.raises(RuntimeError):
            plugin.once(root)
        assert calls == [".a", ".b"]
        assert [r.selectors for r in root.rules()] == [[".a"], [".b"]]

    def test_processor_chaining(self):
        processor = Processor().use(selector_namespace(namespace=".c"))
        result = processor.process(".a {}")
        assert result.css == ".c .a {}"
        assert result.rules == 1
        assert result.rewritten == 1
        assert set(result.timings) == {"parse", "selector-namespace", "render"}
        assert str(result) == ".c .a {}"

    def test_once_visits_rules_through_walk_rules(self, monkeypatch):
        plugin = selector_namespace(namespace=".c")
        root = parse_stylesheet(".a {}\n.b {}")
        visited = []
        walk_rules = root.walk_rules

        def recording(callback):
            def wrapped(rule):
                visited.append(rule.selectors[0])
                callback(rule)
            walk_rules(wrapped)

        monkeypatch.setattr(root, "walk_rules", recording)
        assert plugin.once(root) == 2
        assert visited == [".a", ".b"]
