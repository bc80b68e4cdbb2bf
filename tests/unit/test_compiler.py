"""Unit tests for ruleset compilation."""
import pytest
from pslsplit.core.compiler import RulesetCompiler, build_trie, compile_ruleset
from pslsplit.errors import SuffixListError
from pslsplit.models import LocalSource, SuffixListConfig, TextSource


class TestParsing:
    """Test line classification into public and private sets."""

    def test_public_and_private_sets(self, text_config):
        compile_ruleset(text_config)
        assert "co.uk" in text_config.public_suffixes
        assert "*.kawasaki.jp" in text_config.public_suffixes
        assert "!city.kawasaki.jp" in text_config.public_suffixes
        assert text_config.private_suffixes == {"github.io", "blogspot.com"}

    def test_comments_and_blank_lines_skipped(self, text_config):
        compile_ruleset(text_config)
        all_rules = text_config.public_suffixes | text_config.private_suffixes
        assert not any(rule.startswith("//") or not rule for rule in all_rules)

    def test_unicode_rule_stored_in_both_forms(self, text_config):
        compile_ruleset(text_config)
        assert "公司.cn" in text_config.public_suffixes
        assert any(
            rule.startswith("xn--") and rule.endswith(".cn")
            for rule in text_config.public_suffixes
        )

    def test_trailing_whitespace_trimmed(self):
        config = SuffixListConfig(primary=TextSource("com   \nnet\t\n"))
        compile_ruleset(config)
        assert config.public_suffixes == {"com", "net"}

    def test_separator_must_match_exactly(self):
        text = "com\n//===BEGIN PRIVATE DOMAINS===\nexample.com\n"
        config = SuffixListConfig(primary=TextSource(text))
        compile_ruleset(config)
        assert config.private_suffixes == set()
        assert "example.com" in config.public_suffixes

    def test_disabled_private_domains_discarded(self, psl_text):
        config = SuffixListConfig(primary=TextSource(psl_text), disable_private_domains=True)
        compile_ruleset(config)
        assert config.private_suffixes == set()
        assert "github.io" not in config.public_suffixes

    def test_extra_source_is_unioned(self, psl_text):
        config = SuffixListConfig(
            primary=TextSource(psl_text),
            extra=TextSource("internal\n// ===BEGIN PRIVATE DOMAINS===\ncorp.internal\n"),
        )
        compile_ruleset(config)
        assert "internal" in config.public_suffixes
        assert "co.uk" in config.public_suffixes
        assert "corp.internal" in config.private_suffixes
        assert "github.io" in config.private_suffixes


class TestCompile:
    """Test trie construction and build bookkeeping."""

    def test_sets_reset_between_compiles(self, text_config):
        compiler = RulesetCompiler()
        compiler.compile(text_config)
        text_config.primary = TextSource("org\n")
        compiler.compile(text_config)
        assert text_config.public_suffixes == {"org"}
        assert text_config.private_suffixes == set()

    def test_trie_is_frozen(self, text_config):
        trie = compile_ruleset(text_config)
        assert trie.frozen is True

    def test_last_build_set_on_success(self, text_config):
        assert text_config.last_build is None
        compile_ruleset(text_config)
        assert text_config.last_build is not None

    def test_last_build_untouched_on_failure(self, tmp_path):
        config = SuffixListConfig(primary=LocalSource(tmp_path / "missing.dat"))
        with pytest.raises(SuffixListError):
            compile_ruleset(config)
        assert config.last_build is None

    def test_private_rules_excluded_from_trie_when_disabled(self):
        config = SuffixListConfig(disable_private_domains=True)
        config.public_suffixes = {"com"}
        config.private_suffixes = {"blogspot.com"}
        trie = build_trie(config)
        assert trie.suffix_length(["com", "blogspot", "example"]) == 1

    def test_private_rules_included_when_enabled(self):
        config = SuffixListConfig()
        config.public_suffixes = {"com"}
        config.private_suffixes = {"blogspot.com"}
        trie = build_trie(config)
        assert trie.suffix_length(["com", "blogspot", "example"]) == 2
