"""Tests for the slash command tokenizer and parser."""

import pytest

from slash_dispatch.core.commands.parser import ParsedCommand, parse_command, tokenize


class TestTokenize:
    """Tests for tokenize function."""

    def test_tokenize_quoted_and_named_args(self):
        """Quoted spans and key="value" pairs stay in one token."""
        line = r'a b=c "d e" f-g="h i" "j \"k\"" l="m \"n\" o"'
        print(f"\n INPUT: {line!r}")
        result = tokenize(line)
        print(f" OUTPUT: {result}")
        assert result == [
            "a",
            "b=c",
            '"d e"',
            'f-g="h i"',
            r'"j \"k\""',
            r'l="m \"n\" o"',
        ]

    def test_tokenize_malformed_quotes(self):
        """Unterminated quotes fall back to whitespace splitting."""
        line = r'test arg named= quoted arg" named-arg="with \"quoted value'
        print(f"\n INPUT: {line!r}")
        result = tokenize(line)
        print(f" OUTPUT: {result}")
        assert result == [
            "test",
            "arg",
            "named=",
            "quoted",
            'arg"',
            'named-arg="with',
            r'\"quoted',
            "value",
        ]

    @pytest.mark.parametrize(
        "line",
        [
            "deploy",
            "deploy production now",
            "  deploy   with   extra   spaces  ",
            "rebase\tmain",
        ],
    )
    def test_tokenize_matches_whitespace_split(self, line):
        """Without quotes or '=' tokenizing equals splitting on whitespace."""
        assert tokenize(line) == line.split()

    def test_tokenize_blank_line(self):
        """Blank input yields no tokens."""
        assert tokenize("") == []
        assert tokenize("   ") == []

    def test_tokenize_keeps_quotes(self):
        """Wrapping quotes are not stripped at tokenization time."""
        assert tokenize('"hello world"') == ['"hello world"']


class TestParseCommand:
    """Tests for parse_command function."""

    def test_parse_basic_command(self):
        """Parse simple command with no args."""
        print("\n INPUT: '/deploy'")
        result = parse_command("/deploy")
        print(f" OUTPUT: {result}")
        assert result == ParsedCommand(name="deploy", tokens=["deploy"])
        assert result.args == []

    def test_parse_command_with_args(self):
        """Parse command with arguments."""
        print("\n INPUT: '/test branch=main arg1 dry-run'")
        result = parse_command("/test branch=main arg1 dry-run")
        print(f" OUTPUT: {result}")
        assert result is not None
        assert result.name == "test"
        assert result.args == ["branch=main", "arg1", "dry-run"]

    def test_parse_uses_first_line_only(self):
        """Only the first line of the comment is parsed."""
        result = parse_command("/deploy prod\r\nsome more text\n/other")
        assert result == ParsedCommand(name="deploy", tokens=["deploy", "prod"])

    def test_parse_trims_first_line(self):
        """Surrounding whitespace on the first line is ignored."""
        result = parse_command("   /deploy   \nbody")
        assert result is not None
        assert result.name == "deploy"

    def test_parse_preserves_case(self):
        """Command names are matched exactly, so case is preserved."""
        result = parse_command("/Deploy")
        assert result is not None
        assert result.name == "Deploy"

    def test_parse_non_command_returns_none(self):
        """Non-command text returns None."""
        print("\n INPUT: 'hello world'")
        result = parse_command("hello world")
        print(f" OUTPUT: {result}")
        assert result is None

    def test_parse_command_on_second_line_returns_none(self):
        """A command that is not on the first line is ignored."""
        assert parse_command("LGTM\n/deploy") is None

    def test_parse_empty_string(self):
        """Empty string returns None."""
        assert parse_command("") is None

    def test_parse_slash_only(self):
        """Slash only returns None."""
        assert parse_command("/") is None
        assert parse_command("  /  \nbody") is None
