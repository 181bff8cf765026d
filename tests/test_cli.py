# =============================================================================
# test_cli.py - bologna Command Tests
# =============================================================================
# Tests for the click command wrapping the top-level driver.
# =============================================================================

import io
import warnings
from pathlib import Path

from click.testing import CliRunner

from bologna import __version__
from bologna.cli.errors import ExitCode
from bologna.cli.repl import main


class TestReadLoop:
    """Test reading constructs from stdin and files."""

    def test_reports_each_construct(self):
        runner = CliRunner()
        result = runner.invoke(main, [], input="def f(x) x\nextern g()\n1+2\n")
        assert result.exit_code == 0, result.output
        assert "Parsed a function definition." in result.output
        assert "Parsed an extern" in result.output
        assert "Parsed a top-level expr" in result.output

    def test_parse_error_does_not_abort(self):
        runner = CliRunner()
        result = runner.invoke(main, [], input="(1\n2\n")
        assert result.exit_code == ExitCode.SUCCESS
        assert "expected ')'" in result.output
        assert "Parsed a top-level expr" in result.output

    def test_stdin_read_without_deprecation_warning(self):
        runner = CliRunner()
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            result = runner.invoke(main, [], input="1\n")

        assert result.exit_code == 0, result.output
        assert not [w for w in caught if issubclass(w.category, DeprecationWarning)
                    and "get_text_stream" in str(w.message)]

    def test_no_banner_when_not_a_terminal(self):
        runner = CliRunner()
        result = runner.invoke(main, [], input="1\n")
        assert "Bologna v" not in result.output

    def test_ast_numbers_are_exact(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--ast"], input="1234567 + 0.1234567\n")
        assert result.exit_code == 0, result.output
        assert "Number 1234567\n" in result.output
        assert "Number 0.1234567\n" in result.output

    def test_input_file_with_ast(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.bo").write_text("# add two numbers\ndef add(a b) a + b\n")
            result = runner.invoke(main, ["--ast", "prog.bo"])

        assert result.exit_code == 0, result.output
        assert "Function add(a, b)" in result.output
        assert "Binary '+'" in result.output

    def test_error_names_input_file(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.bo").write_text("extern (x)\n")
            result = runner.invoke(main, ["bad.bo"])

        assert "bad.bo:1:8: error: expected function name in prototype" in result.output

    def test_missing_input_file(self):
        runner = CliRunner()
        result = runner.invoke(main, ["does-not-exist.bo"])
        assert result.exit_code == 2


class TestOptions:
    """Test command-line options."""

    def test_tokens(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--tokens"], input="a+ 1")
        assert result.exit_code == 0, result.output
        assert "Token(IDENTIFIER, 'a', 1:1)" in result.output
        assert "Token(SYMBOL, '+', 1:2)" in result.output
        assert "Token(WHITESPACE, ' ', 1:3)" in result.output
        assert "Token(NUMBER, 1.0, 1:4)" in result.output
        assert "Token(EOF, 1:5)" in result.output

    def test_tokens_reports_bad_number(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--tokens"], input="1.2.3 x")
        assert result.exit_code == 0
        assert "invalid numeric literal '1.2.3'" in result.output
        assert "Token(IDENTIFIER, 'x', 1:7)" in result.output

    def test_binop(self):
        runner = CliRunner()
        result = runner.invoke(main, ["-b", "/=40", "--ast"], input="8 / 2\n")
        assert result.exit_code == 0, result.output
        assert result.output.count("Parsed a top-level expr") == 1
        assert "Binary '/'" in result.output

    def test_invalid_binop(self):
        runner = CliRunner()
        result = runner.invoke(main, ["-b", "a=3"], input="")
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Invalid value" in result.output
        assert "'a'" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TerminalInput(io.BytesIO):
    """Standard input that claims to be a terminal."""

    def isatty(self) -> bool:
        return True


class TestInteractive:
    """Test the banner and prompt shown on a terminal."""

    def test_banner_and_prompt(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--prompt", "bo> "], input=TerminalInput(b"1\n2\n"))
        assert result.exit_code == 0, result.output
        assert result.output.startswith(f"Bologna v{__version__}\n")
        # Once per construct, plus the prompt that meets end of input
        assert result.output.count("bo> ") == 3
        assert result.output.count("Parsed a top-level expr") == 2

    def test_newline_after_end_of_input(self):
        runner = CliRunner()
        result = runner.invoke(main, [], input=TerminalInput(b"1\n"))
        assert result.output.endswith("> \n")

    def test_no_prompt(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--no-prompt"], input=TerminalInput(b"1\n"))
        assert result.exit_code == 0, result.output
        assert "Bologna v" not in result.output
        assert ">" not in result.output
        assert result.output == "Parsed a top-level expr\n"
