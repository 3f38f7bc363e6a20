# =============================================================================
# test_cli.py - Command-Line Interface Tests
# =============================================================================
# Tests for the assem2mac, cleanmac and mac2linemac commands.
#
# Test coverage includes:
#   - Successful runs and the files they write
#   - Exit status 1 for usage, I/O and assembly errors
#   - --help and --version
# =============================================================================

import pytest
from click.testing import CliRunner

from ssbc_sdk import __version__
from ssbc_sdk.cli.assem2mac import main as assem2mac
from ssbc_sdk.cli.cleanmac import main as cleanmac
from ssbc_sdk.cli.mac2linemac import main as mac2linemac


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def program(tmp_path):
    """A small valid source file."""
    path = tmp_path / "prog.asm"
    path.write_text("// demo\n#top\n    pushimm 5\n    pushext @top\n")
    return path


# =============================================================================
# assem2mac Tests
# =============================================================================

class TestAssem2mac:
    """Test the assembler command."""

    def test_help(self, runner):
        """--help describes the command."""
        result = runner.invoke(assem2mac, ["--help"])
        assert result.exit_code == 0
        assert "Assemble SSBC source code" in result.output

    def test_version(self, runner):
        """--version prints the package version."""
        result = runner.invoke(assem2mac, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_basic_assembly(self, runner, program, tmp_path):
        """Assembly writes the machine-code file."""
        output = tmp_path / "prog.mac"
        result = runner.invoke(assem2mac, ["-i", str(program), "-o", str(output)])
        assert result.exit_code == 0
        assert output.read_text() == (
            "; demo\n"
            "00000010 pushimm #top\n"
            "00000101 5\n"
            "00000011 pushext\n"
            "00000000 @top.H\n"
            "00000000 @top.L\n"
        )

    def test_hex_line_number(self, runner, program, tmp_path):
        """--hex-line-number prefixes addresses."""
        output = tmp_path / "prog.mac"
        result = runner.invoke(
            assem2mac, ["-i", str(program), "-o", str(output), "--hex-line-number"]
        )
        assert result.exit_code == 0
        assert "0x0004 00000000 @top.L" in output.read_text()

    def test_add_noops(self, runner, program, tmp_path):
        """--add-noops turns comment lines into noops."""
        output = tmp_path / "prog.mac"
        result = runner.invoke(
            assem2mac, ["-i", str(program), "-o", str(output), "--add-noops"]
        )
        assert result.exit_code == 0
        assert output.read_text().startswith("00000000 ; demo\n")

    def test_symbols(self, runner, program, tmp_path):
        """-s writes the symbol table."""
        output = tmp_path / "prog.mac"
        symbols = tmp_path / "prog.sym"
        result = runner.invoke(
            assem2mac, ["-i", str(program), "-o", str(output), "-s", str(symbols)]
        )
        assert result.exit_code == 0
        assert "top 0x0000" in symbols.read_text()

    def test_verbose(self, runner, program, tmp_path):
        """-v reports progress."""
        output = tmp_path / "prog.mac"
        result = runner.invoke(assem2mac, ["-v", "-i", str(program), "-o", str(output)])
        assert result.exit_code == 0
        assert "Wrote 5 bytes" in result.output

    def test_missing_output_option(self, runner, program):
        """Usage errors exit with status 1."""
        result = runner.invoke(assem2mac, ["-i", str(program)])
        assert result.exit_code == 1
        assert "Missing option" in result.output

    def test_missing_input_file(self, runner, tmp_path):
        """A missing input file is a usage error."""
        result = runner.invoke(
            assem2mac, ["-i", str(tmp_path / "nope.asm"), "-o", str(tmp_path / "x.mac")]
        )
        assert result.exit_code == 1

    def test_assembly_error(self, runner, tmp_path):
        """Assembly errors exit with status 1 and write no output."""
        source = tmp_path / "bad.asm"
        source.write_text("halt\npushimm 0x1FF\n")
        output = tmp_path / "bad.mac"
        result = runner.invoke(assem2mac, ["-i", str(source), "-o", str(output)])
        assert result.exit_code == 1
        assert ":2:" in result.output
        assert "pushimm 0x1FF" in result.output
        assert not output.exists()

    def test_unwritable_symbols_leave_no_output(self, runner, program, tmp_path):
        """A failed symbol write leaves no machine-code file behind."""
        output = tmp_path / "prog.mac"
        symbols = tmp_path / "missing_dir" / "prog.sym"
        result = runner.invoke(
            assem2mac, ["-i", str(program), "-o", str(output), "-s", str(symbols)]
        )
        assert result.exit_code == 1
        assert not output.exists()

    def test_unparseable_operand(self, runner, tmp_path):
        """Unusual blank characters are reported as a syntax error with status 1."""
        source = tmp_path / "odd.asm"
        source.write_text("pushimm \xa0\n", encoding="utf-8")
        output = tmp_path / "odd.mac"
        result = runner.invoke(assem2mac, ["-i", str(source), "-o", str(output)])
        assert result.exit_code == 1
        assert "could not parse" in result.output
        assert "Internal error" not in result.output

    def test_unwritable_output(self, runner, program, tmp_path):
        """An output path that cannot be written is an error."""
        output = tmp_path / "missing_dir" / "prog.mac"
        result = runner.invoke(assem2mac, ["-i", str(program), "-o", str(output)])
        assert result.exit_code == 1
        assert "Error" in result.output


# =============================================================================
# cleanmac Tests
# =============================================================================

class TestCleanmac:
    """Test the annotation stripper."""

    def test_stdin_to_stdout(self, runner):
        """With no options, input and output are the standard streams."""
        result = runner.invoke(cleanmac, [], input="; x\n00000001 halt #a\n")
        assert result.exit_code == 0
        assert result.output == "00000001\n"

    def test_files(self, runner, tmp_path):
        """-i and -o name files."""
        source = tmp_path / "prog.mac"
        source.write_text("00000010 pushimm\n00000101 5\n")
        output = tmp_path / "prog.bin"
        result = runner.invoke(cleanmac, ["-i", str(source), "-o", str(output)])
        assert result.exit_code == 0
        assert output.read_text() == "00000010\n00000101\n"

    def test_missing_input(self, runner, tmp_path):
        """An unreadable input file exits with status 1."""
        result = runner.invoke(cleanmac, ["-i", str(tmp_path / "nope.mac")])
        assert result.exit_code == 1


# =============================================================================
# mac2linemac Tests
# =============================================================================

class TestMac2linemac:
    """Test the address annotator."""

    def test_annotates(self, runner, tmp_path):
        """Byte lines get address and hex columns."""
        source = tmp_path / "prog.bin"
        source.write_text("00000010\n00000101\n")
        output = tmp_path / "prog.lst"
        result = runner.invoke(mac2linemac, ["-i", str(source), "-o", str(output)])
        assert result.exit_code == 0
        assert output.read_text() == "0000 02 00000010\n0001 05 00000101\n"

    def test_requires_output(self, runner, tmp_path):
        """-o is required."""
        source = tmp_path / "prog.bin"
        source.write_text("00000010\n")
        result = runner.invoke(mac2linemac, ["-i", str(source)])
        assert result.exit_code == 1
