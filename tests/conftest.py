"""Core test fixtures for Duke Script tests."""

import pytest

from src.duke_script.scanner import CommandLine, SourceCursor, read_command_line


@pytest.fixture
def command_line():
    """Factory building a CommandLine from source text like "//DELAY 5"."""

    def _make(source: str) -> CommandLine:
        line = read_command_line(SourceCursor(source))
        assert line is not None, f"No command in {source!r}"
        return line

    return _make


@pytest.fixture
def sample_source() -> str:
    """A small script file exercising most constructs."""
    return (
        "Intro\n"
        "This line is prose and gets ignored.\n"
        "//GETPAL MYPAL.PAL\n"
        "//LOADRAW INTRO.MNI\n"
        "//FADEIN\n"
        "//DELAY 50\n"
        "//CENTERWINDOW 5 6 20\n"
        "//CWTEXT Hello\n"
        "//SKLINE\n"
        "//CWTEXT Bye\n"
        "//WAIT\n"
        "//FADEOUT\n"
        "//END\n"
        "\n"
        "Main_Menu\n"
        "//MENU 2\n"
        "//PAGESSTART\n"
        "//XYTEXT 4 5 First page\n"
        "//APAGE\n"
        "//PAK\n"
        "//PAGESEND\n"
        "//WAIT\n"
        "//END\n"
    )


@pytest.fixture
def sample_file(tmp_path, sample_source):
    """The sample source written to disk with latin-1 encoding."""
    path = tmp_path / "TEXT.MNI"
    path.write_bytes(sample_source.encode("latin-1"))
    return path
