"""Tests for the command-line interface."""

import logging

import pytest

from simtext import cli


@pytest.fixture
def corpus(tmp_path):
    def write(text):
        path = tmp_path / "text.txt"
        path.write_text(text, encoding="utf-8")
        return path
    return write


def test_generates_text(corpus, capsys):
    path = corpus("The cat sat. The dog ran, fast.\nA cat ran.\n")
    status = cli.main(["--data", str(path), "--seed", "1", "--soft-limit", "5"])
    out = capsys.readouterr().out
    assert status == 0
    assert out.endswith(".\n")
    assert " ." not in out


def test_missing_corpus(tmp_path, caplog, capsys):
    with caplog.at_level(logging.ERROR):
        status = cli.main(["--data", str(tmp_path / "absent.txt")])
    assert status == 1
    assert "Can't open the file specified" in caplog.text
    assert capsys.readouterr().out == ""


def test_empty_corpus(corpus, caplog, capsys):
    path = corpus("  \n\n— —\n")
    with caplog.at_level(logging.INFO):
        status = cli.main(["--data", str(path)])
    assert status == 0
    assert "Got no parsable data" in caplog.text
    assert capsys.readouterr().out == ""


def test_dead_end(corpus, caplog):
    path = corpus("a b")
    with caplog.at_level(logging.ERROR):
        status = cli.main(["--data", str(path), "--soft-limit", "3"])
    assert status == 1
    assert "Can't find next lexeme for 'b'" in caplog.text


def test_dead_end_restart(corpus, capsys):
    path = corpus("a b")
    status = cli.main([
        "--data", str(path), "--soft-limit", "3", "--on-dead-end", "restart",
    ])
    assert status == 0
    assert capsys.readouterr().out == "a b. a b.\n"


def test_max_lexemes(corpus, capsys):
    path = corpus("a b .")
    status = cli.main([
        "--data", str(path), "--soft-limit", "50", "--max-lexemes", "4",
    ])
    assert status == 0
    assert capsys.readouterr().out == "a b. a\n"


@pytest.mark.parametrize("argv", [
    ["--soft-limit", "-1"],
    ["--max-lexemes", "0"],
    ["--on-dead-end", "skip"],
])
def test_rejects_bad_arguments(argv):
    with pytest.raises(SystemExit):
        cli.main(argv)


def test_non_utf8_corpus(tmp_path, capsys):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9 ok.\n")
    status = cli.main(["--data", str(path), "--seed", "1", "--soft-limit", "2"])
    assert status == 0
    assert capsys.readouterr().out == "caf ok. caf ok.\n"


def test_read_chunks_streams(corpus):
    """Chunks are read lazily, one at a time."""
    chunks = cli.read_chunks(corpus("one two\nthree\n"))
    assert next(chunks) == "one"
    assert list(chunks) == ["two", "three"]


def test_read_chunks_missing_file_raises_on_iteration(tmp_path):
    chunks = cli.read_chunks(tmp_path / "absent.txt")
    with pytest.raises(OSError):
        next(chunks)
