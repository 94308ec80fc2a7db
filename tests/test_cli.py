import io
import json

import pytest

from framedump.cli import _line_and_column, create_parser, main
from framedump.core.config import set_config


@pytest.fixture
def dump_file(tmp_path, sample_dump):
    path = tmp_path / "layout.dump"
    path.write_text(sample_dump + "\n", encoding="utf-8")
    return path


def test_parse_prints_canonical_dump(dump_file, sample_dump, capsys):
    assert main(["parse", str(dump_file), "--format", "dump"]) == 0

    assert capsys.readouterr().out.strip() == sample_dump


def test_parse_prints_json(dump_file, capsys):
    assert main(["parse", str(dump_file), "-f", "json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["type"] == "split"
    assert data["children"][0]["windows"] == [0x1400003]


def test_parse_prints_tree(dump_file, capsys):
    assert main(["parse", str(dump_file)]) == 0

    out = capsys.readouterr().out
    assert "split horizontal" in out
    assert "0x1400003" in out
    assert "(empty)" in out


def test_parse_reads_stdin(monkeypatch, sample_dump, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(sample_dump))

    assert main(["parse", "-", "--format", "dump"]) == 0
    assert capsys.readouterr().out.strip() == sample_dump


def test_parse_reports_stale_windows(dump_file, capsys, caplog):
    assert main(["parse", str(dump_file), "--known", "0x1", "--format", "dump"]) == 0

    out = capsys.readouterr().out
    assert out.strip() == "(split horizontal:0.5:1 (clients max:-1) (clients vertical:-1))"
    assert "0x1400003" in caplog.text
    assert "does not exist" in caplog.text


def test_parse_syntax_error_points_at_token(tmp_path, capsys):
    path = tmp_path / "bad.dump"
    path.write_text("(split vertical:0.5:0\n  (clients max:0)\n  (clients tiles:0))\n")

    assert main(["parse", str(path)]) == 1

    err = capsys.readouterr().err
    assert "line 3, column 12" in err
    assert 'got "tiles"' in err
    assert "           ^^^^^" in err


def test_missing_file(tmp_path, capsys):
    assert main(["parse", str(tmp_path / "nope.dump")]) == 1

    assert "Error" in capsys.readouterr().err


def test_tokens_table(dump_file, capsys):
    assert main(["tokens", str(dump_file)]) == 0

    out = capsys.readouterr().out
    assert "LPAREN" in out
    assert "EOF" in out


def test_no_command_prints_help(capsys):
    assert main([]) == 0

    assert "usage: framedump" in capsys.readouterr().out


def test_known_accepts_hex_and_decimal():
    args = create_parser().parse_args(["parse", "x.dump", "--known", "0x10", "17"])

    assert args.known == [16, 17]
    assert args.dump_file == "x.dump"


def test_known_rejects_garbage(capsys):
    with pytest.raises(SystemExit):
        create_parser().parse_args(["parse", "--known", "zz"])


def test_line_and_column():
    source = "ab\ncd\nef"

    assert _line_and_column(source, 0) == (1, 1)
    assert _line_and_column(source, 4) == (2, 2)
    assert _line_and_column(source, len(source)) == (3, 3)


@pytest.mark.parametrize("dump, shown", [("(clients max:0 [/x])", "[/x]"), ("(clients [bold]max:0)", "[bold]max:0")])
def test_tokens_table_shows_bracketed_text_verbatim(tmp_path, capsys, dump, shown):
    path = tmp_path / "odd.dump"
    path.write_text(dump, encoding="utf-8")

    assert main(["tokens", str(path)]) == 0

    assert shown in capsys.readouterr().out


def test_invalid_config_env_is_reported(dump_file, monkeypatch, capsys):
    set_config(None)
    monkeypatch.setenv("FRAMEDUMP_COLOR", "maybe")

    assert main(["parse", str(dump_file)]) == 1

    err = capsys.readouterr().err
    assert "Error:" in err
    assert "FRAMEDUMP_COLOR" in err
