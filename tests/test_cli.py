"""Tests for the base1024 command line."""
import pytest

from base1024 import config
from base1024.api.cli import create_parser, main
from base1024.core.alphabet import Version
from base1024.core.codec import decode_with_version, encode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(config.VERSION_ENV, raising=False)
    monkeypatch.delenv(config.WRAP_ENV, raising=False)


class TestParser:
    def test_encode_defaults(self):
        args = create_parser().parse_args(["encode"])
        assert args.alphabet is Version.V2
        assert args.wrap == 0
        assert args.input is None

    def test_env_defaults(self, monkeypatch):
        monkeypatch.setenv(config.VERSION_ENV, "1")
        monkeypatch.setenv(config.WRAP_ENV, "12")
        args = create_parser().parse_args(["encode"])
        assert args.alphabet is Version.V1
        assert args.wrap == 12

    def test_flags_override_env(self, monkeypatch):
        monkeypatch.setenv(config.VERSION_ENV, "1")
        args = create_parser().parse_args(["encode", "--alphabet", "2", "-w", "3"])
        assert args.alphabet is Version.V2
        assert args.wrap == 3

    def test_bad_version_is_usage_error(self):
        with pytest.raises(SystemExit) as exc:
            create_parser().parse_args(["encode", "--alphabet", "7"])
        assert exc.value.code == 2

    def test_bad_env_falls_back(self, monkeypatch, capsys):
        monkeypatch.setenv(config.WRAP_ENV, "lots")
        args = create_parser().parse_args(["encode"])
        assert args.wrap == 0
        assert "WARNING" in capsys.readouterr().err

    def test_bad_wrap_env_keeps_version_env(self, monkeypatch, capsys):
        monkeypatch.setenv(config.VERSION_ENV, "1")
        monkeypatch.setenv(config.WRAP_ENV, "lots")
        args = create_parser().parse_args(["encode"])
        assert args.alphabet is Version.V1
        assert args.wrap == 0
        assert config.WRAP_ENV in capsys.readouterr().err

    def test_bad_version_env_keeps_wrap_env(self, monkeypatch):
        monkeypatch.setenv(config.VERSION_ENV, "9")
        monkeypatch.setenv(config.WRAP_ENV, "12")
        args = create_parser().parse_args(["encode"])
        assert args.alphabet is Version.V2
        assert args.wrap == 12


class TestCommands:
    def test_encode_decode_files(self, tmp_path, sample_bytes):
        src = tmp_path / "in.bin"
        enc = tmp_path / "out.txt"
        dec = tmp_path / "back.bin"
        src.write_bytes(sample_bytes)

        assert main(["encode", "--alphabet", "1", "-w", "6", str(src), "-o", str(enc)]) == 0
        text = enc.read_text(encoding="utf-8")
        assert text.replace("\n", "") == encode(sample_bytes, Version.V1)
        assert decode_with_version(text.replace("\n", ""))[0] == sample_bytes

        assert main(["decode", str(enc), "-o", str(dec)]) == 0
        assert dec.read_bytes() == sample_bytes

    def test_decode_error(self, tmp_path, capsys):
        bad = tmp_path / "bad.txt"
        bad.write_text("\U0001F300\U0001F300", encoding="utf-8")
        assert main(["decode", str(bad), "-o", str(tmp_path / "x.bin")]) == 1
        assert "ERROR" in capsys.readouterr().err

    def test_failed_decode_writes_no_file(self, tmp_path, capsys):
        """A valid first block followed by a bad symbol leaves nothing behind."""
        bad = tmp_path / "bad.txt"
        bad.write_text("\U0001F300" * 4 + "A", encoding="utf-8")
        out = tmp_path / "x.bin"
        assert main(["decode", str(bad), "-o", str(out)]) == 1
        assert not out.exists()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["bad.txt"]

    def test_failed_decode_keeps_existing_file(self, tmp_path):
        bad = tmp_path / "bad.txt"
        bad.write_text("\U0001F300" * 4 + "A", encoding="utf-8")
        out = tmp_path / "x.bin"
        out.write_bytes(b"previous")
        assert main(["decode", str(bad), "-o", str(out)]) == 1
        assert out.read_bytes() == b"previous"

    def test_failed_decode_to_stdout_writes_nothing(self, tmp_path, capsys):
        bad = tmp_path / "bad.txt"
        bad.write_text("\U0001F300" * 4 + "\U0001F300", encoding="utf-8")
        assert main(["decode", str(bad)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "ERROR" in captured.err

    @pytest.mark.parametrize("command", ["encode", "decode"])
    def test_missing_input(self, tmp_path, capsys, command):
        missing = tmp_path / "missing.bin"
        assert main([command, str(missing), "-o", str(tmp_path / "o")]) == 1
        err = capsys.readouterr().err
        assert err.startswith("ERROR: ")
        assert "missing.bin" in err

    @pytest.mark.parametrize("command", ["encode", "decode"])
    def test_unwritable_output(self, tmp_path, capsys, command):
        src = tmp_path / "in"
        src.write_text(encode(b"hello"), encoding="utf-8")
        out = tmp_path / "no-such-dir" / "out"
        assert main([command, str(src), "-o", str(out)]) == 1
        assert "ERROR" in capsys.readouterr().err
        assert not out.parent.exists()

    def test_decode_not_utf8(self, tmp_path, capsys):
        bad = tmp_path / "bad.txt"
        bad.write_bytes(b"\xff\xfe\xfd")
        assert main(["decode", str(bad), "-o", str(tmp_path / "x.bin")]) == 1
        assert "UTF-8" in capsys.readouterr().err

    def test_verbose_logs_version(self, tmp_path, capsys):
        enc = tmp_path / "in.txt"
        enc.write_text(encode(b"\x08\x40", Version.V1), encoding="utf-8")
        assert main(["-v", "decode", str(enc), "-o", str(tmp_path / "o.bin")]) == 0
        assert "V1" in capsys.readouterr().err

    def test_alphabet_listing(self, capsys):
        assert main(["alphabet", "--alphabet", "1"]) == 0
        out = capsys.readouterr().out
        assert "   0  U+1F300" in out
        assert "V1 only" in out
        assert "fill  U+02615" in out
        assert "last3  U+1F64B" in out
        assert "4-byte block, last bits 11" in out

    def test_no_command(self, capsys):
        assert main([]) == 2
        assert "usage" in capsys.readouterr().out
