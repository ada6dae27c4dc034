import pytest

from hamlab.cli import main, parse_arguments


def test_run_command_writes_decoded_file(tmp_path):
    source = tmp_path / "data.txt"
    source.write_bytes(b"The quick brown fox")
    out = tmp_path / "out"

    code = main(["run", str(source), "--seed", "4", "--probability", "0.2", "--data-dir", str(out)])

    assert code == 0
    assert (out / "encoded.txt").stat().st_size == 2 * len(b"The quick brown fox")
    assert (out / "decoded.txt").read_bytes() == b"The quick brown fox"


def test_parse_defaults(tmp_path):
    args = parse_arguments(["run", str(tmp_path / "x")])
    assert args.command == "run"
    assert args.probability == 0.1
    assert args.double_flip == 0.0


@pytest.mark.parametrize("flag", ["--probability", "--double-flip"])
@pytest.mark.parametrize("value", ["2", "-0.1", "often"])
def test_out_of_range_probability_is_usage_error(tmp_path, capsys, flag, value):
    with pytest.raises(SystemExit) as excinfo:
        main(["run", str(tmp_path / "x"), flag, value])
    assert excinfo.value.code == 2
    assert f"argument {flag}" in capsys.readouterr().err
