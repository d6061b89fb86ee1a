def test_encode_to_file_and_decode_roundtrip(tmp_path, m, capsys):
    out = tmp_path / "values.bin"
    data = m.encode_values(
        ["int:-1", "double:1.5", "string:AB", "vector3:1,2,3"],
        str(out),
        exact_zero=False,
    )
    assert out.read_bytes() == data
    assert data[:4] == b"\xff\xff\xff\xff"

    values = m.decode_values(
        str(out), ["int", "double", "string", "vector3", "byte"], is_hex=False
    )
    assert values == [0xFFFFFFFF, 1.5, "AB", (1.0, 2.0, 3.0), None]
    printed = capsys.readouterr().out
    assert "string: 'AB'" in printed
    assert "byte: <end of buffer>" in printed


def test_encode_prints_hex_without_output(m, capsys):
    m.main(["encode", "string:AB"])
    assert capsys.readouterr().out.strip() == "01 41 01 42 00"


def test_exact_zero_flag(m, capsys):
    m.main(["e", "double:0.005", "--exact-zero"])
    exact = capsys.readouterr().out.strip()
    m.main(["e", "double:0.005"])
    lossy = capsys.readouterr().out.strip()
    assert lossy == "00 00 00 00 00 00 00 00"
    assert exact != lossy


def test_decode_hex_source(m, capsys):
    m.main(["decode", "00 02 3f f8 00 00 00 00 00 00", "--hex", "-t", "short", "double"])
    assert capsys.readouterr().out.splitlines() == ["short: 2", "double: 1.5"]


def test_user_errors_are_reported(tmp_path, m, capsys):
    assert m.encode_values(["nope:1"], None, exact_zero=False) is None
    assert m.decode_values(str(tmp_path / "missing.bin"), ["int"], False) == []
    assert m.decode_values("zz", ["int"], True) == []
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert all(line.startswith("[!]") for line in lines)
