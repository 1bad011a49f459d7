from huffproc.__main__ import default_output, main


def test_default_output_names():
    assert default_output("compress", "notes.txt", ".hf") == "notes.txt.hf"
    assert default_output("decompress", "notes.txt.hf", ".hf") == "notes.txt"
    assert default_output("decompress", "notes.bin", ".hf") == "notes.bin.out"
    assert default_output("decompress", ".hf", ".hf") == ".hf.out"


def test_compress_then_decompress(tmp_path, capsys):
    src = tmp_path / "notes.txt"
    src.write_bytes(b"some notes, some more notes\n" * 20)

    assert main(["compress", str(src)]) == 0
    packed = tmp_path / "notes.txt.hf"
    assert packed.exists()
    assert "notes.txt.hf" in capsys.readouterr().out

    restored = tmp_path / "restored.txt"
    assert main(["decompress", str(packed), str(restored)]) == 0
    assert restored.read_bytes() == src.read_bytes()


def test_config_sets_suffix(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text('compressed_suffix: ".huff"\n')
    src = tmp_path / "data.bin"
    src.write_bytes(bytes(range(50)))

    assert main(["compress", str(src), "--config", str(config)]) == 0
    assert (tmp_path / "data.bin.huff").exists()


def test_bad_input_reports_error(tmp_path, capsys):
    src = tmp_path / "plain.hf"
    src.write_bytes(b"not compressed")

    assert main(["decompress", str(src), str(tmp_path / "plain")]) == 1
    assert "illegal header" in capsys.readouterr().err


def test_failed_decompress_keeps_existing_output(tmp_path, capsys):
    original = tmp_path / "notes.txt"
    original.write_bytes(b"precious original data\n")
    bogus = tmp_path / "notes.txt.hf"
    bogus.write_bytes(b"not compressed at all")

    assert main(["decompress", str(bogus)]) == 1
    assert original.read_bytes() == b"precious original data\n"
    assert "decompress failed" in capsys.readouterr().err


def test_truncated_input_leaves_no_partial_output(tmp_path):
    src = tmp_path / "data.txt"
    src.write_bytes(b"a fairly long line of text to compress\n" * 40)
    packed = tmp_path / "data.txt.hf"
    assert main(["compress", str(src), str(packed)]) == 0
    packed.write_bytes(packed.read_bytes()[:-5])

    restored = tmp_path / "restored.txt"
    assert main(["decompress", str(packed), str(restored)]) == 1
    assert not restored.exists()


def test_missing_input_reports_error(tmp_path, capsys):
    assert main(["compress", str(tmp_path / "absent.txt")]) == 1
    assert "compress failed" in capsys.readouterr().err
    assert not (tmp_path / "absent.txt.hf").exists()


def test_missing_config_reports_error(tmp_path, capsys):
    src = tmp_path / "data.bin"
    src.write_bytes(b"data")
    assert main(["compress", str(src), "--config", str(tmp_path / "absent.yaml")]) == 1
    assert "cannot load config" in capsys.readouterr().err


def test_bad_config_value_reports_error(tmp_path, capsys):
    config = tmp_path / "config.yaml"
    config.write_text('debug_level: "high"\n')
    src = tmp_path / "data.bin"
    src.write_bytes(b"data")
    assert main(["compress", str(src), "--config", str(config)]) == 1
    assert "debug_level" in capsys.readouterr().err
    assert not (tmp_path / "data.bin.hf").exists()
