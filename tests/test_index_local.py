from consultancy_api import index_local


def test_index_file_uploads_text(tmp_path, mocker):
    path = tmp_path / "notes.txt"
    path.write_text("digital transformation notes", encoding="utf-8")
    client = mocker.Mock()
    client.upload_document.return_value = True

    assert index_local.index_file(str(path), client) is True
    client.upload_document.assert_called_once_with("notes.txt", "digital transformation notes")


def test_index_file_skips_empty_text(tmp_path, mocker):
    path = tmp_path / "blank.txt"
    path.write_text("   ", encoding="utf-8")
    client = mocker.Mock()

    assert index_local.index_file(str(path), client) is False
    client.upload_document.assert_not_called()


def test_main_requires_token(monkeypatch, capsys):
    monkeypatch.delenv("API_TOKEN", raising=False)
    assert index_local.main(["a.txt"]) == 1
    assert "Usage" in capsys.readouterr().out


def test_main_reports_unsupported_files(tmp_path, monkeypatch, mocker, capsys):
    monkeypatch.setenv("API_TOKEN", "tok")
    good = tmp_path / "a.txt"
    good.write_text("alpha", encoding="utf-8")
    bad = tmp_path / "b.png"
    bad.write_bytes(b"\x89PNG")
    client_cls = mocker.patch.object(index_local, "ApiClient")
    client_cls.return_value.upload_document.return_value = True

    assert index_local.main([str(good), str(bad)]) == 1

    out = capsys.readouterr().out
    assert f"✅ Uploaded {good}" in out
    assert f"❌ Failed {bad}" in out
    client_cls.return_value.upload_document.assert_called_once_with("a.txt", "alpha")
