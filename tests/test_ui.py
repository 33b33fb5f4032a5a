from rustlings import ui


def test_no_emoji_follows_environment(monkeypatch):
    monkeypatch.setenv("NO_EMOJI", "1")
    assert ui.no_emoji() is True
    monkeypatch.delenv("NO_EMOJI")
    assert ui.no_emoji() is False


def test_warn_without_emoji(monkeypatch, capsys):
    monkeypatch.setenv("NO_EMOJI", "1")
    line = ui.warn("Ran example with errors")
    assert line == "! Ran example with errors"
    assert capsys.readouterr().out.strip() == line


def test_success_without_emoji(monkeypatch, capsys):
    monkeypatch.setenv("NO_EMOJI", "1")
    line = ui.success("Successfully ran example")
    assert line == "✓ Successfully ran example"
    assert capsys.readouterr().out.strip() == line


def test_warn_with_emoji(monkeypatch, capsys):
    monkeypatch.delenv("NO_EMOJI", raising=False)
    line = ui.warn("Compilation failed")
    assert line.startswith("⚠️")
    assert line.endswith(" Compilation failed")
    assert "Compilation failed" in capsys.readouterr().out


def test_success_with_emoji(monkeypatch, capsys):
    monkeypatch.delenv("NO_EMOJI", raising=False)
    line = ui.success("done")
    assert line == "✅ done"
    assert "✅ done" in capsys.readouterr().out