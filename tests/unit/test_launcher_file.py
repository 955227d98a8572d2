from __future__ import annotations

from pathlib import Path

import pytest

from webapp_desktop.core.errors import LauncherParseError
from webapp_desktop.core.models import LauncherEntry
from webapp_desktop.desktop import launcher_file
from webapp_desktop.desktop.config import IntegrationSettings


def _settings(tmp_path: Path) -> IntegrationSettings:
    return IntegrationSettings(
        applications_dir=tmp_path / "applications",
        staging_dir=tmp_path / "Desktop",
        icons_dir=tmp_path / "icons",
    )


def test_build_writes_fixed_fields(tmp_path: Path) -> None:
    entry = LauncherEntry(
        app_id="abc",
        display_name="Example",
        exec_command="https://example.com",
        description="An example app",
        icon_ref="chrome-abc",
    )
    text = launcher_file.build(entry, _settings(tmp_path))
    lines = text.splitlines()

    assert lines[0] == "[Desktop Entry]"
    assert "Name=Example" in lines
    assert "GenericName=Example" in lines
    assert "Comment=An example app" in lines
    assert 'Exec=chromium "--app=https://example.com"' in lines
    assert "Terminal=false" in lines
    assert "Categories=Network;WebBrowser;" in lines
    assert "Type=Application" in lines
    assert "StartupNotify=true" in lines
    assert "StartupWMClass=chrome.google.com__webstore_category_home" in lines
    assert "Icon=chrome-abc" in lines


def test_build_omits_empty_comment_and_icon(tmp_path: Path) -> None:
    entry = LauncherEntry(app_id="abc", display_name="Example", exec_command="https://example.com")
    text = launcher_file.build(entry, _settings(tmp_path))
    assert "Comment=" not in text
    assert "Icon=" not in text


def test_build_uses_configured_launcher_command(tmp_path: Path) -> None:
    settings = _settings(tmp_path)
    settings.launcher_command = "google-chrome"
    entry = LauncherEntry(app_id="abc", display_name="Example", exec_command="https://example.com")
    assert 'Exec=google-chrome "--app=https://example.com"' in launcher_file.build(entry, settings)


def test_parse_reads_back_built_entry(tmp_path: Path) -> None:
    entry = LauncherEntry(
        app_id="abc",
        display_name="Example",
        exec_command="https://example.com",
        description="Desc",
        icon_ref="/tmp/icon.png",
    )
    path = tmp_path / "chrome-abc-Default.desktop"
    parsed = launcher_file.parse(launcher_file.build(entry, _settings(tmp_path)), path)

    assert parsed.app_id == "abc"
    assert parsed.display_name == "Example"
    assert parsed.exec_command == 'chromium "--app=https://example.com"'
    assert parsed.description == "Desc"
    assert parsed.icon_ref == "/tmp/icon.png"
    assert parsed.file_path == path
    assert parsed.basename == path.name


def test_parse_accepts_leading_shebang_line() -> None:
    text = "#!/usr/bin/env xdg-open\n[Desktop Entry]\nName=App\nExec=chromium --app=https://a.test\n"
    parsed = launcher_file.parse(text)
    assert parsed.display_name == "App"
    assert parsed.icon_ref == ""


@pytest.mark.parametrize(
    "text",
    [
        "#!/usr/bin/env xdg-open[{",
        "[Other Group]\nName=x\n",
        "[Desktop Entry]\nExec=chromium\n",
        "not a key file at all",
    ],
)
def test_parse_rejects_invalid_text(text: str) -> None:
    with pytest.raises(LauncherParseError):
        launcher_file.parse(text)


def test_set_icon_replaces_only_icon_key() -> None:
    text = "#!/usr/bin/env xdg-open\n[Desktop Entry]\nName=App\nExec=chromium\nIcon=small\n"
    updated = launcher_file.set_icon(text, "chrome-abc")
    parsed = launcher_file.parse(updated)
    assert parsed.icon_ref == "chrome-abc"
    assert parsed.display_name == "App"
    assert "#!/usr/bin/env xdg-open" in updated


@pytest.mark.parametrize(
    ("basename", "app_id"),
    [
        ("chrome-abc-Default.desktop", "abc"),
        ("chrome-abc.desktop", "abc"),
        ("chrome-abc", "abc"),
    ],
)
def test_app_id_from_basename(basename: str, app_id: str) -> None:
    assert launcher_file.app_id_from_basename(basename) == app_id


def test_launcher_basename_round_trip() -> None:
    name = launcher_file.launcher_basename("xyz")
    assert name == "chrome-xyz-Default.desktop"
    assert launcher_file.is_launcher_name(name)
    assert not launcher_file.is_launcher_name("firefox.desktop")


def test_entry_basename_matches_launcher_basename() -> None:
    entry = LauncherEntry(app_id="xyz", display_name="X", exec_command="https://x.example")
    assert entry.basename == launcher_file.launcher_basename("xyz")
