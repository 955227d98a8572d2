from __future__ import annotations

from pathlib import Path

from webapp_desktop.desktop import launcher_file
from webapp_desktop.desktop.config import IntegrationSettings
from webapp_desktop.desktop.integration import WebappIntegration
from webapp_desktop.mock import (
    MemoryFavoritesPreference,
    MockIconTheme,
    MockImageCodec,
    mock_data_url,
    mock_image,
)


def _integration(
    tmp_path: Path, favorites: list[str] | None = None
) -> tuple[WebappIntegration, MemoryFavoritesPreference]:
    settings = IntegrationSettings(
        applications_dir=tmp_path / "applications",
        staging_dir=tmp_path / "Desktop",
        icons_dir=tmp_path / "icons",
    )
    pref = MemoryFavoritesPreference(favorites)
    integration = WebappIntegration(
        settings, preference=pref, codec=MockImageCodec(), theme=MockIconTheme()
    )
    return integration, pref


def test_install_writes_launcher_icon_and_favorite(tmp_path: Path) -> None:
    integration, pref = _integration(tmp_path, favorites=["firefox.desktop"])

    integration.install("abc", "Example", "An example app", "https://e.com", mock_data_url(48, 48))

    path = tmp_path / "applications" / "chrome-abc-Default.desktop"
    entry = launcher_file.parse(path.read_text(), path)
    assert entry.app_id == "abc"
    assert entry.display_name == "Example"
    assert entry.description == "An example app"
    assert entry.exec_command == 'chromium "--app=https://e.com"'
    assert entry.icon_ref == "chrome-abc"
    assert (tmp_path / "icons" / "chrome-abc.png").read_bytes() == mock_image(48, 48)
    assert pref.read() == ["firefox.desktop", "chrome-abc-Default.desktop"]


def test_install_twice_pins_once(tmp_path: Path) -> None:
    integration, pref = _integration(tmp_path)

    integration.install("abc", "Example", None, "https://e.com", "")
    integration.install("abc", "Example v2", None, "https://e.com", "")

    text = (tmp_path / "applications" / "chrome-abc-Default.desktop").read_text()
    assert "Name=Example v2" in text
    assert pref.read() == ["chrome-abc-Default.desktop"]
    assert pref.writes == 1


def test_install_without_icon_omits_icon_key(tmp_path: Path) -> None:
    integration, _ = _integration(tmp_path)
    integration.install("abc", "Example", "", "https://e.com", "https://e.com/favicon.ico")

    text = (tmp_path / "applications" / "chrome-abc-Default.desktop").read_text()
    assert "Icon=" not in text
    assert "Comment=" not in text
    assert not (tmp_path / "icons").exists()


def test_undecodable_install_icon_uses_fallback(tmp_path: Path) -> None:
    integration, _ = _integration(tmp_path)
    integration.install("abc", "Example", None, "https://e.com", "data:image/png;base64,AAAA")

    text = (tmp_path / "applications" / "chrome-abc-Default.desktop").read_text()
    assert "Icon=chromium-browser" in text


def test_invalid_arguments_are_a_no_op(tmp_path: Path) -> None:
    integration, pref = _integration(tmp_path)

    integration.install(42, "Example", None, "https://e.com", "")
    integration.install("abc", None, None, "https://e.com", "")
    integration.install("abc", "Example", None, "", "")
    integration.install("../escape", "Example", None, "https://e.com", "")
    integration.uninstall(None)
    integration.uninstall("..")

    assert not (tmp_path / "applications").exists()
    assert pref.writes == 0


def test_uninstall_restores_previous_state(tmp_path: Path) -> None:
    before = ["firefox.desktop", "org.gnome.Nautilus.desktop"]
    integration, pref = _integration(tmp_path, favorites=before)

    integration.install("abc", "Example", None, "https://e.com", mock_data_url(48, 48))
    integration.set_icon_for_url("https://e.com", mock_data_url(256, 256))
    integration.uninstall("abc")

    assert pref.read() == before
    assert list((tmp_path / "applications").iterdir()) == []
    assert [p for p in (tmp_path / "icons").rglob("*") if p.is_file()] == []


def test_uninstall_of_unknown_app_changes_nothing(tmp_path: Path) -> None:
    integration, pref = _integration(tmp_path, favorites=["firefox.desktop"])
    integration.uninstall("never-installed")

    assert pref.read() == ["firefox.desktop"]
    assert pref.writes == 0


def test_set_icon_for_url_updates_matching_launchers(tmp_path: Path) -> None:
    integration, _ = _integration(tmp_path)
    integration.install("abc", "Example", None, "https://e.com", "")
    integration.install("other", "Other", None, "https://other.example", "")

    saved = integration.set_icon_for_url("https://e.com", mock_data_url(300, 300))

    icon = tmp_path / "icons" / "hicolor" / "256x256" / "apps" / "chrome-abc.png"
    assert saved == [icon]
    assert icon.read_bytes() == mock_image(256, 256)
    launcher = tmp_path / "applications" / "chrome-abc-Default.desktop"
    assert launcher_file.parse(launcher.read_text()).icon_ref == "chrome-abc"
    other = tmp_path / "applications" / "chrome-other-Default.desktop"
    assert "Icon=" not in other.read_text()


def test_set_icon_for_url_rejects_bad_input(tmp_path: Path) -> None:
    integration, _ = _integration(tmp_path)
    integration.install("abc", "Example", None, "https://e.com", "")

    assert integration.set_icon_for_url(None, mock_data_url(64, 64)) == []
    assert integration.set_icon_for_url("https://e.com", "not a data url") == []
    assert integration.set_icon_for_url("https://unknown.example", mock_data_url(64, 64)) == []
    assert not (tmp_path / "icons").exists()


def test_install_example_scenario(tmp_path: Path) -> None:
    integration, pref = _integration(tmp_path)
    integration.install("abc", "Example", "", "https://example.com", "")

    text = (tmp_path / "applications" / "chrome-abc-Default.desktop").read_text()
    assert "--app=https://example.com" in text
    assert "Categories=Network;WebBrowser;" in text
    assert pref.read() == ["chrome-abc-Default.desktop"]


def test_icon_reply_never_touches_the_fallback_theme_icon(tmp_path: Path) -> None:
    integration, _ = _integration(tmp_path)
    integration.install("abc", "Example", None, "https://e.com", "data:image/png;base64,AAAA")
    launcher = tmp_path / "applications" / "chrome-abc-Default.desktop"
    assert launcher_file.parse(launcher.read_text()).icon_ref == "chromium-browser"

    saved = integration.set_icon_for_url("https://e.com", mock_data_url(256, 256))

    icon = tmp_path / "icons" / "hicolor" / "256x256" / "apps" / "chrome-abc.png"
    assert saved == [icon]
    assert not list((tmp_path / "icons").rglob("chromium-browser.png"))
    assert launcher_file.parse(launcher.read_text()).icon_ref == "chrome-abc"

    integration.uninstall("abc")
    assert [p for p in (tmp_path / "icons").rglob("*") if p.is_file()] == []


def test_icon_reply_for_browser_written_icon_name_uses_app_icon(tmp_path: Path) -> None:
    integration, _ = _integration(tmp_path)
    apps = tmp_path / "applications"
    apps.mkdir()
    launcher = apps / "chrome-abc-Default.desktop"
    launcher.write_text(
        "[Desktop Entry]\n"
        "Name=Example\n"
        'Exec=/usr/bin/chromium "--app=https://e.com"\n'
        "Icon=chrome-abc-Default\n"
    )

    saved = integration.set_icon_for_url("https://e.com", mock_data_url(48, 48))

    assert saved == [tmp_path / "icons" / "hicolor" / "48x48" / "apps" / "chrome-abc.png"]
    assert launcher_file.parse(launcher.read_text()).icon_ref == "chrome-abc"
