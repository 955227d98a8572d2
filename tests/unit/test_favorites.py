from webapp_desktop.core.errors import PreferenceUnavailableError
from webapp_desktop.desktop.favorites import FavoritesListManager
from webapp_desktop.mock import MemoryFavoritesPreference


def test_add_appends_and_writes_full_list() -> None:
    pref = MemoryFavoritesPreference(["firefox.desktop", "org.gnome.Nautilus.desktop"])
    manager = FavoritesListManager(pref)

    assert manager.add("chrome-abc-Default.desktop") is True
    assert pref.read() == [
        "firefox.desktop",
        "org.gnome.Nautilus.desktop",
        "chrome-abc-Default.desktop",
    ]
    assert pref.writes == 1


def test_add_is_idempotent() -> None:
    pref = MemoryFavoritesPreference(["firefox.desktop"])
    manager = FavoritesListManager(pref)

    manager.add("chrome-abc-Default.desktop")
    once = pref.read()
    manager.add("chrome-abc-Default.desktop")

    assert pref.read() == once
    assert pref.writes == 1


def test_remove_preserves_order_of_the_rest() -> None:
    pref = MemoryFavoritesPreference(["a.desktop", "chrome-abc-Default.desktop", "b.desktop"])
    manager = FavoritesListManager(pref)

    assert manager.remove("chrome-abc-Default.desktop") is True
    assert pref.read() == ["a.desktop", "b.desktop"]


def test_remove_non_member_does_not_write() -> None:
    pref = MemoryFavoritesPreference(["a.desktop"])
    manager = FavoritesListManager(pref)

    assert manager.remove("chrome-abc-Default.desktop") is False
    assert pref.read() == ["a.desktop"]
    assert pref.writes == 0


def test_mutations_see_external_changes() -> None:
    pref = MemoryFavoritesPreference(["a.desktop"])
    manager = FavoritesListManager(pref)
    manager.add("x.desktop")

    # Another writer (the shell) reorders the list behind our back
    pref.write(["x.desktop", "a.desktop", "b.desktop"])
    manager.add("y.desktop")

    assert pref.read() == ["x.desktop", "a.desktop", "b.desktop", "y.desktop"]
    assert manager.contains("b.desktop")


class _UnavailablePreference:
    def read(self) -> list[str]:
        raise PreferenceUnavailableError("schema org.gnome.shell is not installed")

    def write(self, values: list[str]) -> None:
        raise PreferenceUnavailableError("schema org.gnome.shell is not installed")


def test_unavailable_preference_is_logged_not_raised() -> None:
    manager = FavoritesListManager(_UnavailablePreference())
    assert manager.add("chrome-abc-Default.desktop") is False
    assert manager.remove("chrome-abc-Default.desktop") is False
    assert manager.list() == []
