"""Terminal color themes a user can pick for their recordings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """A named player color theme."""

    name: str
    label: str


THEMES: tuple[Theme, ...] = (
    Theme("asciinema", "asciinema"),
    Theme("tango", "Tango"),
    Theme("solarized-dark", "Solarized Dark"),
    Theme("solarized-light", "Solarized Light"),
    Theme("monokai", "Monokai"),
)

DEFAULT_THEME = THEMES[0]

_THEMES_BY_NAME = {theme.name: theme for theme in THEMES}


def for_name(name: str | None) -> Theme | None:
    """Look up a theme by name, None for blank or unknown names."""
    if not name:
        return None
    return _THEMES_BY_NAME.get(name)


def theme_names() -> list[str]:
    return list(_THEMES_BY_NAME)
