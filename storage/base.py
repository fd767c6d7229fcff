"""Abstract repository interface for the storage layer."""

from abc import ABC, abstractmethod

from models import Preferences

LOCALE_KEY = "locale"
THEME_KEY = "theme"


class PreferencesRepository(ABC):
    """Abstract interface for persisted client preferences."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Read a single preference.

        Args:
            key: The preference name.

        Returns:
            The stored value, or None if it was never set.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a single preference, replacing any previous value.

        Args:
            key: The preference name.
            value: The value to store.
        """
        pass

    @abstractmethod
    def get_all(self) -> dict[str, str]:
        """Read every stored preference."""
        pass

    def load(self) -> Preferences:
        """Load the typed preferences record."""
        values = self.get_all()
        return Preferences(locale=values.get(LOCALE_KEY), theme=values.get(THEME_KEY))

    def save(self, preferences: Preferences) -> None:
        """Store every field of ``preferences`` that has been chosen."""
        if preferences.locale is not None:
            self.set(LOCALE_KEY, preferences.locale)
        if preferences.theme is not None:
            self.set(THEME_KEY, preferences.theme.value)
