from abc import ABC, abstractmethod

from studybudget.models import CategorySuggestion


class Suggester(ABC):
    @abstractmethod
    def suggest(self, description: str) -> CategorySuggestion | None:
        """Suggest a spending category for an expense description."""
        pass

    @abstractmethod
    def learn(self, description: str, category: str) -> None:
        """Remember the category the user settled on for a description."""
        pass
