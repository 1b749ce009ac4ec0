import os

from studybudget.core import settings
from studybudget.logger import get_logger
from studybudget.models import CategorySuggestion
from studybudget.suggesters.base import Suggester
from studybudget.suggesters.keywords import KeywordSuggester
from studybudget.suggesters.memory import MemoryMatcher

logger = get_logger(__name__)


class SuggestionService:
    def __init__(self,
                 memory_threshold: float = settings.DEFAULT_MEMORY_THRESHOLD,
                 min_length: int = settings.DEFAULT_SUGGESTION_MIN_LENGTH,
                 data_dir: str = "."):

        self.min_length = min_length
        self.suggesters: list[Suggester] = []

        # 1. Descriptions the user already categorized (highest priority)
        self.memory = MemoryMatcher(
            data_path=os.path.join(data_dir, "memory.json"),
            threshold=memory_threshold,
        )
        self.suggesters.append(self.memory)

        # 2. Fixed keyword table
        self.keywords = KeywordSuggester()
        self.suggesters.append(self.keywords)

    def suggest(self, description: str) -> CategorySuggestion | None:
        if len(description) < self.min_length:
            logger.debug("[SUGGEST] Description too short for a suggestion: '%s'", description)
            return None

        for suggester in self.suggesters:
            suggester_name = suggester.__class__.__name__
            result = suggester.suggest(description)
            if result:
                logger.debug(
                    "[SUGGEST] %s returned '%s' (confidence: %.2f) for '%s'",
                    suggester_name,
                    result.category,
                    result.confidence,
                    description[:50],
                )
                return result
            logger.debug("[SUGGEST] %s returned: None", suggester_name)

        return None

    def learn(self, description: str, category: str) -> None:
        for suggester in self.suggesters:
            suggester.learn(description, category)

    def clear(self) -> None:
        self.memory.clear()
        logger.info("[SUGGEST] Suggestion memory cleared.")

    def refresh(self) -> None:
        self.memory.threshold = settings.memory_threshold()
        self.min_length = settings.suggestion_min_length()
        logger.info(
            "[CONFIG] Suggestion settings refreshed: threshold=%.1f, min_length=%s.",
            self.memory.threshold,
            self.min_length,
        )
