import json
import os
import threading

from rapidfuzz import fuzz, process

from studybudget.logger import get_logger
from studybudget.models import CategorySuggestion

from .base import Suggester

logger = get_logger(__name__)


class MemoryMatcher(Suggester):
    """Recall categories the user already chose for similar descriptions."""

    def __init__(self, data_path: str = "memory.json", threshold: float = 90.0):
        self.data_path = data_path
        self.threshold = threshold
        self.memory: dict[str, str] = {}  # normalized description -> category
        self._lock = threading.Lock()
        self.load()

    @staticmethod
    def normalize(description: str) -> str:
        return " ".join(description.lower().split())

    def load(self) -> None:
        if not os.path.exists(self.data_path):
            return
        try:
            with open(self.data_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.warning("[MEMORY] Ignoring unreadable memory file %s.", self.data_path)
            data = {}
        self.memory = data if isinstance(data, dict) else {}

    def save(self) -> None:
        with open(self.data_path, "w", encoding="utf-8") as f:
            json.dump(self.memory, f, indent=2)

    def suggest(self, description: str) -> CategorySuggestion | None:
        key = self.normalize(description)
        if not key or not self.memory:
            return None

        if key in self.memory:
            category = self.memory[key]
            return CategorySuggestion(
                category=category,
                confidence=100.0,
                reason=f'Previously saved as "{category}"',
            )

        result = process.extractOne(key, self.memory.keys(), scorer=fuzz.token_sort_ratio)
        if result:
            match, score, _ = result
            if score >= self.threshold:
                category = self.memory[match]
                return CategorySuggestion(
                    category=category,
                    confidence=float(score),
                    reason=f'Similar to "{match}" saved as "{category}"',
                )

        return None

    def learn(self, description: str, category: str) -> None:
        key = self.normalize(description)
        if not key or not category:
            return
        with self._lock:
            self.memory[key] = category
            self.save()

    def clear(self) -> None:
        with self._lock:
            self.memory = {}
            self.save()
