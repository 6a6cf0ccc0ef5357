from dataclasses import dataclass

from mobichat.domain.entities.category import Category

UNKNOWN_INTENT = "unknown"


@dataclass(frozen=True)
class ServiceIntent:
    intent: str
    confidence: float
    category: Category

    @staticmethod
    def unknown() -> "ServiceIntent":
        return ServiceIntent(intent=UNKNOWN_INTENT, confidence=0.0, category=Category.general)
