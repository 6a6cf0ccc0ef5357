from __future__ import annotations

import uuid

from mobichat.application.utils.intent_resolver import validate_catalog
from mobichat.domain.entities.catalog_entry import IntentCatalogEntry
from mobichat.domain.entities.category import Category
from mobichat.domain.entities.language import Language

_DEFAULT_ENTRIES = (
    {
        "intent": "balance_inquiry",
        "keywords": ("رصيد", "balance", "solde", "credit"),
        "category": Category.balance,
        "responses": {
            Language.ar: "يمكنكم الاستعلام عن رصيدكم عبر الاتصال بـ *555# أو عبر تطبيق موبليس",
            Language.fr: "Vous pouvez consulter votre solde en composant *555# ou via l'application Mobilis",
        },
    },
    {
        "intent": "recharge",
        "keywords": ("شحن", "recharge", "rechargement", "credit"),
        "category": Category.recharge,
        "responses": {
            Language.ar: "يمكنكم شحن رصيدكم عبر بطاقات الشحن أو عبر التطبيق المصرفي",
            Language.fr: "Vous pouvez recharger via les cartes de recharge ou l'application bancaire",
        },
    },
    {
        "intent": "plans",
        "keywords": ("باقة", "باقات", "forfait", "plans", "abonnement"),
        "category": Category.plans,
        "responses": {
            Language.ar: "لدينا باقات متنوعة للمكالمات والإنترنت. اتصل بـ 600 للمزيد من التفاصيل",
            Language.fr: "Nous avons diverses offres d'appels et internet. Appelez le 600 pour plus de détails",
        },
    },
    {
        "intent": "support",
        "keywords": ("مساعدة", "دعم", "aide", "support", "problème", "مشكلة"),
        "category": Category.support,
        "responses": {
            Language.ar: "فريق الدعم الفني متاح على 600 من 8:00 إلى 20:00",
            Language.fr: "Le support technique est disponible au 600 de 8h00 à 20h00",
        },
    },
    {
        "intent": "greeting",
        "keywords": ("مرحبا", "أهلا", "السلام", "bonjour", "salut", "hello"),
        "category": Category.general,
        "responses": {
            Language.ar: "مرحباً بكم في خدمة عملاء موبليس! كيف يمكنني مساعدتكم؟",
            Language.fr: "Bienvenue chez Mobilis! Comment puis-je vous aider?",
        },
    },
)


def build_default_catalog() -> list[IntentCatalogEntry]:
    """Fresh entries (new ids) for the operator's standard intents."""
    entries = [
        IntentCatalogEntry(
            id=uuid.uuid4().hex,
            intent=item["intent"],
            keywords=tuple(item["keywords"]),
            category=item["category"],
            responses=dict(item["responses"]),
        )
        for item in _DEFAULT_ENTRIES
    ]
    return list(validate_catalog(entries))
