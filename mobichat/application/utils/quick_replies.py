from __future__ import annotations

from mobichat.domain.entities.language import Language
from mobichat.domain.entities.quick_reply import QuickReply

_SERVICE_QUICK_REPLIES: dict[Language, tuple[QuickReply, ...]] = {
    Language.ar: (
        QuickReply(title="الرصيد", payload="balance"),
        QuickReply(title="الشحن", payload="recharge"),
        QuickReply(title="الباقات", payload="plans"),
        QuickReply(title="الدعم", payload="support"),
    ),
    Language.fr: (
        QuickReply(title="Solde", payload="balance"),
        QuickReply(title="Recharge", payload="recharge"),
        QuickReply(title="Forfaits", payload="plans"),
        QuickReply(title="Support", payload="support"),
    ),
}


def build_service_quick_replies(language: Language) -> list[QuickReply]:
    """Menu of the main services, titled in the user's language."""
    return list(_SERVICE_QUICK_REPLIES[Language(language)])
