"""
Tests for keyword intent classification and reply resolution.
"""

from __future__ import annotations

import logging

import pytest

from conftest import make_entry
from mobichat.application.exceptions import CatalogConfigurationError, IntentNotFoundError
from mobichat.application.utils.intent_resolver import (
    UNKNOWN_REPLIES,
    classify,
    resolve_reply,
    validate_catalog,
)
from mobichat.domain.entities.category import Category
from mobichat.domain.entities.intent import ServiceIntent
from mobichat.domain.entities.language import Language
from mobichat.infrastructure.knowledge.default_catalog import build_default_catalog

BALANCE_FR = "Vous pouvez consulter votre solde en composant *555# ou via l'application Mobilis"


@pytest.fixture
def balance_catalog():
    return [
        make_entry(
            "balance_inquiry",
            ["balance", "solde"],
            category=Category.balance,
            ar="يمكنكم الاستعلام عن رصيدكم",
            fr=BALANCE_FR,
        )
    ]


def test_french_balance_question_round_trip(balance_catalog):
    """'quel est mon solde' matches 'solde' and resolves to the French balance reply."""
    intent = classify("quel est mon solde", balance_catalog)

    assert intent.intent == "balance_inquiry"
    assert intent.category == Category.balance
    assert intent.confidence == pytest.approx(5 / 18)
    assert resolve_reply(intent, Language.fr, balance_catalog) == BALANCE_FR


def test_matching_is_case_insensitive(balance_catalog):
    intent = classify("SOLDE please", balance_catalog)
    assert intent.intent == "balance_inquiry"
    assert intent.confidence == pytest.approx(5 / 12)


def test_empty_message_is_unknown(balance_catalog):
    assert classify("", balance_catalog) == ServiceIntent("unknown", 0.0, Category.general)
    assert classify("   ", balance_catalog) == ServiceIntent("unknown", 0.0, Category.general)


def test_no_match_falls_back_to_unknown_reply():
    catalog = build_default_catalog()
    intent = classify("hi", catalog)

    assert intent.intent == "unknown"
    assert intent.confidence == 0
    assert resolve_reply(intent, Language.ar, catalog) == UNKNOWN_REPLIES[Language.ar]
    assert resolve_reply(intent, Language.fr, catalog) == UNKNOWN_REPLIES[Language.fr]


def test_denominator_is_untrimmed_message_length(balance_catalog):
    intent = classify("  solde  ", balance_catalog)
    assert intent.confidence == pytest.approx(5 / 9)


def test_whole_message_keyword_scores_one():
    catalog = build_default_catalog()
    intent = classify("رصيد", catalog)
    assert intent.intent == "balance_inquiry"
    assert intent.confidence == pytest.approx(1.0)


def test_longest_relative_match_wins():
    """'recharge' (8) beats 'credit' (6) in a 15 character message."""
    intent = classify("recharge credit", build_default_catalog())
    assert intent.intent == "recharge"
    assert intent.confidence == pytest.approx(8 / 15)


def test_ties_go_to_earlier_catalog_entry():
    catalog = [make_entry("first", ["abc"]), make_entry("second", ["xyz"])]
    assert classify("abc xyz", catalog).intent == "first"

    reversed_catalog = list(reversed(catalog))
    assert classify("abc xyz", reversed_catalog).intent == "second"


def test_shared_keyword_tie_goes_to_earlier_entry():
    """'credit' is in both balance and recharge; balance is seeded first."""
    intent = classify("credit", build_default_catalog())
    assert intent.intent == "balance_inquiry"


def test_keyword_scores_are_not_aggregated():
    catalog = [
        make_entry("two_hits", ["solde", "mon"]),
        make_entry("one_hit", ["quel est"]),
    ]
    intent = classify("quel est mon solde", catalog)
    assert intent.intent == "one_hit"
    assert intent.confidence == pytest.approx(8 / 18)


def test_inactive_entries_and_empty_keywords_never_match():
    catalog = [
        make_entry("inactive", ["solde"], active=False),
        make_entry("blank", [""]),
    ]
    assert classify("solde", catalog).intent == "unknown"


def test_classify_does_not_mutate_catalog(balance_catalog):
    before = list(balance_catalog)
    classify("balance solde", balance_catalog)
    assert balance_catalog == before


@pytest.mark.parametrize(
    "confidence, expected",
    [
        (0.099999, UNKNOWN_REPLIES[Language.fr]),
        (0.1, BALANCE_FR),
    ],
)
def test_threshold_boundary(balance_catalog, confidence, expected):
    intent = ServiceIntent("balance_inquiry", confidence, Category.balance)
    assert resolve_reply(intent, Language.fr, balance_catalog) == expected


def test_below_threshold_ignores_intent_id(balance_catalog):
    intent = ServiceIntent("does_not_exist", 0.05, Category.general)
    assert resolve_reply(intent, Language.ar, balance_catalog) == UNKNOWN_REPLIES[Language.ar]


def test_missing_catalog_entry_raises_not_found(balance_catalog):
    intent = ServiceIntent("deleted_intent", 0.5, Category.plans)
    with pytest.raises(IntentNotFoundError):
        resolve_reply(intent, Language.fr, balance_catalog)


def test_missing_language_reply_is_configuration_error():
    catalog = [make_entry("plans", ["forfait"], category=Category.plans, ar=None)]
    intent = classify("forfait", catalog)
    with pytest.raises(CatalogConfigurationError):
        resolve_reply(intent, Language.ar, catalog)


def test_validate_catalog_rejects_missing_reply_and_duplicates():
    with pytest.raises(CatalogConfigurationError):
        validate_catalog([make_entry("plans", ["forfait"], fr="")])

    with pytest.raises(CatalogConfigurationError):
        validate_catalog([make_entry("plans", ["forfait"]), make_entry("plans", ["offre"])])

    # an inactive duplicate is allowed
    validate_catalog([make_entry("plans", ["forfait"]), make_entry("plans", ["offre"], active=False)])


def test_validate_catalog_warns_on_empty_keywords(caplog):
    with caplog.at_level(logging.WARNING):
        validate_catalog([make_entry("inert", [])])
    assert "no keywords" in caplog.text


def test_default_catalog_is_valid_and_bilingual():
    catalog = build_default_catalog()
    assert [entry.intent for entry in catalog] == [
        "balance_inquiry", "recharge", "plans", "support", "greeting",
    ]
    for entry in catalog:
        assert entry.response_for(Language.ar)
        assert entry.response_for(Language.fr)
