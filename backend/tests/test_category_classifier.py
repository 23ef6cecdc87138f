# backend/tests/test_category_classifier.py
from __future__ import annotations

from app.domain.classification import classify_transaction_type, normalize_payable_type


def test_known_types():
    assert classify_transaction_type("rent_received") == "receivable"
    assert classify_transaction_type("salary_paid") == "payable"
    assert classify_transaction_type("unknown_type") == "other"
    assert classify_transaction_type(None) == "other"
    assert classify_transaction_type("") == "other"


def test_match_is_case_insensitive_substring():
    assert classify_transaction_type("Monthly_RENT") == "receivable"
    assert classify_transaction_type("VENDOR_PAID_LATE") == "payable"
    assert classify_transaction_type("security deposit") == "receivable"


def test_receivable_wins_when_both_match():
    # "refund" is payable, "dues_received" is receivable
    assert classify_transaction_type("refund_dues_received") == "receivable"
    assert classify_transaction_type("refund") == "payable"


def test_payable_type_normalization():
    assert normalize_payable_type("vendor") == "vendor"
    assert normalize_payable_type(" Laundry ") == "laundry"
    assert normalize_payable_type("bills") == "bills"
    assert normalize_payable_type(None) is None
    assert normalize_payable_type("salaries") is None
