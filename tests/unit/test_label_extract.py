"""Unit tests for free-text label extraction."""
from __future__ import annotations

import pytest

from safeboard.labels import Extraction, extract_name_and_type
from safeboard.labels.extract import clean_name, is_account_type


class TestExtractNameAndType:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("Timo_ledger", Extraction("Timo", "Ledger")),
            ("Timo Ledger", Extraction("Timo", "Ledger")),
            ("Timo (Ledger)", Extraction("Timo", "Ledger")),
            ("Mihailo hot wallet", Extraction("Mihailo", "Hot Wallet")),
            ("Mihailo_Hot_Wallet", Extraction("Mihailo", "Hot Wallet")),
            ("mihailo hot-wallet", Extraction("mihailo", "Hot Wallet")),
            ("Ana hardware wallet", Extraction("Ana", "Hardware Wallet")),
            ("Validator Operator", Extraction("Validator", "Operator")),
            ("Bot proposer", Extraction("Bot", "Proposer")),
            ("Manoj Account1", Extraction("Manoj", "Account 1")),
            ("Manoj account_2", Extraction("Manoj", "Account 2")),
            ("Manoj Account #03", Extraction("Manoj", "Account 3")),
            ("Treasury", Extraction("Treasury", None)),
        ],
    )
    def test_examples(self, label: str, expected: Extraction) -> None:
        assert extract_name_and_type(label) == expected

    def test_keyword_priority(self) -> None:
        assert extract_name_and_type("Timo hot wallet ledger").type == "Hot Wallet"
        assert extract_name_and_type("Timo ledger account 2").type == "Ledger"

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("TimoLedger", Extraction("Timo", "Ledger")),
            ("MihailoHotWallet", Extraction("Mihailo", "Hot Wallet")),
            ("ManojAccount2", Extraction("Manoj", "Account 2")),
            ("ValidatorOperator", Extraction("Validator", "Operator")),
        ],
    )
    def test_camel_case_keyword(self, label: str, expected: Extraction) -> None:
        assert extract_name_and_type(label) == expected

    def test_keyword_inside_word_ignored(self) -> None:
        assert extract_name_and_type("Ledgerwood").type is None
        assert extract_name_and_type("Ledgerwood").name == "Ledgerwood"

    def test_account_without_number_is_plain_name(self) -> None:
        assert extract_name_and_type("Savings account") == Extraction("Savings account", None)

    def test_type_only_label(self) -> None:
        assert extract_name_and_type("Hardware Wallet") == Extraction("", "Hardware Wallet")

    def test_account_zero(self) -> None:
        assert extract_name_and_type("Account 000").type == "Account 0"

    @pytest.mark.parametrize("label", [None, "", "   ", "___", "()", "!!!"])
    def test_empty_or_punctuation(self, label: str | None) -> None:
        result = extract_name_and_type(label)
        assert result.name == ""
        assert result.type is None

    def test_huge_account_number(self) -> None:
        label = "Account " + "9" * 500
        assert extract_name_and_type(label).type == "Account " + "9" * 500


class TestCleanName:
    def test_underscores_and_whitespace(self) -> None:
        assert clean_name("  Timo__  Smith_ ") == "Timo Smith"

    def test_nested_empty_brackets(self) -> None:
        assert clean_name("Timo ( [ ] )") == "Timo"

    def test_edge_separators(self) -> None:
        assert clean_name("- Timo -") == "Timo"


class TestIsAccountType:
    def test_account_types(self) -> None:
        assert is_account_type("Account 3") is True
        assert Extraction("x", "Account 1").is_account is True

    def test_other_types(self) -> None:
        assert is_account_type("Ledger") is False
        assert is_account_type(None) is False
        assert is_account_type("") is False
