from datetime import datetime

import pytest

from finance_tracker.parser import TransactionParser, combine_confidence, parse

NOW = datetime(2026, 3, 10, 12, 0)


@pytest.fixture
def parser():
    return TransactionParser()


def test_parse_expense_with_category(parser):
    proposal = parser.parse("Gasté 25€ en comida", NOW)
    assert proposal is not None
    assert proposal.amount == 25
    assert proposal.type == "expense"
    assert proposal.category == "food"
    assert proposal.confidence == "high"
    assert proposal.description == "comida"
    assert proposal.date == NOW


def test_parse_income_salary(parser):
    proposal = parser.parse("Recibí 1500€ de salario", NOW)
    assert proposal is not None
    assert proposal.amount == 1500
    assert proposal.type == "income"
    assert proposal.category == "salary"
    assert proposal.confidence == "high"
    assert proposal.description == "salario"


def test_parse_bare_amount_defaults_to_expense(parser):
    proposal = parser.parse("15 euros", NOW)
    assert proposal is not None
    assert proposal.amount == 15
    assert proposal.type == "expense"
    assert proposal.type_confidence == "medium"
    assert proposal.category == "other-expense"
    assert proposal.category_confidence == "low"
    assert proposal.confidence == "low"
    assert proposal.description == "Gasto de Otros Gastos"


def test_parse_without_amount_returns_none(parser):
    assert parser.parse("Hola, ¿qué tal?", NOW) is None
    assert parser.parse("", NOW) is None


def test_parse_decimal_comma(parser):
    proposal = parser.parse("Pagué 12,50€ de taxi", NOW)
    assert proposal is not None
    assert proposal.amount == 12.5
    assert proposal.category == "transport"
    assert proposal.description == "taxi"


def test_parse_thousands_separator(parser):
    proposal = parser.parse("Pagué 1.500€ de alquiler", NOW)
    assert proposal is not None
    assert proposal.amount == 1500
    assert proposal.category == "rent"


def test_parse_currency_prefix_and_dollars(parser):
    proposal = parser.parse("€45 en supermercado", NOW)
    assert proposal is not None
    assert proposal.amount == 45
    assert proposal.category == "food"
    assert proposal.type_confidence == "medium"
    assert proposal.confidence == "medium"

    proposal = parser.parse("Pagué 20 dólares en uber", NOW)
    assert proposal is not None
    assert proposal.amount == 20
    assert proposal.category == "transport"


def test_parse_with_date_strips_it_from_description(parser):
    proposal = parser.parse("Gasté 25€ en gasolina el 15 de julio", NOW)
    assert proposal is not None
    assert proposal.date == datetime(2025, 7, 15)
    assert proposal.category == "transport"
    assert proposal.description == "gasolina"


def test_parse_relative_date(parser):
    proposal = parser.parse("Pagué 50€ de gasolina hace 2 días", NOW)
    assert proposal is not None
    assert proposal.date == datetime(2026, 3, 8, 12, 0)
    assert proposal.description == "gasolina"


def test_income_keywords_win_over_expense_keywords(parser):
    proposal = parser.parse("Me pagaron 300€ por un proyecto", NOW)
    assert proposal is not None
    assert proposal.type == "income"
    assert proposal.category == "freelance"
    assert "proyecto" in proposal.description


def test_keywords_are_whole_words(parser):
    # "gas" must not fire inside "gasté".
    proposal = parser.parse("Gasté 20€", NOW)
    assert proposal is not None
    assert proposal.category == "other-expense"
    assert proposal.type_confidence == "high"
    assert proposal.confidence == "medium"


def test_keywords_ignore_accents_and_case(parser):
    proposal = parser.parse("PAGUE 40€ EN EL MEDICO", NOW)
    assert proposal is not None
    assert proposal.type == "expense"
    assert proposal.category == "health"


def test_category_table_order_breaks_ties(parser):
    proposal = parser.parse("Gasté 15€ en un bar", NOW)
    assert proposal is not None
    assert proposal.category == "food"


def test_combine_confidence():
    assert combine_confidence("high", "high") == "high"
    assert combine_confidence("high", "low") == "medium"
    assert combine_confidence("medium", "high") == "medium"
    assert combine_confidence("medium", "low") == "low"


def test_module_level_parse():
    proposal = parse("Compré ropa por 60€", NOW)
    assert proposal is not None
    assert proposal.amount == 60
    assert proposal.category == "shopping"
    assert proposal.description == "ropa"


def test_out_of_range_relative_date_falls_back_to_now(parser):
    proposal = parser.parse("Gasté 5€ hace 999999 días", NOW)
    assert proposal is not None
    assert proposal.amount == 5
    assert proposal.date == NOW


def test_pago_is_not_an_income_keyword(parser):
    proposal = parser.parse("Pago 50€ de luz", NOW)
    assert proposal is not None
    assert proposal.type == "expense"
    assert proposal.category == "utilities"
    assert proposal.confidence == "medium"
