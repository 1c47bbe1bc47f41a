import pytest
from datetime import datetime
from decimal import Decimal

from errors import EmptySheet, ImportPersistFailure, InvalidAmount, MalformedRow
from ledger.importer import (
    detect_language,
    import_into_store,
    import_table,
    parse_row,
)
from tests.helpers import FailingStore

RU_HEADER = ["Дата", "Тип", "Категория", "Описание", "Сумма"]
EN_HEADER = ["Date", "Type", "Category", "Description", "Amount"]


class TestDetectLanguage:
    """Tests for detect_language function."""

    def test_russian_header(self):
        assert detect_language(RU_HEADER) == "ru"

    def test_english_header(self):
        assert detect_language(EN_HEADER) == "en"

    def test_single_cyrillic_cell(self):
        assert detect_language(["Date", "Type", "Категория", None, 5]) == "ru"

    def test_non_text_cells(self):
        assert detect_language([None, 1, 2.5, datetime(2024, 1, 1)]) == "en"


class TestParseRow:
    """Tests for parse_row function."""

    def test_parse_income_row(self):
        row = ["2024-01-05", "income", "Зарплата", "January", 1000]

        transaction = parse_row(row, 1, "user-1")

        assert transaction.id is None
        assert transaction.owner_id == "user-1"
        assert transaction.kind == "income"
        assert transaction.date == "2024-01-05"
        assert transaction.category == "Зарплата"
        assert transaction.description == "January"
        assert transaction.amount == Decimal("1000")

    def test_type_is_lowercased(self):
        transaction = parse_row(["2024-01-05", "EXPENSE", "Транспорт", "", "300"], 1, "user-1")

        assert transaction.kind == "expense"
        assert transaction.amount == Decimal("300")

    def test_russian_type_labels(self):
        """Test that Russian sheets may label kinds in Russian."""
        income = parse_row(["2024-01-05", "Доход", "Премия", "", 5], 1, "u", "ru")
        expense = parse_row(["2024-01-05", "расход", "Одежда", "", 5], 2, "u", "ru")

        assert income.kind == "income"
        assert expense.kind == "expense"

    def test_russian_labels_need_russian_header(self):
        with pytest.raises(MalformedRow, match="unknown type"):
            parse_row(["2024-01-05", "доход", "Премия", "", 5], 3, "u", "en")

    def test_missing_cells_become_empty(self):
        transaction = parse_row([None, "income", None, None, 12.5], 1, "user-1")

        assert transaction.date == ""
        assert transaction.category == ""
        assert transaction.description == ""
        assert transaction.amount == Decimal("12.5")

    def test_date_cell_becomes_iso_text(self):
        transaction = parse_row([datetime(2024, 1, 5), "income", "Зарплата", "", 1], 1, "u")

        assert transaction.date == "2024-01-05"

    def test_free_form_category_accepted(self):
        transaction = parse_row(["2024-01-05", "expense", "Books & Music", "", 1], 1, "u")

        assert transaction.category == "Books & Music"

    def test_short_row(self):
        with pytest.raises(MalformedRow) as exc_info:
            parse_row(["2024-01-05", "income", "Зарплата", ""], 4, "u")

        assert exc_info.value.row_index == 4

    @pytest.mark.parametrize("raw", ["abc", "", None, "NaN", "inf", -5, "-0.01", True])
    def test_invalid_amount(self, raw):
        with pytest.raises(InvalidAmount) as exc_info:
            parse_row(["2024-01-05", "income", "Зарплата", "", raw], 2, "u")

        assert exc_info.value.row_index == 2
        assert exc_info.value.raw_value == raw

    @pytest.mark.parametrize("raw", ["1e400", "1e999999999"])
    def test_amount_beyond_float_range(self, raw):
        """Test that amounts the store cannot hold as a finite REAL are rejected."""
        with pytest.raises(InvalidAmount) as exc_info:
            parse_row(["2024-01-05", "income", "Зарплата", "", raw], 1, "u")

        assert exc_info.value.raw_value == raw

    def test_unknown_type(self):
        with pytest.raises(MalformedRow, match="Row 3: unknown type 'transfer'"):
            parse_row(["2024-01-05", "transfer", "", "", 1], 3, "u")


class TestImportTable:
    """Tests for import_table function."""

    def test_partitions_by_kind(self):
        grid = [
            RU_HEADER,
            ["2024-01-05", "income", "Зарплата", "", 1000],
            ["2024-01-10", "expense", "Транспорт", "", 300],
            ["2024-01-12", "income", "Подработка", "Freelance", "150.5"],
        ]

        batch = import_table(grid, "user-1")

        assert batch.language == "ru"
        assert len(batch) == 3
        assert [t.category for t in batch.incomes] == ["Зарплата", "Подработка"]
        assert [t.category for t in batch.expenses] == ["Транспорт"]
        assert all(t.owner_id == "user-1" for t in batch.incomes + batch.expenses)

    def test_english_header(self):
        grid = [EN_HEADER, ["2024-01-05", "income", "Salary", "", 1]]

        batch = import_table(grid, "user-1")

        assert batch.language == "en"
        assert len(batch.incomes) == 1

    @pytest.mark.parametrize("grid", [[], [RU_HEADER]])
    def test_empty_sheet(self, grid):
        with pytest.raises(EmptySheet):
            import_table(grid, "user-1")

    def test_short_row_rejects_whole_sheet(self):
        grid = [
            RU_HEADER,
            ["2024-01-05", "income", "Зарплата", "", 1000],
            ["2024-01-10", "expense", "Транспорт"],
        ]

        with pytest.raises(MalformedRow) as exc_info:
            import_table(grid, "user-1")

        assert exc_info.value.row_index == 2

    def test_bad_amount_rejects_whole_sheet(self):
        grid = [
            RU_HEADER,
            ["2024-01-05", "income", "Зарплата", "", 1000],
            ["2024-01-10", "expense", "Транспорт", "", "три сотни"],
        ]

        with pytest.raises(InvalidAmount) as exc_info:
            import_table(grid, "user-1")

        assert exc_info.value.row_index == 2
        assert exc_info.value.raw_value == "три сотни"

    def test_blank_rows_skipped(self):
        grid = [
            RU_HEADER,
            ["2024-01-05", "income", "Зарплата", "", 1000],
            [],
            [None, None, None, None, None],
            ["", "", "", "", ""],
        ]

        batch = import_table(grid, "user-1")

        assert len(batch) == 1

    def test_balance_row_skipped(self):
        """Test that the exporter's trailing total row is not imported."""
        grid = [
            RU_HEADER,
            ["2024-01-05", "income", "Зарплата", "", 1000],
            ["", "", "", "Итоговый баланс:", 1000],
        ]

        batch = import_table(grid, "user-1")

        assert len(batch) == 1


class TestImportIntoStore:
    """Tests for import_into_store function."""

    GRID = [
        RU_HEADER,
        ["2024-01-05", "income", "Зарплата", "", 1000],
        ["2024-01-10", "expense", "Транспорт", "", 300],
        ["2024-01-11", "expense", "Рестораны", "", 45],
    ]

    def test_inserts_incomes_then_expenses(self, fake_store, session):
        batch = import_into_store(self.GRID, fake_store, session)

        assert fake_store.insert_calls == ["incomes", "expenses"]
        assert len(fake_store.inserted["incomes"]) == 1
        assert len(fake_store.inserted["expenses"]) == 2
        assert [t.id for t in batch.expenses] == [1, 2]

    def test_huge_amount_inserts_nothing(self, fake_store, session):
        grid = self.GRID + [["2024-01-12", "income", "Зарплата", "", "1e400"]]

        with pytest.raises(InvalidAmount) as exc_info:
            import_into_store(grid, fake_store, session)

        assert exc_info.value.row_index == 4
        assert fake_store.insert_calls == []

    def test_skips_empty_batch(self, fake_store, session):
        grid = [RU_HEADER, ["2024-01-10", "expense", "Транспорт", "", 300]]

        import_into_store(grid, fake_store, session)

        assert fake_store.insert_calls == ["expenses"]

    def test_invalid_row_inserts_nothing(self, fake_store, session):
        grid = self.GRID + [["2024-01-12", "income", "Премия", "", "n/a"]]

        with pytest.raises(InvalidAmount):
            import_into_store(grid, fake_store, session)

        assert fake_store.insert_calls == []

    def test_short_row_inserts_nothing(self, fake_store, session):
        grid = self.GRID + [["2024-01-12", "income"]]

        with pytest.raises(MalformedRow):
            import_into_store(grid, fake_store, session)

        assert fake_store.insert_calls == []

    def test_insert_failure_is_wrapped(self, session):
        store = FailingStore(fail_insert=["expenses"])

        with pytest.raises(ImportPersistFailure) as exc_info:
            import_into_store(self.GRID, store, session)

        assert exc_info.value.table == "expenses"
        assert exc_info.value.persisted == 1

    def test_no_owner_is_not_applicable(self, fake_store, anonymous_session):
        assert import_into_store(self.GRID, fake_store, anonymous_session) is None
        assert fake_store.insert_calls == []
