from models.criteria import FilterCriteria


class TestFilterCriteria:
    """Tests for FilterCriteria model."""

    def test_default_is_empty(self):
        criteria = FilterCriteria()

        assert criteria.is_empty()
        assert criteria.active_fields() == {}

    def test_empty_strings_become_none(self):
        criteria = FilterCriteria(date="", kind="", category="")

        assert criteria.date is None
        assert criteria.kind is None
        assert criteria.is_empty()

    def test_unknown_kind_is_kept(self):
        """Test that an unknown kind is a constraint, not an error."""
        criteria = FilterCriteria(kind="transfer")

        assert criteria.active_fields() == {"kind": "transfer"}

    def test_active_fields(self):
        criteria = FilterCriteria(date="2024-01", kind="income")

        assert criteria.active_fields() == {"date": "2024-01", "kind": "income"}
        assert not criteria.is_empty()


class TestFromDict:
    """Tests for FilterCriteria.from_dict."""

    def test_type_alias(self):
        assert FilterCriteria.from_dict({"type": "expense"}).kind == "expense"

    def test_kind_wins_over_type(self):
        criteria = FilterCriteria.from_dict({"kind": "income", "type": "expense"})

        assert criteria.kind == "income"

    def test_numeric_amount_becomes_text(self):
        assert FilterCriteria.from_dict({"amount": 300}).amount == "300"

    def test_unknown_keys_ignored(self):
        criteria = FilterCriteria.from_dict({"category": "Транспорт", "color": "red"})

        assert criteria.active_fields() == {"category": "Транспорт"}
