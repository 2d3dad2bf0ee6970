from __future__ import annotations

from property_dedupe import PropertyRecord, ReconcileResult
from property_dedupe.runners import build_pipeline
from property_dedupe.view import explain, filter_records, total_balance


def _result() -> ReconcileResult:
    records = [
        PropertyRecord(record_id="1", label="Kirchweg 3, 28211 Bremen", attributes={"last_balance": "1200.50"}),
        PropertyRecord(record_id="2", label="Hauptstraße 12 Bremen", attributes={"last_balance": 0}),
        PropertyRecord(record_id="3", label="Gartenstraße 4", attributes={"last_balance": ""}),
        PropertyRecord(record_id="4", label="Lindenallee 7 (core-shadow)", attributes={"last_balance": 300}),
        PropertyRecord(record_id="5", label="Am Markt 2, 70174 Stuttgart", attributes={"last_balance": "n/a"}),
    ]
    return build_pipeline().run(records)


def _ids(records: list[PropertyRecord]) -> list[str]:
    return [record.record_id for record in records]


def test_filter_hides_shadow_rows_by_default() -> None:
    result = _result()
    assert _ids(result.records) == ["5", "3", "2", "1", "4"]
    assert _ids(filter_records(result)) == ["5", "3", "2", "1"]
    assert _ids(filter_records(result, include_shadow=True)) == ["5", "3", "2", "1", "4"]


def test_filter_by_balance_and_query() -> None:
    result = _result()
    assert _ids(filter_records(result, hide_zero_balance=True)) == ["1"]
    assert _ids(filter_records(result, hide_zero_balance=True, include_shadow=True)) == ["1", "4"]
    assert _ids(filter_records(result, query=" BREMEN ")) == ["2", "1"]
    assert _ids(filter_records(result, query="5")) == ["5"]
    assert filter_records(result, query="nowhere") == []


def test_total_balance_ignores_missing_values() -> None:
    result = _result()
    assert total_balance(filter_records(result)) == 1200.5
    assert total_balance(filter_records(result, include_shadow=True)) == 1500.5
    assert total_balance([]) == 0


def test_explain_reports_matching_keys() -> None:
    result = _result()

    entries = explain(result, limit=2)

    assert [entry["record_id"] for entry in entries] == ["5", "3"]
    assert entries[0]["key"] == "am markt 2"
    assert entries[0]["base"] == "am markt"
    assert entries[0]["locality"] == "stuttgart"
    assert entries[1] == {
        "record_id": "3",
        "raw": "Gartenstraße 4",
        "label": "Gartenstraße 4",
        "shadow": False,
        "key": "garten str 4",
        "base": "garten str",
        "locality": None,
        "score": 100,
    }

    shadow_entry = explain(result)[-1]
    assert shadow_entry["raw"] == "Lindenallee 7 (core-shadow)"
    assert shadow_entry["label"] == "Lindenallee 7"
    assert shadow_entry["shadow"] is True
