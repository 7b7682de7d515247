from datetime import date

from taskflow_client.dates import format_date, is_overdue

TODAY = date(2025, 2, 10)


def test_format_date_relative_labels():
    assert format_date("2025-02-10", TODAY) == "Today"
    assert format_date("2025-02-11", TODAY) == "Tomorrow"
    assert format_date("2025-02-09", TODAY) == "Yesterday"
    assert format_date("2025-02-08", TODAY) == "2 days overdue"
    assert format_date("2025-01-10", TODAY) == "31 days overdue"


def test_format_date_future_uses_month_and_day():
    result = format_date("2025-02-15", TODAY)
    assert "Feb" in result
    assert "15" in result


def test_format_date_across_month_boundary():
    assert format_date("2025-03-01", date(2025, 2, 28)) == "Tomorrow"


def test_format_date_without_value():
    assert format_date(None, TODAY) == "No due date"
    assert format_date("soon", TODAY) == "soon"


def test_is_overdue():
    assert is_overdue("2025-02-09", TODAY)
    assert not is_overdue("2025-02-10", TODAY)
    assert not is_overdue("2025-02-11", TODAY)
    assert not is_overdue(None, TODAY)


def test_is_overdue_defaults_to_wall_clock():
    assert is_overdue("2000-01-01")
    assert not is_overdue(date.today().isoformat())
