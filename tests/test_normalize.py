from taskflow_client.normalize import collect_tags, normalize_status, normalize_task


def test_snake_case_due_date_is_used():
    task = normalize_task({"id": 1, "title": "A", "due_date": "2025-02-20"})
    assert task.due_date == "2025-02-20"


def test_snake_case_wins_over_camel_case():
    task = normalize_task(
        {"id": 1, "due_date": "2025-02-20", "dueDate": "2025-03-01", "project_id": 4, "projectId": 5}
    )
    assert task.due_date == "2025-02-20"
    assert task.project_id == 4


def test_camel_case_fields_are_accepted():
    task = normalize_task({"id": 1, "dueDate": "2025-03-01", "projectId": 5})
    assert task.due_date == "2025-03-01"
    assert task.project_id == 5


def test_status_underscore_becomes_hyphen():
    assert normalize_task({"id": 1, "status": "in_progress"}).status == "in-progress"


def test_status_defaults_and_aliases():
    assert normalize_status(None) == "todo"
    assert normalize_status("") == "todo"
    assert normalize_status("completed") == "done"
    assert normalize_status("archived") == "todo"
    # only the first underscore is replaced, leaving an unknown value
    assert normalize_status("in__progress") == "todo"


def test_tag_objects_become_ids_in_order():
    task = normalize_task({"id": 1, "tags": [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]})
    assert task.tag_ids == [1, 2]


def test_existing_tag_ids_list_is_kept():
    task = normalize_task({"id": 1, "tagIds": [3, 3, 1], "tags": [{"id": 9}]})
    assert task.tag_ids == [3, 3, 1]


def test_bare_tag_ids_and_missing_tags():
    assert normalize_task({"id": 1, "tags": [4, 5]}).tag_ids == [4, 5]
    assert normalize_task({"id": 1}).tag_ids == []


def test_defaults_for_missing_fields():
    task = normalize_task({"id": "abc"})
    assert task.id == "abc"
    assert task.title == ""
    assert task.description is None
    assert task.project_id is None
    assert task.status == "todo"


def test_timestamp_due_date_keeps_calendar_date():
    task = normalize_task({"id": 1, "due_date": "2025-02-15T00:00:00.000000Z"})
    assert task.due_date == "2025-02-15"


def test_input_is_not_mutated():
    raw = {"id": 1, "status": "in_progress", "tags": [{"id": 1, "name": "a"}]}
    snapshot = {"id": 1, "status": "in_progress", "tags": [{"id": 1, "name": "a"}]}
    normalize_task(raw)
    assert raw == snapshot


def test_collect_tags_unique_first_seen():
    raw_tasks = [
        {"id": 1, "tags": [{"id": 2, "name": "urgent", "color": "#ef4444"}, {"id": 1, "name": "docs"}]},
        {"id": 2, "tags": [{"id": 2, "name": "urgent"}]},
        {"id": 3, "tagIds": [7]},
    ]
    tags = collect_tags(raw_tasks)
    assert [tag.id for tag in tags] == [2, 1, 7]
    assert tags[0].name == "urgent"
    assert tags[0].color == "#ef4444"
    assert tags[2].name == "7"


def test_non_string_text_fields_are_stringified():
    task = normalize_task({"id": 1, "title": 42, "description": 7})
    assert task.title == "42"
    assert task.description == "7"
    tags = collect_tags([{"id": 1, "tags": [{"id": 3, "name": 2024}]}])
    assert tags[0].name == "2024"


def test_blank_snake_case_falls_back_to_camel_case():
    task = normalize_task({"id": 1, "due_date": "", "dueDate": "2025-02-10", "project_id": "", "projectId": 5})
    assert task.due_date == "2025-02-10"
    assert task.project_id == 5


def test_blank_due_date_becomes_none():
    assert normalize_task({"id": 1, "due_date": ""}).due_date is None
    assert normalize_task({"id": 1, "dueDate": "   "}).due_date is None
