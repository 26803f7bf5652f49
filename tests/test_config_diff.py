from quota_admin.services.config_diff import ChangedKey, diff


def test_diff_reports_changed_keys_only():
    assert diff({"a": 1, "b": 2}, {"a": 1, "b": 3}) == [ChangedKey("b", 3, 2)]
    assert [item.key for item in diff({"a": 1, "b": 2}, {"a": 1, "b": 3})] == ["b"]


def test_diff_of_identical_maps_is_empty():
    assert diff({"a": 1}, {"a": 1}) == []


def test_diff_uses_value_equality():
    current = {"words": "".join(["foo", "\n", "bar"]), "flags": [1, 2]}
    baseline = {"words": "foo\nbar", "flags": [1, 2]}
    assert diff(current, baseline) == []


def test_diff_follows_current_order_and_flags_new_keys():
    changed = diff({"z": True, "a": "x", "new": 1}, {"a": "y", "z": False})
    assert [item.key for item in changed] == ["z", "a", "new"]
    assert changed[2] == ChangedKey("new", None, 1)


def test_diff_distinguishes_bool_from_string():
    assert [item.key for item in diff({"flag": True}, {"flag": "true"})] == ["flag"]
