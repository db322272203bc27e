from __future__ import annotations

import pytest

from inventory.page import advance_targets
from inventory.view import ReconciliationView


@pytest.fixture()
def user_view(store, user_session, sample_rows):
    store.insert("alice", sample_rows)
    view = ReconciliationView(user_session, store, save_delay=0)
    assert view.auto_load_latest()
    return view


def test_enter_moves_to_next_editable_row(user_view):
    targets = advance_targets(user_view, user_view.visible_rows(None))
    # Row 3 has no description and takes no count
    assert targets == {
        "Physical count, row 1": "Physical count, row 2",
        "Physical count, row 2": "Physical count, row 4",
        "Physical count, row 4": "Physical count, row 5",
    }


def test_enter_never_targets_a_row_hidden_by_search(user_view):
    rows = user_view.visible_rows("abc")
    assert [row.key for row in rows] == [4]
    assert advance_targets(user_view, rows) == {}


def test_enter_skips_over_hidden_rows_only_when_target_is_shown(user_view):
    rows = [row for row in user_view.visible_rows(None) if row.key in (1, 4)]
    assert advance_targets(user_view, rows) == {}

    rows = [row for row in user_view.visible_rows(None) if row.key in (2, 4)]
    assert advance_targets(user_view, rows) == {"Physical count, row 2": "Physical count, row 4"}
