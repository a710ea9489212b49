from collections.abc import Iterator

from hotel_desk.app.ui.views.guests_view import GuestsView

GUESTS = [
    {"guest_id": 11, "name": "John Smith", "room_no": "101", "check_in": "2024-05-01", "check_out": "2024-05-04",
     "phone": "98450 11111", "notes": "Late arrival"},
    {"guest_id": 12, "name": "Mary Jones", "room_no": "204", "check_in": "2024-05-02", "check_out": None,
     "phone": None, "notes": ""},
]


class StubStaffClient:
    def guests(self):
        return list(GUESTS)


def _answers(monkeypatch, values: list[str]) -> None:
    answers: Iterator[str] = iter(values)
    monkeypatch.setattr("builtins.input", lambda _: next(answers))


def _view() -> GuestsView:
    view = GuestsView(StubStaffClient(), page_size=10)
    view.apply_rows(view.fetch_rows())
    return view


def test_guest_search_covers_name_room_and_phone() -> None:
    view = _view()

    view.controller.set_filter_text("204")
    assert [row["guest_id"] for row in view.controller.get_visible_slice().rows] == [12]

    view.controller.set_filter_text("11111")
    assert [row["guest_id"] for row in view.controller.get_visible_slice().rows] == [11]

    assert view.controller.filter_fields == ()


def test_show_guest_prints_detail(monkeypatch, capsys) -> None:
    view = _view()
    _answers(monkeypatch, ["12", "99"])

    assert view.show_guest() is False
    assert view.show_guest() is False

    out = capsys.readouterr().out
    assert "Guest #12 • Mary Jones" in out
    assert "Stay: 2024-05-02 → —" in out
    assert "Notes:" not in out
    assert "Unknown guest_id: 99" in out
