from portfolio.utils.order import next_order, renumber
from portfolio.utils.status import StatusMessage


class TestOrder:
    def test_renumber_dicts(self):
        items = [{"display_order": 5}, {"display_order": 2}, {"display_order": 9}]
        assert [i["display_order"] for i in renumber(items)] == [0, 1, 2]

    def test_next_order(self):
        assert next_order([]) == 0
        assert next_order([{"display_order": 4}, {"display_order": 1}]) == 5


class TestStatusMessage:
    def test_message_expires(self, clock):
        status = StatusMessage(ttl=3.0, clock=clock)
        status.show("Saved!")

        clock.advance(2.9)
        assert status.to_dict() == {"text": "Saved!", "error": False}

        clock.advance(1)
        assert status.text is None
        assert status.to_dict() is None

    def test_new_message_restarts_timer(self, clock):
        status = StatusMessage(ttl=3.0, clock=clock)
        status.show("first")
        clock.advance(2)
        status.show("Upload failed", error=True)
        clock.advance(2)

        assert status.text == "Upload failed"
        assert status.is_error

    def test_clear(self, clock):
        status = StatusMessage(clock=clock)
        status.show("x", error=True)
        status.clear()
        assert status.is_error is False
