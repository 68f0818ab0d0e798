from notifications.channel.fake_email import FakeEmailAdapter
from notifications.channel.fake_whatsapp import FakeWhatsAppAdapter
from notifications.channel.whatsapp_port import WhatsAppCredentials

CREDENTIALS = WhatsAppCredentials(auth_key="key", integrated_number="918000000000")


class TestFakeWhatsApp:
    def test_succeeds_by_default(self):
        adapter = FakeWhatsAppAdapter()
        response = adapter.send_template(CREDENTIALS, "919876543210", "cod_reminder", {"a": "1"})
        assert response.ok is True
        assert response.message_id.startswith("wa-")
        assert adapter.sent_messages[0]["integrated_number"] == "918000000000"

    def test_scripted_statuses(self):
        adapter = FakeWhatsAppAdapter()
        adapter.configure(503, 0, 200)
        responses = [adapter.send_template(CREDENTIALS, "919876543210", "t", {}) for _ in range(3)]

        assert [r.status_code for r in responses] == [503, 0, 200]
        assert responses[1].error.startswith("ECONNRESET")
        assert adapter.attempts == 3


class TestFakeEmail:
    def test_records_sent_email(self):
        adapter = FakeEmailAdapter()
        response = adapter.send("key", "Store <cart@x.site>", "a@b.in", "Hi", "<p>Hi</p>", "Hi")
        assert response.ok is True
        assert adapter.sent_emails[0]["from"] == "Store <cart@x.site>"

    def test_configured_failure(self):
        adapter = FakeEmailAdapter()
        adapter.configure(should_succeed=False, status_code=422, failure_reason="Invalid from address")
        response = adapter.send("key", "x@y.in", "a@b.in", "Hi", "<p>Hi</p>")
        assert (response.ok, response.status_code, response.error) == (False, 422, "Invalid from address")
        assert adapter.calls == 1
        assert adapter.sent_emails == []
