import pytest

from idp.services.notifications import ShareNotifier
from idp.tasks import notifications as notification_tasks


def test_payload_uses_role_name_and_share_link(notifier):
    payload = notifier.build_payload(
        collaborator_email="c@example.com",
        original_user_email="o@example.com",
        role_id=999,
        share_token="tok",
    )

    assert payload["roleName"] == "Unknown Role"
    assert payload["shareLink"] == "https://idp.test/collaborate/tok"


def test_enqueue_failure_is_reported_not_raised(reference):
    def broken(payload, share_id):
        raise ConnectionError("redis down")

    notifier = ShareNotifier(reference=reference, enqueue=broken)

    assert notifier.notify_share_created(
        collaborator_email="c@example.com",
        original_user_email="o@example.com",
        role_id=1,
        share_token="tok",
    ) is False


class _FakeFunctions:
    invoked = []

    def invoke(self, name, body):
        self.invoked.append((name, body))
        return {"ok": True}


@pytest.fixture
def fake_functions(monkeypatch):
    _FakeFunctions.invoked = []
    monkeypatch.setattr(notification_tasks, "SupabaseFunctions", _FakeFunctions)
    return _FakeFunctions


def test_send_share_email_task_invokes_edge_function(fake_functions):
    payload = {"collaboratorEmail": "c@example.com", "shareToken": "tok"}

    result = notification_tasks.send_share_email_task.apply(args=[payload], kwargs={"share_id": "s-1"}).get()

    assert result == {"ok": True, "share_id": "s-1"}
    assert fake_functions.invoked == [("send-share-email", payload)]


def test_supabase_adapter_decodes_json_bytes():
    from idp.services.supabase_functions import SupabaseFunctions

    class _Fn:
        def invoke(self, name, invoke_options):
            assert invoke_options == {"body": {"a": 1}}
            return b'{"sent": true}'

    class _Client:
        functions = _Fn()

    assert SupabaseFunctions(client=_Client()).invoke("send-share-email", {"a": 1}) == {"sent": True}
