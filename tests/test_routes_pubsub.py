"""
HTTP tests for the long-polling relay: publish, poll, state and LED routes.
"""

from emolamp_server.models import LED_TOPIC, STATE_TOPIC


def _publish(client, topic, payload, client_id=None):
    body = {"topic": topic, "payload": payload}
    if client_id is not None:
        body["clientId"] = client_id
    return client.post("/api/publish", json=body)


class TestPublish:
    def test_publish_returns_stored_message(self, client):
        response = _publish(client, "emolamp/test", {"value": 1}, client_id="unity")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        message = body["message"]
        assert message["topic"] == "emolamp/test"
        assert message["payload"] == {"value": 1}
        assert message["clientId"] == "unity"
        assert isinstance(message["timestamp"], int)

    def test_missing_client_id_defaults_to_anonymous(self, client):
        response = _publish(client, "emolamp/test", "hello")

        assert response.json()["message"]["clientId"] == "anonymous"

    def test_missing_topic_is_rejected(self, client, context):
        response = client.post("/api/publish", json={"payload": {"value": 1}})

        assert response.status_code == 400
        assert response.json() == {"error": "topic is required"}
        assert context.message_store.topics() == {}

    def test_state_topic_payload_merges_into_current_state(self, client):
        _publish(client, STATE_TOPIC, {"emotion": "happy", "hue": 45}, client_id="lamp")

        state = client.get("/api/state").json()
        assert state["emotion"] == "happy"
        assert state["hue"] == 45

    def test_non_object_state_payload_leaves_state_alone(self, client):
        before = client.get("/api/state").json()
        _publish(client, STATE_TOPIC, "not a state", client_id="lamp")

        assert client.get("/api/state").json() == before


class TestPoll:
    def test_empty_poll_returns_null(self, client):
        response = client.get("/api/poll", params={"clientId": "web", "since": 0})

        assert response.status_code == 200
        assert response.json() is None

    def test_poll_returns_message_from_another_client(self, client):
        _publish(client, "emolamp/test", {"value": 1}, client_id="unity")

        message = client.get("/api/poll", params={"clientId": "web", "since": 0}).json()

        assert message["payload"] == {"value": 1}
        assert message["clientId"] == "unity"

    def test_poll_excludes_own_messages(self, client):
        _publish(client, "emolamp/test", {"value": 1}, client_id="unity")

        response = client.get("/api/poll", params={"clientId": "unity", "since": 0})

        assert response.json() is None

    def test_poll_after_latest_timestamp_returns_null(self, client):
        published = _publish(client, "emolamp/test", {"value": 1}, client_id="unity").json()["message"]

        response = client.get("/api/poll", params={"clientId": "web", "since": published["timestamp"]})

        assert response.json() is None

    def test_unreadable_since_is_treated_as_zero(self, client):
        _publish(client, "emolamp/test", {"value": 1}, client_id="unity")

        response = client.get("/api/poll", params={"clientId": "web", "since": "yesterday"})

        assert response.status_code == 200
        assert response.json()["payload"] == {"value": 1}

    def test_since_with_trailing_junk_uses_its_leading_number(self, client):
        published = _publish(client, "emolamp/test", {"value": 1}, client_id="unity").json()["message"]

        response = client.get("/api/poll", params={"clientId": "web", "since": f"{published['timestamp']}abc"})

        assert response.status_code == 200
        assert response.json() is None

    def test_poll_registers_subscriber(self, client, context):
        client.get("/api/poll", params={"clientId": "web"})

        assert "web" in context.message_store.subscribers()


class TestState:
    def test_default_state(self, client):
        state = client.get("/api/state").json()

        assert state["mode"] == "AUTO"
        assert state["emotion"] == "calm"
        assert state["hue"] == 120
        assert state["colorHex"] == "#50C878"

    def test_post_state_merges_and_returns_snapshot(self, client):
        response = client.post("/api/state", json={"mode": "manual", "brightness": 30})

        body = response.json()
        assert body["success"] is True
        assert body["state"]["mode"] == "MANUAL"
        assert body["state"]["brightness"] == 30
        assert body["state"]["emotion"] == "calm"
        assert client.get("/api/state").json()["brightness"] == 30

    def test_post_state_keeps_unknown_keys(self, client):
        client.post("/api/state", json={"sceneName": "forest"})

        assert client.get("/api/state").json()["sceneName"] == "forest"

    def test_post_state_rebroadcasts_on_state_topic(self, client):
        client.post("/api/state", json={"emotion": "sad"})

        message = client.get("/api/poll", params={"clientId": "unity", "since": 0}).json()

        assert message["topic"] == STATE_TOPIC
        assert message["clientId"] == "server"
        assert message["payload"]["emotion"] == "sad"

    def test_empty_state_update_still_rebroadcasts(self, client, context):
        before = client.get("/api/state").json()

        response = client.post("/api/state", json={})

        body = response.json()
        assert body["success"] is True
        assert body["state"]["timestamp"] >= before["timestamp"]
        assert context.message_store.topics() == {STATE_TOPIC: 1}
        message = client.get("/api/poll", params={"clientId": "unity", "since": 0}).json()
        assert message["clientId"] == "server"
        assert message["payload"]["emotion"] == before["emotion"]


class TestLed:
    def test_led_publishes_clamped_colour(self, client, context):
        response = client.post("/api/led", json={"r": 300, "g": -5, "b": "128"})

        assert response.json() == {"success": True, "led": {"r": 255, "g": 0, "b": 128}}
        assert context.message_store.topics() == {LED_TOPIC: 1}
        message = context.message_store.poll_since(0, "lamp")
        assert message.client_id == "api"
        assert message.payload == {"r": 255, "g": 0, "b": 128}

    def test_led_missing_channels_default_to_zero(self, client):
        response = client.post("/api/led", json={"g": 10})

        assert response.json()["led"] == {"r": 0, "g": 10, "b": 0}
