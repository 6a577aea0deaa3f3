import json

import httpx
import pytest
from fakes import Outcome, RecordingTransport, User
from pytest_httpx import HTTPXMock

import easyrequester
from easyrequester import (
    ClientConfig,
    DecodeFailure,
    Envelope,
    HttpMethod,
    Payload,
    Requester,
    TransportFailure,
)

ENVELOPE_JSON = {
    "data": {"id": 1, "name": "A"},
    "statusCode": 0,
    "statusMessage": "SUCCESS",
}


class TestRequester:
    def test_module_level_requesters(self):
        assert easyrequester.get.method is HttpMethod.GET
        assert easyrequester.post.method is HttpMethod.POST
        assert easyrequester.put.method is HttpMethod.PUT
        assert easyrequester.delete.method is HttpMethod.DELETE

    class TestDoRequestDefault:
        def test_body_text_reaches_callback(self, httpx_mock: HTTPXMock):
            httpx_mock.add_response(url="http://h/x", text="ok")
            received = []

            easyrequester.get.do_request_default(
                "http://h/x", None, None, received.append
            ).result(timeout=5)

            assert received == ["ok"]

        def test_post_string_body_as_text(self, httpx_mock: HTTPXMock, base_url: str):
            httpx_mock.add_response(url=f"{base_url}/echo", method="POST", text="done")

            easyrequester.post.do_request_default(
                f"{base_url}/echo", "hello"
            ).result(timeout=5)

            sent_request = httpx_mock.get_request()
            if sent_request is None:
                raise Exception("No request was sent")

            assert sent_request.content == b"hello"
            assert sent_request.headers["Content-Type"] == "text/plain; charset=utf-8"

        def test_xml_body(self, httpx_mock: HTTPXMock, base_url: str):
            httpx_mock.add_response(url=f"{base_url}/xml", method="PUT", text="saved")
            xml = '<?xml version="1.0"?><user><id>1</id></user>'

            easyrequester.put.do_request_default(
                f"{base_url}/xml", xml, "text/xml"
            ).result(timeout=5)

            sent_request = httpx_mock.get_request()
            assert sent_request is not None
            assert sent_request.content == xml.encode("utf-8")
            assert sent_request.headers["Content-Type"] == "text/xml"

    class TestDoRequest:
        def test_envelope_of_user(self, httpx_mock: HTTPXMock, base_url: str):
            httpx_mock.add_response(url=f"{base_url}/users/1", json=ENVELOPE_JSON)
            outcome = Outcome()

            (
                easyrequester.get.builder(Envelope[User])
                .set_url(f"{base_url}/users/1")
                .set_body(None)
                .on_success(outcome.on_success)
                .on_exception(outcome.on_exception)
                .build()
                .execute()
                .result(timeout=5)
            )

            (envelope,) = outcome.successes
            assert envelope.data.name == "A"
            assert envelope.data.id == 1
            assert outcome.failures == []

        def test_post_model_as_json(self, httpx_mock: HTTPXMock, base_url: str):
            httpx_mock.add_response(
                url=f"{base_url}/users",
                method="POST",
                status_code=201,
                json={"id": 2, "name": "B"},
            )

            created = easyrequester.post.do_request(
                User, f"{base_url}/users", User(id=2, name="B")
            ).result(timeout=5)

            assert created == User(id=2, name="B")
            sent_request = httpx_mock.get_request()
            assert sent_request is not None
            assert json.loads(sent_request.content) == {"id": 2, "name": "B"}
            assert sent_request.headers["Content-Type"] == "application/json"

        def test_get_with_params_headers_and_cookies(
            self, httpx_mock: HTTPXMock, base_url: str
        ):
            httpx_mock.add_response(
                url=f"{base_url}/users?page=2&size=10",
                json=[{"id": 1, "name": "A"}],
            )

            users = easyrequester.get.do_request(
                list[User],
                f"{base_url}/users",
                params={"page": "2", "size": "10"},
                headers={"Authorization": "Bearer token"},
                cookies={"session": "s1", "lang": "en"},
            ).result(timeout=5)

            assert users == [User(id=1, name="A")]
            sent_request = httpx_mock.get_request()
            assert sent_request is not None
            assert sent_request.headers["Authorization"] == "Bearer token"
            assert sent_request.headers["Cookie"] == "session=s1; lang=en"
            assert "Mozilla/5.0" in sent_request.headers["User-Agent"]

        def test_custom_user_agent_is_kept(self, httpx_mock: HTTPXMock, base_url: str):
            httpx_mock.add_response(url=f"{base_url}/ping", text="pong")

            easyrequester.get.do_request_default(
                f"{base_url}/ping", headers={"user-agent": "my-agent"}
            ).result(timeout=5)

            sent_request = httpx_mock.get_request()
            assert sent_request is not None
            assert sent_request.headers["User-Agent"] == "my-agent"

        def test_delete_with_params(self, httpx_mock: HTTPXMock, base_url: str):
            httpx_mock.add_response(
                url=f"{base_url}/users?id=1", method="DELETE", status_code=204
            )

            result = easyrequester.delete.do_request(
                User, f"{base_url}/users", params={"id": "1"}
            ).result(timeout=5)

            assert result is None
            assert len(httpx_mock.get_requests()) == 1

        def test_multipart_upload(self, httpx_mock: HTTPXMock, base_url: str):
            httpx_mock.add_response(url=f"{base_url}/upload", method="POST", text="ok")
            payload = Payload.multipart(
                data={"name": "A"}, files={"file": ("a.txt", b"hello", "text/plain")}
            )

            easyrequester.post.do_request_default(
                f"{base_url}/upload", payload
            ).result(timeout=5)

            sent_request = httpx_mock.get_request()
            assert sent_request is not None
            assert sent_request.headers["Content-Type"] == payload.content_type
            assert sent_request.content == payload.content

        def test_incompatible_type_is_a_decode_failure(
            self, httpx_mock: HTTPXMock, base_url: str
        ):
            httpx_mock.add_response(
                url=f"{base_url}/users/1", method="PUT", text="<html>not json</html>"
            )
            outcome = Outcome()

            easyrequester.put.do_request(
                User,
                f"{base_url}/users/1",
                {"name": "A"},
                on_success=outcome.on_success,
                on_exception=outcome.on_exception,
            ).result(timeout=5)

            assert outcome.successes == []
            ((failure, spec),) = outcome.failures
            assert isinstance(failure, DecodeFailure)
            assert failure.url == f"{base_url}/users/1"
            assert failure.method == "PUT"
            assert spec.method is HttpMethod.PUT

        def test_connection_error_is_a_transport_failure(
            self, httpx_mock: HTTPXMock, base_url: str
        ):
            httpx_mock.add_exception(httpx.ConnectError("connection refused"))
            outcome = Outcome()

            easyrequester.get.do_request(
                User,
                f"{base_url}/users/1",
                on_success=outcome.on_success,
                on_exception=outcome.on_exception,
            ).result(timeout=5)

            ((failure, _),) = outcome.failures
            assert isinstance(failure, TransportFailure)
            assert isinstance(failure.cause, httpx.ConnectError)

        def test_on_response_sees_status_before_decoding(
            self, httpx_mock: HTTPXMock, base_url: str
        ):
            httpx_mock.add_response(
                url=f"{base_url}/users/1", json={"id": 1, "name": "A"}
            )
            statuses = []

            user = easyrequester.get.do_request(
                User,
                f"{base_url}/users/1",
                on_response=lambda response: statuses.append(response.status_code),
            ).result(timeout=5)

            assert statuses == [200]
            assert user == User(id=1, name="A")

        def test_per_call_transport_override(self):
            transport = RecordingTransport(content=b'{"id": 1, "name": "A"}')

            result = easyrequester.get.do_request(
                User, "https://example.com/users/1", transport=transport
            ).result(timeout=5)

            assert result == User(id=1, name="A")
            assert len(transport.calls) == 1

    class TestDoRequestRaw:
        def test_error_status_reaches_on_success(
            self, httpx_mock: HTTPXMock, base_url: str
        ):
            httpx_mock.add_response(url=f"{base_url}/missing", status_code=404, text="nope")
            outcome = Outcome()

            easyrequester.get.do_request_raw(
                f"{base_url}/missing",
                on_success=outcome.on_success,
                on_exception=outcome.on_exception,
            ).result(timeout=5)

            (response,) = outcome.successes
            assert isinstance(response, httpx.Response)
            assert response.status_code == 404
            assert response.text == "nope"
            assert outcome.failures == []

    class TestConfigInjection:
        def test_requester_with_own_config(self):
            transport = RecordingTransport(content=b"from config")
            config = ClientConfig(transport=transport, user_agent="injected/1.0")
            requester = Requester("GET", config=config)

            result = requester.do_request_default("https://example.com").result(timeout=5)

            assert result == "from config"
            (call,) = transport.calls
            assert call["headers"]["User-Agent"] == "injected/1.0"
            config.close()

        @pytest.mark.anyio
        async def test_async_execution(self, httpx_mock: HTTPXMock, base_url: str):
            httpx_mock.add_response(url=f"{base_url}/users/1", json=ENVELOPE_JSON)

            envelope = await (
                easyrequester.get.builder(Envelope[User])
                .set_url(f"{base_url}/users/1")
                .build()
                .execute_async()
            )

            assert envelope.status_message == "SUCCESS"
