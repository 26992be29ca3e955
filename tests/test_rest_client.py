"""
Tests for RestCommandClient

URL building, transport delegation, and normalization of transport
callbacks into futures.
"""

import logging

import pytest

from helpers import ok

from fx4ctl.communication.rest_client import RestCommandClient, parse_body
from fx4ctl.communication.rest_format import HttpMethod, RestError, RestResponse, RestResult
from fx4ctl.config.module_config import ModuleConfig
from fx4ctl.exceptions import InvalidArgument, TransportFailure


class TestBuildUrl:
    """Test URL construction"""

    def test_prefixes_scheme_and_host(self, client):
        assert client.build_url('/PreferredInput.cgx') == 'http://192.168.1.50/PreferredInput.cgx'

    def test_no_encoding_applied(self, client):
        url = client.build_url('/a b/c?d=é&e')
        assert url == 'http://192.168.1.50/a b/c?d=é&e'

    def test_host_taken_verbatim(self, transport):
        client = RestCommandClient(transport, ModuleConfig(host="fx4.local:8080"))
        assert client.build_url('/x') == 'http://fx4.local:8080/x'

    @pytest.mark.parametrize("path", ["PreferredInput.cgx", "", "http://evil/x", " /x"])
    def test_rejects_path_without_leading_slash(self, client, path):
        with pytest.raises(InvalidArgument, match="must start with a /"):
            client.build_url(path)

    def test_uses_replaced_config(self, client):
        client.update_config(ModuleConfig(host="10.0.0.9"))
        assert client.build_url('/x') == 'http://10.0.0.9/x'


class TestExecute:
    """Test delegation to the transport"""

    def test_post_calls_rest_with_body_and_empty_headers(self, client, transport):
        client.execute(HttpMethod.POST, '/RebootDevice.cgx', {"a": 1})

        assert transport.calls == [
            ('POST', 'http://192.168.1.50/RebootDevice.cgx', {"a": 1}, {})
        ]

    def test_post_defaults_body_to_empty_mapping(self, client, transport):
        client.post('/RebootDevice.cgx')
        assert transport.calls[0][2] == {}

    def test_get_calls_rest_get_and_ignores_body(self, client, transport):
        client.execute('GET', '/Status.cgx', {"ignored": True})

        assert transport.calls == [('GET', 'http://192.168.1.50/Status.cgx', None, {})]

    def test_method_string_is_case_insensitive(self, client, transport):
        client.execute('post', '/x')
        assert transport.calls[0][0] == 'POST'

    def test_headers_passed_through(self, client, transport):
        client.execute(HttpMethod.GET, '/x', headers={'X-Test': '1'})
        assert transport.calls[0][3] == {'X-Test': '1'}

    @pytest.mark.parametrize("method", ["PUT", "DELETE", "", None])
    def test_invalid_method_raises(self, client, transport, method):
        with pytest.raises(InvalidArgument, match="Invalid method"):
            client.execute(method, '/x')
        assert transport.calls == []

    def test_invalid_path_issues_no_call(self, client, transport):
        with pytest.raises(InvalidArgument):
            client.post('RebootDevice.cgx')
        assert transport.calls == []

    def test_future_pending_until_callback(self, client, transport):
        future = client.get('/x')
        assert not future.done()

        transport.respond(None, ok())
        assert future.done()

    def test_inflight_call_keeps_its_url(self, client, transport):
        client.post('/x')
        client.update_config(ModuleConfig(host="10.0.0.9"))
        client.post('/x')

        assert transport.calls[0][1] == 'http://192.168.1.50/x'
        assert transport.calls[1][1] == 'http://10.0.0.9/x'


class TestNormalization:
    """Test how callback results resolve or fail the future"""

    def _settle(self, client, transport, error, result):
        future = client.post('/x')
        transport.respond(error, result)
        return future

    def test_empty_200_body_resolves_to_empty_mapping(self, client, transport):
        future = self._settle(client, transport, None, ok(b""))
        assert future.result() == {}

    def test_json_200_body_is_parsed(self, client, transport):
        future = self._settle(client, transport, None, ok(b'{"a":1}'))
        assert future.result() == {"a": 1}

    def test_text_body_accepted(self, client, transport):
        future = self._settle(client, transport, None, ok('{"a":1}'))
        assert future.result() == {"a": 1}

    def test_malformed_200_body_resolves_to_empty_mapping(self, client, transport):
        future = self._settle(client, transport, None, ok(b"not json"))
        assert future.result() == {}

    def test_non_utf8_200_body_resolves_to_empty_mapping(self, client, transport):
        future = self._settle(client, transport, None, ok(b"\xff\xfe\x00"))
        assert future.result() == {}

    def test_http_error_rejects_with_status_line(self, client, transport):
        result = RestResult(response=RestResponse(404, "Not Found"))
        future = self._settle(client, transport, None, result)

        with pytest.raises(TransportFailure) as exc_info:
            future.result()
        assert exc_info.value.message == "404: Not Found"
        assert str(exc_info.value) == "404: Not Found"

    def test_transport_error_rejects_with_code_and_message(self, client, transport):
        result = RestResult(error=RestError(code="ECONNRESET", message="reset"))
        future = self._settle(client, transport, OSError("reset"), result)

        with pytest.raises(TransportFailure, match="^ECONNRESET: reset$"):
            future.result()

    def test_error_without_result_rejects_unknown(self, client, transport):
        future = self._settle(client, transport, OSError("boom"), None)

        with pytest.raises(TransportFailure, match="^Unknown error$"):
            future.result()

    def test_error_with_200_response_still_fails(self, client, transport):
        future = self._settle(client, transport, OSError("late"), ok(b'{"a":1}'))

        with pytest.raises(TransportFailure, match="^200: OK$"):
            future.result()

    def test_result_without_response_or_error_is_unknown(self, client, transport):
        future = self._settle(client, transport, None, RestResult())

        with pytest.raises(TransportFailure, match="^Unknown error$"):
            future.result()

    def test_non_object_result_is_unknown(self, client, transport):
        future = self._settle(client, transport, None, "garbage")

        with pytest.raises(TransportFailure, match="^Unknown error$"):
            future.result()

    def test_response_takes_precedence_over_error(self, client, transport):
        result = RestResult(
            response=RestResponse(500, "Internal Server Error"),
            error=RestError(code="EPIPE", message="broken pipe")
        )
        future = self._settle(client, transport, None, result)

        with pytest.raises(TransportFailure, match="^500: Internal Server Error$"):
            future.result()

    def test_mapping_results_are_accepted(self, client, transport):
        future = self._settle(client, transport, None, {
            "response": {"status_code": 200, "status_message": "OK"},
            "data": b'{"Input": 2}'
        })
        assert future.result() == {"Input": 2}

    def test_mapping_error_result(self, client, transport):
        future = self._settle(client, transport, object(), {
            "error": {"code": "ECONNREFUSED", "message": "refused"}
        })
        with pytest.raises(TransportFailure, match="^ECONNREFUSED: refused$"):
            future.result()

    def test_host_mapping_200_with_empty_data(self, client, transport):
        future = self._settle(client, transport, None, {"response": {"statusCode": 200}, "data": ""})
        assert future.result() == {}

    def test_host_mapping_200_with_json_data(self, client, transport):
        future = self._settle(client, transport, None, {"response": {"statusCode": 200}, "data": '{"a":1}'})
        assert future.result() == {"a": 1}

    def test_host_mapping_200_with_malformed_data(self, client, transport):
        future = self._settle(client, transport, None, {"response": {"statusCode": 200}, "data": "not json"})
        assert future.result() == {}

    def test_host_mapping_status_line(self, client, transport):
        future = self._settle(client, transport, None, {
            "response": {"statusCode": 404, "statusMessage": "Not Found"}
        })

        with pytest.raises(TransportFailure, match="^404: Not Found$"):
            future.result()

    def test_host_mapping_transport_error(self, client, transport):
        future = self._settle(client, transport, OSError(), {
            "error": {"code": "ECONNRESET", "message": "reset"}
        })

        with pytest.raises(TransportFailure, match="^ECONNRESET: reset$"):
            future.result()

    def test_non_text_200_body_resolves_to_empty_mapping(self, client, transport):
        future = self._settle(client, transport, None, {"response": {"status_code": 200}, "data": 5})

        assert future.done()
        assert future.result() == {}

    @pytest.mark.parametrize("result", [
        {"response": []},
        {"response": "200 OK"},
        {"response": {"statusCode": 200}, "data": "\ud800"},
    ])
    def test_malformed_mapping_rejects_unknown(self, client, transport, result):
        future = self._settle(client, transport, None, result)

        assert future.done()
        with pytest.raises(TransportFailure, match="^Unknown error$"):
            future.result()

    def test_outcome_is_logged_with_command_context(self, client, transport, caplog):
        with caplog.at_level(logging.DEBUG, logger="fx4ctl.communication.rest_client"):
            self._settle(client, transport, None, RestResult(response=RestResponse(404, "Not Found")))

        record = [r for r in caplog.records if "failed" in r.getMessage()][-1]
        assert record.host == "192.168.1.50"
        assert record.method == "POST"
        assert record.path == "/x"
        assert record.outcome == "failure"

    def test_second_callback_is_ignored(self, client, transport):
        future = client.post('/x')
        transport.respond(None, ok(b'{"first": true}'))
        transport.respond(None, RestResult(response=RestResponse(500, "Oops")))

        assert future.result() == {"first": True}


class TestParseBody:

    def test_json_scalar(self):
        assert parse_body(b"42") == 42

    def test_none(self):
        assert parse_body(None) == {}

    @pytest.mark.parametrize("data", [5, {"a": 1}, ["a"]])
    def test_non_text_body(self, data):
        assert parse_body(data) == {}
